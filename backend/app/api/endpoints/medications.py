from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db, get_email_sender
from backend.app.schemas.catalog import MedicationCreate, MedicationRead
from backend.services import catalog, notifications

router = APIRouter(prefix="/medicaments")


@router.get("", response_model=list[MedicationRead])
def list_medications(db: Session = Depends(get_db)):
    return [MedicationRead.model_validate(m) for m in catalog.list_medications(db)]


@router.get("/a-reapprovisionner", response_model=list[MedicationRead])
def list_medications_to_reorder(db: Session = Depends(get_db)):
    return [MedicationRead.model_validate(m) for m in notifications.list_reorder_candidates(db)]


@router.get("/{medication_id}", response_model=MedicationRead)
def get_medication(medication_id: int, db: Session = Depends(get_db)):
    return MedicationRead.model_validate(catalog.get_medication(db, medication_id))


@router.post("", response_model=MedicationRead, status_code=201)
def create_medication(payload: MedicationCreate, db: Session = Depends(get_db)):
    m = catalog.create_medication(
        db,
        name=payload.nom,
        category_code=payload.categorie,
        quantity_per_unit=payload.quantiteParUnite,
        unit_price=payload.prixUnitaire,
        units_in_stock=payload.unitesEnStock,
        units_on_order=payload.unitesCommandees,
        reorder_threshold=payload.niveauDeReappro,
        unavailable=payload.indisponible,
    )
    db.commit()
    db.refresh(m)
    return MedicationRead.model_validate(m)


@router.put("/{medication_id}/stock", response_model=MedicationRead)
def update_stock(
    medication_id: int,
    unites: int = Query(..., ge=0),
    db: Session = Depends(get_db),
    send: Callable[[str, str, str], bool] = Depends(get_email_sender),
):
    """Mise à jour du stock ; déclenche les emails de réappro si besoin."""
    m = catalog.update_stock(db, medication_id, unites)
    # Emails seulement pour un stock effectivement enregistré
    db.commit()
    notifications.check_and_notify(db, m, send=send)
    return MedicationRead.model_validate(m)
