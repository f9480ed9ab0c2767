from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.schemas.supplier import SupplierRead
from backend.services import suppliers as supplier_service

router = APIRouter(prefix="/fournisseurs")


@router.get("", response_model=list[SupplierRead])
def list_suppliers(db: Session = Depends(get_db)):
    return [SupplierRead.from_entity(s) for s in supplier_service.list_all(db)]


@router.get("/search", response_model=list[SupplierRead])
def search_suppliers(nom: str = Query(...), db: Session = Depends(get_db)):
    return [SupplierRead.from_entity(s) for s in supplier_service.search_by_name(db, nom)]


@router.get("/categorie/{categorie_code}", response_model=list[SupplierRead])
def list_suppliers_for_category(categorie_code: int, db: Session = Depends(get_db)):
    return [SupplierRead.from_entity(s) for s in supplier_service.list_by_category_code(db, categorie_code)]


@router.get("/{supplier_id}", response_model=SupplierRead)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return SupplierRead.from_entity(supplier_service.get_by_id(db, supplier_id))


@router.post("", response_model=SupplierRead, status_code=201)
def create_supplier(
    nom: str = Query(..., min_length=1, max_length=255),
    email: str = Query(..., min_length=1, max_length=255),
    db: Session = Depends(get_db),
):
    s = supplier_service.create(db, nom, email)
    db.commit()
    db.refresh(s)
    return SupplierRead.from_entity(s)


@router.put("/{supplier_id}", response_model=SupplierRead)
def update_supplier(
    supplier_id: int,
    nom: str | None = None,
    email: str | None = None,
    db: Session = Depends(get_db),
):
    s = supplier_service.update(db, supplier_id, nom, email)
    db.commit()
    return SupplierRead.from_entity(s)


@router.delete("/{supplier_id}", status_code=204)
def delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    supplier_service.delete(db, supplier_id)
    db.commit()
    return Response(status_code=204)


@router.post("/{supplier_id}/categories/{categorie_code}", response_model=SupplierRead)
def add_category(supplier_id: int, categorie_code: int, db: Session = Depends(get_db)):
    s = supplier_service.add_category(db, supplier_id, categorie_code)
    db.commit()
    return SupplierRead.from_entity(s)


@router.delete("/{supplier_id}/categories/{categorie_code}", response_model=SupplierRead)
def remove_category(supplier_id: int, categorie_code: int, db: Session = Depends(get_db)):
    s = supplier_service.remove_category(db, supplier_id, categorie_code)
    db.commit()
    return SupplierRead.from_entity(s)
