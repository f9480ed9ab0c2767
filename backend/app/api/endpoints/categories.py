from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.schemas.catalog import CategoryCreate, CategoryRead
from backend.services import catalog

router = APIRouter(prefix="/categories")


@router.get("", response_model=list[CategoryRead])
def list_categories(db: Session = Depends(get_db)):
    return [CategoryRead.model_validate(c) for c in catalog.list_categories(db)]


@router.get("/{code}", response_model=CategoryRead)
def get_category(code: int, db: Session = Depends(get_db)):
    return CategoryRead.model_validate(catalog.get_category(db, code))


@router.post("", response_model=CategoryRead, status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    c = catalog.create_category(db, payload.libelle, payload.description)
    db.commit()
    db.refresh(c)
    return CategoryRead.model_validate(c)


@router.delete("/{code}", status_code=204)
def delete_category(code: int, db: Session = Depends(get_db)):
    catalog.delete_category(db, code)
    db.commit()
    return Response(status_code=204)
