from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.app.schemas.catalog import DispensaryRead
from backend.services import catalog

router = APIRouter(prefix="/dispensaires")


@router.get("", response_model=list[DispensaryRead])
def list_dispensaries(db: Session = Depends(get_db)):
    return [DispensaryRead.model_validate(d) for d in catalog.list_dispensaries(db)]
