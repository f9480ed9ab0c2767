from __future__ import annotations

import logging
from typing import Callable

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db, get_email_sender
from backend.app.schemas.notification import StockCheckResult
from backend.services import notifications

router = APIRouter(prefix="/notifications")

logger = logging.getLogger(__name__)


@router.post("/verifier-stock", response_model=StockCheckResult)
def check_stock(
    db: Session = Depends(get_db),
    send: Callable[[str, str, str], bool] = Depends(get_email_sender),
):
    """
    Vérifie tous les médicaments et notifie les fournisseurs concernés.
    Lecture seule : rien n'est commité.
    """
    logger.info("Vérification du stock et notification des fournisseurs")
    count = notifications.check_all_medications(db, send=send)
    return StockCheckResult(
        success=True,
        message=f"{count} médicament(s) nécessite(nt) un réapprovisionnement",
        count=count,
    )
