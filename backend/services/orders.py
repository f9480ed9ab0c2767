"""
Cycle de vie des commandes.

    OUVERTE (shipped_at is None) --ship_order--> EXPEDIEE (terminal)

Aucune ligne ne peut être ajoutée à une commande expédiée.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Order, OrderLine, Medication
from backend.services.catalog import get_dispensary
from backend.services.errors import InvalidStateError, NotFoundError

logger = logging.getLogger(__name__)


def get_order(db: Session, number: int) -> Order:
    order = db.get(Order, number)
    if not order:
        raise NotFoundError(f"Commande {number} introuvable")
    return order


def create_order(db: Session, dispensary_code: str) -> Order:
    logger.info("Création d'une commande pour le dispensaire %s", dispensary_code)
    dispensary = get_dispensary(db, dispensary_code)
    order = Order(
        dispensary=dispensary,
        delivery_address=dispensary.address,
        created_at=datetime.now(timezone.utc),
        shipped_at=None,
    )
    db.add(order)
    db.flush()
    return order


def add_line(db: Session, order_number: int, medication_id: int, quantity: int) -> OrderLine:
    logger.info("Ajout de %s x médicament %s à la commande %s", quantity, medication_id, order_number)
    order = get_order(db, order_number)
    medication = db.get(Medication, medication_id)
    if not medication:
        raise NotFoundError(f"Médicament avec l'id {medication_id} introuvable")
    if order.shipped_at is not None:
        raise InvalidStateError(f"La commande {order_number} est déjà expédiée")

    line = OrderLine(medication=medication, quantity=quantity)
    order.lines.append(line)
    db.flush()
    return line


def remove_line(db: Session, line_id: int) -> None:
    # NB: pas bloqué après expédition (asymétrique avec add_line, à confirmer)
    logger.info("Suppression de la ligne %s", line_id)
    line = db.get(OrderLine, line_id)
    if not line:
        raise NotFoundError(f"Ligne {line_id} introuvable")
    line.order.lines.remove(line)
    db.flush()


def ship_order(db: Session, order_number: int) -> Order:
    logger.info("Expédition de la commande %s", order_number)
    order = get_order(db, order_number)
    if order.shipped_at is not None:
        raise InvalidStateError(f"La commande {order_number} est déjà expédiée")
    order.shipped_at = datetime.now(timezone.utc)
    db.flush()
    return order


def list_open_orders_for_dispensary(db: Session, dispensary_code: str) -> list[Order]:
    stmt = (
        select(Order)
        .where(Order.dispensary_code == dispensary_code)
        .where(Order.shipped_at.is_(None))
        .order_by(Order.number)
    )
    return list(db.execute(stmt).scalars().all())
