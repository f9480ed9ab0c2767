"""
Catalogue : catégories, médicaments, dispensaires.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Category, Medication, Dispensary
from backend.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


# ---------- CATÉGORIES ----------
def list_categories(db: Session) -> list[Category]:
    return list(db.execute(select(Category).order_by(Category.code)).scalars().all())


def get_category(db: Session, code: int) -> Category:
    category = db.get(Category, code)
    if not category:
        raise NotFoundError(f"Catégorie avec le code {code} introuvable")
    return category


def create_category(db: Session, label: str, description: str | None = None) -> Category:
    logger.info("Création de la catégorie %r", label)
    category = Category(label=label, description=description)
    db.add(category)
    db.flush()
    return category


def delete_category(db: Session, code: int) -> None:
    logger.info("Suppression de la catégorie %s", code)
    category = get_category(db, code)
    if category.medications:
        raise ConflictError(
            f"La catégorie '{category.label}' contient encore {len(category.medications)} médicament(s)"
        )
    category.suppliers.clear()
    db.delete(category)
    db.flush()


# ---------- MÉDICAMENTS ----------
def list_medications(db: Session) -> list[Medication]:
    return list(db.execute(select(Medication).order_by(Medication.id)).scalars().all())


def get_medication(db: Session, medication_id: int) -> Medication:
    medication = db.get(Medication, medication_id)
    if not medication:
        raise NotFoundError(f"Médicament avec l'id {medication_id} introuvable")
    return medication


def create_medication(
    db: Session,
    *,
    name: str,
    category_code: int,
    unit_price: Decimal = Decimal("0.00"),
    units_in_stock: int = 0,
    reorder_threshold: int = 0,
    units_on_order: int = 0,
    quantity_per_unit: str | None = None,
    unavailable: bool = False,
) -> Medication:
    logger.info("Création du médicament %r (catégorie %s)", name, category_code)
    category = get_category(db, category_code)
    medication = Medication(
        name=name,
        category=category,
        unit_price=unit_price,
        units_in_stock=units_in_stock,
        reorder_threshold=reorder_threshold,
        units_on_order=units_on_order,
        quantity_per_unit=quantity_per_unit,
        unavailable=unavailable,
    )
    db.add(medication)
    db.flush()
    return medication


def update_stock(db: Session, medication_id: int, units_in_stock: int) -> Medication:
    """
    Met à jour le stock (flush seulement).

    La vérification de réappro (notifications.check_and_notify) est à lancer
    par l'appelant une fois le stock commité.
    """
    logger.info("Stock du médicament %s -> %s", medication_id, units_in_stock)
    medication = get_medication(db, medication_id)
    medication.units_in_stock = units_in_stock
    db.flush()
    return medication


# ---------- DISPENSAIRES ----------
def list_dispensaries(db: Session) -> list[Dispensary]:
    return list(db.execute(select(Dispensary).order_by(Dispensary.code)).scalars().all())


def get_dispensary(db: Session, code: str) -> Dispensary:
    dispensary = db.get(Dispensary, code)
    if not dispensary:
        raise NotFoundError(f"Dispensaire avec le code {code} introuvable")
    return dispensary
