"""
Gestion des fournisseurs et de leurs catégories.

Les services ne font que flush() : le commit appartient à l'appelant
(endpoint), une requête = une transaction.
"""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Supplier, Category, Medication
from backend.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def _get_supplier(db: Session, supplier_id: int) -> Supplier:
    supplier = db.get(Supplier, supplier_id)
    if not supplier:
        raise NotFoundError(f"Fournisseur avec l'id {supplier_id} introuvable")
    return supplier


def _get_category(db: Session, category_code: int) -> Category:
    category = db.get(Category, category_code)
    if not category:
        raise NotFoundError(f"Catégorie avec le code {category_code} introuvable")
    return category


# ---------- LECTURE ----------
def list_all(db: Session) -> list[Supplier]:
    return list(db.execute(select(Supplier).order_by(Supplier.id)).scalars().all())


def get_by_id(db: Session, supplier_id: int) -> Supplier:
    return _get_supplier(db, supplier_id)


def find_by_name(db: Session, name: str) -> Supplier | None:
    return db.execute(select(Supplier).where(Supplier.name == name)).scalar_one_or_none()


def find_by_email(db: Session, email: str) -> Supplier | None:
    return db.execute(select(Supplier).where(Supplier.email == email)).scalars().first()


def search_by_name(db: Session, text: str) -> list[Supplier]:
    """
    Sous-chaîne, insensible à la casse ; % et _ sont cherchés littéralement.

    lower() est appliqué des deux côtés en SQL. Sous SQLite il n'est
    Unicode qu'une fois register_unicode_lower() branché (db.session).
    """
    stmt = (
        select(Supplier)
        .where(Supplier.name.icontains(text, autoescape=True))
        .order_by(Supplier.id)
    )
    return list(db.execute(stmt).scalars().all())


def list_by_category_code(db: Session, category_code: int) -> list[Supplier]:
    stmt = (
        select(Supplier)
        .join(Supplier.categories)
        .where(Category.code == category_code)
        .order_by(Supplier.id)
    )
    return list(db.execute(stmt).scalars().all())


def list_for_reorder(db: Session, category_code: int) -> list[Supplier]:
    """
    Fournisseurs d'une catégorie contenant au moins un médicament
    disponible dont le stock est <= au niveau de réappro.
    """
    stmt = (
        select(Supplier)
        .join(Supplier.categories)
        .join(Category.medications)
        .where(Category.code == category_code)
        .where(Medication.units_in_stock <= Medication.reorder_threshold)
        .where(Medication.unavailable.is_(False))
        .distinct()
        .order_by(Supplier.id)
    )
    return list(db.execute(stmt).scalars().all())


# ---------- ÉCRITURE ----------
def create(db: Session, name: str, email: str) -> Supplier:
    # Unicité du nom : laissée à la contrainte SQL (IntegrityError au flush)
    logger.info("Création du fournisseur %r", name)
    supplier = Supplier(name=name, email=email)
    db.add(supplier)
    db.flush()
    return supplier


def update(db: Session, supplier_id: int, name: str | None = None, email: str | None = None) -> Supplier:
    logger.info("Mise à jour du fournisseur %s", supplier_id)
    supplier = _get_supplier(db, supplier_id)
    if name is not None and name.strip():
        supplier.name = name
    if email is not None and email.strip():
        supplier.email = email
    db.flush()
    return supplier


def delete(db: Session, supplier_id: int) -> None:
    logger.info("Suppression du fournisseur %s", supplier_id)
    supplier = _get_supplier(db, supplier_id)
    # Détache des deux côtés (back_populates vide aussi category.suppliers)
    supplier.categories.clear()
    db.delete(supplier)
    db.flush()


def add_category(db: Session, supplier_id: int, category_code: int) -> Supplier:
    logger.info("Association du fournisseur %s à la catégorie %s", supplier_id, category_code)
    supplier = _get_supplier(db, supplier_id)
    category = _get_category(db, category_code)

    if supplier in category.suppliers:
        raise ConflictError(
            f"Le fournisseur '{supplier.name}' est déjà associé à la catégorie '{category.label}'"
        )

    # back_populates met à jour category.suppliers
    supplier.categories.append(category)
    db.flush()
    return supplier


def remove_category(db: Session, supplier_id: int, category_code: int) -> Supplier:
    """Idempotent : pas d'erreur si l'association n'existe pas."""
    logger.info("Retrait de l'association du fournisseur %s à la catégorie %s", supplier_id, category_code)
    supplier = _get_supplier(db, supplier_id)
    category = _get_category(db, category_code)

    if category in supplier.categories:
        supplier.categories.remove(category)
        db.flush()
    return supplier
