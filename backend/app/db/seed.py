from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.session import SessionLocal
from backend.app.db.models.models_v1 import Category, Dispensary, Medication, Supplier

logger = logging.getLogger(__name__)

DISPENSARIES = [
    ("DSP01", "Dispensaire Central", "12 avenue Léopold Sédar Senghor", "Dakar", "10200"),
    ("DSP02", "Dispensaire de Thiès", "4 rue de la Gare", "Thiès", "21000"),
]

# libellé -> [(nom, prix, stock, niveau réappro)]
CATALOG = {
    "Antalgiques": [
        ("Paracétamol 500mg", Decimal("2.50"), 500, 100),
        ("Ibuprofène 400mg", Decimal("3.20"), 40, 50),
    ],
    "Antibiotiques": [
        ("Amoxicilline 1g", Decimal("6.80"), 12, 30),
    ],
    "Antiseptiques": [
        ("Chlorhexidine 0,05%", Decimal("4.10"), 80, 20),
    ],
}

# nom -> (email, libellés fournis)
SUPPLIERS = {
    "PharmaPlus": ("contact@pharmaplus.sn", ["Antalgiques"]),
    "MedSupply": ("devis@medsupply.sn", ["Antalgiques", "Antibiotiques"]),
    "HygièneSen": ("ventes@hygienesen.sn", ["Antiseptiques"]),
}


def _seed(db: Session) -> None:
    # 1) Dispensaires
    for code, name, address, city, postal_code in DISPENSARIES:
        if not db.get(Dispensary, code):
            db.add(Dispensary(code=code, name=name, address=address, city=city, postal_code=postal_code))

    # 2) Catégories + médicaments
    categories: dict[str, Category] = {}
    for label, meds in CATALOG.items():
        category = db.scalar(select(Category).where(Category.label == label))
        if not category:
            category = Category(label=label)
            db.add(category)
        categories[label] = category

        for name, price, stock, threshold in meds:
            if not db.scalar(select(Medication).where(Medication.name == name)):
                db.add(
                    Medication(
                        name=name,
                        category=category,
                        unit_price=price,
                        units_in_stock=stock,
                        reorder_threshold=threshold,
                    )
                )
    db.flush()

    # 3) Fournisseurs et leurs catégories
    for name, (email, labels) in SUPPLIERS.items():
        supplier = db.scalar(select(Supplier).where(Supplier.name == name))
        if not supplier:
            supplier = Supplier(name=name, email=email)
            db.add(supplier)
        for label in labels:
            if categories[label] not in supplier.categories:
                supplier.categories.append(categories[label])

    db.commit()


def run_seed(db: Session | None = None) -> None:
    """Données de démo, idempotent."""
    owns_session = db is None
    db = db or SessionLocal()
    try:
        _seed(db)
        logger.info("SEED OK: %s dispensaire(s), %s catégorie(s), %s fournisseur(s)",
                    len(DISPENSARIES), len(CATALOG), len(SUPPLIERS))
    finally:
        if owns_session:
            db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_seed()
