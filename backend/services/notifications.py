"""
Notifications de réapprovisionnement.

Règle retenue : un médicament est à réapprovisionner si
    not unavailable and units_in_stock < reorder_threshold   (strict)

La vérification envoie UN SEUL email récapitulatif par fournisseur,
groupé par catégorie, pour toutes les catégories qu'il fournit.
"""
from __future__ import annotations

import logging
from html import escape
from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Category, Medication, Supplier
from backend.services import email_sender

logger = logging.getLogger(__name__)

REORDER_SUBJECT = "Demande de devis de réapprovisionnement - Pharmacie Centrale"

SendFn = Callable[[str, str, str], bool]


def list_reorder_candidates(db: Session) -> list[Medication]:
    stmt = (
        select(Medication)
        .where(Medication.unavailable.is_(False))
        .where(Medication.units_in_stock < Medication.reorder_threshold)
        .order_by(Medication.id)
    )
    return list(db.execute(stmt).scalars().all())


def group_by_category(medications: list[Medication]) -> dict[Category, list[Medication]]:
    # dict conserve l'ordre de découverte des catégories
    groups: dict[Category, list[Medication]] = {}
    for med in medications:
        groups.setdefault(med.category, []).append(med)
    return groups


def check_and_notify(db: Session, medication: Medication, *, send: SendFn | None = None) -> int:
    """
    Vérifie un médicament ; s'il passe sous son niveau de réappro,
    lance la vérification complète (emails consolidés).

    Retourne le nombre de médicaments à réapprovisionner, 0 si rien n'est déclenché.
    """
    if not medication.needs_reorder:
        return 0

    logger.warning(
        "Médicament %r sous le niveau de réapprovisionnement. Stock: %s, Niveau: %s",
        medication.name,
        medication.units_in_stock,
        medication.reorder_threshold,
    )
    return check_all_medications(db, send=send)


def check_all_medications(db: Session, *, send: SendFn | None = None) -> int:
    """
    Vérifie tous les médicaments et envoie un email récapitulatif à chaque
    fournisseur concerné.

    Retourne le nombre de médicaments à réapprovisionner (et non le nombre
    d'emails envoyés). Les échecs d'envoi sont journalisés par le transport.
    """
    send = send or email_sender.send_email
    logger.info("Vérification du stock de tous les médicaments...")

    to_reorder = list_reorder_candidates(db)
    if not to_reorder:
        logger.info("Aucun médicament ne nécessite de réapprovisionnement")
        return 0
    logger.info("%s médicament(s) nécessite(nt) un réapprovisionnement", len(to_reorder))

    groups = group_by_category(to_reorder)
    for category in groups:
        if not category.suppliers:
            logger.info("Catégorie %r sans fournisseur associé, ignorée", category.label)

    suppliers = db.execute(select(Supplier).order_by(Supplier.id)).scalars().all()
    for supplier in suppliers:
        supplier_groups = {c: groups[c] for c in supplier.categories if c in groups}
        if not supplier_groups:
            continue

        total = sum(len(meds) for meds in supplier_groups.values())
        logger.info(
            "Envoi d'un email récapitulatif à %s (%s) : %s médicament(s) dans %s catégorie(s)",
            supplier.name,
            supplier.email,
            total,
            len(supplier_groups),
        )
        send(supplier.email, REORDER_SUBJECT, build_email_body(supplier, supplier_groups))

    return len(to_reorder)


_CELL = "padding:7px; border:1px solid #ddd;"


def build_email_body(supplier: Supplier, groups: dict[Category, list[Medication]]) -> str:
    parts = [
        '<html>\n<body style="font-family: Arial, sans-serif; padding: 20px; color: #333;">',
        '<h2 style="color: #2c3e50;">Demande de devis de réapprovisionnement</h2>',
        f"<p>Bonjour <strong>{escape(supplier.name)}</strong>,</p>",
        "<p>Nous vous contactons afin de solliciter un devis de réapprovisionnement "
        "pour les médicaments suivants, dont le stock est actuellement insuffisant. "
        "Merci de nous transmettre vos disponibilités et tarifs.</p>",
    ]

    for category, meds in groups.items():
        parts.append(
            '<h3 style="color:#2980b9; border-bottom:1px solid #ccc; padding-bottom:4px;">'
            f"{escape(category.label)}</h3>"
        )
        parts.append(
            '<table style="border-collapse: collapse; width: 100%; margin-bottom: 16px;">'
            '<thead><tr style="background-color:#2980b9; color:#fff;">'
            '<th style="padding:8px; text-align:left;">Médicament</th>'
            '<th style="padding:8px; text-align:right;">Stock actuel</th>'
            '<th style="padding:8px; text-align:right;">Niveau réappro</th>'
            '<th style="padding:8px; text-align:right;">Prix unitaire</th>'
            "</tr></thead><tbody>"
        )
        for i, med in enumerate(meds):
            bg = "background-color:#f2f2f2;" if i % 2 else ""
            parts.append(
                f'<tr style="{bg}">'
                f'<td style="{_CELL}">{escape(med.name)}</td>'
                f'<td style="{_CELL} text-align:right; color:#c0392b;">{med.units_in_stock}</td>'
                f'<td style="{_CELL} text-align:right;">{med.reorder_threshold}</td>'
                f'<td style="{_CELL} text-align:right;">{med.unit_price} €</td>'
                "</tr>"
            )
        parts.append("</tbody></table>")

    parts.append(
        "<p>Nous vous remercions de bien vouloir nous adresser votre devis dans les meilleurs délais.</p>"
        "<p>Cordialement,<br><strong>Pharmacie Centrale</strong></p>\n</body>\n</html>"
    )
    return "\n".join(parts)
