"""initial pharmacie schema

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("code", sa.Integer(), primary_key=True),
        sa.Column("label", sa.String(255), nullable=False, unique=True),
        sa.Column("description", sa.Text()),
    )
    op.create_table(
        "suppliers",
        sa.Column("id", ID, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False),
    )
    op.create_index("ix_suppliers_email", "suppliers", ["email"])

    op.create_table(
        "category_suppliers",
        sa.Column(
            "category_code",
            sa.Integer(),
            sa.ForeignKey("categories.code", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "supplier_id",
            ID,
            sa.ForeignKey("suppliers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "medications",
        sa.Column("id", ID, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column(
            "category_code",
            sa.Integer(),
            sa.ForeignKey("categories.code", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity_per_unit", sa.String(64)),
        sa.Column("unit_price", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("units_in_stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("units_on_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("reorder_threshold", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unavailable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.CheckConstraint("units_in_stock >= 0", name="ck_medication_stock_nonneg"),
        sa.CheckConstraint("units_on_order >= 0", name="ck_medication_on_order_nonneg"),
        sa.CheckConstraint("reorder_threshold >= 0", name="ck_medication_threshold_nonneg"),
        sa.CheckConstraint("unit_price >= 0", name="ck_medication_unit_price_nonneg"),
    )
    op.create_index("ix_medications_category_code", "medications", ["category_code"])

    op.create_table(
        "dispensaries",
        sa.Column("code", sa.String(16), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(128)),
        sa.Column("postal_code", sa.String(16)),
    )

    op.create_table(
        "orders",
        sa.Column("number", ID, primary_key=True),
        sa.Column(
            "dispensary_code",
            sa.String(16),
            sa.ForeignKey("dispensaries.code", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("delivery_address", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("shipped_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_orders_dispensary_shipped", "orders", ["dispensary_code", "shipped_at"])

    op.create_table(
        "order_lines",
        sa.Column("id", ID, primary_key=True),
        sa.Column(
            "order_number",
            ID,
            sa.ForeignKey("orders.number", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "medication_id",
            ID,
            sa.ForeignKey("medications.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_order_line_qty_pos"),
    )
    op.create_index("ix_order_lines_order_number", "order_lines", ["order_number"])


def downgrade() -> None:
    op.drop_index("ix_order_lines_order_number", table_name="order_lines")
    op.drop_table("order_lines")
    op.drop_index("ix_orders_dispensary_shipped", table_name="orders")
    op.drop_table("orders")
    op.drop_table("dispensaries")
    op.drop_index("ix_medications_category_code", table_name="medications")
    op.drop_table("medications")
    op.drop_table("category_suppliers")
    op.drop_index("ix_suppliers_email", table_name="suppliers")
    op.drop_table("suppliers")
    op.drop_table("categories")
