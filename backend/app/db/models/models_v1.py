from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    BigInteger,
    DateTime,
    Boolean,
    ForeignKey,
    Numeric,
    Text,
    Table,
    Column,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.db.models.core_types import OrderState


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# BigInteger en Postgres, INTEGER en SQLite (sinon pas d'autoincrement)
Identifier = BigInteger().with_variant(Integer(), "sqlite")


# ---------- ASSOCIATION ----------
# PK composite = garde-fou stockage contre les associations en double
category_suppliers = Table(
    "category_suppliers",
    Base.metadata,
    Column("category_code", ForeignKey("categories.code", ondelete="CASCADE"), primary_key=True),
    Column("supplier_id", ForeignKey("suppliers.id", ondelete="CASCADE"), primary_key=True),
)


# ---------- MASTER DATA ----------
class Supplier(Base):
    __tablename__ = "suppliers"
    id: Mapped[int] = mapped_column(Identifier, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    categories: Mapped[list["Category"]] = relationship(
        secondary=category_suppliers,
        back_populates="suppliers",
        order_by="Category.code",
    )

    def __repr__(self) -> str:
        return f"Supplier(id={self.id!r}, name={self.name!r})"


class Category(Base):
    __tablename__ = "categories"
    code: Mapped[int] = mapped_column(Integer, primary_key=True)
    label: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    medications: Mapped[list["Medication"]] = relationship(
        back_populates="category",
        order_by="Medication.id",
    )
    suppliers: Mapped[list[Supplier]] = relationship(
        secondary=category_suppliers,
        back_populates="categories",
        order_by="Supplier.id",
    )

    def __repr__(self) -> str:
        return f"Category(code={self.code!r}, label={self.label!r})"


class Medication(Base):
    __tablename__ = "medications"
    id: Mapped[int] = mapped_column(Identifier, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category_code: Mapped[int] = mapped_column(
        ForeignKey("categories.code", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantity_per_unit: Mapped[str | None] = mapped_column(String(64))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), default=Decimal("0.00"), nullable=False)
    units_in_stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    units_on_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    reorder_threshold: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    unavailable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    category: Mapped[Category] = relationship(back_populates="medications")

    __table_args__ = (
        CheckConstraint("units_in_stock >= 0", name="ck_medication_stock_nonneg"),
        CheckConstraint("units_on_order >= 0", name="ck_medication_on_order_nonneg"),
        CheckConstraint("reorder_threshold >= 0", name="ck_medication_threshold_nonneg"),
        CheckConstraint("unit_price >= 0", name="ck_medication_unit_price_nonneg"),
    )

    @property
    def needs_reorder(self) -> bool:
        return not self.unavailable and self.units_in_stock < self.reorder_threshold


class Dispensary(Base):
    __tablename__ = "dispensaries"
    code: Mapped[str] = mapped_column(String(16), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str | None] = mapped_column(String(128))
    postal_code: Mapped[str | None] = mapped_column(String(16))


# ---------- COMMANDES ----------
class Order(Base):
    __tablename__ = "orders"
    number: Mapped[int] = mapped_column(Identifier, primary_key=True)
    dispensary_code: Mapped[str] = mapped_column(
        ForeignKey("dispensaries.code", ondelete="RESTRICT"),
        nullable=False,
    )
    delivery_address: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    shipped_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    dispensary: Mapped[Dispensary] = relationship()
    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
    )

    __table_args__ = (Index("ix_orders_dispensary_shipped", "dispensary_code", "shipped_at"),)

    @property
    def state(self) -> OrderState:
        return OrderState.open if self.shipped_at is None else OrderState.shipped


class OrderLine(Base):
    __tablename__ = "order_lines"
    id: Mapped[int] = mapped_column(Identifier, primary_key=True)
    order_number: Mapped[int] = mapped_column(
        ForeignKey("orders.number", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    medication_id: Mapped[int] = mapped_column(ForeignKey("medications.id", ondelete="RESTRICT"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship(back_populates="lines")
    medication: Mapped[Medication] = relationship()

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_order_line_qty_pos"),)
