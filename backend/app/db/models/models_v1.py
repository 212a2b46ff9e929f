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
    Enum,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base
from backend.app.db.models.core_types import OrderStatus

# BIGINT en PostgreSQL, INTEGER (rowid auto-incrémenté) en SQLite
PK = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- CATALOG ----------
class Product(Base):
    __tablename__ = "products"
    id: Mapped[int] = mapped_column(PK, primary_key=True)
    sku: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Vendor(Base):
    __tablename__ = "vendors"
    id: Mapped[int] = mapped_column(PK, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)


# ---------- INVENTORY ----------
class VendorProduct(Base):
    """
    Ligne d'inventaire (vendor, product) : prix et stock propres au vendeur.

    Écrite par :
    - la réservation (décrément gardé, jamais en dessous de 0)
    - les éditions vendeur (prix / stock), sous verrou de ligne
    `version` est incrémenté à chaque écriture.
    """

    __tablename__ = "vendor_products"
    vendor_id: Mapped[int] = mapped_column(ForeignKey("vendors.id", ondelete="CASCADE"), primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="RESTRICT"), primary_key=True)

    price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    vendor: Mapped[Vendor] = relationship()
    product: Mapped[Product] = relationship()

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_vendor_product_price_pos"),
        CheckConstraint("stock >= 0", name="ck_vendor_product_stock_nonneg"),
        Index("ix_vendor_products_candidates", "product_id", "price", "vendor_id"),
    )


# ---------- ORDERS ----------
class Order(Base):
    __tablename__ = "orders"
    id: Mapped[int] = mapped_column(PK, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    allocated_vendor_id: Mapped[int] = mapped_column(ForeignKey("vendors.id", ondelete="RESTRICT"), nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status", values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.allocated,
        nullable=False,
    )

    # Snapshot au moment de la réservation (les éditions de prix ultérieures ne touchent pas l'historique)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    vendor_name: Mapped[str] = mapped_column(String(200), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    product: Mapped[Product] = relationship()

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_qty_pos"),
        Index("ix_orders_vendor_created", "allocated_vendor_id", "created_at"),
    )
