"""create products, vendors, vendor_products, orders

Revision ID: a1f3c9e2b7d4
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1f3c9e2b7d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")

order_status = sa.Enum("ALLOCATED", name="order_status")


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", PK, primary_key=True),
        sa.Column("sku", sa.String(64), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        "vendors",
        sa.Column("id", PK, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "vendor_products",
        sa.Column("vendor_id", PK, sa.ForeignKey("vendors.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("product_id", PK, sa.ForeignKey("products.id", ondelete="RESTRICT"), primary_key=True),
        sa.Column("price", sa.Numeric(14, 2), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("price > 0", name="ck_vendor_product_price_pos"),
        sa.CheckConstraint("stock >= 0", name="ck_vendor_product_stock_nonneg"),
    )
    op.create_index(
        "ix_vendor_products_candidates",
        "vendor_products",
        ["product_id", "price", "vendor_id"],
    )

    op.create_table(
        "orders",
        sa.Column("id", PK, primary_key=True),
        sa.Column("product_id", PK, sa.ForeignKey("products.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("allocated_vendor_id", PK, sa.ForeignKey("vendors.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("status", order_status, nullable=False),
        sa.Column("unit_price", sa.Numeric(14, 2), nullable=False),
        sa.Column("vendor_name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("quantity > 0", name="ck_order_qty_pos"),
    )
    op.create_index("ix_orders_vendor_created", "orders", ["allocated_vendor_id", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_orders_vendor_created", table_name="orders")
    op.drop_table("orders")
    order_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_vendor_products_candidates", table_name="vendor_products")
    op.drop_table("vendor_products")
    op.drop_table("vendors")
    op.drop_table("products")
