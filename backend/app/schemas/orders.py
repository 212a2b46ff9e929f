from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from backend.app.db.models.core_types import OrderStatus


class OrderCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)


class OrderRead(BaseModel):
    order_id: int
    product_id: int
    product_name: str
    quantity: int
    allocated_vendor_id: int
    vendor_name: str
    unit_price: Decimal
    total_price: Decimal
    status: OrderStatus
    created_at: datetime

    class Config:
        from_attributes = True


class OrderReadCompact(BaseModel):
    """Forme courte : pas de nom produit / vendeur ni de prix."""

    order_id: int
    product_id: int
    quantity: int
    allocated_vendor_id: int
    status: OrderStatus
    created_at: datetime

    class Config:
        from_attributes = True
