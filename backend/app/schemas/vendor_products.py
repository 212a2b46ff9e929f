from decimal import Decimal

from pydantic import BaseModel, Field


class VendorCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class EnrollCreate(BaseModel):
    product_id: int
    price: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    stock: int = Field(ge=0)


class PriceUpdate(BaseModel):
    price: Decimal = Field(gt=0, max_digits=14, decimal_places=2)


class StockUpdate(BaseModel):
    stock: int = Field(ge=0)


class VendorProductRead(BaseModel):
    vendor_id: int
    product_id: int
    price: Decimal
    stock: int

    class Config:
        from_attributes = True


class PriceChangeRead(BaseModel):
    vendor_id: int
    product_id: int
    old_price: Decimal
    new_price: Decimal
    stock: int

    class Config:
        from_attributes = True


class StockChangeRead(BaseModel):
    vendor_id: int
    product_id: int
    old_stock: int
    new_stock: int
    price: Decimal

    class Config:
        from_attributes = True
