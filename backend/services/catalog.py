from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import Product, Vendor
from backend.services.errors import AlreadyExists, NotFound


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFound(f"Product not found: productId={product_id}")
    return product


def get_vendor(db: Session, vendor_id: int) -> Vendor:
    vendor = db.get(Vendor, vendor_id)
    if vendor is None:
        raise NotFound(f"Vendor not found: vendorId={vendor_id}")
    return vendor


def list_products(db: Session) -> list[Product]:
    return list(db.execute(select(Product).order_by(Product.sku)).scalars().all())


def create_product(db: Session, *, sku: str, name: str, active: bool = True) -> Product:
    exists = db.execute(select(Product).where(Product.sku == sku)).scalar_one_or_none()
    if exists:
        raise AlreadyExists("SKU already exists")

    p = Product(sku=sku, name=name, active=active)
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def create_vendor(db: Session, *, name: str) -> Vendor:
    exists = db.execute(select(Vendor).where(Vendor.name == name)).scalar_one_or_none()
    if exists:
        raise AlreadyExists("Vendor name already exists")

    v = Vendor(name=name, active=True)
    db.add(v)
    db.commit()
    db.refresh(v)
    return v
