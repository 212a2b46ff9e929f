"""
Éditions vendeur sur leurs lignes d'inventaire (prix, stock, enrôlement).

Même discipline que la réservation : verrou de ligne (FOR UPDATE) avant
écriture, incrément de `version`. Une édition de stock ne peut donc pas
écraser un décrément concurrent (lost update).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from backend.app.db.models.models_v1 import VendorProduct
from backend.services.catalog import get_product, get_vendor
from backend.services.errors import AlreadyEnrolled, NotFound
from backend.services.inventory import lock_inventory_record

log = logging.getLogger("oms.vendor_inventory")


@dataclass(frozen=True)
class PriceChange:
    vendor_id: int
    product_id: int
    old_price: Decimal
    new_price: Decimal
    stock: int


@dataclass(frozen=True)
class StockChange:
    vendor_id: int
    product_id: int
    old_stock: int
    new_stock: int
    price: Decimal


def _locked_or_404(db: Session, vendor_id: int, product_id: int) -> VendorProduct:
    vp = lock_inventory_record(db, vendor_id, product_id)
    if vp is None:
        raise NotFound(f"Product not found for vendor: vendorId={vendor_id}, productId={product_id}")
    return vp


def list_vendor_products(db: Session, *, vendor_id: int) -> list[VendorProduct]:
    return list(
        db.execute(
            select(VendorProduct)
            .options(joinedload(VendorProduct.product))
            .where(VendorProduct.vendor_id == vendor_id)
            .order_by(VendorProduct.product_id)
        )
        .scalars()
        .all()
    )


def enroll_product(
    db: Session,
    *,
    vendor_id: int,
    product_id: int,
    price: Decimal,
    stock: int,
) -> VendorProduct:
    vendor = get_vendor(db, vendor_id)
    product = get_product(db, product_id)

    if db.get(VendorProduct, (vendor_id, product_id)) is not None:
        raise AlreadyEnrolled(vendor.name, product.name)

    vp = VendorProduct(vendor_id=vendor_id, product_id=product_id, price=price, stock=stock, version=1)
    db.add(vp)
    db.commit()
    db.refresh(vp)
    log.info("vendor_id=%s enrolled product_id=%s price=%s stock=%s", vendor_id, product_id, price, stock)
    return vp


def update_price(db: Session, *, vendor_id: int, product_id: int, price: Decimal) -> PriceChange:
    try:
        vp = _locked_or_404(db, vendor_id, product_id)
        change = PriceChange(
            vendor_id=vendor_id,
            product_id=product_id,
            old_price=Decimal(vp.price),
            new_price=Decimal(price),
            stock=int(vp.stock),
        )
        vp.price = price
        vp.version += 1
        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("vendor_id=%s product_id=%s price %s -> %s", vendor_id, product_id, change.old_price, price)
    return change


def update_stock(db: Session, *, vendor_id: int, product_id: int, stock: int) -> StockChange:
    try:
        vp = _locked_or_404(db, vendor_id, product_id)
        change = StockChange(
            vendor_id=vendor_id,
            product_id=product_id,
            old_stock=int(vp.stock),
            new_stock=int(stock),
            price=Decimal(vp.price),
        )
        vp.stock = stock
        vp.version += 1
        db.commit()
    except Exception:
        db.rollback()
        raise

    log.info("vendor_id=%s product_id=%s stock %s -> %s", vendor_id, product_id, change.old_stock, stock)
    return change


def unenroll_product(db: Session, *, vendor_id: int, product_id: int) -> None:
    try:
        vp = _locked_or_404(db, vendor_id, product_id)
        db.delete(vp)
        db.commit()
    except Exception:
        db.rollback()
        raise
    log.info("vendor_id=%s unenrolled product_id=%s", vendor_id, product_id)
