from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_vendor_id, get_db, require_same_vendor
from backend.app.schemas.vendor_products import (
    EnrollCreate,
    PriceChangeRead,
    PriceUpdate,
    StockChangeRead,
    StockUpdate,
    VendorCreate,
    VendorProductRead,
)
from backend.services import catalog, vendor_inventory

router = APIRouter(prefix="/vendors")


@router.post("", status_code=201)
def create_vendor(payload: VendorCreate, db: Session = Depends(get_db)):
    v = catalog.create_vendor(db, name=payload.name)
    return {"id": v.id, "name": v.name}


@router.get("/{vendor_id}/products", response_model=list[VendorProductRead])
def list_vendor_products(
    vendor_id: int,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    require_same_vendor(vendor_id, current_vendor_id, "access your own data")
    return vendor_inventory.list_vendor_products(db, vendor_id=vendor_id)


@router.post("/{vendor_id}/products", response_model=VendorProductRead, status_code=201)
def enroll_product(
    vendor_id: int,
    payload: EnrollCreate,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    require_same_vendor(vendor_id, current_vendor_id, "enroll your own products")
    return vendor_inventory.enroll_product(
        db,
        vendor_id=vendor_id,
        product_id=payload.product_id,
        price=payload.price,
        stock=payload.stock,
    )


@router.put("/{vendor_id}/products/{product_id}/price", response_model=PriceChangeRead)
def update_price(
    vendor_id: int,
    product_id: int,
    payload: PriceUpdate,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    require_same_vendor(vendor_id, current_vendor_id, "update your own prices")
    return vendor_inventory.update_price(db, vendor_id=vendor_id, product_id=product_id, price=payload.price)


@router.put("/{vendor_id}/products/{product_id}/stock", response_model=StockChangeRead)
def update_stock(
    vendor_id: int,
    product_id: int,
    payload: StockUpdate,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    require_same_vendor(vendor_id, current_vendor_id, "update your own stock")
    return vendor_inventory.update_stock(db, vendor_id=vendor_id, product_id=product_id, stock=payload.stock)


@router.delete("/{vendor_id}/products/{product_id}", status_code=204)
def unenroll_product(
    vendor_id: int,
    product_id: int,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    require_same_vendor(vendor_id, current_vendor_id, "unenroll your own products")
    vendor_inventory.unenroll_product(db, vendor_id=vendor_id, product_id=product_id)
