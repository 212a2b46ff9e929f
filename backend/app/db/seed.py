from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select

from backend.app.core.config import get_settings
from backend.app.core.logging import setup_logging
from backend.app.db.models.models_v1 import Product, Vendor, VendorProduct
from backend.app.db.session import SessionLocal

log = logging.getLogger("oms.seed")

# (vendor, price, stock) pour le produit de démo "Widget"
DEMO_OFFERS = [
    ("Vendor-1", Decimal("50.00"), 100),
    ("Vendor-2", Decimal("45.00"), 50),
    ("Vendor-3", Decimal("40.00"), 0),
]


def run_seed():
    db = SessionLocal()
    try:
        product = db.scalar(select(Product).where(Product.sku == "WIDGET"))
        if not product:
            product = Product(sku="WIDGET", name="Widget", active=True)
            db.add(product)
            db.flush()

        for name, price, stock in DEMO_OFFERS:
            vendor = db.scalar(select(Vendor).where(Vendor.name == name))
            if not vendor:
                vendor = Vendor(name=name, active=True)
                db.add(vendor)
                db.flush()

            if db.get(VendorProduct, (vendor.id, product.id)) is None:
                db.add(VendorProduct(vendor_id=vendor.id, product_id=product.id, price=price, stock=stock))

        db.commit()
        log.info("SEED OK: product=Widget, vendors=%s", [n for n, _, _ in DEMO_OFFERS])
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging(get_settings().LOG_LEVEL)
    run_seed()
