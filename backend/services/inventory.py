from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backend.app.db.models.models_v1 import VendorProduct
from backend.services.errors import InsufficientStock, RecordNotFound


@dataclass(frozen=True)
class Candidate:
    vendor_id: int
    price: Decimal
    stock: int


@dataclass(frozen=True)
class StockDecrement:
    stock: int
    price: Decimal


def list_eligible_candidates(db: Session, product_id: int) -> list[Candidate]:
    """
    Candidats à l'allocation : stock > 0, tri price ASC puis vendor_id ASC.
    Lecture simple (pas de verrou) : la décision est revalidée au décrément.
    """
    rows = db.execute(
        select(VendorProduct.vendor_id, VendorProduct.price, VendorProduct.stock)
        .where(VendorProduct.product_id == product_id)
        .where(VendorProduct.stock > 0)
        .order_by(VendorProduct.price.asc(), VendorProduct.vendor_id.asc())
    ).all()

    return [Candidate(vendor_id=int(vid), price=Decimal(price), stock=int(stock)) for vid, price, stock in rows]


def lock_inventory_record(db: Session, vendor_id: int, product_id: int) -> VendorProduct | None:
    """SELECT ... FOR UPDATE sur la ligne (vendor, product)."""
    return (
        db.execute(
            select(VendorProduct)
            .where(VendorProduct.vendor_id == vendor_id)
            .where(VendorProduct.product_id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        .scalars()
        .one_or_none()
    )


def decrement_stock(
    db: Session,
    *,
    vendor_id: int,
    product_id: int,
    quantity: int,
) -> StockDecrement:
    """
    Décrément gardé (compare-and-swap sur stock) :

        UPDATE vendor_products
           SET stock = stock - :q, version = version + 1
         WHERE vendor_id = :v AND product_id = :p AND stock >= :q
        RETURNING stock, price

    La condition stock >= :q est évaluée par la base au moment de l'écriture,
    jamais à partir d'une lecture antérieure. Aucune ligne touchée =>
    RecordNotFound si l'association a disparu, InsufficientStock sinon.
    """
    row = db.execute(
        update(VendorProduct)
        .where(VendorProduct.vendor_id == vendor_id)
        .where(VendorProduct.product_id == product_id)
        .where(VendorProduct.stock >= quantity)
        .values(stock=VendorProduct.stock - quantity, version=VendorProduct.version + 1)
        .returning(VendorProduct.stock, VendorProduct.price)
        .execution_options(synchronize_session=False)
    ).one_or_none()

    if row is not None:
        return StockDecrement(stock=int(row.stock), price=Decimal(row.price))

    current = db.execute(
        select(VendorProduct.stock)
        .where(VendorProduct.vendor_id == vendor_id)
        .where(VendorProduct.product_id == product_id)
    ).scalar_one_or_none()

    if current is None:
        raise RecordNotFound(vendor_id=vendor_id, product_id=product_id)
    raise InsufficientStock(
        vendor_id=vendor_id,
        product_id=product_id,
        requested=quantity,
        available=int(current),
    )
