from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from backend.services.inventory import Candidate, decrement_stock

log = logging.getLogger("oms.reservation")


@dataclass(frozen=True)
class Reservation:
    vendor_id: int
    product_id: int
    quantity: int
    stock_after: int
    unit_price: Decimal  # prix lu atomiquement avec le décrément


def reserve_stock(
    db: Session,
    *,
    candidate: Candidate,
    product_id: int,
    quantity: int,
) -> Reservation:
    """
    Réserve `quantity` unités chez le gagnant du resolver.

    Le stock vu par le resolver n'est pas réutilisé : la précondition
    stock >= quantity est revérifiée par le décrément gardé.
    Lève InsufficientStock / RecordNotFound si la course est perdue.
    """
    dec = decrement_stock(
        db,
        vendor_id=candidate.vendor_id,
        product_id=product_id,
        quantity=quantity,
    )
    log.debug(
        "reserved vendor_id=%s product_id=%s qty=%s stock_after=%s",
        candidate.vendor_id,
        product_id,
        quantity,
        dec.stock,
    )
    return Reservation(
        vendor_id=candidate.vendor_id,
        product_id=product_id,
        quantity=quantity,
        stock_after=dec.stock,
        unit_price=dec.price,
    )
