"""
Order Orchestrator.

Compose resolver + réservation + insertion de la commande en une seule
unité tout-ou-rien. Deux issues seulement pour create_order :
- commande ALLOCATED persistée, stock décrémenté
- échec (NotFound / NoStockAvailable) sans aucun effet de bord
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.core.config import get_settings
from backend.app.db.models.core_types import OrderStatus
from backend.app.db.models.models_v1 import Order
from backend.app.db.tx import run_in_transaction
from backend.services.allocation import resolve_allocation
from backend.services.catalog import get_product, get_vendor
from backend.services.errors import NoStockAvailable, NotFound, ReservationConflict
from backend.services.inventory import list_eligible_candidates
from backend.services.reservation import reserve_stock

log = logging.getLogger("oms.orders")


@dataclass(frozen=True)
class AllocationResult:
    vendor_id: int | None
    success: bool
    unit_price: Decimal | None = None


@dataclass(frozen=True)
class OrderResult:
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


def allocate(
    db: Session,
    *,
    product_id: int,
    quantity: int,
    max_attempts: int | None = None,
) -> AllocationResult:
    """
    Résout le vendeur gagnant et réserve son stock.

    Si la réservation perd une course (stock consommé ou ligne supprimée
    entre la lecture et l'écriture), on relit les candidats et on résout
    à nouveau, au plus max_attempts fois. Épuisement => échec.

    Ne commit pas : la transaction appartient à l'appelant.
    """
    attempts = max_attempts or get_settings().ALLOCATION_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        candidates = list_eligible_candidates(db, product_id)
        winner = resolve_allocation(candidates, quantity)
        if winner is None:
            log.info("allocation failed product_id=%s qty=%s candidates=%d", product_id, quantity, len(candidates))
            return AllocationResult(vendor_id=None, success=False)

        try:
            res = reserve_stock(db, candidate=winner, product_id=product_id, quantity=quantity)
        except ReservationConflict as exc:
            log.warning(
                "reservation lost race (attempt %d/%d) product_id=%s vendor_id=%s: %s",
                attempt,
                attempts,
                product_id,
                winner.vendor_id,
                exc,
            )
            continue

        log.info(
            "allocated product_id=%s qty=%s vendor_id=%s price=%s",
            product_id,
            quantity,
            res.vendor_id,
            res.unit_price,
        )
        return AllocationResult(vendor_id=res.vendor_id, success=True, unit_price=res.unit_price)

    log.warning("allocation gave up after %d attempts product_id=%s qty=%s", attempts, product_id, quantity)
    return AllocationResult(vendor_id=None, success=False)


def create_order(db: Session, *, product_id: int, quantity: int) -> OrderResult:
    """
    1. le produit doit exister (NotFound sinon)
    2. allocation ; échec => NoStockAvailable, aucune écriture
    3. insertion de la commande (snapshot prix + nom vendeur)
    4. commit
    """

    def _create(session: Session) -> OrderResult:
        product = get_product(session, product_id)

        result = allocate(session, product_id=product_id, quantity=quantity)
        if not result.success:
            raise NoStockAvailable(product.name)

        vendor = get_vendor(session, result.vendor_id)

        order = Order(
            product_id=product_id,
            quantity=quantity,
            allocated_vendor_id=result.vendor_id,
            status=OrderStatus.allocated,
            unit_price=result.unit_price,
            vendor_name=vendor.name,
        )
        session.add(order)
        session.flush()  # get order.id / created_at

        return _to_result(order, product_name=product.name)

    out = run_in_transaction(db, _create)
    log.info("order created order_id=%s vendor_id=%s", out.order_id, out.allocated_vendor_id)
    return out


def get_order(db: Session, *, order_id: int, vendor_id: int) -> OrderResult:
    """
    Même NotFound pour une commande absente ou appartenant à un autre
    vendeur : l'existence des commandes des autres n'est pas révélée.
    """
    order = db.get(Order, order_id)
    if order is None or order.allocated_vendor_id != vendor_id:
        raise NotFound(f"Order not found: orderId={order_id}")
    return _to_result(order, product_name=order.product.name)


def list_orders(db: Session, *, vendor_id: int) -> list[OrderResult]:
    rows = (
        db.execute(
            select(Order)
            .where(Order.allocated_vendor_id == vendor_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        .scalars()
        .all()
    )
    return [_to_result(o, product_name=o.product.name) for o in rows]


def _to_result(order: Order, *, product_name: str) -> OrderResult:
    unit_price = Decimal(order.unit_price)
    return OrderResult(
        order_id=int(order.id),
        product_id=int(order.product_id),
        product_name=product_name,
        quantity=int(order.quantity),
        allocated_vendor_id=int(order.allocated_vendor_id),
        vendor_name=order.vendor_name,
        unit_price=unit_price,
        total_price=unit_price * order.quantity,
        status=OrderStatus(order.status),
        created_at=order.created_at,
    )
