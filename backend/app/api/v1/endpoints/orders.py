from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_vendor_id, get_db
from backend.app.core.config import get_settings
from backend.app.schemas.orders import OrderCreate, OrderRead, OrderReadCompact
from backend.services import orders as order_service
from backend.services.orders import OrderResult

router = APIRouter(prefix="/orders")


def _render(result: OrderResult) -> dict:
    # même moteur, deux formes de réponse selon le déploiement
    schema = OrderReadCompact if get_settings().ORDER_RESPONSE_SHAPE == "compact" else OrderRead
    return schema.model_validate(result).model_dump(mode="json")


@router.post("", status_code=201)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    result = order_service.create_order(db, product_id=payload.product_id, quantity=payload.quantity)
    return _render(result)


@router.get("")
def list_orders(
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    return [_render(r) for r in order_service.list_orders(db, vendor_id=current_vendor_id)]


@router.get("/{order_id}")
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_vendor_id: int = Depends(get_current_vendor_id),
):
    return _render(order_service.get_order(db, order_id=order_id, vendor_id=current_vendor_id))
