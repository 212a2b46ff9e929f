from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.app.api.deps import get_db
from backend.services import catalog

router = APIRouter(prefix="/products")


class ProductCreate(BaseModel):
    sku: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=255)
    active: bool = True


@router.get("")
def list_products(db: Session = Depends(get_db)):
    rows = catalog.list_products(db)
    return [
        {
            "id": p.id,
            "sku": p.sku,
            "name": p.name,
            "active": p.active,
        }
        for p in rows
    ]


@router.post("", status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    p = catalog.create_product(db, sku=payload.sku, name=payload.name, active=payload.active)
    return {"id": p.id, "sku": p.sku, "name": p.name}
