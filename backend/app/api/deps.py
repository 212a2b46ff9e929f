from __future__ import annotations

from typing import Generator

from fastapi import Header

from backend.app.db.session import SessionLocal
from backend.services.errors import VendorAccessDenied


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_vendor_id(x_vendor_id: int = Header(alias="X-Vendor-Id")) -> int:
    """
    Identité du vendeur appelant.
    L'émission / vérification des credentials se fait en amont (gateway) ;
    le cœur reçoit toujours le vendor_id en paramètre explicite.
    """
    return x_vendor_id


def require_same_vendor(path_vendor_id: int, current_vendor_id: int, action: str) -> None:
    if path_vendor_id != current_vendor_id:
        raise VendorAccessDenied(f"Access denied: You can only {action}")
