"""
Erreurs métier.

Visibles par l'appelant : NotFound, NoStockAvailable, AlreadyExists,
VendorAccessDenied.
Internes (absorbées par la boucle de re-résolution) : InsufficientStock,
RecordNotFound.
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    status_code = 404


class NoStockAvailable(DomainError):
    def __init__(self, product_name: str):
        super().__init__(f"No vendor has stock for product: {product_name}")
        self.product_name = product_name


class AlreadyExists(DomainError):
    status_code = 409


class AlreadyEnrolled(AlreadyExists):
    def __init__(self, vendor_name: str, product_name: str):
        super().__init__(f"Vendor {vendor_name} is already enrolled in product {product_name}")


class VendorAccessDenied(DomainError):
    status_code = 403


# ---------- signaux internes de la réservation ----------
class ReservationConflict(DomainError):
    status_code = 500


class InsufficientStock(ReservationConflict):
    def __init__(self, *, vendor_id: int, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock: vendorId={vendor_id}, productId={product_id}, "
            f"available={available}, requested={requested}"
        )
        self.available = available
        self.requested = requested


class RecordNotFound(ReservationConflict):
    def __init__(self, *, vendor_id: int, product_id: int):
        super().__init__(f"Inventory record not found: vendorId={vendor_id}, productId={product_id}")
