from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backend.app.api.deps import get_db
from backend.app.api.v1.endpoints import orders as orders_endpoint
from backend.app.core.config import AppSettings
from backend.app.main import app


@pytest.fixture
def client(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def as_vendor(vendor_id: int) -> dict:
    return {"X-Vendor-Id": str(vendor_id)}


def test_health(client):
    r = client.get("/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_order_then_read_back(client, widget):
    v2 = widget.vendors["Vendor-2"]

    r = client.post("/v1/orders", json={"product_id": widget.product_id, "quantity": 10})
    assert r.status_code == 201
    body = r.json()
    assert body["allocated_vendor_id"] == v2
    assert body["product_name"] == "Widget"
    assert body["vendor_name"] == "Vendor-2"
    assert Decimal(body["unit_price"]) == Decimal("45.00")
    assert Decimal(body["total_price"]) == Decimal("450.00")
    assert body["status"] == "ALLOCATED"

    r = client.get(f"/v1/orders/{body['order_id']}", headers=as_vendor(v2))
    assert r.status_code == 200
    assert r.json()["order_id"] == body["order_id"]

    r = client.get("/v1/orders", headers=as_vendor(v2))
    assert [o["order_id"] for o in r.json()] == [body["order_id"]]


def test_foreign_and_missing_order_look_the_same(client, widget):
    created = client.post("/v1/orders", json={"product_id": widget.product_id, "quantity": 1}).json()
    other = as_vendor(widget.vendors["Vendor-1"])

    foreign = client.get(f"/v1/orders/{created['order_id']}", headers=other)
    missing = client.get("/v1/orders/987654", headers=other)

    assert foreign.status_code == missing.status_code == 404
    assert set(foreign.json()) == set(missing.json()) == {"detail", "status", "timestamp"}
    assert foreign.json()["detail"].startswith("Order not found: orderId=")


def test_no_stock_is_400(client, widget):
    r = client.post("/v1/orders", json={"product_id": widget.product_id, "quantity": 1000})
    assert r.status_code == 400
    assert r.json()["detail"] == "No vendor has stock for product: Widget"


def test_unknown_product_is_404(client, widget):
    r = client.post("/v1/orders", json={"product_id": 31337, "quantity": 1})
    assert r.status_code == 404


@pytest.mark.parametrize("quantity", [0, -3])
def test_invalid_quantity_rejected_before_core(client, widget, quantity):
    r = client.post("/v1/orders", json={"product_id": widget.product_id, "quantity": quantity})
    assert r.status_code == 422


def test_compact_response_shape(client, widget, monkeypatch):
    monkeypatch.setattr(orders_endpoint, "get_settings", lambda: AppSettings(ORDER_RESPONSE_SHAPE="compact"))

    r = client.post("/v1/orders", json={"product_id": widget.product_id, "quantity": 2})
    assert r.status_code == 201
    assert set(r.json()) == {"order_id", "product_id", "quantity", "allocated_vendor_id", "status", "created_at"}


def test_vendor_edits_through_api(client, widget):
    v3, pid = widget.vendors["Vendor-3"], widget.product_id

    r = client.put(f"/v1/vendors/{v3}/products/{pid}/stock", json={"stock": 15}, headers=as_vendor(v3))
    assert r.status_code == 200
    assert (r.json()["old_stock"], r.json()["new_stock"]) == (0, 15)

    r = client.put(f"/v1/vendors/{v3}/products/{pid}/price", json={"price": "39.50"}, headers=as_vendor(v3))
    assert r.status_code == 200
    assert Decimal(r.json()["new_price"]) == Decimal("39.50")

    r = client.post("/v1/orders", json={"product_id": pid, "quantity": 15})
    assert r.json()["allocated_vendor_id"] == v3

    r = client.get(f"/v1/vendors/{v3}/products", headers=as_vendor(v3))
    assert [(p["product_id"], p["stock"]) for p in r.json()] == [(pid, 0)]


def test_vendor_cannot_touch_another_vendor(client, widget):
    v1, v2, pid = widget.vendors["Vendor-1"], widget.vendors["Vendor-2"], widget.product_id

    r = client.put(f"/v1/vendors/{v1}/products/{pid}/stock", json={"stock": 0}, headers=as_vendor(v2))
    assert r.status_code == 403

    r = client.put(f"/v1/vendors/{v1}/products/{pid}/stock", json={"stock": -1}, headers=as_vendor(v1))
    assert r.status_code == 422


def test_catalog_endpoints(client):
    r = client.post("/v1/products", json={"sku": "GEAR", "name": "Gear"})
    assert r.status_code == 201
    pid = r.json()["id"]

    assert client.post("/v1/products", json={"sku": "GEAR", "name": "Gear"}).status_code == 409

    r = client.post("/v1/vendors", json={"name": "Acme"})
    assert r.status_code == 201
    vid = r.json()["id"]

    r = client.post(
        f"/v1/vendors/{vid}/products",
        json={"product_id": pid, "price": "3.20", "stock": 8},
        headers=as_vendor(vid),
    )
    assert r.status_code == 201

    r = client.delete(f"/v1/vendors/{vid}/products/{pid}", headers=as_vendor(vid))
    assert r.status_code == 204

    assert [p["sku"] for p in client.get("/v1/products").json()] == ["GEAR"]
