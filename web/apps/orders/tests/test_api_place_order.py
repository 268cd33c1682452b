"""API tests for the place-order endpoint.

These tests exercise the orders HTTP API for the main scenarios: order
placed, product out of stock, partial inventory answer, inventory
unavailable and payload validation errors. They rely on in-process stubs
from ``apps.orders.adapters`` for deterministic behavior, and on
``django_capture_on_commit_callbacks`` to run after-commit publication.
"""
from decimal import Decimal

import httpx
import pytest

from apps.orders import providers
from apps.orders.adapters import InventoryStub, EventPublisherStub
from apps.orders.domain import OrderService, InventoryStatus, InventoryUnavailableError
from apps.orders.http_adapters import HttpInventoryClient
from apps.orders.models import OrderModel, OrderLineItemModel
from apps.orders.repository import OrderRepository

PLACE_URL = "/api/order"
NOT_IN_STOCK = "Product is not in stock, please try again later"


def _payload(*items):
    return {"orderLineItemsDtoList": [
        {"skuCode": sku, "price": price, "quantity": qty} for sku, price, qty in items
    ]}


@pytest.fixture
def publisher():
    return EventPublisherStub()


@pytest.fixture
def wire(monkeypatch, publisher):
    """Install an OrderService built from the given inventory port."""
    def _wire(inventory):
        monkeypatch.setattr(
            providers,
            "get_order_service",
            lambda: OrderService(inventory, OrderRepository(), publisher),
            raising=True,
        )
    return _wire


class FixedInventory:
    def __init__(self, statuses=None, exc=None):
        self.statuses, self.exc = statuses, exc
    def check_stock(self, sku_codes):
        if self.exc:
            raise self.exc
        return self.statuses


@pytest.mark.django_db
def test_place_order_in_stock(client, wire, publisher, django_capture_on_commit_callbacks):
    """Scenario A: 200 with the success message, order and event recorded."""
    wire(FixedInventory([InventoryStatus("iphone_13", True)]))

    with django_capture_on_commit_callbacks(execute=True):
        r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")

    assert r.status_code == 200
    assert r.json() == "Order Placed Successfully"
    assert OrderModel.objects.count() == 1
    order = OrderModel.objects.get()
    li = order.line_items.get()
    assert (li.sku_code, li.price, li.quantity) == ("iphone_13", Decimal("1000.00"), 1)
    assert [(t, e.order_number) for t, e in publisher.published] == [("notificationTopic", order.order_number)]


@pytest.mark.django_db
def test_place_order_out_of_stock(client, wire, publisher, django_capture_on_commit_callbacks):
    """Scenario B: 400 with the fixed message, nothing persisted or published."""
    wire(FixedInventory([InventoryStatus("iphone_13", False)]))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")

    assert r.status_code == 400
    assert r.json()["detail"] == NOT_IN_STOCK
    assert OrderModel.objects.count() == 0
    assert callbacks == []
    assert publisher.published == []


@pytest.mark.django_db
def test_place_order_partial_inventory_answer(client, wire, publisher):
    """Scenario C: a missing status for one SKU rejects the whole order."""
    wire(FixedInventory([InventoryStatus("iphone_13", True)]))
    payload = _payload(("iphone_13", 1000, 1), ("galaxy_s22", 900, 2))
    r = client.post(PLACE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert r.json()["detail"] == NOT_IN_STOCK
    assert OrderModel.objects.count() == 0


@pytest.mark.django_db
def test_place_order_inventory_unavailable(client, wire, publisher):
    """Scenario D: 503 when the inventory lookup fails, nothing persisted."""
    wire(FixedInventory(exc=InventoryUnavailableError("connection refused")))
    r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")
    assert r.status_code == 503
    assert r.json()["detail"] == "UPSTREAM_UNAVAILABLE"
    assert OrderModel.objects.count() == 0
    assert publisher.published == []


@pytest.mark.django_db
def test_place_order_with_default_stubs(client, settings):
    """Without patching, the provider wires the in-process stubs."""
    settings.INVENTORY_STUB_OUT_OF_STOCK = ["galaxy_s22"]

    r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")
    assert r.status_code == 200

    r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1), ("galaxy_s22", 900, 1)), content_type="application/json")
    assert r.status_code == 400
    assert OrderModel.objects.count() == 1


@pytest.mark.django_db
def test_place_order_keeps_line_item_order(client, wire):
    wire(InventoryStub())
    items = [("b", "0.99", 3), ("a", "10.50", 1), ("b", "0.99", 2)]
    r = client.post(PLACE_URL, data=_payload(*items), content_type="application/json")
    assert r.status_code == 200

    rows = list(OrderLineItemModel.objects.order_by("position").values_list("sku_code", "price", "quantity"))
    assert rows == [(s, Decimal(p), q) for s, p, q in items]


@pytest.mark.django_db
def test_place_order_twice_creates_two_orders(client, wire):
    wire(InventoryStub())
    for _ in range(2):
        r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")
        assert r.status_code == 200
    numbers = list(OrderModel.objects.values_list("order_number", flat=True))
    assert len(numbers) == 2 and len(set(numbers)) == 2


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"orderLineItemsDtoList": []},
        _payload(("iphone_13", 1000, 0)),
        _payload(("iphone_13", -1, 1)),
        _payload(("", 1000, 1)),
        {"orderLineItemsDtoList": [{"skuCode": "iphone_13"}]},
    ],
)
def test_place_order_validation_error(client, payload):
    """Returns 400 when the payload fails DTO validation."""
    r = client.post(PLACE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert OrderModel.objects.count() == 0


@pytest.mark.django_db
def test_request_id_is_echoed(client):
    r = client.post(
        PLACE_URL,
        data=_payload(("iphone_13", 1000, 1)),
        content_type="application/json",
        HTTP_X_REQUEST_ID="req-42",
    )
    assert r.headers["X-Request-ID"] == "req-42"


@pytest.mark.django_db
def test_payload_too_large(client, settings):
    settings.API_MAX_BYTES = 10
    r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")
    assert r.status_code == 413
    assert r.json()["detail"] == "PAYLOAD_TOO_LARGE"


def _inventory_answers(monkeypatch, status_code, body):
    def fake_get(self, url, params=None, headers=None, **kw):
        return httpx.Response(status_code, content=body, request=httpx.Request("GET", url))
    monkeypatch.setattr(httpx.Client, "get", fake_get, raising=True)


@pytest.mark.django_db
@pytest.mark.parametrize("body", [b"", b"null", b"[]"])
def test_place_order_inventory_without_stock_data_is_rejected(
    client, wire, publisher, monkeypatch, django_capture_on_commit_callbacks, body
):
    """An empty, null or empty-array inventory answer is a 400 rejection."""
    _inventory_answers(monkeypatch, 200, body)
    wire(HttpInventoryClient(base_url="http://inventory-service"))

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")

    assert r.status_code == 400
    assert r.json()["detail"] == NOT_IN_STOCK
    assert OrderModel.objects.count() == 0
    assert callbacks == []
    assert publisher.published == []


@pytest.mark.django_db
def test_place_order_over_http_inventory(client, wire, publisher, monkeypatch, django_capture_on_commit_callbacks):
    _inventory_answers(monkeypatch, 200, b'[{"skuCode": "iphone_13", "inStock": true}]')
    wire(HttpInventoryClient(base_url="http://inventory-service"))

    with django_capture_on_commit_callbacks(execute=True):
        r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")

    assert r.status_code == 200
    assert OrderModel.objects.count() == 1
    assert len(publisher.published) == 1


@pytest.mark.django_db
@pytest.mark.parametrize("status_code, body", [(500, b"boom"), (200, b"<html>"), (200, b'{"skuCode": "a"}')])
def test_place_order_http_inventory_failure_is_503(client, wire, publisher, monkeypatch, status_code, body):
    _inventory_answers(monkeypatch, status_code, body)
    wire(HttpInventoryClient(base_url="http://inventory-service"))

    r = client.post(PLACE_URL, data=_payload(("iphone_13", 1000, 1)), content_type="application/json")

    assert r.status_code == 503
    assert r.json()["detail"] == "UPSTREAM_UNAVAILABLE"
    assert OrderModel.objects.count() == 0
    assert publisher.published == []
