"""Service provider helpers for wiring OrderService with ports.

This module exposes a small factory function `get_order_service` that
returns a configured `OrderService` instance. When
`settings.USE_HTTP_ADAPTERS` is enabled it uses the HTTP inventory client and
the RabbitMQ publisher; otherwise it falls back to fast in-process stubs
suitable for tests and local development. Orders are always persisted
through the Django ORM repository.
"""

from django.conf import settings
from .domain import OrderService
from .adapters import InventoryStub, EventPublisherStub
from .http_adapters import HttpInventoryClient
from .publisher import RabbitMQEventPublisher
from .repository import OrderRepository


def get_order_service() -> OrderService:
    """Return a configured OrderService instance.

    Returns:
        OrderService: A service instance with appropriate ports.
    """
    if getattr(settings, "USE_HTTP_ADAPTERS", True):
        return OrderService(
            inventory=HttpInventoryClient(),
            store=OrderRepository(),
            publisher=RabbitMQEventPublisher(),
            topic=settings.NOTIFICATION_TOPIC,
        )

    return OrderService(
        inventory=InventoryStub(getattr(settings, "INVENTORY_STUB_OUT_OF_STOCK", ())),
        store=OrderRepository(),
        publisher=EventPublisherStub(),
        topic=settings.NOTIFICATION_TOPIC,
    )
