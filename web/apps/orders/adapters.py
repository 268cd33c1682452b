"""In-process stub adapters for the orders domain ports.

These stubs implement ``InventoryPort`` and ``EventPublisherPort`` without
any network calls. They are intended for tests and local development where
deterministic behavior is useful and the inventory service or the message
broker are not available.
"""

import logging
from typing import Iterable, List, Tuple

from .domain import InventoryPort, EventPublisherPort, InventoryStatus, OrderPlacedEvent

logger = logging.getLogger("orders")


class InventoryStub(InventoryPort):
    """Stub implementation of ``InventoryPort``.

    Reports every SKU as in stock except those listed in ``out_of_stock``.
    One status is returned per distinct requested SKU.
    """

    def __init__(self, out_of_stock: Iterable[str] = ()):
        self.out_of_stock = set(out_of_stock)

    def check_stock(self, sku_codes: List[str]) -> List[InventoryStatus]:
        return [
            InventoryStatus(sku_code=sku, in_stock=sku not in self.out_of_stock)
            for sku in dict.fromkeys(sku_codes)
        ]


class EventPublisherStub(EventPublisherPort):
    """Stub implementation of ``EventPublisherPort``.

    Keeps published events in memory, in publication order, and logs them.
    """

    def __init__(self):
        self.published: List[Tuple[str, OrderPlacedEvent]] = []

    def publish(self, topic: str, event: OrderPlacedEvent) -> None:
        self.published.append((topic, event))
        logger.info("event published (stub)", extra={"topic": topic, "payload": event.to_payload()})
