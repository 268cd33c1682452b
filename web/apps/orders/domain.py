"""Domain models, ports and service for orders.

This module contains simple dataclasses for the order aggregate, protocol
definitions (ports) for external dependencies such as the inventory
service, the order store and the event publisher, and the domain service
that orchestrates placing an order.
"""

import logging
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, ContextManager, List, Optional, Protocol, Sequence

from gateway.tracing import span

logger = logging.getLogger("orders")

ORDER_PLACED_MESSAGE = "Order Placed Successfully"
NOT_IN_STOCK_MESSAGE = "Product is not in stock, please try again later"
INVENTORY_LOOKUP_SPAN = "InventoryServiceLookup"
NOTIFICATION_TOPIC = "notificationTopic"


# ---- Errors ----
class ProductNotInStockError(ValueError):
    """Raised when at least one requested SKU is not confirmed in stock."""

    def __init__(self, message: str = NOT_IN_STOCK_MESSAGE):
        super().__init__(message)


class InventoryUnavailableError(RuntimeError):
    """Raised when the inventory service cannot answer a stock query."""


# ---- Entities / DTOs ----
@dataclass(frozen=True)
class OrderLineItem:
    """A single line item in an order.

    Attributes:
        sku_code: Product identifier correlated with inventory and catalog.
        price: Unit price.
        quantity: Number of units requested for this SKU.
    """

    sku_code: str
    price: Decimal
    quantity: int


@dataclass
class Order:
    """Order aggregate: an order number plus its owned line items."""

    order_number: str
    line_items: List[OrderLineItem] = field(default_factory=list)

    @classmethod
    def create(cls, line_items: Sequence[OrderLineItem]) -> "Order":
        return cls(order_number=str(uuid.uuid4()), line_items=list(line_items))

    @property
    def sku_codes(self) -> List[str]:
        return [item.sku_code for item in self.line_items]


@dataclass(frozen=True)
class InventoryStatus:
    sku_code: str
    in_stock: bool


@dataclass(frozen=True)
class OrderPlacedEvent:
    """Notification emitted once an order has been committed."""

    order_number: str

    def to_payload(self) -> dict:
        return {"orderNumber": self.order_number}


# ---- Ports (DIP) ----
class InventoryPort(Protocol):
    """Port describing the stock lookup used by the domain."""

    def check_stock(self, sku_codes: List[str]) -> List[InventoryStatus]:
        """Return the stock status for the requested SKU codes.

        Raises:
            InventoryUnavailableError: When the lookup cannot be completed.
        """
        raise NotImplementedError()


class OrderStorePort(Protocol):
    """Port describing durable order persistence."""

    def atomic(self) -> ContextManager:
        raise NotImplementedError()

    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the enclosing transaction has committed."""
        raise NotImplementedError()

    def save(self, order: Order) -> Order:
        raise NotImplementedError()

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        raise NotImplementedError()

    def find_all(self) -> List[Order]:
        raise NotImplementedError()


class EventPublisherPort(Protocol):
    """Port describing fire-and-forget event publication."""

    def publish(self, topic: str, event: OrderPlacedEvent) -> None:
        raise NotImplementedError()


# ---- Domain helpers ----
def all_in_stock(sku_codes: Sequence[str], statuses: Optional[Sequence[InventoryStatus]]) -> bool:
    """Decide whether every requested SKU is confirmed in stock.

    An empty or missing response, an entry reporting ``in_stock=False`` or a
    requested SKU without any entry all count as "not in stock".
    """
    if not statuses:
        return False
    if not all(s.in_stock for s in statuses):
        return False
    answered = {s.sku_code for s in statuses}
    return all(sku in answered for sku in sku_codes)


# ---- Domain service ----
class OrderService:
    """Domain service responsible for placing orders.

    Orchestrates the stock lookup, the transactional write of the order and
    the publication of ``OrderPlacedEvent`` once that write has committed.
    """

    def __init__(
        self,
        inventory: InventoryPort,
        store: OrderStorePort,
        publisher: EventPublisherPort,
        topic: str = NOTIFICATION_TOPIC,
    ):
        """Initialize the service with required dependencies.

        Args:
            inventory: InventoryPort used to check stock.
            store: OrderStorePort used to persist the order.
            publisher: EventPublisherPort used to notify downstream consumers.
            topic: Destination topic for ``OrderPlacedEvent``.
        """
        self.inventory = inventory
        self.store = store
        self.publisher = publisher
        self.topic = topic

    def place_order(self, line_items: Sequence[OrderLineItem]) -> str:
        """Place an order if every requested product is in stock.

        Args:
            line_items: Requested lines, persisted in the given order.

        Returns:
            str: ``ORDER_PLACED_MESSAGE`` on success.

        Raises:
            ValueError: ``EMPTY_ORDER`` when no line items are given.
            ProductNotInStockError: When the inventory does not confirm
                every SKU as in stock.
            InventoryUnavailableError: When the inventory lookup fails.
        """
        if not line_items:
            raise ValueError("EMPTY_ORDER")

        order = Order.create(line_items)
        sku_codes = order.sku_codes

        with span(INVENTORY_LOOKUP_SPAN):
            statuses = self.inventory.check_stock(sku_codes)

        if not all_in_stock(sku_codes, statuses):
            logger.error(NOT_IN_STOCK_MESSAGE, extra={"sku_codes": sku_codes})
            raise ProductNotInStockError()

        with self.store.atomic():
            self.store.save(order)
            self.store.on_commit(lambda: self._publish_order_placed(order.order_number))

        logger.info("order placed", extra={"order_number": order.order_number})
        return ORDER_PLACED_MESSAGE

    def _publish_order_placed(self, order_number: str) -> None:
        # The order is already committed here; publish errors are only logged.
        try:
            self.publisher.publish(self.topic, OrderPlacedEvent(order_number))
        except Exception:
            logger.exception("order placed event not published", extra={"order_number": order_number})
