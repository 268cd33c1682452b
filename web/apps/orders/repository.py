"""Repository layer for persisting orders.

This module contains a small repository abstraction used by the
application to persist order aggregates. It intentionally keeps a thin
interface so the domain layer is not coupled to Django ORM details: it
accepts and returns ``domain.Order`` instances only.
"""

from typing import List, Optional

from django.db import transaction

from .models import OrderModel, OrderLineItemModel
from .domain import Order, OrderLineItem


def to_domain(obj: OrderModel) -> Order:
    items = [
        OrderLineItem(sku_code=li.sku_code, price=li.price, quantity=li.quantity)
        for li in obj.line_items.all()
    ]
    return Order(order_number=obj.order_number, line_items=items)


class OrderRepository:
    """Repository that persists Order aggregates using Django ORM.

    The order row and its line item rows are written in a single
    transaction; ``on_commit`` lets callers schedule work that must only
    happen once that transaction is durable.
    """

    def atomic(self):
        return transaction.atomic()

    def on_commit(self, callback) -> None:
        """Register ``callback`` to run after the current transaction commits.

        Outside of any transaction the callback runs immediately.
        """
        transaction.on_commit(callback)

    def save(self, order: Order) -> Order:
        """Persist a new order with its line items.

        Args:
            order: Domain ``Order`` to persist.

        Returns:
            The same ``Order``.

        Raises:
            django.db.IntegrityError: If the order number already exists.
        """
        with transaction.atomic():
            obj = OrderModel.objects.create(order_number=order.order_number)
            OrderLineItemModel.objects.bulk_create(
                [
                    OrderLineItemModel(
                        order=obj,
                        position=pos,
                        sku_code=item.sku_code,
                        price=item.price,
                        quantity=item.quantity,
                    )
                    for pos, item in enumerate(order.line_items)
                ]
            )
        return order

    def find_by_order_number(self, order_number: str) -> Optional[Order]:
        obj = (
            OrderModel.objects.prefetch_related("line_items")
            .filter(order_number=order_number)
            .first()
        )
        return to_domain(obj) if obj else None

    def find_all(self) -> List[Order]:
        return [to_domain(o) for o in OrderModel.objects.prefetch_related("line_items")]
