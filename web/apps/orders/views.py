"""HTTP views for the orders app.

This module contains DRF API views used by the order service. Views are
kept intentionally small: they validate requests (via Pydantic), map to
domain objects, delegate to the domain service, and return an HTTP response.

The views obtain a configured ``OrderService`` from
``providers.get_order_service()`` which returns HTTP/broker-backed ports
(``HttpInventoryClient``, ``RabbitMQEventPublisher``) or in-process stubs
(``InventoryStub``, ``EventPublisherStub``) depending on runtime settings.
This allows tests and local development to swap implementations without
changing view logic.
"""
import logging

from django.core.paginator import Paginator
from pydantic import ValidationError
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from . import providers
from .domain import OrderLineItem, InventoryUnavailableError
from .models import OrderModel
from .repository import OrderRepository, to_domain
from .schemas import PlaceOrderDTO, OrderReadDTO

logger = logging.getLogger("orders")

MAX_PAGE_SIZE = 100


def _positive_int(raw, default: int) -> int:
    """Parse a query parameter as an integer >= 1.

    Raises:
        ValueError: When ``raw`` is not an integer or is below 1.
    """
    if raw is None:
        return default
    value = int(raw)
    if value < 1:
        raise ValueError(raw)
    return value


def _read_body(order) -> dict:
    dto = OrderReadDTO.model_validate(
        {
            "order_number": order.order_number,
            "line_items": [
                {"sku_code": li.sku_code, "price": li.price, "quantity": li.quantity}
                for li in order.line_items
            ],
        }
    )
    return dto.model_dump(by_alias=True, mode="json")


class OrdersCollectionView(APIView):
    """Place an order (POST) or list stored orders (GET).

    Placing an order validates the payload using a Pydantic DTO, then asks
    the domain service to check stock, persist the order and publish the
    ``OrderPlacedEvent``.
    """

    def get(self, request):
        qs = OrderModel.objects.prefetch_related("line_items").order_by("-created_at", "-id")
        try:
            page = _positive_int(request.GET.get("page"), 1)
            page_size = min(_positive_int(request.GET.get("page_size"), 20), MAX_PAGE_SIZE)
        except ValueError:
            return Response({"detail": "INVALID_PAGINATION"}, status=status.HTTP_400_BAD_REQUEST)
        p = Paginator(qs, page_size)
        page_obj = p.get_page(page)

        results = [_read_body(to_domain(o)) for o in page_obj.object_list]

        return Response(
            {
                "count": p.count,
                "page": page_obj.number,
                "page_size": page_size,
                "results": results,
            },
            status=200,
        )

    def post(self, request):
        """Place a new order.

        Args:
            request (Request): DRF request with a JSON body
                ``{"orderLineItemsDtoList": [{skuCode, price, quantity}]}``.

        Returns:
            Response: One of the following responses.
            - 200 with the string "Order Placed Successfully".
            - 400 with {detail: "Product is not in stock, please try again
              later"} when any item is not confirmed in stock.
            - 400 for DTO validation errors.
            - 503 with {detail: "UPSTREAM_UNAVAILABLE"} when the inventory
              service cannot be queried.
        """
        # 1) Pydantic validation
        try:
            dto = PlaceOrderDTO.model_validate(request.data)
        except ValidationError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        # 2) Domain
        items = [
            OrderLineItem(sku_code=i.sku_code, price=i.price, quantity=i.quantity)
            for i in dto.line_items
        ]
        service = providers.get_order_service()

        try:
            message = service.place_order(items)
        except InventoryUnavailableError:
            logger.exception("inventory lookup failed")
            return Response({"detail": "UPSTREAM_UNAVAILABLE"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(message, status=status.HTTP_200_OK)


class RetrieveOrderView(APIView):
    def get(self, request, order_number: str):
        order = OrderRepository().find_by_order_number(order_number)
        if order is None:
            return Response({"detail": "NOT_FOUND"}, status=status.HTTP_404_NOT_FOUND)
        return Response(_read_body(order), status=200)
