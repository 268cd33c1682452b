"""Pydantic schemas for orders.

This module exposes the request/response schemas used by the orders API
and the inventory HTTP client. Field names follow the camelCase wire format
(``skuCode``, ``orderLineItemsDtoList``) through aliases while the Python
attributes stay snake_case.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class OrderLineItemIn(BaseModel):
    """Input schema for a single order line item.

    Attributes:
        sku_code: Product SKU, taken verbatim.
        price: Non-negative unit price.
        quantity: Positive integer indicating units requested.
    """

    model_config = ConfigDict(populate_by_name=True)

    sku_code: str = Field(alias="skuCode", min_length=1, max_length=255)
    price: Decimal = Field(ge=0, max_digits=19, decimal_places=2)
    quantity: int = Field(gt=0)


class PlaceOrderDTO(BaseModel):
    """Schema for placing an order.

    Attributes:
        line_items: Non-empty list of ``OrderLineItemIn``.
    """

    model_config = ConfigDict(populate_by_name=True)

    line_items: list[OrderLineItemIn] = Field(alias="orderLineItemsDtoList", min_length=1)


class OrderLineItemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sku_code: str = Field(alias="skuCode")
    price: Decimal
    quantity: int


class OrderReadDTO(BaseModel):
    """Read model returned by the list and detail endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    order_number: str = Field(alias="orderNumber")
    line_items: list[OrderLineItemOut] = Field(alias="orderLineItemsList")


class InventoryResponseDTO(BaseModel):
    """One entry of the inventory service's stock lookup response."""

    sku_code: str = Field(alias="skuCode")
    in_stock: bool = Field(alias="inStock")
