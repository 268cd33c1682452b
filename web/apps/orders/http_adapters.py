"""HTTP adapter client for the inventory service.

This module implements the concrete HTTP client for ``InventoryPort`` using
``httpx``. It adds:

- Request correlation: propagates ``X-Request-ID`` from the ContextVar set
    by the gateway middleware and ``X-Span-ID`` from the active tracing span.
- An explicit, configurable timeout (``settings.HTTP_TIMEOUT_SECS``).
- Fail-closed error mapping: transport errors, non-2xx statuses and bodies
    that do not match the expected schema all raise
    ``InventoryUnavailableError``. There is a single attempt per call.
"""

from typing import List, Optional

import httpx
from django.conf import settings
from pydantic import TypeAdapter

from gateway.middleware import REQUEST_ID_CTX
from gateway.tracing import SPAN_ID_CTX

from .domain import InventoryPort, InventoryStatus, InventoryUnavailableError
from .schemas import InventoryResponseDTO

_INVENTORY_RESPONSE = TypeAdapter(List[InventoryResponseDTO])


def _request_headers(extra: Optional[dict] = None) -> dict:
    """Build base headers including correlation ids and any extras.

    Args:
        extra: Optional dict of additional headers to include.

    Returns:
        dict: Final headers dictionary for the outgoing request.
    """
    headers: dict[str, str] = {}
    rid = REQUEST_ID_CTX.get()
    if rid and rid != "-":
        headers["X-Request-ID"] = rid
    sid = SPAN_ID_CTX.get()
    if sid and sid != "-":
        headers["X-Span-ID"] = sid
    if extra:
        headers.update(extra)
    return headers


class HttpInventoryClient(InventoryPort):
    """HTTP client for the inventory service's stock lookup endpoint."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.INVENTORY_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECS

    def check_stock(self, sku_codes: List[str]) -> List[InventoryStatus]:
        """Query stock status for the given SKU codes.

        Sends ``GET /api/inventory?skuCode=a&skuCode=b`` and expects a JSON
        array of ``{"skuCode": str, "inStock": bool}``.

        Args:
            sku_codes: SKU codes to look up, sent in the given order.

        Returns:
            list[InventoryStatus]: One entry per status returned by the service. An
            empty or ``null`` body yields an empty list.

        Raises:
            InventoryUnavailableError: On transport errors, timeouts, non-2xx
                responses or malformed bodies.
        """
        headers = _request_headers()
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.get(
                    f"{self.base_url}/api/inventory",
                    params={"skuCode": list(sku_codes)},
                    headers=headers or None,
                )
                resp.raise_for_status()
                # an empty or null body means no stock data: the domain rejects it
                payload = resp.json() if resp.content.strip() else None
                rows = _INVENTORY_RESPONSE.validate_python(payload) if payload is not None else []
        except httpx.HTTPError as e:
            raise InventoryUnavailableError(f"INVENTORY_UNAVAILABLE: {e}") from e
        except ValueError as e:
            # invalid JSON or schema mismatch
            raise InventoryUnavailableError("INVENTORY_MALFORMED_RESPONSE") from e

        return [InventoryStatus(sku_code=r.sku_code, in_stock=r.in_stock) for r in rows]
