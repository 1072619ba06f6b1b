"""Inventory Service Client - product and stock lookups over HTTP."""
import os
from typing import Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from rocketcart.logging import get_logger
from rocketcart.services.models import Product, StockRecord

logger = get_logger(__name__)

INVENTORY_API_URL = os.environ.get("INVENTORY_API_URL", "http://localhost:3333")
INVENTORY_TIMEOUT = float(os.environ.get("INVENTORY_TIMEOUT", "10.0"))
INVENTORY_MAX_ATTEMPTS = int(os.environ.get("INVENTORY_MAX_ATTEMPTS", "3"))

# Only connection-level failures are worth repeating; a 404 or a bad body is final
_retry_transport = retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(INVENTORY_MAX_ATTEMPTS),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
    reraise=True,
)


class InventoryClient:
    """
    Read-only client for the inventory/product service.

    Endpoints:
    - GET stock/{id}    -> {"id": ..., "amount": ...}
    - GET products/{id} -> {"id": ..., "title": ..., "price": ..., "image": ...}

    Raises httpx.HTTPStatusError on non-2xx, httpx.TransportError on network
    failure, pydantic.ValidationError or ValueError on a malformed body.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or INVENTORY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else INVENTORY_TIMEOUT
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                transport=self._transport,
            )
        return self._http_client

    @_retry_transport
    async def _get_json(self, path: str):
        client = await self._get_http_client()
        response = await client.get(path)
        response.raise_for_status()
        return response.json()

    async def get_stock(self, product_id: int) -> StockRecord:
        """Fetch the current stock record for a product."""
        data = await self._get_json(f"/stock/{product_id}")
        logger.debug("Stock for product %s: %s", product_id, data)
        return StockRecord.model_validate(data)

    async def get_product(self, product_id: int) -> Product:
        """Fetch a product by id."""
        data = await self._get_json(f"/products/{product_id}")
        return Product.model_validate(data)

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
