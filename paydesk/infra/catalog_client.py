"""
Client HTTP de la source produits (GET /products?limit=&skip=).
- Réponse attendue: {"products": [{id, title, price, discountPercentage?}], "total": <int>}
- Toute erreur transport/HTTP/JSON devient CatalogUnavailableError.
"""
from typing import Any, Dict, Optional
import logging
import httpx
from paydesk.config import CATALOG_BASE_URL, HTTP_TIMEOUT_SECONDS
from paydesk.errors import CatalogUnavailableError

logger = logging.getLogger(__name__)


class CatalogClient:
    def __init__(
        self,
        base_url: str = CATALOG_BASE_URL,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch_products(self, limit: int, skip: int) -> Dict[str, Any]:
        url = f"{self._base_url}/products"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url, params={"limit": limit, "skip": skip})
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("catalog_client.fetch_products failed limit=%s skip=%s error=%s", limit, skip, e)
            raise CatalogUnavailableError(str(e)) from e
        return body if isinstance(body, dict) else {}
