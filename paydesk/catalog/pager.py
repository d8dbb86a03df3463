"""
Pagination du catalogue: une page de `page_size` produits à la fois.
- Succès: produits + total mis à jour, page courante validée
- Échec: produits précédents conservés, message d'erreur exposé, pas de nouvel essai
- Chargements concurrents: seule la dernière demande émise peut publier son résultat
- Page au-delà de la dernière: ramenée à la dernière page connue de la réponse
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional
import logging
import math

from paydesk.config import CATALOG_PAGE_SIZE
from paydesk.errors import CatalogUnavailableError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load products."

FetchPage = Callable[[int, int], Awaitable[Dict[str, Any]]]


def _normalize_product(raw: Dict[str, Any]) -> Dict[str, Any]:
    try:
        price = float(raw.get("price") or 0)
    except (TypeError, ValueError):
        price = 0.0
    return {
        "id": raw.get("id"),
        "title": raw.get("title") or "",
        "price": price,
        "discountPercentage": raw.get("discountPercentage"),
    }


class CatalogPager:
    def __init__(self, fetch_page: FetchPage, page_size: int = CATALOG_PAGE_SIZE):
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.items: List[Dict[str, Any]] = []
        self.total_count = 0
        self.current_page = 1
        self.loading = False
        self.error: Optional[str] = None
        self._generation = 0

    async def load(self, page_index: int) -> bool:
        """Charge la page `page_index` (base 1). Retourne True si la page a été publiée."""
        self._generation += 1
        generation = self._generation
        self.error = None
        self.loading = True
        skip = (page_index - 1) * self.page_size
        try:
            body = await self._fetch_page(self.page_size, skip)
        except CatalogUnavailableError:
            if generation == self._generation:
                self.loading = False
                self.error = LOAD_ERROR_MESSAGE
            return False
        if generation != self._generation:
            logger.info("catalog.load stale response dropped page=%s", page_index)
            return False
        try:
            total_count = int(body.get("total") or 0)
        except (TypeError, ValueError):
            total_count = 0
        last_page = max(1, math.ceil(total_count / self.page_size))
        if page_index > last_page:
            logger.info("catalog.load page=%s beyond last=%s, clamped", page_index, last_page)
            return await self.load(last_page)
        self.loading = False
        products = body.get("products") or []
        self.items = [_normalize_product(p) for p in products if isinstance(p, dict)]
        self.total_count = total_count
        self.current_page = page_index
        return True

    @property
    def can_go_back(self) -> bool:
        return self.current_page > 1

    @property
    def can_go_forward(self) -> bool:
        return self.current_page * self.page_size < self.total_count

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    async def next(self) -> bool:
        if not self.can_go_forward:
            return False
        return await self.load(self.current_page + 1)

    async def previous(self) -> bool:
        if not self.can_go_back:
            return False
        return await self.load(self.current_page - 1)

    def find(self, product_id: Any) -> Optional[Dict[str, Any]]:
        key = str(product_id)
        return next((p for p in self.items if str(p.get("id")) == key), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": self.items,
            "page": self.current_page,
            "page_size": self.page_size,
            "total": self.total_count,
            "total_pages": self.total_pages,
            "can_go_back": self.can_go_back,
            "can_go_forward": self.can_go_forward,
            "loading": self.loading,
            "error": self.error,
        }
