import pytest
from typing import Any, Dict, Generator, List
from fastapi.testclient import TestClient

from paydesk.app_setup.factory import create_app
from paydesk.desk import Desk
from paydesk.errors import CatalogUnavailableError
from paydesk.infra.storage import MemoryStore

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "title": "Phone", "price": 1000, "discountPercentage": "10"},
    {"id": 2, "title": "Case", "price": 250, "discountPercentage": 12.5},
    {"id": 3, "title": "Charger", "price": 2400, "discountPercentage": 0},
    {"id": 4, "title": "Cable", "price": 15, "discountPercentage": "oops"},
    {"id": 5, "title": "Stand", "price": 480},
] + [
    {"id": i, "title": f"Produit {i}", "price": 100 * i, "discountPercentage": 5}
    for i in range(6, 13)
]


class FakeCatalog:
    """Source produits en mémoire, même contrat que CatalogClient.fetch_products."""

    def __init__(self, products=None, fail: bool = False):
        self.products = list(PRODUCTS if products is None else products)
        self.fail = fail
        self.calls = []

    async def fetch_products(self, limit: int, skip: int) -> Dict[str, Any]:
        self.calls.append((limit, skip))
        if self.fail:
            raise CatalogUnavailableError("source indisponible")
        return {"products": self.products[skip:skip + limit], "total": len(self.products)}


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def store() -> MemoryStore:
    # Utilisateur déjà connecté: le garde ne vérifie que la présence du token
    return MemoryStore({"auth_token": "fake-token"})


@pytest.fixture
def desk(store, catalog) -> Desk:
    return Desk(store, catalog_client=catalog, page_size=5, seed_balance=2400)


@pytest.fixture
def app(desk):
    return create_app(desk=desk)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
