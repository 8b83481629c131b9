import json
import os

#must be set before novacart is imported: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATALOG_STORE"] = "unavailable"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from novacart.data.database import Base, SessionLocal, engine
from novacart.data import models  # noqa: F401
from novacart.domain.errors import StoreUnavailable
from novacart.domain.schemas import Product
from novacart.main import create_app
from novacart.repos.catalog_store import CatalogStore, UnavailableStore
from novacart.repos.snapshot import ProductSnapshot
from novacart.services.catalog_service import CatalogResolver

PRODUCTS = [
    {
        "id": "1",
        "sku": "KB-1",
        "name": "Mechanical Keyboard",
        "price": 199.99,
        "category": "Electronics",
        "description": "Clicky keys",
        "stock": 20,
        "isFeatured": True,
        "imageUrls": ["/images/electronics.jpg"],
        "createdAt": "2024-01-03T00:00:00+00:00",
    },
    {
        "id": "2",
        "sku": "MS-1",
        "name": "Wireless Mouse",
        "price": 49.5,
        "category": "Electronics",
        "description": "Ergonomic mouse for work",
        "stock": 21,
        "isFeatured": False,
        "imageUrls": ["/images/electronics.jpg"],
        "createdAt": "2024-01-01T00:00:00+00:00",
    },
    {
        "id": "3",
        "sku": "MN-1",
        "name": "4K Monitor",
        "price": 899.0,
        "category": "Electronics",
        "description": "Sharp display",
        "stock": 22,
        "isFeatured": False,
        "imageUrls": ["/images/electronics.jpg"],
        "createdAt": "2024-01-05T00:00:00+00:00",
    },
    {
        "id": "4",
        "sku": "MG-1",
        "name": "Coffee Mug",
        "price": 12.0,
        "category": "Kitchen",
        "description": "Holds keyboard-warming coffee",
        "stock": 23,
        "isFeatured": False,
        "imageUrls": ["/images/kitchen.jpg"],
        "createdAt": "2024-01-02T00:00:00+00:00",
    },
    {
        "id": "5",
        "sku": "TB-1",
        "name": "Teapot",
        "price": 49.5,
        "category": "Kitchen",
        "description": "Ceramic teapot",
        "stock": 24,
        "isFeatured": True,
        "imageUrls": ["/images/kitchen.jpg"],
        "createdAt": "2024-01-04T00:00:00+00:00",
    },
]


class FakeStore(CatalogStore):
    """In-memory primary store. fail=True behaves like an unreachable mongo."""

    def __init__(self, products=None, fail=False):
        self.products = [Product.model_validate(p) for p in (products or [])]
        self.fail = fail
        self.queries = []

    def find_many(self, query):
        self.queries.append(query)
        if self.fail:
            raise StoreUnavailable("connection refused")
        return len(self.products), self.products[query.skip:query.skip + query.take]

    def find_one(self, product_id):
        if self.fail:
            raise StoreUnavailable("connection refused")
        return next((p for p in self.products if p.id == product_id), None)


def write_products(path, products):
    path.write_text(json.dumps(products), encoding="utf-8")
    return path


@pytest.fixture
def snapshot_path(tmp_path):
    return write_products(tmp_path / "local_products.json", PRODUCTS)


@pytest.fixture
def snapshot(snapshot_path):
    return ProductSnapshot(snapshot_path)


@pytest.fixture
def catalog(snapshot):
    #no document store: everything is served from the snapshot file
    return CatalogResolver(store=UnavailableStore(), snapshot=snapshot)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session, catalog):
    app = create_app(catalog=catalog)
    return TestClient(app)


def register(client, email="jan@example.com", password="secret123", name="Jan"):
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}
