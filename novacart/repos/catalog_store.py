# novacart/repos/catalog_store.py
import re
from abc import ABC, abstractmethod
from typing import List, Tuple

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pydantic import ValidationError as SchemaError

from novacart.domain.errors import StoreUnavailable
from novacart.domain.schemas import Product, ProductQuery
from novacart.utils.settings import CATALOG_STORE, MONGO_DB_NAME, MONGO_TIMEOUT_MS, MONGO_URL
from novacart.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS_COLLECTION = "products"


class CatalogStore(ABC):
    """Primary product source. Any backing failure raises StoreUnavailable."""

    @abstractmethod
    def find_many(self, query: ProductQuery) -> Tuple[int, List[Product]]:
        ...

    @abstractmethod
    def find_one(self, product_id: str) -> Product | None:
        ...


class LiveStore(CatalogStore):
    """Mongo-backed catalog, filters/sort/pagination run in the database."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def find_many(self, query: ProductQuery) -> Tuple[int, List[Product]]:
        where = build_filter(query)
        direction = DESCENDING if query.sort_order == "desc" else ASCENDING
        logger.info(f"LiveStore find_many where={where} sort={query.sort_by}:{query.sort_order}")

        try:
            count = self.collection.count_documents(where)
            if query.take <= 0:
                return count, []
            cursor = (
                self.collection.find(where)
                .sort([(query.sort_by, direction), ("_id", direction)])
                .skip(max(query.skip, 0))
                .limit(query.take)
            )
            return count, [to_product(doc) for doc in cursor]
        except (PyMongoError, SchemaError) as e:
            raise StoreUnavailable(str(e)) from e

    def find_one(self, product_id: str) -> Product | None:
        try:
            doc = self.collection.find_one({"_id": str(product_id)})
            return to_product(doc) if doc else None
        except (PyMongoError, SchemaError) as e:
            raise StoreUnavailable(str(e)) from e


class UnavailableStore(CatalogStore):
    """Used when no document store is configured: every call goes to the fallback."""

    def __init__(self, reason: str = "catalog store disabled"):
        self.reason = reason

    def find_many(self, query: ProductQuery) -> Tuple[int, List[Product]]:
        raise StoreUnavailable(self.reason)

    def find_one(self, product_id: str) -> Product | None:
        raise StoreUnavailable(self.reason)


def build_filter(query: ProductQuery) -> dict:
    where: dict = {}

    if query.category:
        where["category"] = query.category

    if query.search:
        pattern = {"$regex": re.escape(query.search), "$options": "i"}
        where["$or"] = [{"name": pattern}, {"description": pattern}]

    price = {}
    if query.min_price is not None:
        price["$gte"] = query.min_price
    if query.max_price is not None:
        price["$lte"] = query.max_price
    if price:
        where["price"] = price

    return where


def to_product(doc: dict) -> Product:
    data = dict(doc)
    data["id"] = str(data.pop("_id"))
    return Product.model_validate(data)


def get_products_collection(client: MongoClient | None = None) -> Collection:
    client = client or MongoClient(MONGO_URL, serverSelectionTimeoutMS=MONGO_TIMEOUT_MS)
    return client[MONGO_DB_NAME][PRODUCTS_COLLECTION]


def build_catalog_store(kind: str | None = None) -> CatalogStore:
    kind = (kind or CATALOG_STORE).lower()

    if kind == "live":
        #MongoClient connects lazily, a dead server surfaces on first query
        return LiveStore(get_products_collection())
    if kind == "unavailable":
        logger.warning("Catalog store disabled by configuration, serving products from snapshot")
        return UnavailableStore()

    raise ValueError(f"Unknown CATALOG_STORE: {kind}")
