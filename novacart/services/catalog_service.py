# novacart/services/catalog_service.py
from novacart.domain.errors import StoreUnavailable
from novacart.domain.schemas import Product, ProductPage, ProductQuery
from novacart.repos.catalog_store import CatalogStore
from novacart.repos.snapshot import ProductSnapshot
from novacart.utils.settings import PRODUCTS_MAX_TAKE
from novacart.utils.logging import get_logger

logger = get_logger(__name__)

#largest skip BSON can encode (signed 64-bit)
MAX_SKIP = 2**63 - 1


class CatalogResolver:
    """
    Product lookups for the API, carts and orders.

    The primary store is tried first. When it is unavailable the same query
    runs against the snapshot file; callers never see the store failure,
    only possibly stale data.
    """

    def __init__(self, store: CatalogStore, snapshot: ProductSnapshot, max_take: int = PRODUCTS_MAX_TAKE):
        self.store = store
        self.snapshot = snapshot
        self.max_take = max_take

    def find_all(self, query: ProductQuery) -> ProductPage:
        query = self.normalize(query)

        try:
            count, data = self.store.find_many(query)
        except StoreUnavailable as e:
            logger.warning(f"Catalog store unavailable ({e}), serving products from snapshot")
            count, data = self.snapshot.query(query)

        return ProductPage(count=count, data=data)

    def find_by_id(self, product_id: str) -> Product | None:
        try:
            return self.store.find_one(product_id)
        except StoreUnavailable as e:
            logger.warning(f"Catalog store unavailable ({e}), looking up product {product_id} in snapshot")
            return self.snapshot.get(product_id)

    def normalize(self, query: ProductQuery) -> ProductQuery:
        #malformed pagination is clamped, never an error
        skip = min(max(query.skip, 0), MAX_SKIP)
        take = min(max(query.take, 0), self.max_take)
        if skip == query.skip and take == query.take:
            return query
        return query.model_copy(update={"skip": skip, "take": take})
