# novacart/repos/snapshot.py
import json
from pathlib import Path
from typing import List, Tuple

from pydantic import ValidationError as SchemaError

from novacart.domain.schemas import Product, ProductQuery
from novacart.utils.logging import get_logger

logger = get_logger(__name__)

SORT_FIELDS = {
    "name": "name",
    "price": "price",
    "createdAt": "created_at",
}


class ProductSnapshot:
    """
    Static point-in-time copy of the catalog (JSON array of products).

    Read on every call, never kept in sync with the live store.
    Unreadable or corrupt file behaves like an empty catalog.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> List[Product]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("snapshot root must be a JSON array")
            return [Product.model_validate(record) for record in raw]
        except (OSError, ValueError, SchemaError) as e:
            logger.error(f"Error reading or parsing product snapshot {self.path}: {e}")
            return []

    def get(self, product_id: str) -> Product | None:
        for product in self.load():
            if product.id == str(product_id):
                return product
        return None

    def query(self, query: ProductQuery) -> Tuple[int, List[Product]]:
        products = [p for p in self.load() if matches(p, query)]

        #list.sort is stable for reverse=True too, ties keep file order
        attr = SORT_FIELDS[query.sort_by]
        products.sort(key=lambda p: _sort_key(getattr(p, attr)), reverse=query.sort_order == "desc")

        skip = max(query.skip, 0)
        take = max(query.take, 0)
        return len(products), products[skip:skip + take]


def matches(product: Product, query: ProductQuery) -> bool:
    if query.category and product.category != query.category:
        return False

    if query.search:
        term = query.search.lower()
        if term not in product.name.lower() and term not in product.description.lower():
            return False

    if query.min_price is not None and product.price < query.min_price:
        return False
    if query.max_price is not None and product.price > query.max_price:
        return False

    return True


def _sort_key(value):
    # missing values (e.g. createdAt in old snapshots) go first when ascending, like mongo
    return (value is not None, value if value is not None else 0)
