# novacart/data/seed.py
"""
Loads the product catalog.

    python -m novacart.data.seed ecommerce_products.json

The source file is {"products": [{"sku", "name", "price", "category"}, ...]}
with prices in minor units. The transformed products are always written to
the snapshot file; mongo is seeded when reachable.
"""
import argparse
import json
import re
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List

from pymongo.errors import PyMongoError

from novacart.repos.catalog_store import get_products_collection
from novacart.utils.retry import mongo_retry
from novacart.utils.settings import PRODUCTS_SNAPSHOT_PATH
from novacart.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SOURCE = "ecommerce_products_50_items.json"


def load_source(path: Path) -> List[dict]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    products = raw.get("products") if isinstance(raw, dict) else None
    if not isinstance(products, list):
        raise ValueError(f"{path} has no 'products' list")
    return products


def category_slug(category: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", category.lower()).strip("-")


def transform(products: List[dict], now: datetime | None = None) -> List[dict]:
    now = now or datetime.now(timezone.utc)
    out = []

    for index, p in enumerate(products):
        category = p["category"]
        out.append(
            {
                "id": str(index + 1),
                "sku": p["sku"],
                "name": p["name"],
                "price": p["price"] / 100,
                "category": category,
                "description": (
                    "The perfect item for your needs! This product is part of our premium "
                    f"collection in the {category} category. SKU: {p['sku']}."
                ),
                "stock": 20 + (index % 15),
                "isFeatured": index % 5 == 0,
                "imageUrls": [f"/images/{category_slug(category)}.jpg"],
                #spaced out so createdAt sorting is deterministic
                "createdAt": (now + timedelta(seconds=index)).isoformat(),
            }
        )

    return out


def write_snapshot(products: List[dict], path: str | Path = PRODUCTS_SNAPSHOT_PATH) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(products, indent=2), encoding="utf-8")
    logger.info(f"Wrote {len(products)} products to snapshot {path}")
    return path


@mongo_retry()
def seed_mongo(products: List[dict], collection=None) -> int:
    collection = collection if collection is not None else get_products_collection()
    docs = []
    for p in products:
        doc = dict(p)
        doc["_id"] = doc.pop("id")
        doc["createdAt"] = datetime.fromisoformat(doc["createdAt"])
        docs.append(doc)

    collection.delete_many({})
    if docs:
        collection.insert_many(docs)
    logger.info(f"Seeded {len(docs)} products into mongo")
    return len(docs)


def seed(source: str | Path = DEFAULT_SOURCE, snapshot_path: str | Path = PRODUCTS_SNAPSHOT_PATH, collection=None) -> List[dict]:
    products = transform(load_source(Path(source)))
    write_snapshot(products, snapshot_path)

    try:
        seed_mongo(products, collection)
    except PyMongoError as e:
        logger.error(f"MongoDB seeding failed, the snapshot is the only product source: {e}")

    return products


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the NovaCart product catalog")
    parser.add_argument("source", nargs="?", default=DEFAULT_SOURCE)
    parser.add_argument("--snapshot", default=PRODUCTS_SNAPSHOT_PATH)
    args = parser.parse_args(argv)

    try:
        seed(args.source, args.snapshot)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Error loading product source {args.source}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
