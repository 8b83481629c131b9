# novacart/api/routers/products.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from novacart.api.deps import get_catalog
from novacart.domain.schemas import ProductListOut, ProductOut, ProductQuery
from novacart.services.catalog_service import CatalogResolver

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListOut)
def list_products(
    search: str | None = Query(None),
    category: str | None = Query(None),
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    sort_by: Literal["price", "name", "createdAt"] = Query("name", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("asc", alias="sortOrder"),
    skip: int = Query(0),
    take: int = Query(10),
    catalog: CatalogResolver = Depends(get_catalog),
):
    """
    Search, filter, sort and page the catalog.
    GET /api/products?search=monitor&category=Electronics&sortBy=price&sortOrder=desc
    """
    query = ProductQuery(
        search=search or None,
        category=category or None,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=skip,
        take=take,
    )
    page = catalog.find_all(query)
    return {"count": page.count, "data": page.data}


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, catalog: CatalogResolver = Depends(get_catalog)):
    product_id = product_id.strip()
    if not product_id:
        raise HTTPException(status_code=400, detail="Product ID is required.")

    product = catalog.find_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found.")

    return {"data": product}
