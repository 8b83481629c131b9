# novacart/api/__init__.py
from fastapi import APIRouter

from novacart.api.routers import auth, carts, health, orders, products

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(orders.router)
