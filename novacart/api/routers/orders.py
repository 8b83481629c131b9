# novacart/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from novacart.api.deps import get_current_user, get_order_service
from novacart.domain.errors import NotFoundError, ValidationError
from novacart.domain.schemas import OrderOut, TokenPayload
from novacart.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    user: TokenPayload = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    """
    Turns the user's cart into an order and empties the cart.
    Notification goes out asynchronously.
    """
    try:
        return svc.create_order(user.user_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("/myorders", response_model=List[OrderOut])
def get_my_orders(
    user: TokenPayload = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.get_my_orders(user.user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: TokenPayload = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    try:
        return svc.get_order(user.user_id, order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
