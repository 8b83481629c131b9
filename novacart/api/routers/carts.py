# novacart/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from novacart.api.deps import get_cart_service, get_current_user
from novacart.domain.errors import NotFoundError, ValidationError
from novacart.domain.schemas import CartItemIn, CartItemUpdateIn, CartOut, TokenPayload
from novacart.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    user: TokenPayload = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_cart(user.user_id)


@router.post("", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user: TokenPayload = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.add_item(user.user_id, payload.product_id, payload.quantity)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.put("", response_model=CartOut)
def update_item(
    payload: CartItemUpdateIn,
    user: TokenPayload = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.update_item(user.user_id, payload.product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


@router.delete("/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    user: TokenPayload = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return svc.remove_item(user.user_id, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
