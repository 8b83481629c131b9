# novacart/services/cart_service.py
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from novacart.data.models import CartModel, CartItemModel
from novacart.domain.errors import NotFoundError, ValidationError
from novacart.domain.schemas import UnknownProduct
from novacart.repos.cart_repo import CartRepo
from novacart.services.catalog_service import CatalogResolver
from novacart.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Per-user cart use cases.
    commands (add, update, remove) change the stored lines,
    get_cart only reads (and lazily creates the empty cart)
    Every result is materialized: lines joined with catalog products.
    """

    def __init__(self, db: Session, catalog: CatalogResolver):
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._get_or_create_cart(user_id)
        return self._materialize(cart)

    #commands
    def add_item(self, user_id: int, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0.")

        cart = self._get_or_create_cart(user_id)

        try:
            if self.repo.increment_item(cart.id, product_id, quantity):
                logger.info(f"Product {product_id} already in cart {cart.id}, quantity +{quantity}")
            else:
                self._insert_item(cart.id, product_id, quantity)
            self.repo.commit()
        except SQLAlchemyError:
            self.repo.rollback()
            raise

        return self._materialize(cart)

    def remove_item(self, user_id: int, product_id: str) -> Dict[str, Any]:
        cart = self._require_cart(user_id)

        try:
            deleted = self.repo.delete_cart_item(cart.id, product_id)
            self.repo.commit()
        except SQLAlchemyError:
            self.repo.rollback()
            raise

        logger.info(f"Removed product {product_id} from cart {cart.id} ({deleted} line(s))")
        return self._materialize(cart)

    def update_item(self, user_id: int, product_id: str, quantity: int) -> Dict[str, Any]:
        cart = self._require_cart(user_id)

        try:
            if quantity <= 0:
                #no zero-quantity rows, the line goes away
                self.repo.delete_cart_item(cart.id, product_id)
                logger.info(f"Quantity {quantity} for product {product_id}, line removed from cart {cart.id}")
            else:
                self.repo.set_item_quantity(cart.id, product_id, quantity)
                logger.info(f"Product {product_id} in cart {cart.id} set to {quantity}")
            self.repo.commit()
        except SQLAlchemyError:
            self.repo.rollback()
            raise

        return self._materialize(cart)

    #helpers
    def _insert_item(self, cart_id: int, product_id: str, quantity: int):
        try:
            self.repo.add_cart_item(
                CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
            )
            logger.info(f"Added new product {product_id} to cart {cart_id}")
        except IntegrityError:
            #a concurrent request inserted the line first, add on top of it
            self.repo.rollback()
            if not self.repo.increment_item(cart_id, product_id, quantity):
                raise

    def _get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        try:
            cart = self.repo.create_cart(CartModel(user_id=user_id))
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            cart = self.repo.get_cart_by_user(user_id)
            if cart is None:
                raise
            return cart

        logger.info(f"Created cart {cart.id} for user {user_id}")
        return cart

    def _require_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    def _materialize(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        lines = []
        total = 0.0

        for item in items:
            product = self.catalog.find_by_id(item.product_id)
            if product is None:
                #stale reference, the cart still has to render
                product = UnknownProduct(id=item.product_id)
            total += product.price * item.quantity
            lines.append(
                {
                    "id": item.id,
                    "cart_id": item.cart_id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "product": product,
                }
            )

        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "items": lines,
            "total": round(total, 2),
        }
