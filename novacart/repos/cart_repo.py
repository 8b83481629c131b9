# novacart/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from novacart.data.models import CartModel, CartItemModel


class CartRepo:
    """Cart persistence. Commands don't commit, the service owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
                .execution_options(populate_existing=True)
            ).scalars()
        )

    def increment_item(self, cart_id: int, product_id: str, quantity: int) -> int:
        #single UPDATE ... SET quantity = quantity + n, no read-modify-write
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=CartItemModel.quantity + quantity)
        )
        return result.rowcount

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def set_item_quantity(self, cart_id: int, product_id: str, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        )
        return result.rowcount

    def clear_cart(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
