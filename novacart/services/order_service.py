# novacart/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from novacart.data.models import OrderModel, OrderItemModel
from novacart.domain.errors import EmptyCartError, NotFoundError, ValidationError
from novacart.repos.cart_repo import CartRepo
from novacart.repos.order_repo import OrderRepo
from novacart.services.catalog_service import CatalogResolver
from novacart.services.notification_service import NotificationService
from novacart.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order domain, kept apart from CartService.
    An order is built from the user's cart and the cart is emptied in the
    same transaction.
    """

    def __init__(
        self,
        db: Session,
        catalog: CatalogResolver,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.catalog = catalog
        self.notification_service = notification_service or NotificationService()

    def create_order(self, user_id: int) -> Dict[str, Any]:
        """
        1. Reject a missing or empty cart
        2. Price every line at the current catalog price
        3. Insert order + items and clear the cart, one commit
        4. Queue the notification (async)
        """
        cart = self.cart_repo.get_cart_by_user(user_id)
        items = self.cart_repo.get_cart_items(cart.id) if cart else []

        if not items:
            raise EmptyCartError("Cart is empty")

        total = Decimal("0.00")
        order_items = []

        for item in items:
            product = self.catalog.find_by_id(item.product_id)
            if product is None:
                logger.warning(
                    f"Product {item.product_id} not found in catalog, "
                    f"left out of order for user {user_id}"
                )
                continue

            price = Decimal(str(product.price)).quantize(Decimal("0.01"))
            total += price * item.quantity
            order_items.append(
                OrderItemModel(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price_at_purchase=price,
                )
            )

        if not order_items:
            raise ValidationError("None of the products in the cart are available.")

        try:
            order = self.repo.add_order(
                OrderModel(
                    user_id=user_id,
                    total=total,
                    status="PENDING",
                    items=order_items,
                )
            )
            self.cart_repo.clear_cart(cart.id)
            self.db.commit()
        except SQLAlchemyError as e:
            #nothing of the order or the cart clearing survives
            self.db.rollback()
            logger.error(f"Order for user {user_id} rolled back: {e}")
            raise

        logger.info(f"Order {order.id} created from cart {cart.id}, total {total}")

        self.notification_service.send_order_notification(user_id, order.id, float(total))

        return self._to_dict(order)

    def get_my_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(o) for o in self.repo.get_orders_by_user(user_id)]

    def get_order(self, user_id: int, order_id: int) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)

        #someone else's order looks the same as a missing one
        if not order or order.user_id != user_id:
            raise NotFoundError("Order not found")

        return self._to_dict(order)

    @staticmethod
    def _to_dict(order: OrderModel) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "total": order.total,
            "status": order.status,
            "created_at": order.created_at,
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "price_at_purchase": i.price_at_purchase,
                }
                for i in order.items
            ],
        }
