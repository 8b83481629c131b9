#import all models so SQLAlchemy registers them in Base.metadata

from novacart.data.models.user import UserModel, Role
from novacart.data.models.cart import CartModel
from novacart.data.models.cart_item import CartItemModel
from novacart.data.models.order import OrderModel
from novacart.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "Role", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
