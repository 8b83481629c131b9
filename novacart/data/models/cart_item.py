# novacart/data/models/cart_item.py
from sqlalchemy import Column, Integer, ForeignKey, String, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from novacart.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    #catalog id (mongo / snapshot), not a relational FK
    product_id = Column(String, nullable=False)

    quantity = Column(Integer, nullable=False)

    cart = relationship("CartModel", back_populates="items")

    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="u_cart_product"),
        CheckConstraint("quantity > 0", name="ck_cart_item_quantity_positive"),
    )
