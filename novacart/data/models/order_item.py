# novacart/data/models/order_item.py
from sqlalchemy import Column, Integer, ForeignKey, String, Numeric
from sqlalchemy.orm import relationship

from novacart.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String, nullable=False)

    quantity = Column(Integer, nullable=False)
    #price snapshot, never follows later catalog changes
    price_at_purchase = Column(Numeric(12, 2), nullable=False)

    order = relationship("OrderModel", back_populates="items")
