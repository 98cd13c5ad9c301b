from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from shared.config.database import Base

OPEN_CART_ORDER = "status = 'pending' AND placed_at IS NULL"


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        # At most one open pending order (the cart mirror) per customer
        Index(
            "uq_orders_customer_open_cart",
            "customer_id",
            unique=True,
            postgresql_where=text(OPEN_CART_ORDER),
            sqlite_where=text(OPEN_CART_ORDER),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)  # null for guests
    subtotal = Column(Float, nullable=False, default=0)
    shipping = Column(Float, nullable=False, default=0)
    discount = Column(Float, nullable=False, default=0)
    tax = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False, default=0)
    shipping_address = Column(JSON, nullable=True)
    payment_method = Column(String(50), nullable=False, default="COD")
    status = Column(String(20), nullable=False, default="pending", index=True)
    notes = Column(Text, nullable=True)
    placed_at = Column(DateTime(timezone=True), nullable=True)  # set by checkout
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    # Owner of the product when the line was written
    dealer_id = Column(Integer, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    image = Column(String(1000), nullable=True)

    order = relationship("Order", back_populates="items")
