from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.sql import func

from shared.config.database import Base


class Bill(Base):
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)
    bill_number = Column(String(40), unique=True, nullable=False, index=True)
    # One bill per order at most
    order_id = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
    items = Column(JSON, nullable=False, default=list)  # [{name, quantity, price, total}]
    subtotal = Column(Float, nullable=False)
    tax = Column(Float, nullable=False)
    shipping = Column(Float, nullable=False)
    discount = Column(Float, nullable=False, default=0)
    total = Column(Float, nullable=False)
    payment_method = Column(String(50), nullable=False, default="COD")
    dealer_details = Column(JSON, nullable=False, default=dict)
    customer_details = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, delivered
    created_at = Column(DateTime(timezone=True), server_default=func.now())
