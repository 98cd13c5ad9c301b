from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class BillItem(BaseModel):
    name: str
    quantity: int
    price: float
    total: float


class BillResponse(BaseModel):
    id: int
    bill_number: str
    order_id: int
    order_status: Optional[str] = None
    customer_id: Optional[int] = None
    items: List[BillItem]
    subtotal: float
    tax: float
    shipping: float
    discount: float = 0
    total: float
    payment_method: str
    dealer_details: dict
    customer_details: dict
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BillList(BaseModel):
    bills: List[BillResponse]
