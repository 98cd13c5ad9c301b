from typing import List, Optional

from pydantic import BaseModel, EmailStr

from services.customer_service.schemas import PasswordChange


class DealerProfileUpdate(PasswordChange):
    name: Optional[str] = None
    company_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class SalesSummary(BaseModel):
    total_sales: float
    total_orders: int
    average_order_value: float


class StatusCount(BaseModel):
    status: str
    count: int


class OrderStatusSummary(BaseModel):
    status_counts: List[StatusCount]
