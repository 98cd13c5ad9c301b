from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=0)  # 0 removes the line


class CartItemResponse(BaseModel):
    product_id: int
    name: str
    price: float
    quantity: int
    image: Optional[str] = None

    class Config:
        from_attributes = True


class CartResponse(BaseModel):
    customer_id: int
    items: List[CartItemResponse] = []
    pending_order_id: Optional[int] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
