from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from services.bill_service.schemas import BillItem


class ShippingAddress(BaseModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None


class CheckoutItem(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CheckoutRequest(BaseModel):
    items: List[CheckoutItem] = Field(min_length=1)
    shipping_address: ShippingAddress
    payment_method: str = "COD"
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None
    shipping_address: Optional[ShippingAddress] = None
    payment_method: Optional[str] = None


class StatusUpdate(BaseModel):
    status: Optional[str] = None


class BulkStatusUpdate(BaseModel):
    order_ids: List[int] = Field(min_length=1)
    status: Optional[str] = None


class OrderItemResponse(BaseModel):
    product_id: int
    name: str
    price: float
    quantity: int
    image: Optional[str] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    customer_id: Optional[int] = None
    items: List[OrderItemResponse]
    subtotal: float
    shipping: float
    discount: float
    tax: float
    total: float
    shipping_address: Optional[dict] = None
    payment_method: str
    status: str
    notes: Optional[str] = None
    placed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderList(BaseModel):
    orders: List[OrderResponse]


class DealerOrderView(BaseModel):
    """An order as one dealer may see it: only that dealer's lines and their value."""

    id: int
    customer_id: Optional[int] = None
    items: List[OrderItemResponse]
    item_count: int
    dealer_subtotal: float
    shipping_address: Optional[dict] = None
    payment_method: str
    status: str
    notes: Optional[str] = None
    placed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def build(cls, order, scope) -> "DealerOrderView":
        items = scope.own_items(order)
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            items=[OrderItemResponse.model_validate(item) for item in items],
            item_count=sum(item.quantity for item in items),
            dealer_subtotal=round(sum(item.price * item.quantity for item in items), 2),
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            status=order.status,
            notes=order.notes,
            placed_at=order.placed_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class DealerOrderPage(BaseModel):
    orders: List[DealerOrderView]
    total: int
    limit: int
    skip: int


class DealerBillView(BaseModel):
    """A bill as one dealer may see it: only that dealer's lines and their value."""

    id: int
    bill_number: str
    order_id: int
    order_status: Optional[str] = None
    items: List[BillItem]
    dealer_subtotal: float
    payment_method: str
    dealer_details: dict
    status: str
    created_at: Optional[datetime] = None

    @classmethod
    def build(cls, bill, order, scope) -> "DealerBillView":
        items = scope.own_items(order)
        return cls(
            id=bill.id,
            bill_number=bill.bill_number,
            order_id=bill.order_id,
            order_status=order.status,
            items=[
                BillItem(
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                    total=round(item.price * item.quantity, 2),
                )
                for item in items
            ],
            dealer_subtotal=round(sum(item.price * item.quantity for item in items), 2),
            payment_method=bill.payment_method,
            dealer_details=bill.dealer_details,
            status=bill.status,
            created_at=bill.created_at,
        )


class StatusChangeResponse(BaseModel):
    order: DealerOrderView
    changed: bool
    bill: Optional[DealerBillView] = None


class BulkStatusResult(BaseModel):
    requested: int
    found: int
    authorized: int
    modified: int
    not_found: List[int] = []
    forbidden: List[int] = []
    unchanged: List[int] = []
