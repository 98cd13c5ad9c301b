from typing import Optional, Union

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import (
    AuthContext,
    get_current_auth,
    get_optional_auth,
    require_customer,
    require_dealer,
)

from .schemas import (
    CheckoutRequest,
    DealerBillView,
    DealerOrderView,
    OrderList,
    OrderResponse,
    OrderUpdate,
    StatusChangeResponse,
)
from .service import OrderService, StatusChange
from .visibility import DealerScope

router = APIRouter(tags=["Orders"])
public_router = APIRouter()


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


def status_change_response(change: StatusChange, dealer_id: int) -> StatusChangeResponse:
    scope = DealerScope(dealer_id)
    return StatusChangeResponse(
        order=DealerOrderView.build(change.order, scope),
        changed=change.changed,
        bill=DealerBillView.build(change.bill, change.order, scope) if change.bill else None,
    )


@router.get("/", response_model=ApiResponse[OrderList])
async def list_orders(auth: AuthContext = Depends(require_customer), db: AsyncSession = Depends(get_db)):
    orders = await OrderService.list_customer_orders(db, auth.user_id)
    return ApiResponse(data=OrderList(orders=[OrderResponse.model_validate(o) for o in orders]))


@router.post("/", response_model=ApiResponse[OrderResponse], status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: CheckoutRequest,
    auth: Optional[AuthContext] = Depends(get_optional_auth),
    db: AsyncSession = Depends(get_db),
):
    """Checkout. Works for guests; a signed-in customer's cart order is converted."""
    order = await OrderService.checkout(db, payload, auth)
    return ApiResponse(data=OrderResponse.model_validate(order), message="Order placed successfully!")


@router.get("/{order_id}", response_model=ApiResponse[Union[OrderResponse, DealerOrderView]])
async def get_order(
    order_id: int,
    auth: AuthContext = Depends(get_current_auth),
    db: AsyncSession = Depends(get_db),
):
    if auth.is_dealer:
        scope, order = await OrderService.get_dealer_order(db, order_id, auth.user_id)
        return ApiResponse(data=DealerOrderView.build(order, scope))
    order = await OrderService.get_customer_order(db, order_id, auth.user_id)
    return ApiResponse(data=OrderResponse.model_validate(order))


@router.put("/{order_id}", response_model=ApiResponse[StatusChangeResponse])
async def update_order(
    order_id: int,
    payload: OrderUpdate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    change = await OrderService.update_order(db, order_id, payload, auth.user_id)
    return ApiResponse(data=status_change_response(change, auth.user_id))
