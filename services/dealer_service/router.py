from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import AuthContext, require_dealer
from services.auth_service.schemas import AccountProfile
from services.feedback_service.schemas import ContactResponse, CustomerFeedback
from services.feedback_service.service import FeedbackService
from services.order_service.router import status_change_response
from services.order_service.schemas import (
    BulkStatusResult,
    BulkStatusUpdate,
    DealerOrderPage,
    DealerOrderView,
    StatusChangeResponse,
    StatusUpdate,
)
from services.order_service.service import OrderService
from services.product_service.schemas import ProductList, ProductResponse
from services.product_service.service import ProductService

from .schemas import DealerProfileUpdate, OrderStatusSummary, SalesSummary
from .service import DealerService

router = APIRouter(tags=["Dealer"])
public_router = APIRouter()


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "dealer", "status": "running"}


# --- orders ---

@router.get("/orders", response_model=ApiResponse[DealerOrderPage])
async def list_orders(
    status: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    skip: int = Query(default=0, ge=0),
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    scope, orders, total = await OrderService.list_dealer_orders(db, auth.user_id, status, limit, skip)
    page = DealerOrderPage(
        orders=[DealerOrderView.build(o, scope) for o in orders],
        total=total,
        limit=limit,
        skip=skip,
    )
    return ApiResponse(data=page)


@router.get("/orders/{order_id}", response_model=ApiResponse[DealerOrderView])
async def get_order(order_id: int, auth: AuthContext = Depends(require_dealer), db: AsyncSession = Depends(get_db)):
    scope, order = await OrderService.get_dealer_order(db, order_id, auth.user_id)
    return ApiResponse(data=DealerOrderView.build(order, scope))


@router.put("/orders/{order_id}/status", response_model=ApiResponse[StatusChangeResponse])
async def update_order_status(
    order_id: int,
    payload: StatusUpdate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    change = await OrderService.set_status(db, order_id, payload.status, auth.user_id)
    message = f"Order status updated to {change.order.status}" if change.changed else "Order status unchanged"
    return ApiResponse(data=status_change_response(change, auth.user_id), message=message)


@router.post("/orders/bulk-status", response_model=ApiResponse[BulkStatusResult])
async def bulk_update_status(
    payload: BulkStatusUpdate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    result = await OrderService.bulk_set_status(db, payload.order_ids, payload.status, auth.user_id)
    return ApiResponse(data=result, message=f"{result.modified} order(s) updated")


# --- catalog and profile ---

@router.get("/products", response_model=ApiResponse[ProductList])
async def list_own_products(
    category: Optional[str] = Query(default=None),
    featured: Optional[bool] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    products = await ProductService.list_products(
        db, category=category, featured=featured, active_only=active is True, dealer_id=auth.user_id
    )
    return ApiResponse(data=ProductList(products=[ProductResponse.model_validate(p) for p in products]))


@router.put("/profile", response_model=ApiResponse[AccountProfile])
async def update_profile(
    payload: DealerProfileUpdate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    dealer = await DealerService.update_profile(db, auth.user_id, payload)
    return ApiResponse(data=AccountProfile.model_validate(dealer), message="Profile updated successfully")


# --- analytics ---

@router.get("/analytics/sales", response_model=ApiResponse[SalesSummary])
async def sales_analytics(auth: AuthContext = Depends(require_dealer), db: AsyncSession = Depends(get_db)):
    return ApiResponse(data=await DealerService.sales_summary(db, auth.user_id))


@router.get("/analytics/orders", response_model=ApiResponse[OrderStatusSummary])
async def order_analytics(auth: AuthContext = Depends(require_dealer), db: AsyncSession = Depends(get_db)):
    return ApiResponse(data=await DealerService.order_status_summary(db, auth.user_id))


@router.get("/customers/{customer_id}/feedback", response_model=ApiResponse[CustomerFeedback])
async def customer_feedback(
    customer_id: int,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    contacts = await FeedbackService.customer_feedback(db, customer_id)
    return ApiResponse(data=CustomerFeedback(feedback=[ContactResponse.model_validate(c) for c in contacts]))
