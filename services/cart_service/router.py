from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import AuthContext, require_customer

from .schemas import CartItemCreate, CartItemUpdate, CartResponse
from .service import CartService

router = APIRouter(tags=["Cart"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "cart", "status": "running"}


@router.post("/", response_model=ApiResponse[CartResponse], status_code=status.HTTP_201_CREATED)
async def add_item(
    item: CartItemCreate,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(data=await CartService.add_item(db, auth.user_id, item))


@router.get("/{customer_id}", response_model=ApiResponse[CartResponse])
async def get_cart(
    customer_id: int,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    CartService.check_owner(customer_id, auth.user_id)
    return ApiResponse(data=await CartService.get_cart(db, customer_id))


@router.put("/{customer_id}/item/{product_id}", response_model=ApiResponse[CartResponse])
async def update_item(
    customer_id: int,
    product_id: int,
    payload: CartItemUpdate,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    CartService.check_owner(customer_id, auth.user_id)
    return ApiResponse(data=await CartService.update_quantity(db, customer_id, product_id, payload.quantity))


@router.delete("/{customer_id}/item/{product_id}", response_model=ApiResponse[CartResponse])
async def remove_item(
    customer_id: int,
    product_id: int,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    CartService.check_owner(customer_id, auth.user_id)
    cart = await CartService.remove_item(db, customer_id, product_id)
    return ApiResponse(data=cart, message="Item removed from cart")


@router.delete("/{customer_id}", response_model=ApiResponse[CartResponse])
async def clear_cart(
    customer_id: int,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    """Deletes all items in the customer's cart."""
    CartService.check_owner(customer_id, auth.user_id)
    cart = await CartService.clear(db, customer_id)
    return ApiResponse(data=cart, message="Cart cleared successfully")
