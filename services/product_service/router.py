from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import AuthContext, require_dealer

from .schemas import ProductCreate, ProductDeleted, ProductList, ProductResponse, ProductUpdate
from .service import ProductService

router = APIRouter(tags=["Products"])
public_router = APIRouter()  # For any public endpoints (e.g. health check)


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "product", "status": "running"}


@router.get("/", response_model=ApiResponse[ProductList])
async def list_products(
    category: Optional[str] = Query(default=None),
    featured: Optional[bool] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    # Only active products unless the caller explicitly asks for active=false
    products = await ProductService.list_products(
        db, category=category, featured=featured, active_only=active is not False
    )
    return ApiResponse(data=ProductList(products=[ProductResponse.model_validate(p) for p in products]))


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    product = await ProductService.get_product_by_id(db, product_id)
    return ApiResponse(data=ProductResponse.model_validate(product))


@router.post("/", response_model=ApiResponse[ProductResponse], status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db)
):
    created = await ProductService.create_product(db, product, auth.user_id)
    return ApiResponse(data=ProductResponse.model_validate(created), message="Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
async def update_product(
    product_id: int,
    payload: ProductUpdate,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db)
):
    updated = await ProductService.update_product(db, product_id, payload, auth.user_id)
    return ApiResponse(data=ProductResponse.model_validate(updated), message="Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[ProductDeleted])
async def delete_product(
    product_id: int,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db)
):
    deleted = await ProductService.delete_product(db, product_id, auth.user_id)
    return ApiResponse(data=deleted, message="Product deleted successfully")
