from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import AuthContext, require_customer, require_dealer

from .schemas import CustomerList, CustomerProfile, CustomerProfileUpdate
from .service import CustomerService

router = APIRouter(tags=["Customers"])
public_router = APIRouter()


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "customer", "status": "running"}


# /profile is declared before /{customer_id} so it is matched first
@router.get("/profile", response_model=ApiResponse[CustomerProfile])
async def get_profile(auth: AuthContext = Depends(require_customer), db: AsyncSession = Depends(get_db)):
    customer = await CustomerService.get_customer(db, auth.user_id)
    return ApiResponse(data=CustomerProfile.model_validate(customer))


@router.put("/profile", response_model=ApiResponse[CustomerProfile])
async def update_profile(
    payload: CustomerProfileUpdate,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    customer = await CustomerService.update_profile(db, auth.user_id, payload)
    return ApiResponse(data=CustomerProfile.model_validate(customer), message="Profile updated successfully")


@router.get("/", response_model=ApiResponse[CustomerList])
async def list_customers(auth: AuthContext = Depends(require_dealer), db: AsyncSession = Depends(get_db)):
    customers = await CustomerService.list_customers(db)
    return ApiResponse(data=CustomerList(customers=[CustomerProfile.model_validate(c) for c in customers]))


@router.get("/{customer_id}", response_model=ApiResponse[CustomerProfile])
async def get_customer(
    customer_id: int,
    auth: AuthContext = Depends(require_dealer),
    db: AsyncSession = Depends(get_db),
):
    customer = await CustomerService.get_customer(db, customer_id)
    return ApiResponse(data=CustomerProfile.model_validate(customer))
