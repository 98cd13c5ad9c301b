from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse
from shared.security import AuthContext, require_customer

from .schemas import BillList, BillResponse
from .service import BillService

router = APIRouter(tags=["Bills"])
public_router = APIRouter()


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "bill", "status": "running"}


@router.get("/", response_model=ApiResponse[BillList])
async def list_bills(auth: AuthContext = Depends(require_customer), db: AsyncSession = Depends(get_db)):
    bills = await BillService.list_customer_bills(db, auth.user_id)
    return ApiResponse(data=BillList(bills=bills))


@router.get("/{bill_id}", response_model=ApiResponse[BillResponse])
async def get_bill(
    bill_id: int,
    auth: AuthContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
):
    return ApiResponse(data=await BillService.get_customer_bill(db, bill_id, auth.user_id))
