from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.models import Order

from .models import Bill


class BillRepository:

    @staticmethod
    async def create(db: AsyncSession, bill: Bill) -> Bill:
        db.add(bill)
        await db.commit()
        await db.refresh(bill)
        return bill

    @staticmethod
    async def get_by_order(db: AsyncSession, order_id: int) -> Optional[Bill]:
        result = await db.execute(select(Bill).where(Bill.order_id == order_id))
        return result.scalars().first()

    @staticmethod
    async def next_bill_number(db: AsyncSession) -> str:
        count = (await db.execute(select(func.count(Bill.id)))).scalar_one()
        year = datetime.now(timezone.utc).year
        return f"BILL-{year}-{count + 1:04d}"

    @staticmethod
    async def list_for_customer(db: AsyncSession, customer_id: int) -> Sequence[tuple[Bill, str]]:
        result = await db.execute(
            select(Bill, Order.status)
            .join(Order, Order.id == Bill.order_id)
            .where(Bill.customer_id == customer_id)
            .order_by(Bill.created_at.desc(), Bill.id.desc())
        )
        return result.all()

    @staticmethod
    async def get_for_customer(db: AsyncSession, bill_id: int, customer_id: int) -> Optional[tuple[Bill, str]]:
        result = await db.execute(
            select(Bill, Order.status)
            .join(Order, Order.id == Bill.order_id)
            .where(Bill.id == bill_id)
            .where(Bill.customer_id == customer_id)
        )
        return result.first()
