from typing import Iterable, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order
from .status import PENDING, allowed_sources
from .visibility import DealerScope


class OrderRepository:

    @staticmethod
    async def save(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.commit()
        return await OrderRepository.get_order(db, order.id)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Optional[Order]:
        result = await db.execute(
            select(Order).where(Order.id == order_id).execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def get_orders(db: AsyncSession, order_ids: Iterable[int]) -> Sequence[Order]:
        ids = list(dict.fromkeys(order_ids))
        if not ids:
            return []
        result = await db.execute(
            select(Order).where(Order.id.in_(ids)).execution_options(populate_existing=True)
        )
        return result.scalars().all()

    @staticmethod
    async def get_open_cart_order(db: AsyncSession, customer_id: int) -> Optional[Order]:
        result = await db.execute(
            select(Order)
            .where(Order.customer_id == customer_id)
            .where(Order.status == PENDING)
            .where(Order.placed_at.is_(None))
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    @staticmethod
    async def list_for_customer(db: AsyncSession, customer_id: int) -> Sequence[Order]:
        result = await db.execute(
            select(Order)
            .where(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def list_for_dealer(
        db: AsyncSession,
        scope: DealerScope,
        status: str | None = None,
        limit: int | None = None,
        skip: int = 0,
    ) -> tuple[Sequence[Order], int]:
        conditions = [scope.visible_clause()]
        if status:
            conditions.append(Order.status == status)

        stmt = select(Order).where(*conditions).order_by(Order.created_at.desc(), Order.id.desc()).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        orders = (await db.execute(stmt)).scalars().all()

        total = (await db.execute(select(func.count(Order.id)).where(*conditions))).scalar_one()
        return orders, total

    @staticmethod
    async def transition(db: AsyncSession, order_ids: Sequence[int], target: str) -> int:
        """
        Move the given orders to `target` in one guarded UPDATE. Only rows whose
        current status may legally enter `target` change. Returns rows modified.
        """
        if not order_ids:
            return 0
        stmt = (
            update(Order)
            .where(Order.id.in_(list(order_ids)))
            .where(Order.status.in_(sorted(allowed_sources(target))))
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount or 0
