from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Customer, Dealer


class CustomerRepository:

    @staticmethod
    async def create(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def save(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def get_by_id(db: AsyncSession, customer_id: int) -> Optional[Customer]:
        result = await db.execute(select(Customer).where(Customer.id == customer_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[Customer]:
        result = await db.execute(select(Customer).where(Customer.email == email))
        return result.scalars().first()

    @staticmethod
    async def list_all(db: AsyncSession) -> Sequence[Customer]:
        result = await db.execute(select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()))
        return result.scalars().all()


class DealerRepository:

    @staticmethod
    async def create(db: AsyncSession, dealer: Dealer) -> Dealer:
        db.add(dealer)
        await db.commit()
        await db.refresh(dealer)
        return dealer

    @staticmethod
    async def save(db: AsyncSession, dealer: Dealer) -> Dealer:
        db.add(dealer)
        await db.commit()
        await db.refresh(dealer)
        return dealer

    @staticmethod
    async def get_by_id(db: AsyncSession, dealer_id: int) -> Optional[Dealer]:
        result = await db.execute(select(Dealer).where(Dealer.id == dealer_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[Dealer]:
        result = await db.execute(select(Dealer).where(Dealer.email == email))
        return result.scalars().first()
