from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Contact, TestSubmission


class FeedbackRepository:

    @staticmethod
    async def create_contact(db: AsyncSession, contact: Contact) -> Contact:
        db.add(contact)
        await db.commit()
        await db.refresh(contact)
        return contact

    @staticmethod
    async def create_test_submission(db: AsyncSession, submission: TestSubmission) -> TestSubmission:
        db.add(submission)
        await db.commit()
        await db.refresh(submission)
        return submission

    @staticmethod
    async def list_for_customer(db: AsyncSession, customer_id: int) -> Sequence[Contact]:
        result = await db.execute(
            select(Contact)
            .where(Contact.customer_id == customer_id)
            .order_by(Contact.created_at.desc(), Contact.id.desc())
        )
        return result.scalars().all()
