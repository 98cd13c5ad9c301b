from typing import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.repository import CustomerRepository

from .models import Contact, TestSubmission
from .repository import FeedbackRepository
from .schemas import ContactCreate, TestSubmissionCreate

logger = structlog.get_logger(__name__)


class FeedbackService:

    @staticmethod
    async def submit_contact(db: AsyncSession, data: ContactCreate) -> Contact:
        email = data.email.strip().lower()
        customer_id = data.customer_id
        if customer_id is None:
            customer = await CustomerRepository.get_by_email(db, email)
            customer_id = customer.id if customer else None

        contact = Contact(
            name=data.name,
            email=email,
            phone=data.phone or "",
            message=data.message,
            file_url=data.file_url or "",
            customer_id=customer_id,
            status="new",
        )
        contact = await FeedbackRepository.create_contact(db, contact)
        logger.info("contact_submitted", contact_id=contact.id, customer_id=customer_id)
        return contact

    @staticmethod
    async def submit_test(db: AsyncSession, data: TestSubmissionCreate) -> TestSubmission:
        submission = TestSubmission(
            name=data.name,
            email=data.email.strip().lower(),
            test_score=data.test_score,
            feedback=data.feedback or "",
        )
        if data.date is not None:
            submission.date = data.date
        submission = await FeedbackRepository.create_test_submission(db, submission)
        logger.info("test_submitted", submission_id=submission.id, score=submission.test_score)
        return submission

    @staticmethod
    async def customer_feedback(db: AsyncSession, customer_id: int) -> Sequence[Contact]:
        return await FeedbackRepository.list_for_customer(db, customer_id)
