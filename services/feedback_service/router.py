from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import ApiResponse

from .schemas import ContactCreate, ContactResponse, TestSubmissionCreate, TestSubmissionResponse
from .service import FeedbackService

router = APIRouter(tags=["Feedback"])
public_router = APIRouter()


@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "feedback", "status": "running"}


@router.post("/contact", response_model=ApiResponse[ContactResponse], status_code=status.HTTP_201_CREATED)
async def submit_contact(payload: ContactCreate, db: AsyncSession = Depends(get_db)):
    contact = await FeedbackService.submit_contact(db, payload)
    return ApiResponse(data=ContactResponse.model_validate(contact), message="Contact form submitted successfully")


@router.post(
    "/test-submissions",
    response_model=ApiResponse[TestSubmissionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_test(payload: TestSubmissionCreate, db: AsyncSession = Depends(get_db)):
    submission = await FeedbackService.submit_test(db, payload)
    return ApiResponse(data=TestSubmissionResponse.model_validate(submission), message="Test data stored successfully")
