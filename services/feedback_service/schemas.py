from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class ContactCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)
    phone: Optional[str] = None
    file_url: Optional[str] = None
    customer_id: Optional[int] = None

    @field_validator("name", "message", "phone", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class ContactResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str = ""
    message: str
    file_url: str = ""
    customer_id: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerFeedback(BaseModel):
    feedback: List[ContactResponse]


class TestSubmissionCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    test_score: float = Field(ge=0, le=100)
    feedback: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("name", "feedback", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class TestSubmissionResponse(BaseModel):
    id: int
    name: str
    email: str
    test_score: float
    feedback: str = ""
    date: Optional[datetime] = None

    class Config:
        from_attributes = True
