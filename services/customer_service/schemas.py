from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, model_validator


class CustomerProfile(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    language: Optional[str] = None
    currency: Optional[str] = None
    newsletter: bool = False
    sms_notifications: bool = False
    email_notifications: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CustomerList(BaseModel):
    customers: List[CustomerProfile]


class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None

    @model_validator(mode="after")
    def both_or_neither(self):
        if bool(self.current_password) != bool(self.new_password):
            raise ValueError("current_password and new_password must be given together")
        return self


class CustomerProfileUpdate(PasswordChange):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    language: Optional[str] = None
    currency: Optional[str] = None
    newsletter: Optional[bool] = None
    sms_notifications: Optional[bool] = None
    email_notifications: Optional[bool] = None
