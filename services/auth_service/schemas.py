from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator

from shared.security import ROLES


class _RoleMixin(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def normalize_role(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ROLES:
            raise ValueError("Invalid role. Use customer or dealer.")
        return value


class AccountCreate(_RoleMixin):
    email: EmailStr
    password: str
    name: Optional[str] = None
    company_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("password is required")
        return value


class AccountLogin(_RoleMixin):
    email: EmailStr
    password: str


class AccountProfile(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str
    redirect_url: str
    user: Optional[AccountProfile] = None


class TokenStatus(BaseModel):
    valid: bool = True
    user_id: int
    role: str
