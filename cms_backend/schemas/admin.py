"""
Pydantic schemas for Admin and Auth API
"""
from pydantic import EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from cms_backend.schemas.base import CamelModel, StrictCamelModel


class AdminResponse(CamelModel):
    """Admin profile. Credential fields are never part of it."""
    id: UUID
    email: str
    first_name: str
    last_name: str
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthorSummary(CamelModel):
    """Admin attribution embedded in blogs and testimonials"""
    id: UUID
    first_name: str
    last_name: str
    email: str


class LoginRequest(StrictCamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    admin: AdminResponse
    token: str
    token_type: str = "bearer"
    expires_in: int


class ProfileUpdate(StrictCamelModel):
    """Fields an admin may change on their own profile"""
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)


class ChangePasswordRequest(StrictCamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class ForgotPasswordRequest(StrictCamelModel):
    email: EmailStr


class ResetPasswordRequest(StrictCamelModel):
    email: EmailStr
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)
