"""
Pydantic schemas for Contact API
"""
from pydantic import EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from cms_backend.schemas.base import CamelModel, StrictCamelModel


class ContactCreate(StrictCamelModel):
    """Public contact form submission"""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    subject: Optional[str] = Field(None, max_length=200)
    message: str = Field(..., min_length=10)


class ContactUpdate(StrictCamelModel):
    """Only the read state of a contact is mutable"""
    is_read: Optional[bool] = None


class ContactResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    message: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ContactStats(CamelModel):
    total: int
    read: int
    unread: int
