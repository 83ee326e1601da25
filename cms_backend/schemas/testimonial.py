"""
Pydantic schemas for Testimonial API
"""
from pydantic import EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from cms_backend.schemas.admin import AuthorSummary
from cms_backend.schemas.base import CamelModel, StrictCamelModel


class TestimonialCreate(StrictCamelModel):
    """Public testimonial submission"""
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    company: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=10)
    rating: Optional[int] = Field(None, ge=1, le=5)
    avatar: Optional[str] = Field(None, max_length=500)


class TestimonialUpdate(StrictCamelModel):
    """Admin edit of a testimonial"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    company: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=255)
    message: Optional[str] = Field(None, min_length=10)
    rating: Optional[int] = Field(None, ge=1, le=5)
    avatar: Optional[str] = Field(None, max_length=500)
    is_approved: Optional[bool] = None
    featured: Optional[bool] = None


class PublicTestimonialResponse(CamelModel):
    """Testimonial as shown on the public website"""
    id: UUID
    name: str
    company: Optional[str] = None
    position: Optional[str] = None
    message: str
    rating: Optional[int] = None
    avatar: Optional[str] = None
    featured: bool
    created_at: datetime


class TestimonialResponse(PublicTestimonialResponse):
    """Full testimonial for admins"""
    email: str
    is_approved: bool
    approved_at: Optional[datetime] = None
    approved_by: Optional[UUID] = None
    approver: Optional[AuthorSummary] = None
    updated_at: Optional[datetime] = None


class TestimonialStats(CamelModel):
    total: int
    approved: int
    pending: int
    featured: int
