"""
HTTP API module.

Modular structure:
- auth.py: Login, profile, password change and recovery
- blogs.py: Multilingual blog CRUD and aggregates
- contacts.py: Contact submissions and read state
- testimonials.py: Testimonial submissions and moderation

Mounted under settings.API_PREFIX (/api).
"""
from fastapi import APIRouter

from .auth import router as auth_router
from .blogs import router as blogs_router
from .contacts import router as contacts_router
from .testimonials import router as testimonials_router

# Main API router
router = APIRouter()

# Include all sub-routers
router.include_router(auth_router, tags=["auth"])
router.include_router(blogs_router, tags=["blogs"])
router.include_router(contacts_router, tags=["contacts"])
router.include_router(testimonials_router, tags=["testimonials"])

__all__ = ["router"]
