"""
SQLAlchemy models
"""
from cms_backend.models.admin import Admin
from cms_backend.models.blog import Blog, BlogTranslation, BlogStatus, SUPPORTED_LANGUAGES
from cms_backend.models.contact import Contact
from cms_backend.models.testimonial import Testimonial

__all__ = [
    "Admin",
    "Blog",
    "BlogTranslation",
    "BlogStatus",
    "SUPPORTED_LANGUAGES",
    "Contact",
    "Testimonial",
]

# Import Base for metadata.create_all
from cms_backend.core.database import Base
