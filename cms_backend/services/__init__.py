"""
Business logic services.
Routes stay thin; every rule about the data lives here.
"""
from cms_backend.services.auth_service import AuthService
from cms_backend.services.blog_service import BlogService
from cms_backend.services.contact_service import ContactService
from cms_backend.services.testimonial_service import TestimonialService
from cms_backend.services.notification_service import NotificationService

__all__ = [
    "AuthService",
    "BlogService",
    "ContactService",
    "TestimonialService",
    "NotificationService",
]
