"""
FastAPI dependencies: authentication gates and service wiring
"""
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cms_backend.adapters.base import BaseEmailAdapter
from cms_backend.adapters.sendgrid import SendGridAdapter
from cms_backend.core.config import Settings, get_settings
from cms_backend.core.database import get_db
from cms_backend.core.exceptions import AppError, UnauthorizedError
from cms_backend.models.admin import Admin
from cms_backend.services.auth_service import AuthService
from cms_backend.services.blog_service import BlogService
from cms_backend.services.contact_service import ContactService
from cms_backend.services.notification_service import NotificationService
from cms_backend.services.testimonial_service import TestimonialService

logger = logging.getLogger(__name__)

security_scheme = HTTPBearer(auto_error=False)


def get_email_adapter(settings: Settings = Depends(get_settings)) -> BaseEmailAdapter:
    """Email provider. Override in tests with an in-memory adapter."""
    return SendGridAdapter(settings)


def get_notification_service(
    adapter: BaseEmailAdapter = Depends(get_email_adapter),
    settings: Settings = Depends(get_settings)
) -> NotificationService:
    return NotificationService(adapter, settings)


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    notifications: NotificationService = Depends(get_notification_service)
) -> AuthService:
    return AuthService(db, settings, notifications)


def get_blog_service(db: Session = Depends(get_db)) -> BlogService:
    return BlogService(db)


def get_contact_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service)
) -> ContactService:
    return ContactService(db, notifications)


def get_testimonial_service(
    db: Session = Depends(get_db),
    notifications: NotificationService = Depends(get_notification_service)
) -> TestimonialService:
    return TestimonialService(db, notifications)


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security_scheme),
    auth: AuthService = Depends(get_auth_service)
) -> Admin:
    """
    FastAPI dependency for protected routes.
    
    Returns:
        Active Admin resolved from the bearer token
    
    Raises:
        UnauthorizedError: Missing, invalid or expired token
        ForbiddenError: Admin deactivated
    
    Example:
        @router.get("/protected")
        async def protected_route(admin: Admin = Depends(get_current_admin)):
            ...
    """
    if not credentials or not credentials.credentials:
        raise UnauthorizedError("Authentication required. Please provide a valid token.")
    
    return auth.verify_token(credentials.credentials)


async def get_optional_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security_scheme),
    auth: AuthService = Depends(get_auth_service)
) -> Optional[Admin]:
    """
    Like get_current_admin, but any failure means anonymous (None).
    """
    if not credentials or not credentials.credentials:
        return None
    
    try:
        return auth.verify_token(credentials.credentials)
    except AppError as e:
        logger.debug(f"Ignoring invalid optional token: {e.message}")
        return None
