"""
Notification Service - templated transactional emails.
Delivery is best-effort: failures are logged and never raised.
"""
import logging
from urllib.parse import quote

from cms_backend.adapters.base import BaseEmailAdapter, EmailMessage
from cms_backend.core.config import Settings
from cms_backend.models.admin import Admin
from cms_backend.models.contact import Contact
from cms_backend.models.testimonial import Testimonial
from cms_backend.utils.email_templates import (
    render_contact_notification,
    render_password_reset,
    render_testimonial_notification,
)

logger = logging.getLogger(__name__)


class NotificationService:
    """Builds notification emails and hands them to an email adapter"""
    
    def __init__(self, adapter: BaseEmailAdapter, settings: Settings):
        self.adapter = adapter
        self.settings = settings
    
    async def _dispatch(self, message: EmailMessage, kind: str) -> bool:
        """
        Send one message, swallowing delivery failures.
        
        Returns:
            True if the adapter accepted the message
        """
        try:
            await self.adapter.send(message)
            return True
        except Exception as e:
            logger.warning(f"Failed to send {kind} email to {message.to}: {e}")
            return False
    
    def build_reset_url(self, email: str, token: str) -> str:
        base = self.settings.FRONTEND_URL.rstrip("/")
        return f"{base}/reset-password?token={token}&email={quote(email, safe='')}"
    
    async def send_password_reset(self, admin: Admin, token: str) -> bool:
        """Email the unhashed reset token to the admin"""
        subject, html, text = render_password_reset(
            first_name=admin.first_name,
            reset_url=self.build_reset_url(admin.email, token),
            app_name=self.settings.APP_NAME,
            expire_minutes=self.settings.PASSWORD_RESET_EXPIRE_MINUTES,
        )
        message = EmailMessage(to=admin.email, subject=subject, html=html, text=text)
        return await self._dispatch(message, "password reset")
    
    async def notify_new_contact(self, contact: Contact) -> bool:
        """Tell the site admin about a new contact submission"""
        if not self.settings.ADMIN_EMAIL:
            logger.warning("ADMIN_EMAIL is not configured, skipping contact notification")
            return False
        
        subject, html, text = render_contact_notification(
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            app_name=self.settings.APP_NAME,
        )
        message = EmailMessage(
            to=self.settings.ADMIN_EMAIL,
            subject=subject,
            html=html,
            text=text,
            reply_to=contact.email,
        )
        return await self._dispatch(message, "contact notification")
    
    async def notify_new_testimonial(self, testimonial: Testimonial) -> bool:
        """Tell the site admin a testimonial is waiting for moderation"""
        if not self.settings.ADMIN_EMAIL:
            logger.warning("ADMIN_EMAIL is not configured, skipping testimonial notification")
            return False
        
        subject, html, text = render_testimonial_notification(
            name=testimonial.name,
            email=testimonial.email,
            message=testimonial.message,
            rating=testimonial.rating,
            app_name=self.settings.APP_NAME,
        )
        message = EmailMessage(
            to=self.settings.ADMIN_EMAIL,
            subject=subject,
            html=html,
            text=text,
            reply_to=testimonial.email,
        )
        return await self._dispatch(message, "testimonial notification")
