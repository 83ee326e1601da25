"""
SendGrid adapter implementation (v3 Web API)
"""
import logging
from typing import Any, Dict

import httpx

from cms_backend.adapters.base import BaseEmailAdapter, EmailMessage
from cms_backend.core.config import Settings
from cms_backend.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class SendGridAdapter(BaseEmailAdapter):
    """Sends email through the SendGrid mail/send endpoint"""
    
    def __init__(self, settings: Settings):
        self.api_key = settings.SENDGRID_API_KEY
        self.api_url = settings.SENDGRID_API_URL
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME
        self.timeout = httpx.Timeout(settings.EMAIL_TIMEOUT_SECONDS, connect=5.0)
    
    @property
    def provider_name(self) -> str:
        return "sendgrid"
    
    def build_payload(self, message: EmailMessage) -> Dict[str, Any]:
        """Translate an EmailMessage into the SendGrid request body"""
        payload = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": message.subject,
            "content": [
                {"type": "text/plain", "value": message.text},
                {"type": "text/html", "value": message.html},
            ],
            "reply_to": {"email": message.reply_to or self.from_email},
        }
        return payload
    
    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        if not self.api_key:
            raise EmailDeliveryError("SENDGRID_API_KEY is not configured")
        if not self.from_email:
            raise EmailDeliveryError("EMAIL_FROM is not configured")
        
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=self.build_payload(message),
                    headers=headers
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"SendGrid error: {e.response.status_code} - {e.response.text}")
            raise EmailDeliveryError(f"Failed to send email: HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Failed to send email: {e}") from e
        
        logger.info(f"Email sent successfully: {response.status_code} to={message.to}")
        return {
            "success": True,
            "message_id": response.headers.get("x-message-id"),
            "status_code": response.status_code,
        }
