"""
Base adapter interface for outbound email
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel


class EmailMessage(BaseModel):
    """Provider-independent email"""
    to: str
    subject: str
    html: str
    text: str
    reply_to: Optional[str] = None


class BaseEmailAdapter(ABC):
    """
    Email delivery interface.
    Swapping providers only requires implementing this interface,
    without changing the notification service.
    """
    
    @abstractmethod
    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        """
        Deliver one email.
        
        Args:
            message: Email to send
        
        Returns:
            Dict with provider response data
        
        Raises:
            EmailDeliveryError: If the provider rejects or cannot be reached
        """
        pass
    
    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider name (sendgrid, smtp, etc.)"""
        pass
