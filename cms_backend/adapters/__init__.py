"""
Outbound delivery adapters
"""
from cms_backend.adapters.base import BaseEmailAdapter, EmailMessage
from cms_backend.adapters.sendgrid import SendGridAdapter

__all__ = ["BaseEmailAdapter", "EmailMessage", "SendGridAdapter"]
