"""
Application error taxonomy.

Services raise these; the exception handlers in main.py turn them into the
shared JSON envelope with the matching status code.
"""
from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base application error"""
    
    status_code = 500
    default_message = "Internal server error"
    
    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        body = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed or missing input"""
    status_code = 400
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials"""
    status_code = 401
    default_message = "Authentication required. Please provide a valid token."


class ForbiddenError(AppError):
    """Authenticated but not allowed (e.g. inactive account)"""
    status_code = 403
    default_message = "Access denied"


class NotFoundError(AppError):
    """Referenced entity does not exist"""
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    """Uniqueness violation (slug, email)"""
    status_code = 409
    default_message = "Resource already exists"


class EmailDeliveryError(Exception):
    """Outbound email could not be delivered. Always handled locally."""
