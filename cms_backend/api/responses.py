"""
Shared JSON envelope: {success, message?, data?, pagination?, errors?}
"""
from typing import Any, Dict, List, Optional

from cms_backend.schemas.base import Pagination


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    pagination: Optional[Pagination] = None
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    return body


def error_response(
    message: str,
    errors: Optional[List[Dict[str, Any]]] = None,
    **extra: Any
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body
