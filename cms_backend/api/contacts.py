"""
Contact endpoints. Submitting is public; everything else is admin-only.
"""
import logging
from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional
from uuid import UUID

from cms_backend.api.responses import success_response
from cms_backend.core.dependencies import get_contact_service, get_current_admin
from cms_backend.models.admin import Admin
from cms_backend.schemas.contact import ContactCreate, ContactResponse, ContactStats, ContactUpdate
from cms_backend.services.contact_service import ContactService
from cms_backend.utils.pagination import DEFAULT_LIMIT, MAX_LIMIT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/contacts")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact(
    request: Request,
    data: ContactCreate,
    contacts: ContactService = Depends(get_contact_service)
):
    """Contact form submission"""
    contact = await contacts.create_contact(
        data,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return success_response(
        data=ContactResponse.model_validate(contact),
        message="Thank you for contacting us. We will get back to you soon.",
    )


@router.get("/stats")
async def get_contact_stats(
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    return success_response(data=ContactStats(**contacts.get_stats()))


@router.get("")
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    search: Optional[str] = None,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    """List contacts, newest first"""
    rows, pagination = contacts.list_contacts(
        is_read=is_read,
        search=search,
        page=page,
        limit=limit,
    )
    return success_response(
        data=[ContactResponse.model_validate(c) for c in rows],
        pagination=pagination,
    )


@router.get("/{contact_id}")
async def get_contact(
    contact_id: UUID,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    contact = contacts.get_contact(contact_id)
    return success_response(data=ContactResponse.model_validate(contact))


@router.put("/{contact_id}")
async def update_contact(
    contact_id: UUID,
    data: ContactUpdate,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    contact = contacts.update_contact(contact_id, data)
    return success_response(
        data=ContactResponse.model_validate(contact),
        message="Contact updated successfully",
    )


@router.patch("/{contact_id}/read")
async def mark_contact_read(
    contact_id: UUID,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    contact = contacts.mark_as_read(contact_id)
    return success_response(
        data=ContactResponse.model_validate(contact),
        message="Contact marked as read",
    )


@router.patch("/{contact_id}/unread")
async def mark_contact_unread(
    contact_id: UUID,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    contact = contacts.mark_as_unread(contact_id)
    return success_response(
        data=ContactResponse.model_validate(contact),
        message="Contact marked as unread",
    )


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: UUID,
    admin: Admin = Depends(get_current_admin),
    contacts: ContactService = Depends(get_contact_service)
):
    contacts.delete_contact(contact_id)
    return success_response(message="Contact deleted successfully")
