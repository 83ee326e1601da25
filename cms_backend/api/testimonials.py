"""
Testimonial endpoints. Submitting and reading approved ones is public;
moderation is admin-only.
"""
import logging
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from uuid import UUID

from cms_backend.api.responses import success_response
from cms_backend.core.dependencies import (
    get_current_admin,
    get_optional_admin,
    get_testimonial_service,
)
from cms_backend.models.admin import Admin
from cms_backend.schemas.testimonial import (
    PublicTestimonialResponse,
    TestimonialCreate,
    TestimonialResponse,
    TestimonialStats,
    TestimonialUpdate,
)
from cms_backend.services.testimonial_service import TestimonialService
from cms_backend.utils.pagination import DEFAULT_LIMIT, MAX_LIMIT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/testimonials")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_testimonial(
    data: TestimonialCreate,
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    """Testimonial submission; stays pending until an admin approves it"""
    testimonial = await testimonials.create_testimonial(data)
    return success_response(
        data=TestimonialResponse.model_validate(testimonial),
        message="Thank you for your testimonial. It will be reviewed shortly.",
    )


@router.get("/approved")
async def list_approved_testimonials(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    featured: Optional[bool] = None,
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    """Approved testimonials for the public website, featured first"""
    rows, pagination = testimonials.list_approved(featured=featured, page=page, limit=limit)
    return success_response(
        data=[PublicTestimonialResponse.model_validate(t) for t in rows],
        pagination=pagination,
    )


@router.get("/stats")
async def get_testimonial_stats(
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    return success_response(data=TestimonialStats(**testimonials.get_stats()))


@router.get("")
async def list_testimonials(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    is_approved: Optional[bool] = Query(None, alias="isApproved"),
    featured: Optional[bool] = None,
    search: Optional[str] = None,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    """All testimonials including pending ones"""
    rows, pagination = testimonials.list_testimonials(
        is_approved=is_approved,
        featured=featured,
        search=search,
        page=page,
        limit=limit,
    )
    return success_response(
        data=[TestimonialResponse.model_validate(t) for t in rows],
        pagination=pagination,
    )


@router.get("/{testimonial_id}")
async def get_testimonial(
    testimonial_id: UUID,
    admin: Optional[Admin] = Depends(get_optional_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    """
    Testimonial by id.
    Anonymous callers only see approved testimonials.
    """
    testimonial = testimonials.get_testimonial(
        testimonial_id,
        include_unapproved=admin is not None,
    )
    if admin is None:
        return success_response(data=PublicTestimonialResponse.model_validate(testimonial))
    return success_response(data=TestimonialResponse.model_validate(testimonial))


@router.put("/{testimonial_id}")
async def update_testimonial(
    testimonial_id: UUID,
    data: TestimonialUpdate,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    testimonial = testimonials.update_testimonial(testimonial_id, data, admin_id=admin.id)
    return success_response(
        data=TestimonialResponse.model_validate(testimonial),
        message="Testimonial updated successfully",
    )


@router.patch("/{testimonial_id}/approve")
async def approve_testimonial(
    testimonial_id: UUID,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    testimonial = testimonials.approve(testimonial_id, admin.id)
    return success_response(
        data=TestimonialResponse.model_validate(testimonial),
        message="Testimonial approved successfully",
    )


@router.patch("/{testimonial_id}/reject")
async def reject_testimonial(
    testimonial_id: UUID,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    testimonial = testimonials.reject(testimonial_id)
    return success_response(
        data=TestimonialResponse.model_validate(testimonial),
        message="Testimonial rejected successfully",
    )


@router.patch("/{testimonial_id}/featured")
async def toggle_featured_testimonial(
    testimonial_id: UUID,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    testimonial = testimonials.toggle_featured(testimonial_id)
    state = "featured" if testimonial.featured else "unfeatured"
    return success_response(
        data=TestimonialResponse.model_validate(testimonial),
        message=f"Testimonial {state} successfully",
    )


@router.delete("/{testimonial_id}")
async def delete_testimonial(
    testimonial_id: UUID,
    admin: Admin = Depends(get_current_admin),
    testimonials: TestimonialService = Depends(get_testimonial_service)
):
    testimonials.delete_testimonial(testimonial_id)
    return success_response(message="Testimonial deleted successfully")
