"""
Blog endpoints. Reads are public; writes require an admin token.
"""
import logging
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from uuid import UUID

from cms_backend.api.responses import success_response
from cms_backend.core.dependencies import get_blog_service, get_current_admin, get_optional_admin
from cms_backend.models.admin import Admin
from cms_backend.models.blog import BlogStatus
from cms_backend.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, LanguageCode
from cms_backend.services.blog_service import BlogService
from cms_backend.utils.pagination import DEFAULT_LIMIT, MAX_LIMIT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/blogs")


@router.get("")
async def list_blogs(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    status_filter: Optional[BlogStatus] = Query(None, alias="status"),
    language_code: Optional[LanguageCode] = Query(None, alias="languageCode"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    include_unpublished: bool = Query(False, alias="includeUnpublished"),
    admin: Optional[Admin] = Depends(get_optional_admin),
    blogs: BlogService = Depends(get_blog_service)
):
    """
    List blogs with filtering and pagination.
    Unpublished blogs are only visible to authenticated admins.
    """
    rows, pagination = blogs.list_blogs(
        status=status_filter,
        language_code=language_code,
        category=category,
        search=search,
        include_unpublished=include_unpublished,
        is_admin=admin is not None,
        page=page,
        limit=limit,
    )
    return success_response(
        data=[BlogResponse.model_validate(b) for b in rows],
        pagination=pagination,
    )


@router.get("/categories")
async def get_categories(
    language_code: LanguageCode = Query("en", alias="languageCode"),
    blogs: BlogService = Depends(get_blog_service)
):
    """Distinct categories of published blogs in a language"""
    return success_response(data=blogs.get_categories(language_code))


@router.get("/tags")
async def get_tags(
    language_code: LanguageCode = Query("en", alias="languageCode"),
    blogs: BlogService = Depends(get_blog_service)
):
    """Distinct tags of published blogs in a language"""
    return success_response(data=blogs.get_tags(language_code))


@router.get("/slug/{slug}")
async def get_blog_by_slug(
    slug: str,
    language_code: Optional[LanguageCode] = Query(None, alias="languageCode"),
    blogs: BlogService = Depends(get_blog_service)
):
    """Blog page view; increments the view counter"""
    blog = blogs.get_blog_by_slug(slug, language_code)
    return success_response(data=BlogResponse.model_validate(blog))


@router.get("/{blog_id}")
async def get_blog(
    blog_id: UUID,
    language_code: Optional[LanguageCode] = Query(None, alias="languageCode"),
    blogs: BlogService = Depends(get_blog_service)
):
    """Blog by id (no view counting)"""
    blog = blogs.get_blog_by_id(blog_id, language_code)
    return success_response(data=BlogResponse.model_validate(blog))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_blog(
    data: BlogCreate,
    admin: Admin = Depends(get_current_admin),
    blogs: BlogService = Depends(get_blog_service)
):
    """Create a blog with its translations; the caller becomes the author"""
    blog = blogs.create_blog(data, author_id=admin.id)
    return success_response(
        data=BlogResponse.model_validate(blog),
        message="Blog created successfully",
    )


@router.put("/{blog_id}")
async def update_blog(
    blog_id: UUID,
    data: BlogUpdate,
    admin: Admin = Depends(get_current_admin),
    blogs: BlogService = Depends(get_blog_service)
):
    """Update a blog. A translations array replaces all existing translations."""
    blog = blogs.update_blog(blog_id, data)
    return success_response(
        data=BlogResponse.model_validate(blog),
        message="Blog updated successfully",
    )


@router.delete("/{blog_id}")
async def delete_blog(
    blog_id: UUID,
    admin: Admin = Depends(get_current_admin),
    blogs: BlogService = Depends(get_blog_service)
):
    """Delete a blog and its translations"""
    blogs.delete_blog(blog_id)
    return success_response(message="Blog deleted successfully")
