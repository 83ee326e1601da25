"""
Blog Service - multilingual content management.

A Blog is a language-independent shell; readable content lives in one
BlogTranslation per language. Every read returns the hydrated aggregate
(blog + translations + author) built by _hydrated_query.
"""
import logging
import math
import re
from typing import List, Optional, Set, Tuple
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from cms_backend.core.database import utcnow
from cms_backend.core.exceptions import ConflictError, NotFoundError, ValidationError
from cms_backend.models.blog import Blog, BlogStatus, BlogTranslation
from cms_backend.schemas.base import Pagination
from cms_backend.schemas.blog import BlogCreate, BlogUpdate, TranslationInput
from cms_backend.utils.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, paginate

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
DUPLICATE_SLUG = "A blog with this slug already exists"


def generate_slug(title: str) -> str:
    """
    URL-safe slug from a title.
    
    Example:
        >>> generate_slug("  Hello, World! Part_2 ")
        'hello-world-part-2'
    """
    slug = (title or "").lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def calculate_reading_time(content: str) -> int:
    """Reading time in minutes at 200 words per minute, rounded up"""
    words = len((content or "").split())
    return math.ceil(words / WORDS_PER_MINUTE)


class BlogService:
    """
    Blog lifecycle, translation fan-out and content queries.
    """
    
    def __init__(self, db: Session):
        self.db = db
    
    # ==================== QUERY SHAPE ====================
    
    def _hydrated_query(self, language_code: Optional[str] = None) -> Query:
        """
        Blogs with author and translations eagerly loaded.
        With language_code only that translation is loaded.
        """
        translations = Blog.translations
        if language_code:
            translations = Blog.translations.and_(BlogTranslation.language_code == language_code)
        
        return self.db.query(Blog).options(
            selectinload(translations),
            joinedload(Blog.author),
        )
    
    def _get_hydrated(self, language_code: Optional[str] = None, **criteria) -> Blog:
        query = self._hydrated_query(language_code).filter_by(**criteria)
        if language_code:
            query = query.filter(
                Blog.translations.any(BlogTranslation.language_code == language_code)
            )
        
        blog = query.populate_existing().first()
        if not blog:
            raise NotFoundError("Blog not found")
        return blog
    
    def _slug_taken(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        query = self.db.query(Blog.id).filter(Blog.slug == slug)
        if exclude_id:
            query = query.filter(Blog.id != exclude_id)
        return query.first() is not None
    
    @staticmethod
    def _build_translation(data: TranslationInput) -> BlogTranslation:
        return BlogTranslation(
            language_code=data.language_code,
            title=data.title,
            content=data.content,
            excerpt=data.excerpt,
            meta_description=data.meta_description,
            meta_keywords=data.meta_keywords,
            reading_time=calculate_reading_time(data.content),
            category=data.category,
            tags=list(data.tags or []),
        )
    
    def _commit(self) -> None:
        """
        Commit, mapping a slug race on the unique index to ConflictError.
        Any other integrity failure propagates unchanged.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "slug" not in str(e.orig).lower():
                logger.error(f"Integrity error while saving blog: {e.orig}")
                raise
            logger.warning(f"Slug conflict while saving blog: {e.orig}")
            raise ConflictError(DUPLICATE_SLUG)
        except Exception:
            self.db.rollback()
            raise
    
    # ==================== WRITES ====================
    
    def create_blog(self, data: BlogCreate, author_id: UUID) -> Blog:
        """
        Create a blog and all of its translations in one transaction.
        
        Args:
            data: Blog fields and at least one translation
            author_id: Acting admin
        
        Returns:
            Hydrated Blog
        
        Raises:
            ConflictError: Slug already used by any blog
            ValidationError: Slug could not be derived from the title
        """
        slug = data.slug or generate_slug(data.translations[0].title)
        if not slug:
            raise ValidationError(
                "Could not generate a slug from the title, please provide one",
                errors=[{"field": "slug", "message": "Slug is required for this title"}],
            )
        
        if self._slug_taken(slug):
            raise ConflictError(DUPLICATE_SLUG)
        
        blog = Blog(
            slug=slug,
            author_id=author_id,
            status=data.status.value,
            featured_image=data.featured_image,
            category=data.category,
            tags=list(data.tags or []),
            view_count=0,
            published_at=utcnow() if data.status == BlogStatus.published else None,
        )
        blog.translations = [self._build_translation(t) for t in data.translations]
        
        self.db.add(blog)
        self._commit()
        
        logger.info(f"Blog created: slug={blog.slug} translations={len(data.translations)}")
        return self._get_hydrated(id=blog.id)
    
    def update_blog(self, blog_id: UUID, data: BlogUpdate) -> Blog:
        """
        Update blog fields and optionally replace all translations.
        
        published_at is stamped on the first transition to published and
        never overwritten afterwards. Translations, when given, replace the
        existing set entirely (languages not listed are removed).
        """
        blog = self.db.query(Blog).filter(Blog.id == blog_id).first()
        if not blog:
            raise NotFoundError("Blog not found")
        
        fields = data.model_dump(exclude_unset=True, exclude={"translations"})
        
        new_slug = fields.get("slug")
        if new_slug and new_slug != blog.slug:
            if self._slug_taken(new_slug, exclude_id=blog.id):
                raise ConflictError(DUPLICATE_SLUG)
            blog.slug = new_slug
        
        if fields.get("status") is not None:
            status = BlogStatus(fields["status"])
            if status == BlogStatus.published and blog.published_at is None:
                blog.published_at = utcnow()
            blog.status = status.value
        
        if "featured_image" in fields:
            blog.featured_image = fields["featured_image"]
        if "category" in fields:
            blog.category = fields["category"]
        if fields.get("tags") is not None:
            blog.tags = list(fields["tags"])
        
        if data.translations:
            # Delete-all then recreate; flush the deletes first so the
            # (blog_id, language_code) unique index does not collide.
            blog.translations.clear()
            self.db.flush()
            blog.translations.extend(self._build_translation(t) for t in data.translations)
        
        blog.updated_at = utcnow()
        self._commit()
        
        logger.info(f"Blog updated: id={blog_id}")
        return self._get_hydrated(id=blog_id)
    
    def delete_blog(self, blog_id: UUID) -> None:
        """Delete a blog and, by cascade, its translations"""
        blog = self.db.query(Blog).filter(Blog.id == blog_id).first()
        if not blog:
            raise NotFoundError("Blog not found")
        
        self.db.delete(blog)
        self.db.commit()
        logger.info(f"Blog deleted: id={blog_id}")
    
    # ==================== READS ====================
    
    def get_blog_by_id(self, blog_id: UUID, language_code: Optional[str] = None) -> Blog:
        """Fetch a blog. Does not count as a page view."""
        return self._get_hydrated(language_code, id=blog_id)
    
    def get_blog_by_slug(self, slug: str, language_code: Optional[str] = None) -> Blog:
        """Fetch a blog for display and count one page view"""
        blog = self._get_hydrated(language_code, slug=slug)
        
        self.db.query(Blog).filter(Blog.id == blog.id).update(
            {Blog.view_count: Blog.view_count + 1},
            synchronize_session=False,
        )
        self.db.commit()
        
        return self._get_hydrated(language_code, id=blog.id)
    
    def list_blogs(
        self,
        status: Optional[BlogStatus] = None,
        language_code: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        include_unpublished: bool = False,
        is_admin: bool = False,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> Tuple[List[Blog], Pagination]:
        """
        Page of blogs, newest first.
        
        Args:
            status: Exact status filter (admins only, anonymous callers stay on published)
            language_code: Only blogs translated into this language, hydrated with that translation
            category: Blog default category
            search: Case-insensitive substring of translation title, content or excerpt
            include_unpublished: Drop the default published filter (admins only)
            is_admin: Whether the caller is authenticated
            page: 1-indexed page
            limit: Page size
        
        Returns:
            Tuple of (blogs, pagination)
        """
        filters = []
        
        if status:
            filters.append(Blog.status == BlogStatus(status).value)
        if not is_admin or (not status and not include_unpublished):
            filters.append(Blog.status == BlogStatus.published.value)
        
        if category:
            filters.append(Blog.category == category)
        
        if language_code or search:
            criteria = []
            if language_code:
                criteria.append(BlogTranslation.language_code == language_code)
            if search:
                criteria.append(or_(
                    BlogTranslation.title.icontains(search, autoescape=True),
                    BlogTranslation.content.icontains(search, autoescape=True),
                    BlogTranslation.excerpt.icontains(search, autoescape=True),
                ))
            filters.append(Blog.translations.any(and_(*criteria)))
        
        count_query = self.db.query(Blog.id).filter(*filters)
        rows_query = (
            self._hydrated_query(language_code)
            .filter(*filters)
            .order_by(Blog.created_at.desc(), Blog.id)
            .populate_existing()
        )
        
        return paginate(count_query, rows_query, page, limit)
    
    # ==================== AGGREGATES ====================
    
    def _published_with_translation(self, language_code: str) -> List[Blog]:
        return (
            self._hydrated_query(language_code)
            .filter(Blog.status == BlogStatus.published.value)
            .populate_existing()
            .all()
        )
    
    def get_categories(self, language_code: str = "en") -> List[str]:
        """
        Distinct categories of published blogs in a language.
        A translation's category wins; the blog default fills in when it has none.
        """
        categories: Set[str] = set()
        
        for blog in self._published_with_translation(language_code):
            translated = [t.category for t in blog.translations if t.category]
            if translated:
                categories.update(translated)
            elif blog.category:
                categories.add(blog.category)
        
        return sorted(c for c in categories if c)
    
    def get_tags(self, language_code: str = "en") -> List[str]:
        """Distinct tags of published blogs in a language, same fallback as categories"""
        tags: Set[str] = set()
        
        for blog in self._published_with_translation(language_code):
            translated = [tag for t in blog.translations for tag in (t.tags or [])]
            if translated:
                tags.update(translated)
            else:
                tags.update(blog.tags or [])
        
        return sorted(t for t in tags if t)
