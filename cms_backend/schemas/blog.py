"""
Pydantic schemas for Blog API
"""
from pydantic import Field, model_validator
from typing import List, Literal, Optional
from uuid import UUID
from datetime import datetime

from cms_backend.models.blog import SUPPORTED_LANGUAGES, BlogStatus
from cms_backend.schemas.admin import AuthorSummary
from cms_backend.schemas.base import CamelModel, StrictCamelModel

LanguageCode = Literal[SUPPORTED_LANGUAGES]
SLUG_PATTERN = r"^[a-zA-Z0-9-]+$"


class TranslationInput(StrictCamelModel):
    """One language version submitted with a blog"""
    language_code: LanguageCode
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    meta_description: Optional[str] = Field(None, max_length=160)
    meta_keywords: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


def _check_unique_languages(translations: Optional[List[TranslationInput]]) -> None:
    if not translations:
        return
    codes = [t.language_code for t in translations]
    if len(codes) != len(set(codes)):
        raise ValueError("Each language may only appear once in translations")


class BlogCreate(StrictCamelModel):
    """Schema for creating a blog"""
    slug: Optional[str] = Field(None, pattern=SLUG_PATTERN, max_length=255)
    status: BlogStatus = BlogStatus.draft
    featured_image: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    translations: List[TranslationInput] = Field(..., min_length=1)
    
    @model_validator(mode="after")
    def unique_languages(self):
        _check_unique_languages(self.translations)
        return self


class BlogUpdate(StrictCamelModel):
    """
    Schema for updating a blog.
    translations, when present, replace the whole translation set.
    """
    slug: Optional[str] = Field(None, pattern=SLUG_PATTERN, max_length=255)
    status: Optional[BlogStatus] = None
    featured_image: Optional[str] = Field(None, max_length=500)
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    translations: Optional[List[TranslationInput]] = Field(None, min_length=1)
    
    @model_validator(mode="after")
    def unique_languages(self):
        _check_unique_languages(self.translations)
        return self


class TranslationResponse(CamelModel):
    id: UUID
    blog_id: UUID
    language_code: str
    title: str
    content: str
    excerpt: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    reading_time: Optional[int] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


class BlogResponse(CamelModel):
    """Blog with its translations and author"""
    id: UUID
    slug: str
    author_id: UUID
    status: BlogStatus
    featured_image: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    view_count: int = 0
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    translations: List[TranslationResponse] = Field(default_factory=list)
    author: Optional[AuthorSummary] = None
