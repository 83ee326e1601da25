"""
Blog models - language-independent shell plus per-language translations
"""
import enum

from sqlalchemy import (
    Column, String, Text, Integer, DateTime, JSON, ForeignKey, UniqueConstraint
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from cms_backend.core.database import Base, utcnow


SUPPORTED_LANGUAGES = ("en", "fr", "es", "de", "rw", "sw")  # English, French, Spanish, German, Kinyarwanda, Swahili


class BlogStatus(str, enum.Enum):
    """Publication status of a blog"""
    
    draft = "draft"
    published = "published"
    archived = "archived"


class Blog(Base):
    """Blog shell. Readable content lives in BlogTranslation rows."""
    
    __tablename__ = "blogs"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("admins.id"), nullable=False)
    status = Column(String(20), nullable=False, default=BlogStatus.draft.value, index=True)
    featured_image = Column(String(500), nullable=True)
    category = Column(String(255), nullable=True)  # default for translations without one
    tags = Column(JSON, nullable=False, default=list)
    view_count = Column(Integer, nullable=False, default=0)
    published_at = Column(DateTime(timezone=True), nullable=True)  # set once, on first publish
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    
    # Relationships
    author = relationship("Admin", back_populates="blogs")
    translations = relationship(
        "BlogTranslation",
        back_populates="blog",
        cascade="all, delete-orphan",
        order_by="BlogTranslation.language_code",
    )
    
    def __repr__(self):
        return f"<Blog(id={self.id}, slug={self.slug}, status={self.status})>"


class BlogTranslation(Base):
    """One localized rendering of a Blog"""
    
    __tablename__ = "blog_translations"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    blog_id = Column(UUID(as_uuid=True), ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    language_code = Column(String(5), nullable=False, index=True)  # en, fr, es, de, rw, sw
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    meta_description = Column(String(160), nullable=True)
    meta_keywords = Column(String(255), nullable=True)
    reading_time = Column(Integer, nullable=True)  # minutes, computed on write
    category = Column(String(255), nullable=True)  # per-language override
    tags = Column(JSON, nullable=False, default=list)  # per-language override
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    
    blog = relationship("Blog", back_populates="translations")
    
    # Unique constraint: one translation per blog per language
    __table_args__ = (
        UniqueConstraint("blog_id", "language_code", name="uq_blog_translation_language"),
    )
    
    def __repr__(self):
        return f"<BlogTranslation(blog_id={self.blog_id}, lang={self.language_code})>"
