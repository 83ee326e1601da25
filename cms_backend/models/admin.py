"""
Admin model - back-office account with credentials
"""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from cms_backend.core.database import Base, utcnow


class Admin(Base):
    """Admin account. Provisioned out of band, never hard-deleted."""
    
    __tablename__ = "admins"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)  # always lower-cased
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    reset_password_token = Column(String(64), nullable=True)  # SHA-256 of the emailed token
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    
    # Relationships
    blogs = relationship("Blog", back_populates="author")
    approved_testimonials = relationship("Testimonial", back_populates="approver")
    
    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()
    
    def __repr__(self):
        return f"<Admin(id={self.id}, email={self.email})>"
