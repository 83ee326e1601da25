"""
Testimonial model - visitor endorsement with moderation
"""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from cms_backend.core.database import Base, utcnow


class Testimonial(Base):
    """
    Testimonial submitted by a visitor.
    approved_at and approved_by are set together and cleared together.
    """
    
    __tablename__ = "testimonials"
    
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    company = Column(String(255), nullable=True)
    position = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=True)  # 1-5
    avatar = Column(String(500), nullable=True)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(UUID(as_uuid=True), ForeignKey("admins.id"), nullable=True)
    featured = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    
    # Relationships
    approver = relationship("Admin", back_populates="approved_testimonials")
    
    def __repr__(self):
        return f"<Testimonial(id={self.id}, name={self.name}, approved={self.is_approved})>"
