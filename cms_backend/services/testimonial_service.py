"""
Testimonial Service - visitor testimonials with moderation.

approved_at and approved_by always change together: approving stamps both
with the acting admin, rejecting clears both. Featured is independent of
approval, but public listings only ever include approved testimonials.
"""
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, joinedload

from cms_backend.core.database import utcnow
from cms_backend.core.exceptions import NotFoundError
from cms_backend.models.testimonial import Testimonial
from cms_backend.schemas.base import Pagination
from cms_backend.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from cms_backend.services.notification_service import NotificationService
from cms_backend.utils.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, paginate

logger = logging.getLogger(__name__)


class TestimonialService:
    """Testimonial lifecycle and moderation"""
    
    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications
    
    def _query(self) -> Query:
        return self.db.query(Testimonial).options(joinedload(Testimonial.approver))
    
    def _get(self, testimonial_id: UUID) -> Testimonial:
        testimonial = self._query().filter(Testimonial.id == testimonial_id).first()
        if not testimonial:
            raise NotFoundError("Testimonial not found")
        return testimonial
    
    def _save(self, testimonial: Testimonial) -> Testimonial:
        self.db.commit()
        return self._get(testimonial.id)
    
    @staticmethod
    def _approve(testimonial: Testimonial, admin_id: Optional[UUID]) -> None:
        testimonial.is_approved = True
        testimonial.approved_at = utcnow()
        testimonial.approved_by = admin_id
    
    @staticmethod
    def _unapprove(testimonial: Testimonial) -> None:
        testimonial.is_approved = False
        testimonial.approved_at = None
        testimonial.approved_by = None
    
    @staticmethod
    def _ordered(query: Query) -> Query:
        return query.order_by(
            Testimonial.featured.desc(),
            Testimonial.created_at.desc(),
            Testimonial.id,
        )
    
    async def create_testimonial(self, data: TestimonialCreate) -> Testimonial:
        """Store a pending testimonial and notify the admin (best effort)"""
        testimonial = Testimonial(
            name=data.name.strip(),
            email=str(data.email),
            company=data.company,
            position=data.position,
            message=data.message,
            rating=data.rating,
            avatar=data.avatar,
            is_approved=False,
            featured=False,
        )
        self.db.add(testimonial)
        self.db.commit()
        self.db.refresh(testimonial)
        
        logger.info(f"Testimonial created: id={testimonial.id}")
        
        if self.notifications:
            await self.notifications.notify_new_testimonial(testimonial)
        
        return testimonial
    
    def list_testimonials(
        self,
        is_approved: Optional[bool] = None,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> Tuple[List[Testimonial], Pagination]:
        """Admin listing: featured first, then newest"""
        query = self.db.query(Testimonial)
        
        if is_approved is not None:
            query = query.filter(Testimonial.is_approved == is_approved)
        if featured is not None:
            query = query.filter(Testimonial.featured == featured)
        if search:
            query = query.filter(or_(
                Testimonial.name.icontains(search, autoescape=True),
                Testimonial.email.icontains(search, autoescape=True),
                Testimonial.company.icontains(search, autoescape=True),
                Testimonial.message.icontains(search, autoescape=True),
            ))
        
        rows_query = self._ordered(query.options(joinedload(Testimonial.approver)))
        return paginate(query, rows_query, page, limit)
    
    def list_approved(
        self,
        featured: Optional[bool] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> Tuple[List[Testimonial], Pagination]:
        """Public listing of approved testimonials"""
        query = self.db.query(Testimonial).filter(Testimonial.is_approved.is_(True))
        if featured is not None:
            query = query.filter(Testimonial.featured == featured)
        
        return paginate(query, self._ordered(query), page, limit)
    
    def get_testimonial(self, testimonial_id: UUID, include_unapproved: bool = True) -> Testimonial:
        """
        Fetch one testimonial. Pending ones are hidden unless include_unapproved.
        """
        testimonial = self._get(testimonial_id)
        if not include_unapproved and not testimonial.is_approved:
            raise NotFoundError("Testimonial not found")
        return testimonial
    
    def update_testimonial(
        self,
        testimonial_id: UUID,
        data: TestimonialUpdate,
        admin_id: Optional[UUID] = None
    ) -> Testimonial:
        """
        Patch editable fields. is_approved follows the approve/reject pairing rules.
        """
        testimonial = self._get(testimonial_id)
        fields = data.model_dump(exclude_unset=True)
        
        is_approved = fields.pop("is_approved", None)
        if is_approved is True and not testimonial.is_approved:
            self._approve(testimonial, admin_id)
        elif is_approved is False:
            self._unapprove(testimonial)
        
        if fields.get("featured") is not None:
            testimonial.featured = fields.pop("featured")
        else:
            fields.pop("featured", None)
        
        for field in ("name", "email", "message"):
            if fields.get(field) is not None:
                setattr(testimonial, field, str(fields[field]))
        for field in ("company", "position", "rating", "avatar"):
            if field in fields:
                setattr(testimonial, field, fields[field])
        
        return self._save(testimonial)
    
    def approve(self, testimonial_id: UUID, admin_id: UUID) -> Testimonial:
        """Approve; an already approved testimonial keeps its original approval"""
        testimonial = self._get(testimonial_id)
        if not testimonial.is_approved:
            self._approve(testimonial, admin_id)
        logger.info(f"Testimonial approved: id={testimonial_id} by={admin_id}")
        return self._save(testimonial)
    
    def reject(self, testimonial_id: UUID) -> Testimonial:
        testimonial = self._get(testimonial_id)
        self._unapprove(testimonial)
        logger.info(f"Testimonial rejected: id={testimonial_id}")
        return self._save(testimonial)
    
    def toggle_featured(self, testimonial_id: UUID) -> Testimonial:
        """Flip featured; approval state is left alone"""
        testimonial = self._get(testimonial_id)
        testimonial.featured = not testimonial.featured
        return self._save(testimonial)
    
    def delete_testimonial(self, testimonial_id: UUID) -> None:
        testimonial = self._get(testimonial_id)
        self.db.delete(testimonial)
        self.db.commit()
        logger.info(f"Testimonial deleted: id={testimonial_id}")
    
    def get_stats(self) -> dict:
        """Counts; featured only counts approved testimonials"""
        base = self.db.query(Testimonial)
        total = base.count()
        approved = base.filter(Testimonial.is_approved.is_(True)).count()
        featured = base.filter(
            Testimonial.is_approved.is_(True),
            Testimonial.featured.is_(True),
        ).count()
        
        return {
            "total": total,
            "approved": approved,
            "pending": total - approved,
            "featured": featured,
        }
