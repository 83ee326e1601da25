"""
Contact Service - visitor inquiries and their read state
"""
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from cms_backend.core.database import utcnow
from cms_backend.core.exceptions import NotFoundError
from cms_backend.models.contact import Contact
from cms_backend.schemas.base import Pagination
from cms_backend.schemas.contact import ContactCreate, ContactUpdate
from cms_backend.services.notification_service import NotificationService
from cms_backend.utils.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, paginate

logger = logging.getLogger(__name__)


class ContactService:
    """Contact submissions, consumed by admins only"""
    
    def __init__(self, db: Session, notifications: Optional[NotificationService] = None):
        self.db = db
        self.notifications = notifications
    
    def _get(self, contact_id: UUID) -> Contact:
        contact = self.db.query(Contact).filter(Contact.id == contact_id).first()
        if not contact:
            raise NotFoundError("Contact not found")
        return contact
    
    async def create_contact(
        self,
        data: ContactCreate,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Contact:
        """
        Store a contact submission and notify the admin (best effort).
        
        Args:
            data: Submitted form
            ip_address: Client address
            user_agent: Client User-Agent header
        
        Returns:
            Created Contact
        """
        contact = Contact(
            name=data.name.strip(),
            email=str(data.email),
            phone=data.phone,
            subject=data.subject,
            message=data.message,
            ip_address=ip_address,
            user_agent=user_agent[:500] if user_agent else None,
            is_read=False,
        )
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        
        logger.info(f"Contact created: id={contact.id}")
        
        if self.notifications:
            await self.notifications.notify_new_contact(contact)
        
        return contact
    
    def list_contacts(
        self,
        is_read: Optional[bool] = None,
        search: Optional[str] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT
    ) -> Tuple[List[Contact], Pagination]:
        """Page of contacts, newest first"""
        query = self.db.query(Contact)
        
        if is_read is not None:
            query = query.filter(Contact.is_read == is_read)
        if search:
            query = query.filter(or_(
                Contact.name.icontains(search, autoescape=True),
                Contact.email.icontains(search, autoescape=True),
                Contact.subject.icontains(search, autoescape=True),
                Contact.message.icontains(search, autoescape=True),
            ))
        
        rows_query = query.order_by(Contact.created_at.desc(), Contact.id)
        return paginate(query, rows_query, page, limit)
    
    def get_contact(self, contact_id: UUID) -> Contact:
        return self._get(contact_id)
    
    def update_contact(self, contact_id: UUID, data: ContactUpdate) -> Contact:
        """
        Apply a read-state change.
        Marking read stamps read_at unless already read; marking unread clears it.
        """
        contact = self._get(contact_id)
        
        if data.is_read is True and not contact.is_read:
            contact.is_read = True
            contact.read_at = utcnow()
        elif data.is_read is False:
            contact.is_read = False
            contact.read_at = None
        
        self.db.commit()
        self.db.refresh(contact)
        return contact
    
    def mark_as_read(self, contact_id: UUID) -> Contact:
        """Mark read; the first read time is kept"""
        contact = self._get(contact_id)
        if not contact.is_read:
            contact.is_read = True
            contact.read_at = utcnow()
        self.db.commit()
        self.db.refresh(contact)
        return contact
    
    def mark_as_unread(self, contact_id: UUID) -> Contact:
        contact = self._get(contact_id)
        contact.is_read = False
        contact.read_at = None
        self.db.commit()
        self.db.refresh(contact)
        return contact
    
    def delete_contact(self, contact_id: UUID) -> None:
        contact = self._get(contact_id)
        self.db.delete(contact)
        self.db.commit()
        logger.info(f"Contact deleted: id={contact_id}")
    
    def get_stats(self) -> dict:
        """Counts of all, read and unread contacts"""
        total = self.db.query(Contact).count()
        read = self.db.query(Contact).filter(Contact.is_read.is_(True)).count()
        
        return {
            "total": total,
            "read": read,
            "unread": total - read,
        }
