"""
Auth Service - admin credentials, sessions and password recovery
"""
import logging
from datetime import timedelta
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cms_backend.core.config import Settings
from cms_backend.core.database import utcnow
from cms_backend.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from cms_backend.core.security import (
    TokenExpired,
    TokenInvalid,
    create_access_token,
    decode_access_token,
    generate_reset_token,
    get_password_hash,
    hash_token,
    verify_password,
)
from cms_backend.models.admin import Admin
from cms_backend.schemas.admin import ProfileUpdate
from cms_backend.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
RESET_REQUESTED = "If that email exists, a password reset link has been sent."


class AuthService:
    """
    Credential and session operations for admins.
    """
    
    def __init__(
        self,
        db: Session,
        settings: Settings,
        notifications: Optional[NotificationService] = None
    ):
        self.db = db
        self.settings = settings
        self.notifications = notifications
    
    def _get_by_email(self, email: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(
            Admin.email == Admin.normalize_email(email)
        ).first()
    
    def _get_by_id(self, admin_id: UUID) -> Admin:
        admin = self.db.query(Admin).filter(Admin.id == admin_id).first()
        if not admin:
            raise NotFoundError("Admin not found")
        return admin
    
    def _check_password_strength(self, password: str, label: str = "Password") -> None:
        if not password or len(password) < self.settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"{label} must be at least {self.settings.MIN_PASSWORD_LENGTH} characters long"
            )
    
    def _find_by_reset_token(self, email: str, token: str) -> Optional[Admin]:
        """Admin whose stored hash matches the token and has not expired"""
        return self.db.query(Admin).filter(
            Admin.email == Admin.normalize_email(email),
            Admin.reset_password_token == hash_token(token),
            Admin.reset_password_expires > utcnow(),
        ).first()
    
    # ==================== SESSIONS ====================
    
    def issue_token(self, admin: Admin) -> str:
        """Signed, time-limited token bound to the admin id"""
        return create_access_token(
            data={"sub": str(admin.id)},
            expires_delta=timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            secret_key=self.settings.SECRET_KEY,
            algorithm=self.settings.ALGORITHM,
        )
    
    def authenticate(self, email: str, password: str) -> Tuple[Admin, str]:
        """
        Log an admin in.
        
        Args:
            email: Email as typed (normalized here)
            password: Plain text password
        
        Returns:
            Tuple of (admin, access token)
        
        Raises:
            UnauthorizedError: Unknown email or wrong password (same message for both)
            ForbiddenError: Account deactivated
        """
        admin = self._get_by_email(email)
        
        if not admin or not verify_password(password, admin.password_hash):
            logger.warning(f"Failed login attempt for email: {Admin.normalize_email(email)}")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        
        if not admin.is_active:
            logger.warning(f"Login attempt for deactivated admin: {admin.email}")
            raise ForbiddenError("Your account has been deactivated. Please contact support.")
        
        admin.last_login = utcnow()
        self.db.commit()
        self.db.refresh(admin)
        
        logger.info(f"Admin '{admin.email}' logged in successfully")
        return admin, self.issue_token(admin)
    
    def verify_token(self, token: str) -> Admin:
        """
        Resolve a bearer token to an active admin.
        Looked up on every call so deactivation applies immediately.
        
        Raises:
            UnauthorizedError: Expired, malformed, or unknown admin
            ForbiddenError: Admin deactivated
        """
        try:
            payload = decode_access_token(
                token,
                secret_key=self.settings.SECRET_KEY,
                algorithm=self.settings.ALGORITHM,
            )
        except TokenExpired:
            raise UnauthorizedError("Authentication token has expired.")
        except TokenInvalid:
            raise UnauthorizedError("Invalid authentication token.")
        
        try:
            admin_id = UUID(str(payload.get("sub")))
        except ValueError:
            raise UnauthorizedError("Invalid authentication token.")
        
        admin = self.db.query(Admin).filter(Admin.id == admin_id).first()
        if not admin:
            raise UnauthorizedError("Admin not found. Token is invalid.")
        if not admin.is_active:
            raise ForbiddenError("Admin account is inactive.")
        
        return admin
    
    # ==================== PROFILE ====================
    
    def get_profile(self, admin_id: UUID) -> Admin:
        return self._get_by_id(admin_id)
    
    def update_profile(self, admin_id: UUID, data: ProfileUpdate) -> Admin:
        """Update name fields. Email and credentials are not reachable from here."""
        admin = self._get_by_id(admin_id)
        
        if data.first_name is not None:
            admin.first_name = data.first_name.strip()
        if data.last_name is not None:
            admin.last_name = data.last_name.strip()
        
        self.db.commit()
        self.db.refresh(admin)
        return admin
    
    def change_password(self, admin_id: UUID, current_password: str, new_password: str) -> str:
        """
        Change password of an authenticated admin.
        The current password is required again.
        """
        admin = self._get_by_id(admin_id)
        
        if not verify_password(current_password, admin.password_hash):
            logger.warning(f"Wrong current password on password change for {admin.email}")
            raise ValidationError("Current password is incorrect")
        
        self._check_password_strength(new_password, "New password")
        
        admin.password_hash = get_password_hash(new_password)
        self.db.commit()
        
        logger.info(f"Password changed for admin {admin.email}")
        return "Password changed successfully"
    
    # ==================== PASSWORD RESET ====================
    
    async def request_password_reset(self, email: str) -> str:
        """
        Start password recovery.
        Returns the same message whether or not the email belongs to an admin.
        """
        admin = self._get_by_email(email)
        
        if not admin:
            logger.info("Password reset requested for unknown email")
            return RESET_REQUESTED
        
        token = generate_reset_token()
        admin.reset_password_token = hash_token(token)
        admin.reset_password_expires = utcnow() + timedelta(
            minutes=self.settings.PASSWORD_RESET_EXPIRE_MINUTES
        )
        self.db.commit()
        
        logger.info(f"Password reset token issued for {admin.email}")
        
        if self.notifications:
            await self.notifications.send_password_reset(admin, token)
        
        return RESET_REQUESTED
    
    def reset_password(self, email: str, token: str, new_password: str) -> str:
        """
        Finish password recovery. Clearing the stored hash makes the token single-use.
        """
        admin = self._find_by_reset_token(email, token)
        
        if not admin:
            raise ValidationError("Invalid or expired reset token")
        
        self._check_password_strength(new_password)
        
        admin.password_hash = get_password_hash(new_password)
        admin.reset_password_token = None
        admin.reset_password_expires = None
        self.db.commit()
        
        logger.info(f"Password reset completed for {admin.email}")
        return "Password has been reset successfully"
    
    def verify_reset_token(self, email: str, token: str) -> bool:
        """Non-mutating check of a reset token. Never raises."""
        try:
            return self._find_by_reset_token(email, token) is not None
        except SQLAlchemyError as e:
            logger.error(f"Error verifying reset token: {e}")
            self.db.rollback()
            return False
