"""
Authentication endpoints: login, profile, password change and recovery.
"""
import logging
from fastapi import APIRouter, Depends, Query, Request

from cms_backend.api.responses import success_response
from cms_backend.core.config import Settings, get_settings, settings
from cms_backend.core.dependencies import get_auth_service, get_current_admin
from cms_backend.core.rate_limit import limiter
from cms_backend.models.admin import Admin
from cms_backend.schemas.admin import (
    AdminResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    ResetPasswordRequest,
)
from cms_backend.services.auth_service import RESET_REQUESTED, AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth")


@router.post("/login")
@limiter.limit(settings.LOGIN_RATE_LIMIT)  # Prevent brute force attacks
async def login(
    request: Request,
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
    config: Settings = Depends(get_settings)
):
    """
    Admin login endpoint.
    Returns the admin profile and a JWT for the Authorization header.
    """
    admin, token = auth.authenticate(credentials.email, credentials.password)
    
    return success_response(
        data=LoginResponse(
            admin=AdminResponse.model_validate(admin),
            token=token,
            expires_in=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        ),
        message="Login successful",
    )


@router.get("/me")
async def get_profile(admin: Admin = Depends(get_current_admin)):
    """Current admin profile"""
    return success_response(data=AdminResponse.model_validate(admin))


@router.put("/profile")
async def update_profile(
    data: ProfileUpdate,
    admin: Admin = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service)
):
    """Update first/last name of the current admin"""
    updated = auth.update_profile(admin.id, data)
    return success_response(
        data=AdminResponse.model_validate(updated),
        message="Profile updated successfully",
    )


@router.put("/change-password")
async def change_password(
    data: ChangePasswordRequest,
    admin: Admin = Depends(get_current_admin),
    auth: AuthService = Depends(get_auth_service)
):
    """Change password; the current password must be supplied again"""
    message = auth.change_password(admin.id, data.current_password, data.new_password)
    return success_response(message=message)


@router.post("/forgot-password")
async def forgot_password(
    data: ForgotPasswordRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Request a password reset email.
    The response never reveals whether the email belongs to an admin.
    """
    try:
        message = await auth.request_password_reset(data.email)
    except Exception:
        logger.exception("Password reset request failed")
        message = RESET_REQUESTED
    
    return success_response(message=message)


@router.post("/reset-password")
async def reset_password(
    data: ResetPasswordRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """Set a new password using an emailed reset token"""
    message = auth.reset_password(data.email, data.token, data.new_password)
    return success_response(message=message)


@router.get("/verify-reset-token")
async def verify_reset_token(
    email: str = Query(..., min_length=1),
    token: str = Query(..., min_length=1),
    auth: AuthService = Depends(get_auth_service)
):
    """Check whether a reset token is still usable"""
    return success_response(data={"valid": auth.verify_reset_token(email, token)})
