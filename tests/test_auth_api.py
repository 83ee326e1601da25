"""
Tests for authentication, profile and password recovery endpoints
"""
import re
from datetime import timedelta

from cms_backend.core.database import utcnow
from cms_backend.core.security import create_access_token
from cms_backend.models.admin import Admin

from conftest import ADMIN_PASSWORD


def _reset_token(mailbox) -> str:
    match = re.search(r"token=([0-9a-f]{64})", mailbox.sent[-1].text)
    assert match, "reset link missing from email"
    return match.group(1)


def test_login_success(client, admin):
    response = client.post(
        "/api/auth/login",
        json={"email": "Editor@Example.org", "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["admin"]["email"] == "editor@example.org"
    assert body["data"]["admin"]["firstName"] == "Grace"
    assert "passwordHash" not in body["data"]["admin"]
    assert body["data"]["admin"]["lastLogin"] is not None


def test_login_does_not_reveal_which_part_is_wrong(client, admin):
    wrong_password = client.post(
        "/api/auth/login",
        json={"email": admin.email, "password": "not-the-password"},
    )
    unknown_email = client.post(
        "/api/auth/login",
        json={"email": "nobody@example.org", "password": ADMIN_PASSWORD},
    )
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json()["message"] == unknown_email.json()["message"]
    assert wrong_password.json()["success"] is False


def test_login_validation_error_shape(client, db_session):
    response = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert "email" in fields
    assert "password" in fields


def test_inactive_admin_cannot_login(client, admin, db_session):
    admin.is_active = False
    db_session.commit()
    
    response = client.post(
        "/api/auth/login",
        json={"email": admin.email, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 403


def test_deactivation_revokes_existing_token(client, admin, auth_headers, db_session):
    assert client.get("/api/auth/me", headers=auth_headers).status_code == 200
    
    admin.is_active = False
    db_session.commit()
    
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 403


def test_me_requires_token(client, db_session):
    assert client.get("/api/auth/me").status_code == 401
    
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_expired_token_is_rejected(client, admin):
    token = create_access_token({"sub": str(admin.id)}, expires_delta=timedelta(minutes=-5))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["message"] == "Authentication token has expired."


def test_me_returns_profile(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "editor@example.org"


def test_update_profile(client, auth_headers):
    response = client.put(
        "/api/auth/profile",
        json={"firstName": "Gracia"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["firstName"] == "Gracia"
    assert data["lastName"] == "Uwase"


def test_update_profile_rejects_email_change(client, auth_headers):
    response = client.put(
        "/api/auth/profile",
        json={"email": "other@example.org"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_change_password(client, admin, auth_headers):
    response = client.put(
        "/api/auth/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "BrandNewPass9"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    
    old = client.post("/api/auth/login", json={"email": admin.email, "password": ADMIN_PASSWORD})
    new = client.post("/api/auth/login", json={"email": admin.email, "password": "BrandNewPass9"})
    assert old.status_code == 401
    assert new.status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    response = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "wrong-password", "newPassword": "BrandNewPass9"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Current password is incorrect"


def test_change_password_too_short(client, auth_headers):
    response = client.put(
        "/api/auth/change-password",
        json={"currentPassword": ADMIN_PASSWORD, "newPassword": "short"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_forgot_password_same_response_for_unknown_email(client, admin, mailbox):
    known = client.post("/api/auth/forgot-password", json={"email": admin.email})
    unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@example.org"})
    
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(mailbox.sent) == 1
    assert mailbox.sent[0].to == admin.email


def test_forgot_password_stores_only_token_hash(client, admin, mailbox, db_session):
    client.post("/api/auth/forgot-password", json={"email": admin.email})
    token = _reset_token(mailbox)
    
    db_session.expire_all()
    stored = db_session.query(Admin).filter(Admin.id == admin.id).first()
    assert stored.reset_password_token
    assert stored.reset_password_token != token
    assert stored.reset_password_expires is not None


def test_forgot_password_survives_email_failure(client, admin, mailbox):
    mailbox.fail = True
    response = client.post("/api/auth/forgot-password", json={"email": admin.email})
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_reset_password_is_single_use(client, admin, mailbox):
    client.post("/api/auth/forgot-password", json={"email": admin.email})
    token = _reset_token(mailbox)
    payload = {"email": admin.email, "token": token, "newPassword": "ResetPass123"}
    
    first = client.post("/api/auth/reset-password", json=payload)
    assert first.status_code == 200
    
    second = client.post("/api/auth/reset-password", json=payload)
    assert second.status_code == 400
    
    login = client.post("/api/auth/login", json={"email": admin.email, "password": "ResetPass123"})
    assert login.status_code == 200


def test_reset_password_rejects_expired_token(client, admin, mailbox, db_session):
    client.post("/api/auth/forgot-password", json={"email": admin.email})
    token = _reset_token(mailbox)
    
    db_session.expire_all()
    stored = db_session.query(Admin).filter(Admin.id == admin.id).first()
    stored.reset_password_expires = utcnow() - timedelta(minutes=1)
    db_session.commit()
    
    response = client.post(
        "/api/auth/reset-password",
        json={"email": admin.email, "token": token, "newPassword": "ResetPass123"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid or expired reset token"


def test_verify_reset_token(client, admin, mailbox):
    client.post("/api/auth/forgot-password", json={"email": admin.email})
    token = _reset_token(mailbox)
    
    valid = client.get("/api/auth/verify-reset-token", params={"email": admin.email, "token": token})
    assert valid.status_code == 200
    assert valid.json()["data"] == {"valid": True}
    
    invalid = client.get("/api/auth/verify-reset-token", params={"email": admin.email, "token": "0" * 64})
    assert invalid.json()["data"] == {"valid": False}


def test_verify_reset_token_malformed_email_is_just_invalid(client, db_session):
    response = client.get("/api/auth/verify-reset-token", params={"email": "not-an-email", "token": "abc"})
    assert response.status_code == 200
    assert response.json()["data"] == {"valid": False}


def test_verify_reset_token_requires_params(client, db_session):
    assert client.get("/api/auth/verify-reset-token", params={"token": "abc"}).status_code == 400
