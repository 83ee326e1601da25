"""
Shared fixtures: SQLite test database, in-memory email adapter, admin login
"""
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_EMAIL"] = "owner@example.org"
os.environ["FRONTEND_URL"] = "http://localhost:3000"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from typing import Any, Dict, List

from cms_backend.adapters.base import BaseEmailAdapter, EmailMessage
from cms_backend.core.database import Base, get_db
from cms_backend.core.dependencies import get_email_adapter
from cms_backend.core.exceptions import EmailDeliveryError
from cms_backend.core.security import get_password_hash
from cms_backend.main import app
from cms_backend.models.admin import Admin


SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_PASSWORD = "CorrectHorse42"


class RecordingEmailAdapter(BaseEmailAdapter):
    """Keeps sent messages in memory"""
    
    def __init__(self):
        self.sent: List[EmailMessage] = []
        self.fail = False
    
    @property
    def provider_name(self) -> str:
        return "memory"
    
    async def send(self, message: EmailMessage) -> Dict[str, Any]:
        if self.fail:
            raise EmailDeliveryError("provider unavailable")
        self.sent.append(message)
        return {"status_code": 202}


def override_get_db():
    """Override database dependency for testing"""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def mailbox():
    adapter = RecordingEmailAdapter()
    app.dependency_overrides[get_email_adapter] = lambda: adapter
    yield adapter
    app.dependency_overrides.pop(get_email_adapter, None)


@pytest.fixture
def client(db_session, mailbox):
    """Create test client"""
    return TestClient(app)


@pytest.fixture
def admin(db_session):
    """Active admin with a known password"""
    admin = Admin(
        email="editor@example.org",
        password_hash=get_password_hash(ADMIN_PASSWORD),
        first_name="Grace",
        last_name="Uwase",
        is_active=True,
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(client, admin):
    """Bearer header obtained through the login endpoint"""
    response = client.post(
        "/api/auth/login",
        json={"email": admin.email, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
