#!/usr/bin/env python3
"""
Interactively create an admin account.

Usage:
    python scripts/create_admin.py
"""
import getpass
import sys
from pathlib import Path

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.exc import IntegrityError

from cms_backend.core.config import settings
from cms_backend.core.database import SessionLocal, engine, Base
from cms_backend.core.security import get_password_hash
from cms_backend.models import Admin


def prompt(label: str, min_length: int = 1) -> str:
    value = input(f"{label}: ").strip()
    while len(value) < min_length:
        value = input(f"{label} (at least {min_length} characters): ").strip()
    return value


def create_admin():
    print("Create admin account\n")
    
    email = Admin.normalize_email(prompt("Email"))
    first_name = prompt("First name", 2)
    last_name = prompt("Last name", 2)
    
    password = getpass.getpass("Password: ")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
        sys.exit(1)
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match")
        sys.exit(1)
    
    Base.metadata.create_all(bind=engine)
    
    db = SessionLocal()
    try:
        admin = Admin(
            email=email,
            password_hash=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            is_active=True,
        )
        db.add(admin)
        db.commit()
        print(f"\nAdmin created: {admin.email} ({admin.id})")
    except IntegrityError:
        db.rollback()
        print(f"\nEmail already registered: {email}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    create_admin()
