#!/usr/bin/env python3
"""
Create database tables for the CMS backend.
Used on first deploy; the API also runs create_all on startup.
"""
import sys
from pathlib import Path

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy.exc import SQLAlchemyError

from cms_backend.core.database import engine, Base
from cms_backend import models  # noqa: F401


def create_tables():
    """Create all tables registered on Base.metadata"""
    print("Creating database tables...")
    
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        print(f"Error creating tables: {e}")
        sys.exit(1)
    
    print("Tables created successfully:")
    for table in Base.metadata.sorted_tables:
        print(f"   - {table.name}")


if __name__ == "__main__":
    create_tables()
