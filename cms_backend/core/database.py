"""
Database connection and session management
"""
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from cms_backend.core.config import settings


def _engine_options(url: str) -> dict:
    """Pool and timeout options per backend"""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    
    return {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        "connect_args": {
            "connect_timeout": 10,  # 10 second connection timeout
            "options": "-c statement_timeout=30000"  # 30 second query timeout (PostgreSQL)
        },
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }


# Create engine with timeout settings
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current UTC time, used for column defaults"""
    return datetime.now(timezone.utc)


def get_db():
    """
    Dependency for getting database session.
    Use in FastAPI route dependencies.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
