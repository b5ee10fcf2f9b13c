"""
Database engine, session factory and declarative base
"""
import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)


def _build_engine(url: str):
    """Create the engine, sharing one connection for in-memory SQLite"""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(url, pool_pre_ping=True)


engine = _build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet"""
    # Register models on the metadata before creating tables
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables ensured: {', '.join(sorted(Base.metadata.tables))}")
