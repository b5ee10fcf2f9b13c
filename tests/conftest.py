"""Shared test fixtures for the reading tracker tests."""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:1/0")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "100000")
os.environ.setdefault("RATE_LIMIT_PER_HOUR", "1000000")

import fakeredis
import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine, get_db
from app.main import app
from app.models import DailyReading, UserProfile
from app.utils.cache import cache_service


TODAY = date(2024, 3, 10)


@pytest.fixture(autouse=True)
def disable_cache(monkeypatch):
    """Every read recomputes from the database."""
    monkeypatch.setattr(cache_service, "redis_client", None)


@pytest.fixture
def redis_cache(disable_cache, monkeypatch):
    """In-memory Redis behind the global cache service."""
    client = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr(cache_service, "redis_client", client)
    return client


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make(name="Reader", email=None):
        user = UserProfile(name=name, email=email)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_reading(db_session):
    """Publish a reading `offset` days from TODAY."""
    def _make(offset=0, title=None):
        day = TODAY + timedelta(days=offset)
        reading = DailyReading(date=day, title=title or f"Reading {day}", passage="Genesis 1")
        db_session.add(reading)
        db_session.commit()
        db_session.refresh(reading)
        return reading
    return _make


@pytest.fixture
def today():
    return TODAY
