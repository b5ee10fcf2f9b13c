"""
Shared FastAPI dependencies
"""
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.models import UserProfile
from app.services.progress_engine import normalize_as_of
from app.services.reading_store import ReadingStore
from app.utils.exceptions import InputUnavailable


def get_current_identity(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db)
) -> Optional[UserProfile]:
    """
    Resolve the caller from the X-User-Id header

    Authentication happens upstream; this only maps the opaque id onto a
    profile. Returns None for missing, malformed or unknown ids.
    """
    if not x_user_id:
        return None

    try:
        user_id = UUID(x_user_id)
    except ValueError:
        return None

    try:
        profile = ReadingStore(db).get_user_profile(user_id)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    return profile


def require_identity(
    profile: Optional[UserProfile] = Depends(get_current_identity)
) -> UserProfile:
    if profile is None:
        raise HTTPException(status_code=401, detail="Sign in required")
    return profile


def get_as_of(
    as_of: Optional[date] = Query(None, description="Reference day (UTC), defaults to today")
) -> date:
    return normalize_as_of(as_of)
