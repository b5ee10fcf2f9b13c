"""
User progress API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List
from uuid import UUID
import logging

from app.config import settings
from app.database import get_db
from app.dependencies import get_as_of, require_identity
from app.models import UserProfile
from app.schemas.progress import Dashboard, PendingReadings, ProgressSnapshot, UserProgress
from app.schemas.reading import CalendarEntry
from app.services.progress_service import progress_service
from app.utils.exceptions import InputUnavailable, UserNotFound

router = APIRouter(prefix="/api/users", tags=["progress"])
logger = logging.getLogger(__name__)


@router.get("/me/dashboard", response_model=Dashboard)
async def get_dashboard(
    as_of: date = Depends(get_as_of),
    profile: UserProfile = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """
    Dashboard for the signed-in user

    Returns:
    - Progress snapshot
    - Today's reading and its status (absent when nothing is scheduled)
    - Latest announcements
    """

    try:
        return progress_service.get_dashboard(db, profile.id, as_of)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)


@router.get("/{user_id}/progress", response_model=UserProgress)
async def get_user_progress(
    user_id: UUID,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db)
):
    """
    Get progress statistics for a user

    Returns:
    - Chapters completed, due and overdue as of the reference day
    - Chapters remaining in the full plan
    - Completion percentage of the full plan
    """

    try:
        logger.info(f"Fetching progress for user {user_id} as of {as_of}")
        snapshot = progress_service.get_snapshot(db, user_id, as_of)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    return UserProgress(user_id=user_id, as_of=as_of, snapshot=ProgressSnapshot(**snapshot))


@router.get("/{user_id}/pending", response_model=PendingReadings)
async def get_pending_readings(
    user_id: UUID,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db)
):
    """Due readings the user has not completed, oldest first"""

    try:
        readings = progress_service.get_pending_readings(db, user_id, as_of)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    return {"user_id": user_id, "as_of": as_of, "readings": readings}


@router.get("/{user_id}/calendar", response_model=List[CalendarEntry])
async def get_calendar(
    user_id: UUID,
    as_of: date = Depends(get_as_of),
    limit: int = Query(settings.CALENDAR_DEFAULT_LIMIT, ge=1, le=1189),
    db: Session = Depends(get_db)
):
    """Most recent readings with completed/today/overdue/upcoming status"""

    try:
        return progress_service.get_calendar(db, user_id, as_of, limit)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)
