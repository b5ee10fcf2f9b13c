"""
Reading schedule and completion toggle API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List
from uuid import UUID
import logging

from app.database import get_db
from app.dependencies import get_as_of, require_identity
from app.models import DailyReading, UserProfile
from app.schemas.reading import ReadingCreate, ReadingResponse, ReadingLogResponse
from app.services.progress_engine import progress_engine
from app.services.reading_store import ReadingStore
from app.services.toggle_service import toggle_service
from app.utils.cache import cache_service
from app.utils.exceptions import (
    DuplicateRecordConflict, InputUnavailable, ReadingNotFound, WriteFailed
)

router = APIRouter(prefix="/api/readings", tags=["readings"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[ReadingResponse])
async def list_readings(
    limit: int = Query(10, ge=1, le=1189),
    ascending: bool = False,
    db: Session = Depends(get_db)
):
    """List published readings, newest first by default"""

    try:
        return ReadingStore(db).list_reading_units(ascending=ascending, limit=limit)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)


@router.get("/today", response_model=ReadingResponse)
async def get_today_reading(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db)
):
    """
    Get the reading scheduled for the reference day

    Returns 404 when the plan has nothing on that day.
    """

    try:
        readings = ReadingStore(db).list_reading_units(ascending=False, until=as_of, limit=1)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)

    today = progress_engine.today_reading(readings, as_of)
    if today is None:
        raise HTTPException(status_code=404, detail=f"No reading scheduled for {as_of}")

    return today


@router.post("/", response_model=ReadingResponse, status_code=201)
async def publish_reading(
    payload: ReadingCreate,
    db: Session = Depends(get_db)
):
    """
    Publish a reading to the plan

    - One reading per calendar day
    - Published readings are never modified
    """

    reading = DailyReading(date=payload.date, title=payload.title, passage=payload.passage)

    try:
        reading = ReadingStore(db).publish_reading_unit(reading)
    except DuplicateRecordConflict as e:
        raise HTTPException(status_code=409, detail=e.message)
    except WriteFailed as e:
        raise HTTPException(status_code=503, detail=e.message)

    # Due sets change when a past or current day is filled in
    cache_service.invalidate_all()

    logger.info(f"Reading published: {reading.id} on {reading.date}")

    return reading


@router.post("/{reading_id}/toggle", response_model=ReadingLogResponse)
async def toggle_reading(
    reading_id: UUID,
    profile: UserProfile = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """
    Toggle the caller's completion of a reading

    First toggle marks it completed, the next one marks it pending again.
    """

    try:
        return toggle_service.toggle(db, profile.id, reading_id)
    except ReadingNotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except (WriteFailed, InputUnavailable) as e:
        logger.error(f"Toggle failed for user {profile.id}: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)
