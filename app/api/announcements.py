"""
Announcement listing API endpoint
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List

from app.config import settings
from app.database import get_db
from app.schemas.announcement import AnnouncementResponse
from app.services.reading_store import ReadingStore
from app.utils.exceptions import InputUnavailable

router = APIRouter(prefix="/api/announcements", tags=["announcements"])


@router.get("", response_model=List[AnnouncementResponse])
async def list_announcements(
    limit: int = Query(settings.ANNOUNCEMENT_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db)
):
    """Active announcements, newest first"""

    try:
        return ReadingStore(db).list_announcements(limit=limit)
    except InputUnavailable as e:
        raise HTTPException(status_code=503, detail=e.message)
