"""
Community leaderboard API endpoint
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import date
import logging

from app.database import get_db
from app.dependencies import get_as_of
from app.schemas.progress import Leaderboard
from app.services.leaderboard_service import leaderboard_service
from app.utils.exceptions import InputUnavailable

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Leaderboard)
async def get_leaderboard(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db)
):
    """
    Rank all readers by chapters completed

    Ties keep a stable order and share a rank.
    """

    try:
        entries = leaderboard_service.get_leaderboard(db, as_of)
    except InputUnavailable as e:
        logger.error(f"Leaderboard inputs unavailable: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)

    return Leaderboard(as_of=as_of, entries=entries)
