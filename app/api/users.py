"""
User profile API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.dependencies import require_identity
from app.models import UserProfile
from app.schemas.profile import ProfileCreate, ProfileResponse
from app.services.reading_store import ReadingStore
from app.utils.cache import cache_service
from app.utils.exceptions import DuplicateRecordConflict, WriteFailed

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
    payload: ProfileCreate,
    db: Session = Depends(get_db)
):
    """Register a reader profile"""

    try:
        profile = ReadingStore(db).create_user_profile(
            UserProfile(name=payload.name, email=payload.email)
        )
    except DuplicateRecordConflict as e:
        raise HTTPException(status_code=409, detail=e.message)
    except WriteFailed as e:
        raise HTTPException(status_code=503, detail=e.message)

    # New readers join every leaderboard with zero completions
    cache_service.invalidate_leaderboards()

    logger.info(f"Profile created: {profile.id}")

    return profile


@router.get("/me", response_model=ProfileResponse)
async def get_me(profile: UserProfile = Depends(require_identity)):
    """Profile of the signed-in user"""
    return profile
