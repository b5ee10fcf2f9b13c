"""
Pydantic schemas for progress and leaderboard endpoints
"""
from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import date

from app.schemas.announcement import AnnouncementResponse
from app.schemas.reading import ReadingResponse
from app.services.progress_engine import ReadingStatus


class ProgressSnapshot(BaseModel):
    """Derived statistics for one user as of a day"""
    completed_count: int
    due_count: int
    overdue_count: int
    remaining_count: int
    completion_percentage: float


class UserProgress(BaseModel):
    user_id: UUID
    as_of: date
    snapshot: ProgressSnapshot


class PendingReadings(BaseModel):
    """Overdue and today's readings, oldest first"""
    user_id: UUID
    as_of: date
    readings: List[ReadingResponse]


class TodayReading(BaseModel):
    reading: ReadingResponse
    status: ReadingStatus


class Dashboard(BaseModel):
    """Everything the dashboard page shows"""
    as_of: date
    snapshot: ProgressSnapshot
    today: Optional[TodayReading] = None
    announcements: List[AnnouncementResponse]


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: UUID
    name: str
    snapshot: ProgressSnapshot


class Leaderboard(BaseModel):
    as_of: date
    entries: List[LeaderboardEntry]
