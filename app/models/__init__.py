"""
Database models package
"""
from app.models.daily_reading import DailyReading
from app.models.user_profile import UserProfile
from app.models.reading_log import ReadingLog, CompletionStatus
from app.models.announcement import Announcement

__all__ = ["DailyReading", "UserProfile", "ReadingLog", "CompletionStatus", "Announcement"]
