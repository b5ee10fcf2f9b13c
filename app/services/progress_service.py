"""
Progress query service
Loads inputs from the store, runs the engine and caches the results
"""
import logging
from datetime import date
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.config import settings
from app.models import DailyReading
from app.services.progress_engine import progress_engine
from app.services.reading_store import ReadingStore
from app.utils.cache import cache_service
from app.utils.exceptions import UserNotFound

logger = logging.getLogger(__name__)


class ProgressService:
    """Per-user progress queries, recomputed from raw records"""

    def _load_inputs(self, db: Session, user_id: UUID, as_of: date):
        """
        Fetch the due schedule and the user's records

        Both fetches must succeed before anything is classified;
        InputUnavailable propagates to the caller untouched.
        """
        store = ReadingStore(db)

        if store.get_user_profile(user_id) is None:
            raise UserNotFound(f"User {user_id} not found")

        readings = store.list_reading_units(ascending=True, until=as_of)
        records = store.list_completion_records(user_id=user_id)

        due = progress_engine.due_set(readings, as_of)
        completed = progress_engine.completed_ids(records)
        return due, completed

    def get_snapshot(self, db: Session, user_id: UUID, as_of: date) -> Dict[str, Any]:
        """
        Get progress statistics for a user as of a day

        Returns:
            Dictionary with completed, due, overdue, remaining counts and
            completion percentage
        """
        cache_key = cache_service.snapshot_key(str(user_id), as_of)
        cached = cache_service.get(cache_key)
        if cached is not None:
            return cached

        due, completed = self._load_inputs(db, user_id, as_of)
        snapshot = progress_engine.snapshot(due, completed)

        logger.info(
            f"Snapshot computed: user={user_id}, as_of={as_of}, "
            f"completed={snapshot['completed_count']}, overdue={snapshot['overdue_count']}"
        )

        cache_service.set(cache_key, snapshot, ttl=settings.SNAPSHOT_CACHE_TTL)
        return snapshot

    def get_pending_readings(self, db: Session, user_id: UUID, as_of: date) -> List[DailyReading]:
        """Due readings the user has not completed, oldest first"""
        due, completed = self._load_inputs(db, user_id, as_of)
        return progress_engine.pending_list(due, completed)

    def get_calendar(
        self,
        db: Session,
        user_id: UUID,
        as_of: date,
        limit: int
    ) -> List[Dict[str, Any]]:
        """
        Most recently published readings with their status for the user

        Readings after as_of are listed as upcoming so the user can see
        what is next, but they never enter any count.
        """
        store = ReadingStore(db)

        if store.get_user_profile(user_id) is None:
            raise UserNotFound(f"User {user_id} not found")

        readings = store.list_reading_units(ascending=False, limit=limit)
        records = store.list_completion_records(user_id=user_id)

        completed = progress_engine.completed_ids(records)
        records_by_reading = {r.reading_id: r for r in records}

        calendar = []
        for reading in readings:
            record = records_by_reading.get(reading.id)
            calendar.append({
                "reading": reading,
                "status": progress_engine.classify(reading, as_of, completed),
                "completed_at": record.completed_at if record else None
            })

        return calendar

    def get_dashboard(self, db: Session, user_id: UUID, as_of: date) -> Dict[str, Any]:
        """Snapshot, today's reading and the latest announcements"""
        due, completed = self._load_inputs(db, user_id, as_of)
        snapshot = progress_engine.snapshot(due, completed)
        today = progress_engine.today_reading(reversed(due), as_of)

        today_entry = None
        if today is not None:
            today_entry = {
                "reading": today,
                "status": progress_engine.classify(today, as_of, completed),
            }

        announcements = ReadingStore(db).list_announcements(limit=2)

        return {
            "as_of": as_of,
            "snapshot": snapshot,
            "today": today_entry,
            "announcements": announcements
        }


# Global instance
progress_service = ProgressService()
