"""
Leaderboard service
Ranks every reader by chapters completed as of a day
"""
import logging
from collections import defaultdict
from datetime import date
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.config import settings
from app.services.progress_engine import progress_engine
from app.services.reading_store import ReadingStore
from app.utils.cache import cache_service

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Cross-user aggregation over the progress engine

    Ordering: completed_count descending, then user id ascending so that
    ties resolve the same way on every call. Tied users share a rank
    (competition ranking: 1, 1, 3).
    """

    def get_leaderboard(self, db: Session, as_of: date) -> List[Dict[str, Any]]:
        """
        Compute the ranked leaderboard

        Args:
            db: Database session
            as_of: Reference day, the same due set applies to every user

        Returns:
            List of entries with rank, user and snapshot, best first
        """
        cache_key = cache_service.leaderboard_key(as_of)
        cached = cache_service.get(cache_key)
        if cached is not None:
            return cached

        store = ReadingStore(db)

        # All three inputs must resolve before ranking starts
        profiles = store.list_user_profiles()
        readings = store.list_reading_units(ascending=True, until=as_of)
        records = store.list_completion_records()

        due = progress_engine.due_set(readings, as_of)

        records_by_user = defaultdict(list)
        for record in records:
            records_by_user[record.user_id].append(record)

        entries = []
        for profile in profiles:
            completed = progress_engine.completed_ids(records_by_user.get(profile.id, []))
            entries.append({
                "user_id": str(profile.id),
                "name": profile.name,
                "snapshot": progress_engine.snapshot(due, completed)
            })

        entries.sort(key=lambda e: (-e["snapshot"]["completed_count"], e["user_id"]))
        self._assign_ranks(entries)

        logger.info(f"Leaderboard computed: as_of={as_of}, users={len(entries)}, due={len(due)}")

        cache_service.set(cache_key, entries, ttl=settings.LEADERBOARD_CACHE_TTL)
        return entries

    def _assign_ranks(self, entries: List[Dict[str, Any]]) -> None:
        previous_count = None
        rank = 0
        for position, entry in enumerate(entries, start=1):
            count = entry["snapshot"]["completed_count"]
            if count != previous_count:
                rank = position
                previous_count = count
            entry["rank"] = rank


# Global instance
leaderboard_service = LeaderboardService()
