"""
Progress derivation engine
Classifies scheduled readings against a reference day and a user's records
"""
import enum
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)


class ReadingStatus(str, enum.Enum):
    """Classification of a single reading relative to the reference day"""
    COMPLETED = "completed"
    TODAY = "today"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"  # excluded from every count


def normalize_as_of(value: Optional[Any] = None) -> date:
    """
    Reduce a reference point to a UTC calendar day

    Comparing whole days makes "today" inclusive up to end of day.
    Naive datetimes are taken to be UTC already.
    """
    if value is None:
        return datetime.now(timezone.utc).date()

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    return value


def _reading_day(reading) -> date:
    return normalize_as_of(reading.date)


class ProgressEngine:
    """
    Stateless progress computation over in-memory readings and records

    Readings need `id` and `date`; records need `reading_id` and `completed`.
    Works equally on ORM rows and on plain objects.

    Statistics are relative to the full plan size, not to the number of
    readings published so far, so an empty schedule yields 0.0%.
    """

    # Chapters in the full reading plan
    TOTAL_UNITS = 1189

    def completed_ids(self, records: Iterable) -> Set:
        """Ids of readings with a completed record"""
        return {record.reading_id for record in records if record.completed}

    def due_set(self, readings: Iterable, as_of: date) -> List:
        """Readings dated on or before as_of, oldest first"""
        due = [r for r in readings if _reading_day(r) <= as_of]
        due.sort(key=lambda r: (_reading_day(r), str(r.id)))
        return due

    def classify(self, reading, as_of: date, completed_ids: Set) -> ReadingStatus:
        """Completed wins regardless of date; otherwise compare days"""
        if reading.id in completed_ids:
            return ReadingStatus.COMPLETED

        day = _reading_day(reading)
        if day == as_of:
            return ReadingStatus.TODAY
        if day < as_of:
            return ReadingStatus.OVERDUE
        return ReadingStatus.UPCOMING

    def snapshot(self, due_readings: List, completed_ids: Set) -> Dict[str, Any]:
        """
        Calculate scalar statistics for one user

        Args:
            due_readings: Output of due_set()
            completed_ids: Output of completed_ids()

        Returns:
            Dictionary with completed, due, overdue and remaining counts
            plus completion percentage (1 decimal)
        """
        due_count = len(due_readings)
        completed_count = sum(1 for r in due_readings if r.id in completed_ids)

        logger.debug(f"Snapshot over {due_count} due readings: {completed_count} completed")

        return {
            "completed_count": completed_count,
            "due_count": due_count,
            "overdue_count": due_count - completed_count,
            "remaining_count": self.TOTAL_UNITS - completed_count,
            "completion_percentage": round(completed_count / self.TOTAL_UNITS * 100, 1),
        }

    def pending_list(self, due_readings: List, completed_ids: Set) -> List:
        """Due readings not yet completed, longest overdue first"""
        pending = [r for r in due_readings if r.id not in completed_ids]
        pending.sort(key=lambda r: (_reading_day(r), str(r.id)))
        return pending

    def today_reading(self, readings: Iterable, as_of: date):
        """Reading scheduled for as_of, or None when the plan has a gap"""
        for reading in readings:
            if _reading_day(reading) == as_of:
                return reading
        return None


# Global instance
progress_engine = ProgressEngine()
