"""
Completion toggle service
Flips a user's completion state for one reading
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models import ReadingLog, CompletionStatus
from app.services.reading_store import ReadingStore
from app.utils.cache import cache_service
from app.utils.exceptions import DuplicateRecordConflict, ReadingNotFound, WriteFailed

logger = logging.getLogger(__name__)


class ToggleService:
    """
    Two-state machine per (user, reading): PENDING <-> COMPLETED

    A missing record is the initial PENDING state, so the first toggle
    creates a COMPLETED record. Later toggles update that same record.
    There is never more than one record per pair and records are never
    deleted.
    """

    def toggle(
        self,
        db: Session,
        user_id: UUID,
        reading_id: UUID,
        now: Optional[datetime] = None
    ) -> ReadingLog:
        """
        Toggle completion of a reading for a user

        Args:
            db: Database session
            user_id: Owner of the record
            reading_id: Reading to toggle
            now: Timestamp for the transition (defaults to current UTC time)

        Returns:
            The persisted record in its new state

        Raises:
            ReadingNotFound: reading does not exist
            WriteFailed: store rejected the change, prior state is kept
        """
        now = now or datetime.now(timezone.utc)
        store = ReadingStore(db)

        if store.get_reading_unit(reading_id) is None:
            raise ReadingNotFound(f"Reading {reading_id} not found")

        record = store.find_completion_record(user_id, reading_id)

        if record is None:
            record = ReadingLog(user_id=user_id, reading_id=reading_id)
            record.transition_to(CompletionStatus.COMPLETED, now)
            try:
                record = store.upsert_completion_record(record)
            except DuplicateRecordConflict:
                # A concurrent first toggle won the insert, apply ours as an update
                logger.warning(
                    f"Duplicate reading log for user={user_id}, reading={reading_id}; "
                    f"updating existing record"
                )
                record = self._update_existing(store, user_id, reading_id, CompletionStatus.COMPLETED, now)
        else:
            record.transition_to(record.status.toggled, now)
            try:
                record = store.upsert_completion_record(record)
            except DuplicateRecordConflict as e:
                raise WriteFailed("Completion record could not be saved", cause=e)

        logger.info(
            f"Reading toggled: user={user_id}, reading={reading_id}, "
            f"status={record.status.value}"
        )

        cache_service.invalidate_user(str(user_id))

        return record

    def _update_existing(
        self,
        store: ReadingStore,
        user_id: UUID,
        reading_id: UUID,
        status: CompletionStatus,
        now: datetime
    ) -> ReadingLog:
        record = store.find_completion_record(user_id, reading_id)
        if record is None:
            raise WriteFailed(f"Reading log for user {user_id} vanished during toggle")

        record.transition_to(status, now)
        try:
            return store.upsert_completion_record(record)
        except DuplicateRecordConflict as e:
            raise WriteFailed("Completion record could not be saved", cause=e)


# Global instance
toggle_service = ToggleService()
