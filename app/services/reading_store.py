"""
Store adapter for readings, completion records and profiles
Maps SQLAlchemy failures onto the tracker error taxonomy
"""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Announcement, DailyReading, ReadingLog, UserProfile
from app.utils.exceptions import DuplicateRecordConflict, InputUnavailable, WriteFailed

logger = logging.getLogger(__name__)


class ReadingStore:
    """Thin query layer over one database session"""

    def __init__(self, db: Session):
        self.db = db

    def list_reading_units(
        self,
        ascending: bool = True,
        limit: Optional[int] = None,
        until: Optional[date] = None
    ) -> List[DailyReading]:
        """
        List published readings ordered by date

        Args:
            ascending: Oldest first when True
            limit: Maximum number of rows
            until: Only readings dated on or before this day
        """
        order = DailyReading.date.asc() if ascending else DailyReading.date.desc()

        try:
            query = self.db.query(DailyReading)
            if until is not None:
                query = query.filter(DailyReading.date <= until)
            query = query.order_by(order)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list readings: {str(e)}")
            raise InputUnavailable("Reading schedule could not be loaded", cause=e)

    def get_reading_unit(self, reading_id: UUID) -> Optional[DailyReading]:
        try:
            return self.db.query(DailyReading).filter(DailyReading.id == reading_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load reading {reading_id}: {str(e)}")
            raise InputUnavailable("Reading could not be loaded", cause=e)

    def list_completion_records(self, user_id: Optional[UUID] = None) -> List[ReadingLog]:
        """All completion records, or only those of one user"""
        try:
            query = self.db.query(ReadingLog)
            if user_id is not None:
                query = query.filter(ReadingLog.user_id == user_id)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list reading logs: {str(e)}")
            raise InputUnavailable("Completion records could not be loaded", cause=e)

    def find_completion_record(self, user_id: UUID, reading_id: UUID) -> Optional[ReadingLog]:
        try:
            return self.db.query(ReadingLog).filter(
                ReadingLog.user_id == user_id,
                ReadingLog.reading_id == reading_id
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load reading log: {str(e)}")
            raise InputUnavailable("Completion record could not be loaded", cause=e)

    def upsert_completion_record(self, record: ReadingLog) -> ReadingLog:
        """
        Persist a new or modified completion record

        Raises:
            DuplicateRecordConflict: a record for the pair already exists
            WriteFailed: any other rejection, the session is rolled back
        """
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
            return record
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordConflict(
                f"Completion record already exists for user {record.user_id}, "
                f"reading {record.reading_id}",
                cause=e
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save reading log: {str(e)}")
            raise WriteFailed("Completion record could not be saved", cause=e)

    def list_user_profiles(self) -> List[UserProfile]:
        try:
            return self.db.query(UserProfile).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list user profiles: {str(e)}")
            raise InputUnavailable("User profiles could not be loaded", cause=e)

    def get_user_profile(self, user_id: UUID) -> Optional[UserProfile]:
        try:
            return self.db.query(UserProfile).filter(UserProfile.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load profile {user_id}: {str(e)}")
            raise InputUnavailable("User profile could not be loaded", cause=e)

    def create_user_profile(self, profile: UserProfile) -> UserProfile:
        try:
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)
            return profile
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordConflict(f"Email already registered: {profile.email}", cause=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create profile: {str(e)}")
            raise WriteFailed("User profile could not be saved", cause=e)

    def publish_reading_unit(self, reading: DailyReading) -> DailyReading:
        """Add a reading to the plan, one per calendar day"""
        try:
            self.db.add(reading)
            self.db.commit()
            self.db.refresh(reading)
            return reading
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateRecordConflict(f"A reading is already scheduled on {reading.date}", cause=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to publish reading: {str(e)}")
            raise WriteFailed("Reading could not be published", cause=e)

    def list_announcements(self, limit: int) -> List[Announcement]:
        """Active announcements, newest first"""
        try:
            return self.db.query(Announcement).filter(
                Announcement.is_active.is_(True)
            ).order_by(Announcement.created_at.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list announcements: {str(e)}")
            raise InputUnavailable("Announcements could not be loaded", cause=e)
