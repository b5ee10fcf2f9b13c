"""
ReadingLog model - one completion record per (user, reading)
"""
import enum
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column, CheckConstraint, Enum, ForeignKey, TIMESTAMP, UniqueConstraint, Uuid
)
from app.database import Base


class CompletionStatus(str, enum.Enum):
    """Two-state machine: PENDING <-> COMPLETED, PENDING is the initial state"""
    PENDING = "pending"
    COMPLETED = "completed"

    @property
    def toggled(self) -> "CompletionStatus":
        if self is CompletionStatus.COMPLETED:
            return CompletionStatus.PENDING
        return CompletionStatus.COMPLETED


class ReadingLog(Base):
    """
    Reading logs table - durable completion state of a reading for a user

    completed_at is set iff status is COMPLETED. Use transition_to() to
    change state so the two columns never disagree.
    """
    __tablename__ = "reading_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "reading_id", name="uq_reading_logs_user_reading"),
        CheckConstraint(
            "(status = 'COMPLETED' AND completed_at IS NOT NULL) OR "
            "(status = 'PENDING' AND completed_at IS NULL)",
            name="ck_reading_logs_status_timestamp",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user_profiles.id"), nullable=False, index=True)
    reading_id = Column(Uuid(as_uuid=True), ForeignKey("daily_readings.id"), nullable=False)
    status = Column(Enum(CompletionStatus), nullable=False, default=CompletionStatus.PENDING)
    completed_at = Column(TIMESTAMP(timezone=True), nullable=True)

    @property
    def completed(self) -> bool:
        return self.status == CompletionStatus.COMPLETED

    def transition_to(self, status: CompletionStatus, now: Optional[datetime] = None) -> None:
        """Move to the given state, stamping or clearing completed_at"""
        if status == CompletionStatus.COMPLETED:
            self.completed_at = now or datetime.now(timezone.utc)
        else:
            self.completed_at = None
        self.status = status

    def __repr__(self):
        return f"<ReadingLog(user_id={self.user_id}, reading_id={self.reading_id}, status={self.status})>"
