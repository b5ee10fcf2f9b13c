"""
DailyReading model - one scheduled reading unit per calendar day
"""
from sqlalchemy import Column, Date, String, Text, TIMESTAMP, Uuid, func
from app.database import Base
import uuid


class DailyReading(Base):
    """
    Daily readings table - the published reading plan, append-only
    """
    __tablename__ = "daily_readings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    date = Column(Date, unique=True, nullable=False, index=True)  # UTC calendar day
    title = Column(String(255), nullable=False)
    passage = Column(Text)  # e.g. "Genesis 1-3"
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<DailyReading(id={self.id}, date={self.date}, title={self.title})>"
