"""
Announcement model - community notices shown on the dashboard
"""
from sqlalchemy import Column, Boolean, String, Text, TIMESTAMP, Uuid, func
from app.database import Base
import uuid


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    content = Column(Text)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<Announcement(id={self.id}, title={self.title}, active={self.is_active})>"
