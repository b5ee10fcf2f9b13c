"""
UserProfile model - reader identity only, progress is always derived
"""
from sqlalchemy import Column, String, TIMESTAMP, Uuid, func
from app.database import Base
import uuid


class UserProfile(Base):
    """
    User profiles table - holds no progress counters
    """
    __tablename__ = "user_profiles"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<UserProfile(id={self.id}, name={self.name})>"
