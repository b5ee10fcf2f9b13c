"""
Pydantic schemas for announcements
"""
from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime


class AnnouncementResponse(BaseModel):
    id: UUID
    title: str
    content: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
