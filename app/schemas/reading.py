"""
Pydantic schemas for reading schedule and completion endpoints
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import date, datetime

from app.models.reading_log import CompletionStatus
from app.services.progress_engine import ReadingStatus


class ReadingCreate(BaseModel):
    """Schema for publishing a reading to the plan"""
    date: date
    title: str = Field(..., max_length=255, description="Reading title")
    passage: Optional[str] = Field(None, description="Scripture passage, e.g. 'Genesis 1-3'")


class ReadingResponse(BaseModel):
    """A scheduled reading"""
    id: UUID
    date: date
    title: str
    passage: Optional[str] = None

    class Config:
        from_attributes = True


class ReadingLogResponse(BaseModel):
    """Completion record after a toggle"""
    id: UUID
    user_id: UUID
    reading_id: UUID
    status: CompletionStatus
    completed: bool
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CalendarEntry(BaseModel):
    """A reading with its status for one user"""
    reading: ReadingResponse
    status: ReadingStatus
    completed_at: Optional[datetime] = None
