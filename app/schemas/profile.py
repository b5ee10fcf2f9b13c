"""
Pydantic schemas for user profiles
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID


class ProfileCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)


class ProfileResponse(BaseModel):
    """Identity only, progress comes from the progress endpoints"""
    id: UUID
    name: str
    email: Optional[str] = None

    class Config:
        from_attributes = True
