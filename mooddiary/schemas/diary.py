"""
Pydantic schemas for Diary entity.
"""
from pydantic import BaseModel, computed_field, field_validator
from typing import List, Optional
from datetime import datetime, timezone
from mooddiary.core.utils import format_entry_timestamp


class DiaryEntryBase(BaseModel):
    """Base diary entry schema."""
    title: Optional[str] = None
    content: str


class DiaryEntryCreate(DiaryEntryBase):
    """Schema for diary entry creation."""
    pass


class DiaryEntryUpdate(DiaryEntryBase):
    """Schema for diary entry update. Title and content are both replaced."""
    pass


class DiaryEntryResponse(DiaryEntryBase):
    """Schema for diary entry response. Timestamps are serialized as UTC."""
    id: str
    user_id: str
    mood_emojis: List[str] = []
    sentiment_analysis: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """The store keeps naive UTC timestamps."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @computed_field
    @property
    def display_date(self) -> str:
        """created_at formatted in UTC; clients wanting local time convert created_at."""
        return format_entry_timestamp(self.created_at)

    class Config:
        from_attributes = True
