"""
Diary entry model with mood annotations.
"""
from sqlalchemy import Column, String, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship
from mooddiary.db.base import BaseModel


class DiaryEntry(BaseModel):
    """Free-text diary entry annotated with mood emojis and a sentiment reflection."""
    __tablename__ = "diary_entries"

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=True)  # NULL rather than empty string
    content = Column(Text, nullable=False)
    mood_emojis = Column(JSON, default=list, nullable=False)  # Ordered list of emoji strings
    sentiment_analysis = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", back_populates="diary_entries")
