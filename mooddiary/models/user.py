"""
User model for authentication and entry ownership.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from mooddiary.db.base import BaseModel


class User(BaseModel):
    """User identified by email."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    diary_entries = relationship("DiaryEntry", back_populates="user", cascade="all, delete-orphan")
