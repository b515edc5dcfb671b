"""Models package - Import all models for SQLAlchemy registration."""
from mooddiary.models.user import User
from mooddiary.models.diary import DiaryEntry

__all__ = [
    "User",
    "DiaryEntry",
]
