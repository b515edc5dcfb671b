"""
Diary service for entry lifecycle business logic.

Create and edit run mood analysis before persisting. Analysis failures are
logged and never block the save.
"""
import logging
from typing import List, Optional
import httpx
from sqlalchemy.orm import Session
from mooddiary.models.diary import DiaryEntry
from mooddiary.schemas.analysis import AnalysisResult
from mooddiary.services.analysis_service import analyze_mood, MoodAnalysisError

logger = logging.getLogger(__name__)


class EmptyContentError(ValueError):
    """Entry content is empty after trimming."""

    def __init__(self):
        super().__init__("Content is required")


def _clean_title(title: Optional[str]) -> Optional[str]:
    """Blank titles are stored as NULL."""
    if title is None:
        return None
    return title.strip() or None


def _clean_content(content: str) -> str:
    cleaned = (content or "").strip()
    if not cleaned:
        raise EmptyContentError()
    return cleaned


async def analyze_for_entry(content: str, client: httpx.AsyncClient) -> Optional[AnalysisResult]:
    """Run mood analysis, returning None instead of raising on failure."""
    try:
        return await analyze_mood(content, client)
    except MoodAnalysisError as e:
        logger.warning(f"Mood analysis failed, saving entry without it: {e}")
        return None


def list_entries(user_id: str, db: Session) -> List[DiaryEntry]:
    """Get all entries for an owner, newest first."""
    return db.query(DiaryEntry).filter(
        DiaryEntry.user_id == user_id
    ).order_by(DiaryEntry.created_at.desc()).all()


def get_entry(entry_id: str, user_id: str, db: Session) -> Optional[DiaryEntry]:
    """Get an entry by id if it belongs to the owner."""
    return db.query(DiaryEntry).filter(
        DiaryEntry.id == entry_id,
        DiaryEntry.user_id == user_id
    ).first()


async def create_entry(
    user_id: str,
    title: Optional[str],
    content: str,
    client: httpx.AsyncClient,
    db: Session
) -> DiaryEntry:
    """
    Validate, analyze and insert a new entry.

    Raises EmptyContentError before any network activity when content is blank.
    Database errors propagate after the session is rolled back.
    """
    cleaned_content = _clean_content(content)

    analysis = await analyze_for_entry(content, client)

    diary_entry = DiaryEntry(
        user_id=user_id,
        title=_clean_title(title),
        content=cleaned_content,
        mood_emojis=analysis.emojis if analysis else [],
        sentiment_analysis=analysis.sentiment if analysis else None
    )
    db.add(diary_entry)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(diary_entry)

    return diary_entry


async def update_entry(
    diary_entry: DiaryEntry,
    title: Optional[str],
    content: str,
    client: httpx.AsyncClient,
    db: Session
) -> DiaryEntry:
    """
    Validate and update an entry.

    Analysis is re-run only when the content differs from the stored content.
    If it is not re-run, or it fails, the stored analysis fields are kept.
    """
    cleaned_content = _clean_content(content)

    analysis = None
    if content != diary_entry.content:
        analysis = await analyze_for_entry(content, client)

    diary_entry.title = _clean_title(title)
    diary_entry.content = cleaned_content
    if analysis is not None:
        diary_entry.mood_emojis = analysis.emojis
        diary_entry.sentiment_analysis = analysis.sentiment

    entry_id, user_id = diary_entry.id, diary_entry.user_id
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    # Reload from the store rather than trusting the in-memory object
    db.expire_all()
    return get_entry(entry_id, user_id, db)


def delete_entry(diary_entry: DiaryEntry, db: Session) -> None:
    """Hard-delete an entry."""
    db.delete(diary_entry)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
