"""
Diary entry routes: list, read, create, edit and delete.
"""
import logging
from typing import List
import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from mooddiary.db.session import get_db
from mooddiary.models.user import User
from mooddiary.models.diary import DiaryEntry
from mooddiary.schemas.diary import DiaryEntryCreate, DiaryEntryUpdate, DiaryEntryResponse
from mooddiary.api.dependencies import get_current_user, get_gateway_client
from mooddiary.services import diary_service
from mooddiary.services.diary_service import EmptyContentError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


def get_owned_entry(entry_id: str, user_id: str, db: Session) -> DiaryEntry:
    """Get an entry owned by the user or raise 404."""
    diary_entry = diary_service.get_entry(entry_id, user_id, db)
    if not diary_entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Entry not found"
        )
    return diary_entry


@router.get("", response_model=List[DiaryEntryResponse])
async def list_entries(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's entries, newest first."""
    return diary_service.list_entries(current_user.id, db)


@router.get("/{entry_id}", response_model=DiaryEntryResponse)
async def get_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single entry."""
    return get_owned_entry(entry_id, current_user.id, db)


@router.post("", response_model=DiaryEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: DiaryEntryCreate,
    current_user: User = Depends(get_current_user),
    client: httpx.AsyncClient = Depends(get_gateway_client),
    db: Session = Depends(get_db)
):
    """Create an entry. Mood analysis runs first; its failure does not block the save."""
    try:
        return await diary_service.create_entry(
            current_user.id, entry_data.title, entry_data.content, client, db
        )
    except EmptyContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Entry insert error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save entry."
        )


@router.put("/{entry_id}", response_model=DiaryEntryResponse)
async def update_entry(
    entry_id: str,
    entry_data: DiaryEntryUpdate,
    current_user: User = Depends(get_current_user),
    client: httpx.AsyncClient = Depends(get_gateway_client),
    db: Session = Depends(get_db)
):
    """Edit an entry. Mood is re-analyzed only when the content changed."""
    diary_entry = get_owned_entry(entry_id, current_user.id, db)
    try:
        return await diary_service.update_entry(
            diary_entry, entry_data.title, entry_data.content, client, db
        )
    except EmptyContentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Entry update error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save entry."
        )


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an entry permanently."""
    diary_entry = get_owned_entry(entry_id, current_user.id, db)
    try:
        diary_service.delete_entry(diary_entry, db)
    except SQLAlchemyError as e:
        logger.error(f"Entry delete error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete entry."
        )
    return {"message": "Entry deleted successfully"}
