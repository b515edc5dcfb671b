"""
Shared route dependencies: session user and AI gateway client.
"""
from typing import AsyncIterator, Optional
import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from mooddiary.core.config import settings
from mooddiary.core.security import decode_access_token
from mooddiary.db.session import get_db
from mooddiary.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the session user from the bearer token, 401 when absent or invalid."""
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"}
    )
    if credentials is None:
        raise unauthorized

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise unauthorized

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user or not user.is_active:
        raise unauthorized
    return user


async def get_gateway_client() -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client for the AI gateway, closed after the request."""
    async with httpx.AsyncClient(timeout=settings.AI_GATEWAY_TIMEOUT) as client:
        yield client
