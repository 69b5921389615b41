"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.security import decode_token
from src.db import get_db
from src.models.user import User

# auto_error=False so a missing header reaches get_optional_user instead of a 403
bearer_scheme = HTTPBearer(auto_error=False)

# One message for every failure mode so clients cannot tell which check failed
INVALID_TOKEN_MESSAGE = "Invalid or expired authentication token"


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Resolve the caller from the bearer token, or None when anonymous/invalid."""
    if not credentials:
        return None

    payload = decode_token(credentials.credentials)
    if not payload:
        return None

    return await db.get(User, int(payload.sub))


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Get current user, raising 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user

