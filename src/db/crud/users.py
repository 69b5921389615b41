"""CRUD operations for users."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.auth.security import hash_password
from src.models.schemas import SignupRequest
from src.models.user import User


async def get_user(db: AsyncSession, user_id: int, with_channels: bool = False) -> User | None:
    """Get a user by id, optionally with owned channels loaded."""
    query = select(User).where(User.id == user_id)
    if with_channels:
        query = query.options(selectinload(User.channels))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str, with_channels: bool = False) -> User | None:
    query = select(User).where(User.email == email.lower())
    if with_channels:
        query = query.options(selectinload(User.channels))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def find_conflicting_user(db: AsyncSession, email: str, username: str) -> User | None:
    """Any user already holding this email or username (single query)."""
    result = await db.execute(
        select(User).where(or_(User.email == email.lower(), User.username == username)).limit(1)
    )
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, data: SignupRequest) -> User:
    user = User(
        username=data.username,
        email=data.email.lower(),
        password_hash=hash_password(data.password),
    )
    db.add(user)
    await db.flush()
    return user
