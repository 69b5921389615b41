"""User model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.constants import DEFAULT_AVATAR_URL
from src.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from src.models.channel import Channel


class User(Base, TimestampMixin):
    """Account that can own channels, upload videos and comment."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # bcrypt hash; never exposed through any response schema
    password_hash: Mapped[str] = mapped_column(String(255))
    avatar: Mapped[str] = mapped_column(String(2000), default=DEFAULT_AVATAR_URL)

    # Channels are loaded explicitly (selectinload) where a response needs them
    channels: Mapped[list["Channel"]] = relationship(
        "Channel",
        back_populates="owner",
        order_by="Channel.created_at",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
