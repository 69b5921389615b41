"""Channel model and the category enum shared with videos."""

import enum
from typing import TYPE_CHECKING

from sqlalchemy import Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.constants import DEFAULT_CHANNEL_BANNER_URL
from src.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from src.models.user import User
    from src.models.video import Video


class Category(str, enum.Enum):
    """Content category for channels and videos."""

    GAMING = "Gaming"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    TECHNOLOGY = "Technology"
    MUSIC = "Music"
    SPORTS = "Sports"
    NEWS = "News"
    LIFESTYLE = "Lifestyle"
    COMEDY = "Comedy"
    TRAVEL = "Travel"
    FOOD = "Food"
    FITNESS = "Fitness"


class Channel(Base, TimestampMixin):
    """Content-publishing identity owned by exactly one user."""

    __tablename__ = "channels"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    channel_name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    channel_banner: Mapped[str] = mapped_column(String(2000), default=DEFAULT_CHANNEL_BANNER_URL)
    # Not incremented anywhere yet; there is no subscribe endpoint
    subscribers: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    category: Mapped[Category] = mapped_column(Enum(Category), nullable=False)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="channels")
    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="channel",
        order_by="Video.upload_date",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "channel_name", name="uq_channel_owner_name"),
    )

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, channel_name={self.channel_name})>"
