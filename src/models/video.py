"""Video model and per-user reactions."""

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.constants import DEFAULT_DURATION
from src.models.base import Base, utcnow
from src.models.channel import Category

if TYPE_CHECKING:
    from src.models.channel import Channel
    from src.models.comment import Comment
    from src.models.user import User


class ReactionKind(str, enum.Enum):
    """A user's reaction to a video."""

    LIKE = "like"
    DISLIKE = "dislike"


class VideoReaction(Base):
    """One like or dislike by one user on one video.

    The composite primary key allows a single reaction per (video, user), so a
    user can never be in both the like and the dislike set.
    """

    __tablename__ = "video_reactions"

    video_id: Mapped[int] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    kind: Mapped[ReactionKind] = mapped_column(Enum(ReactionKind), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    video: Mapped["Video"] = relationship("Video", back_populates="reactions")

    def __repr__(self) -> str:
        return f"<VideoReaction(video_id={self.video_id}, user_id={self.user_id}, kind={self.kind})>"


class Video(Base):
    """An uploaded video (media lives at external URLs)."""

    __tablename__ = "videos"

    id: Mapped[int] = mapped_column(primary_key=True)
    channel_id: Mapped[int] = mapped_column(ForeignKey("channels.id", ondelete="CASCADE"), index=True)
    uploader_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    thumbnail_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    category: Mapped[Category] = mapped_column(Enum(Category), nullable=False, index=True)
    duration: Mapped[str] = mapped_column(String(10), default=DEFAULT_DURATION)
    tags: Mapped[list] = mapped_column(JSON, default=list)

    # Counters, only ever changed through atomic UPDATE statements
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    likes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    dislikes: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    upload_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    # Relationships
    channel: Mapped["Channel"] = relationship("Channel", back_populates="videos")
    uploader: Mapped["User"] = relationship("User")
    reactions: Mapped[list[VideoReaction]] = relationship(
        VideoReaction,
        back_populates="video",
        cascade="all, delete-orphan",
        lazy="select",
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="video",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_videos_channel_upload", "channel_id", "upload_date"),
        Index("ix_videos_uploader_upload", "uploader_id", "upload_date"),
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title})>"

    # Only valid when `reactions` has been eagerly loaded
    @property
    def user_likes(self) -> list[int]:
        return [r.user_id for r in self.reactions if r.kind == ReactionKind.LIKE]

    @property
    def user_dislikes(self) -> list[int]:
        return [r.user_id for r in self.reactions if r.kind == ReactionKind.DISLIKE]
