"""Comment model."""

import random
import string
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.models.base import Base, utcnow

if TYPE_CHECKING:
    from src.models.user import User
    from src.models.video import Video

_BASE36 = string.digits + string.ascii_lowercase

# (upper bound in seconds, divisor, unit) for the human readable age
_AGE_UNITS = (
    (60, 1, "seconds"),
    (3600, 60, "minutes"),
    (86400, 3600, "hours"),
    (2592000, 86400, "days"),
    (31536000, 2592000, "months"),
)


def generate_comment_id() -> str:
    """Public comment identifier: ``comment_<epoch ms>_<9 base36 chars>``."""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"comment_{int(time.time() * 1000)}_{suffix}"


class Comment(Base):
    """Text annotation left by a user on a video."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    comment_id: Mapped[str] = mapped_column(
        String(64), unique=True, default=generate_comment_id, nullable=False
    )
    video_id: Mapped[int] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    # Relationships
    video: Mapped["Video"] = relationship("Video", back_populates="comments")
    author: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, video_id={self.video_id}, user_id={self.user_id})>"

    @property
    def age(self) -> str:
        """Time since posting, e.g. "3 hours ago"."""
        posted = self.timestamp
        if posted.tzinfo is None:
            # SQLite hands back naive datetimes; they were written as UTC
            posted = posted.replace(tzinfo=UTC)
        seconds = max(0, int((datetime.now(UTC) - posted).total_seconds()))

        for limit, divisor, unit in _AGE_UNITS:
            if seconds < limit:
                return f"{seconds // divisor} {unit} ago"
        return f"{seconds // 31536000} years ago"
