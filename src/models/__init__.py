"""SQLAlchemy models."""

from src.models.base import Base
from src.models.channel import Category, Channel
from src.models.comment import Comment
from src.models.user import User
from src.models.video import ReactionKind, Video, VideoReaction

__all__ = [
    "Base",
    "User",
    "Channel",
    "Category",
    "Video",
    "VideoReaction",
    "ReactionKind",
    "Comment",
]
