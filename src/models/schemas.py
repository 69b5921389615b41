"""Pydantic schemas for API validation and serialization.

JSON field names are camelCase (``channelName``, ``videoUrl``...) through the
alias generator; Python attribute names stay snake_case.
"""

import re
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from src.constants import (
    CHANNEL_DESCRIPTION_MAX_LENGTH,
    CHANNEL_NAME_MAX_LENGTH,
    COMMENT_MAX_LENGTH,
    MAX_ROW_ID,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    VIDEO_DESCRIPTION_MAX_LENGTH,
    VIDEO_TITLE_MAX_LENGTH,
)
from src.models.channel import Category

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
DURATION_PATTERN = re.compile(r"^\d{1,2}:[0-5]\d$")


def _check_length(value: str, label: str, low: int, high: int) -> str:
    if not low <= len(value) <= high:
        raise PydanticCustomError(
            "length",
            "{label} must be between {low} and {high} characters",
            {"label": label, "low": low, "high": high},
        )
    return value


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies: surrounding whitespace is trimmed."""

    model_config = ConfigDict(str_strip_whitespace=True)


# ============== Auth ==============


class SignupRequest(CamelModel):
    """Registration payload (password is taken verbatim, never trimmed)."""

    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        _check_length(v, "Username", USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH)
        if not USERNAME_PATTERN.match(v):
            raise PydanticCustomError(
                "username_format",
                "Username can only contain letters, numbers, and underscores",
            )
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                "password_length",
                "Password must be at least {min} characters long",
                {"min": PASSWORD_MIN_LENGTH},
            )
        return v


class LoginRequest(CamelModel):
    """Login payload."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("password_required", "Password is required")
        return v


class UserBrief(CamelModel):
    """Public projection of a user embedded in other resources."""

    id: int
    username: str
    avatar: str


class ChannelBase(CamelModel):
    """Channel fields without nested resources."""

    id: int
    owner_id: int
    channel_name: str
    description: str
    channel_banner: str
    subscribers: int
    category: Category
    created_at: datetime


class UserProfile(CamelModel):
    """Current user's profile (never carries the password hash)."""

    id: int
    username: str
    email: str
    avatar: str
    created_at: datetime
    channels: list[ChannelBase] = []


class LoginUser(CamelModel):
    """User projection returned alongside a fresh token."""

    user_id: int
    username: str
    email: str
    avatar: str
    channels: list[int] = []


class SignupResponse(CamelModel):
    message: str
    success: bool = True


class LoginResponse(CamelModel):
    message: str
    token: str
    user: LoginUser


class MeResponse(CamelModel):
    user: UserProfile


# ============== Channels ==============


class ChannelWrite(RequestModel):
    """Channel create/update payload (all fields are re-validated on update)."""

    channel_name: str
    description: str
    category: Category
    channel_banner: str | None = None

    @field_validator("channel_name")
    @classmethod
    def validate_channel_name(cls, v: str) -> str:
        return _check_length(v, "Channel name", 1, CHANNEL_NAME_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _check_length(v, "Description", 1, CHANNEL_DESCRIPTION_MAX_LENGTH)

    @field_validator("channel_banner")
    @classmethod
    def empty_banner_is_unset(cls, v: str | None) -> str | None:
        return v or None


class ChannelVideo(CamelModel):
    """Video summary listed on a channel."""

    id: int
    title: str
    thumbnail_url: str
    duration: str
    views: int
    likes: int
    category: Category
    upload_date: datetime
    uploader: UserBrief


class ChannelRead(ChannelBase):
    """Channel with owner and videos."""

    owner: UserBrief
    videos: list[ChannelVideo] = []


class ChannelResponse(CamelModel):
    channel: ChannelRead


class ChannelMessageResponse(ChannelResponse):
    message: str


class ChannelListResponse(CamelModel):
    channels: list[ChannelRead]


class MessageResponse(CamelModel):
    message: str


# ============== Videos ==============


class VideoCreate(RequestModel):
    """Upload payload; media is referenced by URL."""

    title: str
    description: str
    video_url: str = Field(min_length=1)
    thumbnail_url: str = Field(min_length=1)
    channel_id: int = Field(ge=1, le=MAX_ROW_ID)
    category: Category
    tags: list[str] = []
    duration: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_length(v, "Title", 1, VIDEO_TITLE_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _check_length(v, "Description", 1, VIDEO_DESCRIPTION_MAX_LENGTH)

    @field_validator("tags")
    @classmethod
    def drop_blank_tags(cls, v: list[str]) -> list[str]:
        return [tag for tag in v if tag]

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not DURATION_PATTERN.match(v):
            raise PydanticCustomError("duration_format", "Duration must be formatted as MM:SS")
        return v


class VideoUpdate(RequestModel):
    """Editable video fields; category and tags are kept when omitted."""

    title: str
    description: str
    category: Category | None = None
    tags: list[str] | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_length(v, "Title", 1, VIDEO_TITLE_MAX_LENGTH)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _check_length(v, "Description", 1, VIDEO_DESCRIPTION_MAX_LENGTH)

    @field_validator("tags")
    @classmethod
    def drop_blank_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else [tag for tag in v if tag]


class ChannelBrief(CamelModel):
    id: int
    channel_name: str


class ChannelBriefWithDescription(ChannelBrief):
    description: str


class VideoRead(CamelModel):
    """Video with channel name and uploader projection."""

    id: int
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    channel_id: int
    channel: ChannelBrief
    uploader: UserBrief
    category: Category
    duration: str
    tags: list[str] = []
    views: int
    likes: int
    dislikes: int
    upload_date: datetime


class UserStatus(CamelModel):
    """Whether the caller currently likes/dislikes a video."""

    liked: bool = False
    disliked: bool = False


class VideoDetail(VideoRead):
    """Single video view, including reaction sets and the caller's status."""

    channel: ChannelBriefWithDescription
    user_likes: list[int] = []
    user_dislikes: list[int] = []
    user_status: UserStatus = Field(default_factory=UserStatus)


class VideoResponse(CamelModel):
    message: str
    video: VideoRead


class VideoListResponse(CamelModel):
    videos: list[VideoRead]
    total: int
    current_page: int
    total_pages: int


class ViewResponse(CamelModel):
    success: bool = True
    views: int


class ReactionRequest(RequestModel):
    """Like/dislike payload. Anything but "remove" (or no action) adds the reaction."""

    action: Literal["like", "dislike", "remove"] | None = None


class ReactionResponse(CamelModel):
    success: bool = True
    likes: int
    dislikes: int
    user_status: UserStatus


# ============== Comments ==============


class CommentCreate(RequestModel):
    video_id: int = Field(ge=1, le=MAX_ROW_ID)
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _check_length(v, "Comment", 1, COMMENT_MAX_LENGTH)


class CommentUpdate(RequestModel):
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _check_length(v, "Comment", 1, COMMENT_MAX_LENGTH)


class CommentRead(CamelModel):
    id: int
    comment_id: str
    video_id: int
    user_id: int
    author: UserBrief
    text: str
    timestamp: datetime
    age: str


class CommentCreatedResponse(CamelModel):
    success: bool = True
    comment: CommentRead


class CommentMessageResponse(CamelModel):
    message: str
    comment: CommentRead


class CommentListResponse(CamelModel):
    comments: list[CommentRead]
    total: int
    page: int
    total_pages: int


class SuccessResponse(CamelModel):
    success: bool = True
