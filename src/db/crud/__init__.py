"""CRUD operations module."""

from src.db.crud.channels import (
    create_channel,
    delete_channel,
    get_channel,
    list_channels,
    owner_has_channel_named,
    update_channel,
)
from src.db.crud.comments import (
    create_comment,
    delete_comment,
    get_comment,
    list_video_comments,
    update_comment,
)
from src.db.crud.users import (
    create_user,
    find_conflicting_user,
    get_user,
    get_user_by_email,
)
from src.db.crud.videos import (
    create_video,
    delete_video,
    get_counters,
    get_reaction,
    get_video,
    increment_views,
    list_channel_videos,
    list_user_videos,
    list_videos,
    random_duration,
    set_reaction,
    update_video,
    video_exists,
)

__all__ = [
    "create_channel",
    "create_comment",
    "create_user",
    "create_video",
    "delete_channel",
    "delete_comment",
    "delete_video",
    "find_conflicting_user",
    "get_channel",
    "get_comment",
    "get_counters",
    "get_reaction",
    "get_user",
    "get_user_by_email",
    "get_video",
    "increment_views",
    "list_channel_videos",
    "list_channels",
    "list_user_videos",
    "list_video_comments",
    "list_videos",
    "owner_has_channel_named",
    "random_duration",
    "set_reaction",
    "update_channel",
    "update_comment",
    "update_video",
    "video_exists",
]
