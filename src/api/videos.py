"""Video API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.params import ChannelId, UserId, VideoId
from src.auth import get_current_user, get_optional_user
from src.constants import MAX_PAGE_SIZE, USER_VIDEOS_PAGE_SIZE, VIDEOS_PAGE_SIZE
from src.db import get_db
from src.db.crud import (
    create_video,
    delete_video,
    get_channel,
    get_counters,
    get_video,
    increment_views,
    list_channel_videos,
    list_user_videos,
    list_videos,
    set_reaction,
    update_video,
    video_exists,
)
from src.models.schemas import (
    MessageResponse,
    ReactionRequest,
    ReactionResponse,
    UserStatus,
    VideoCreate,
    VideoDetail,
    VideoListResponse,
    VideoRead,
    VideoResponse,
    VideoUpdate,
    ViewResponse,
)
from src.models.user import User
from src.models.video import ReactionKind, Video
from src.utils.logging import LogContext, get_logger
from src.utils.metrics import metrics
from src.utils.pagination import Page

router = APIRouter()
logger = get_logger(__name__)


def _list_response(page: Page[Video]) -> VideoListResponse:
    return VideoListResponse(
        videos=[VideoRead.model_validate(v) for v in page.items],
        total=page.total,
        current_page=page.page,
        total_pages=page.total_pages,
    )


async def _get_uploaded_video(db: AsyncSession, video_id: int, user: User, verb: str) -> Video:
    video = await get_video(db, video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    if video.uploader_id != user.id:
        LogContext(logger, video_id=video_id, user_id=user.id).warning(f"Refused to {verb} video")
        raise HTTPException(status_code=403, detail=f"Not authorized to {verb} this video")
    return video


@router.post("", response_model=VideoResponse, status_code=201)
@router.post("/", response_model=VideoResponse, status_code=201, include_in_schema=False)
async def upload_video(
    data: VideoCreate,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoResponse:
    """Publish a video to one of the caller's channels."""
    channel = await get_channel(db, data.channel_id, with_relations=False)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    if channel.owner_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized to upload to this channel")

    video = await create_video(db, user.id, data)

    metrics.videos_uploaded_total.inc(category=video.category.value)
    LogContext(logger, video_id=video.id, channel_id=channel.id, user_id=user.id).info(
        f"Video uploaded ({video.duration})"
    )
    return VideoResponse(message="Video uploaded successfully", video=VideoRead.model_validate(video))


@router.get("", response_model=VideoListResponse)
@router.get("/", response_model=VideoListResponse, include_in_schema=False)
async def browse_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = VIDEOS_PAGE_SIZE,
) -> VideoListResponse:
    """Browse and search videos, newest first. ``category=All`` disables the filter."""
    result = await list_videos(db, page, limit, category=category, search=search)
    return _list_response(result)


@router.get("/channel/{channel_id}", response_model=VideoListResponse)
async def channel_videos(
    channel_id: ChannelId,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = VIDEOS_PAGE_SIZE,
) -> VideoListResponse:
    result = await list_channel_videos(db, channel_id, page, limit)
    return _list_response(result)


@router.get("/user/{user_id}", response_model=VideoListResponse)
async def user_videos(
    user_id: UserId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = USER_VIDEOS_PAGE_SIZE,
) -> VideoListResponse:
    """The caller's own uploads."""
    if user_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized to view these videos")
    result = await list_user_videos(db, user_id, page, limit)
    return _list_response(result)


@router.get("/{video_id}", response_model=VideoDetail)
async def get_video_endpoint(
    video_id: VideoId,
    user: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoDetail:
    """Single video with reactions and the caller's like/dislike status."""
    video = await get_video(db, video_id, detail=True)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")

    detail = VideoDetail.model_validate(video)
    if user:
        detail.user_status = UserStatus(
            liked=user.id in detail.user_likes,
            disliked=user.id in detail.user_dislikes,
        )
    return detail


@router.post("/{video_id}/view", response_model=ViewResponse)
async def record_view(
    video_id: VideoId,
    user: Annotated[User | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ViewResponse:
    """Count a view. Anonymous callers get the current count without incrementing."""
    video = await get_video(db, video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")

    if not user:
        return ViewResponse(views=video.views)

    views = await increment_views(db, video_id)
    metrics.video_views_total.inc()
    return ViewResponse(views=views if views is not None else video.views)


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video_endpoint(
    video_id: VideoId,
    data: VideoUpdate,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VideoResponse:
    video = await _get_uploaded_video(db, video_id, user, "update")
    video = await update_video(db, video, data)

    LogContext(logger, video_id=video.id, user_id=user.id).info("Video updated")
    return VideoResponse(message="Video updated successfully", video=VideoRead.model_validate(video))


@router.delete("/{video_id}", response_model=MessageResponse)
async def delete_video_endpoint(
    video_id: VideoId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a video the caller uploaded, along with its comments and reactions."""
    video = await _get_uploaded_video(db, video_id, user, "delete")
    await delete_video(db, video)

    LogContext(logger, video_id=video_id, user_id=user.id).info("Video deleted")
    return MessageResponse(message="Video deleted successfully")


async def _react(
    db: AsyncSession,
    video_id: int,
    user: User,
    kind: ReactionKind,
    data: ReactionRequest | None,
) -> ReactionResponse:
    # Plain int: set_reaction may roll back, which expires the ORM user
    user_id = user.id
    if not await video_exists(db, video_id):
        raise HTTPException(status_code=404, detail="Video not found")

    action = data.action if data and data.action else kind.value
    remove = action == "remove"
    current = await set_reaction(db, video_id, user_id, kind, remove=remove)
    likes, dislikes = await get_counters(db, video_id)

    metrics.video_reactions_total.inc(kind=kind.value, action="remove" if remove else "add")
    LogContext(logger, video_id=video_id, user_id=user_id).debug(
        f"{'Removed' if remove else 'Added'} {kind.value} (now likes={likes}, dislikes={dislikes})"
    )
    return ReactionResponse(
        likes=likes,
        dislikes=dislikes,
        user_status=UserStatus(
            liked=current == ReactionKind.LIKE,
            disliked=current == ReactionKind.DISLIKE,
        ),
    )


@router.post("/{video_id}/like", response_model=ReactionResponse)
async def like_video(
    video_id: VideoId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    data: ReactionRequest | None = None,
) -> ReactionResponse:
    """Like a video, or drop the caller's like with ``{"action": "remove"}``."""
    return await _react(db, video_id, user, ReactionKind.LIKE, data)


@router.post("/{video_id}/dislike", response_model=ReactionResponse)
async def dislike_video(
    video_id: VideoId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    data: ReactionRequest | None = None,
) -> ReactionResponse:
    """Dislike a video, or drop the caller's dislike with ``{"action": "remove"}``."""
    return await _react(db, video_id, user, ReactionKind.DISLIKE, data)
