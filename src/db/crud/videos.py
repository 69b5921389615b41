"""CRUD operations for videos, views and reactions."""

import json
import random

from sqlalchemy import String, case, cast, delete, false, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.constants import CATEGORY_ALL, DURATION_MAX_MINUTES, DURATION_MIN_MINUTES
from src.models.channel import Category
from src.models.schemas import VideoCreate, VideoUpdate
from src.models.video import ReactionKind, Video, VideoReaction
from src.utils.logging import get_logger
from src.utils.pagination import Page, paginate

logger = get_logger(__name__)

NEWEST_FIRST = (Video.upload_date.desc(), Video.id.desc())

_COUNTER = {
    ReactionKind.LIKE: Video.likes,
    ReactionKind.DISLIKE: Video.dislikes,
}


def random_duration() -> str:
    """Placeholder ``MM:SS`` for uploads that don't state a duration."""
    minutes = random.randint(DURATION_MIN_MINUTES, DURATION_MAX_MINUTES)
    seconds = random.randint(0, 59)
    return f"{minutes:02d}:{seconds:02d}"


def _list_options() -> list:
    return [selectinload(Video.channel), selectinload(Video.uploader)]


def _detail_options() -> list:
    return [*_list_options(), selectinload(Video.reactions)]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_clause(search: str):
    """Match any whitespace-separated term in title, description or tags.

    Tags are matched against the stored JSON text, so the term is JSON-encoded
    the same way first (quotes and backslashes come out escaped).
    """
    clauses = []
    for term in search.split():
        pattern = f"%{_escape_like(term)}%"
        tag_pattern = f"%{_escape_like(json.dumps(term, ensure_ascii=False)[1:-1])}%"
        clauses.extend(
            [
                Video.title.ilike(pattern, escape="\\"),
                Video.description.ilike(pattern, escape="\\"),
                cast(Video.tags, String).ilike(tag_pattern, escape="\\"),
            ]
        )
    return or_(*clauses) if clauses else None


async def get_video(db: AsyncSession, video_id: int, detail: bool = False) -> Video | None:
    """Get a video with channel and uploader (and reactions when ``detail``)."""
    result = await db.execute(
        select(Video)
        .where(Video.id == video_id)
        .options(*(_detail_options() if detail else _list_options()))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def video_exists(db: AsyncSession, video_id: int) -> bool:
    result = await db.execute(select(Video.id).where(Video.id == video_id))
    return result.scalar_one_or_none() is not None


async def create_video(db: AsyncSession, uploader_id: int, data: VideoCreate) -> Video:
    video = Video(
        channel_id=data.channel_id,
        uploader_id=uploader_id,
        title=data.title,
        description=data.description,
        video_url=data.video_url,
        thumbnail_url=data.thumbnail_url,
        category=data.category,
        tags=list(data.tags),
        duration=data.duration or random_duration(),
    )
    db.add(video)
    await db.flush()

    # Reload with all relationships
    return await get_video(db, video.id)  # type: ignore[return-value]


async def list_videos(
    db: AsyncSession,
    page: int,
    limit: int,
    category: str | None = None,
    search: str | None = None,
) -> Page[Video]:
    """Browse/search videos, newest first."""
    query = select(Video)

    if category and category != CATEGORY_ALL:
        try:
            query = query.where(Video.category == Category(category))
        except ValueError:
            # Unknown category matches nothing rather than failing the request
            query = query.where(false())

    if search:
        clause = _search_clause(search)
        if clause is not None:
            query = query.where(clause)

    return await paginate(db, query, page, limit, order_by=NEWEST_FIRST, options=_list_options())


async def list_channel_videos(db: AsyncSession, channel_id: int, page: int, limit: int) -> Page[Video]:
    query = select(Video).where(Video.channel_id == channel_id)
    return await paginate(db, query, page, limit, order_by=NEWEST_FIRST, options=_list_options())


async def list_user_videos(db: AsyncSession, uploader_id: int, page: int, limit: int) -> Page[Video]:
    query = select(Video).where(Video.uploader_id == uploader_id)
    return await paginate(db, query, page, limit, order_by=NEWEST_FIRST, options=_list_options())


async def update_video(db: AsyncSession, video: Video, data: VideoUpdate) -> Video:
    """Update title/description; category and tags only when supplied."""
    video.title = data.title
    video.description = data.description
    if data.category is not None:
        video.category = data.category
    if data.tags is not None:
        video.tags = list(data.tags)
    await db.flush()

    return await get_video(db, video.id)  # type: ignore[return-value]


async def delete_video(db: AsyncSession, video: Video) -> None:
    """Delete a video along with its reactions and comments."""
    await db.delete(video)
    await db.flush()


async def increment_views(db: AsyncSession, video_id: int) -> int | None:
    """Add one view atomically; returns the new count, or None if the video is gone."""
    await db.execute(
        update(Video)
        .where(Video.id == video_id)
        .values(views=Video.views + 1)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(select(Video.views).where(Video.id == video_id))
    return result.scalar_one_or_none()


async def get_reaction(db: AsyncSession, video_id: int, user_id: int) -> ReactionKind | None:
    result = await db.execute(
        select(VideoReaction.kind).where(
            VideoReaction.video_id == video_id,
            VideoReaction.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_counters(db: AsyncSession, video_id: int) -> tuple[int, int]:
    """Current (likes, dislikes) read straight from the table."""
    result = await db.execute(select(Video.likes, Video.dislikes).where(Video.id == video_id))
    row = result.one()
    return row.likes, row.dislikes


def _counter_delta(kind: ReactionKind, delta: int) -> dict:
    column = _COUNTER[kind]
    if delta > 0:
        return {column: column + 1}
    # Never let a counter go below zero
    return {column: case((column > 0, column - 1), else_=0)}


async def _adjust(db: AsyncSession, video_id: int, *changes: tuple[ReactionKind, int]) -> None:
    values: dict = {}
    for kind, delta in changes:
        values.update(_counter_delta(kind, delta))
    await db.execute(
        update(Video)
        .where(Video.id == video_id)
        .values(values)
        .execution_options(synchronize_session=False)
    )


async def _apply_reaction(
    db: AsyncSession,
    video_id: int,
    user_id: int,
    kind: ReactionKind,
    remove: bool,
) -> ReactionKind | None:
    """Move the caller's reaction and the counters together.

    Every row change is conditional on the state just read, and counters only
    move when exactly one reaction row changed, so repeated or concurrent
    requests cannot double count.
    """
    current = await get_reaction(db, video_id, user_id)
    own_row = (VideoReaction.video_id == video_id, VideoReaction.user_id == user_id)

    if remove:
        if current != kind:
            return current
        result = await db.execute(
            delete(VideoReaction)
            .where(*own_row, VideoReaction.kind == kind)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            await _adjust(db, video_id, (kind, -1))
        return None

    if current == kind:
        return current

    if current is None:
        await db.execute(insert(VideoReaction).values(video_id=video_id, user_id=user_id, kind=kind))
        await _adjust(db, video_id, (kind, 1))
        return kind

    result = await db.execute(
        update(VideoReaction)
        .where(*own_row, VideoReaction.kind == current)
        .values(kind=kind)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 1:
        await _adjust(db, video_id, (current, -1), (kind, 1))
    return kind


async def set_reaction(
    db: AsyncSession,
    video_id: int,
    user_id: int,
    kind: ReactionKind,
    remove: bool = False,
) -> ReactionKind | None:
    """Add or remove the caller's like/dislike and return their reaction afterwards.

    The caller must not have pending work in ``db``: losing an insert race to
    a concurrent request by the same user rolls the transaction back before
    the change is applied once more on top of the winner's row.
    """
    try:
        return await _apply_reaction(db, video_id, user_id, kind, remove)
    except IntegrityError:
        logger.info(f"Reaction insert raced for video {video_id}, user {user_id}; retrying")
        await db.rollback()
        return await _apply_reaction(db, video_id, user_id, kind, remove)
