"""CRUD operations for comments."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.comment import Comment
from src.utils.pagination import Page, paginate


async def get_comment(db: AsyncSession, comment_id: int) -> Comment | None:
    result = await db.execute(
        select(Comment)
        .where(Comment.id == comment_id)
        .options(selectinload(Comment.author))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def create_comment(db: AsyncSession, video_id: int, user_id: int, text: str) -> Comment:
    comment = Comment(video_id=video_id, user_id=user_id, text=text)
    db.add(comment)
    await db.flush()

    # Reload with author
    return await get_comment(db, comment.id)  # type: ignore[return-value]


async def list_video_comments(db: AsyncSession, video_id: int, page: int, limit: int) -> Page[Comment]:
    """Comments on a video, newest first."""
    query = select(Comment).where(Comment.video_id == video_id)
    return await paginate(
        db,
        query,
        page,
        limit,
        order_by=(Comment.timestamp.desc(), Comment.id.desc()),
        options=(selectinload(Comment.author),),
    )


async def update_comment(db: AsyncSession, comment: Comment, text: str) -> Comment:
    comment.text = text
    await db.flush()
    return comment


async def delete_comment(db: AsyncSession, comment: Comment) -> None:
    await db.delete(comment)
    await db.flush()
