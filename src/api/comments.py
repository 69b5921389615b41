"""Comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.params import CommentId, VideoId
from src.auth import get_current_user
from src.constants import COMMENTS_PAGE_SIZE, MAX_PAGE_SIZE
from src.db import get_db
from src.db.crud import (
    create_comment,
    delete_comment,
    get_comment,
    list_video_comments,
    update_comment,
    video_exists,
)
from src.models.comment import Comment
from src.models.schemas import (
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    CommentMessageResponse,
    CommentRead,
    CommentUpdate,
    SuccessResponse,
)
from src.models.user import User
from src.utils.logging import LogContext, get_logger
from src.utils.metrics import metrics

router = APIRouter()
logger = get_logger(__name__)


async def _get_authored_comment(db: AsyncSession, comment_id: int, user: User, verb: str) -> Comment:
    comment = await get_comment(db, comment_id)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.user_id != user.id:
        LogContext(logger, comment_id=comment_id, user_id=user.id).warning(f"Refused to {verb} comment")
        raise HTTPException(status_code=403, detail=f"Not authorized to {verb} this comment")
    return comment


@router.post("", response_model=CommentCreatedResponse, status_code=201)
@router.post("/", response_model=CommentCreatedResponse, status_code=201, include_in_schema=False)
async def add_comment(
    data: CommentCreate,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentCreatedResponse:
    if not await video_exists(db, data.video_id):
        raise HTTPException(status_code=404, detail="Video not found")

    comment = await create_comment(db, data.video_id, user.id, data.text)
    metrics.comments_posted_total.inc()
    logger.debug(f"Comment {comment.comment_id} posted on video {data.video_id} by user {user.id}")
    return CommentCreatedResponse(comment=CommentRead.model_validate(comment))


@router.get("/video/{video_id}", response_model=CommentListResponse)
async def video_comments(
    video_id: VideoId,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = COMMENTS_PAGE_SIZE,
) -> CommentListResponse:
    """Comments on a video, newest first."""
    if not await video_exists(db, video_id):
        raise HTTPException(status_code=404, detail="Video not found")

    result = await list_video_comments(db, video_id, page, limit)
    return CommentListResponse(
        comments=[CommentRead.model_validate(c) for c in result.items],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.put("/{comment_id}", response_model=CommentMessageResponse)
async def edit_comment(
    comment_id: CommentId,
    data: CommentUpdate,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CommentMessageResponse:
    comment = await _get_authored_comment(db, comment_id, user, "update")
    comment = await update_comment(db, comment, data.text)
    return CommentMessageResponse(
        message="Comment updated successfully",
        comment=CommentRead.model_validate(comment),
    )


@router.delete("/{comment_id}", response_model=SuccessResponse)
async def remove_comment(
    comment_id: CommentId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SuccessResponse:
    comment = await _get_authored_comment(db, comment_id, user, "delete")
    await delete_comment(db, comment)
    return SuccessResponse()
