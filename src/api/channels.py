"""Channel API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.params import ChannelId, UserId
from src.auth import get_current_user
from src.db import get_db
from src.db.crud import (
    create_channel,
    delete_channel,
    get_channel,
    list_channels,
    owner_has_channel_named,
    update_channel,
)
from src.models.channel import Channel
from src.models.schemas import (
    ChannelListResponse,
    ChannelMessageResponse,
    ChannelRead,
    ChannelResponse,
    ChannelWrite,
    MessageResponse,
)
from src.models.user import User
from src.utils.logging import LogContext, get_logger

router = APIRouter()
logger = get_logger(__name__)

DUPLICATE_NAME = "You already have a channel with this name"


async def _get_owned_channel(db: AsyncSession, channel_id: int, user: User, verb: str) -> Channel:
    channel = await get_channel(db, channel_id)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    if channel.owner_id != user.id:
        LogContext(logger, channel_id=channel_id, user_id=user.id).warning(f"Refused to {verb} channel")
        raise HTTPException(status_code=403, detail=f"Not authorized to {verb} this channel")
    return channel


@router.post("/create", response_model=ChannelMessageResponse, status_code=201)
async def create_channel_endpoint(
    data: ChannelWrite,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChannelMessageResponse:
    """Create a channel owned by the caller."""
    if await owner_has_channel_named(db, user.id, data.channel_name):
        raise HTTPException(status_code=400, detail=DUPLICATE_NAME)

    try:
        channel = await create_channel(db, user.id, data)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail=DUPLICATE_NAME)

    LogContext(logger, channel_id=channel.id, user_id=channel.owner_id).info("Channel created")
    return ChannelMessageResponse(
        message="Channel created successfully",
        channel=ChannelRead.model_validate(channel),
    )


@router.get("", response_model=ChannelListResponse)
@router.get("/", response_model=ChannelListResponse, include_in_schema=False)
async def list_channels_endpoint(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChannelListResponse:
    """All channels, newest first."""
    channels = await list_channels(db)
    return ChannelListResponse(channels=[ChannelRead.model_validate(c) for c in channels])


@router.get("/user/{user_id}", response_model=ChannelListResponse)
async def list_user_channels(
    user_id: UserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChannelListResponse:
    """Channels owned by a user, newest first."""
    channels = await list_channels(db, owner_id=user_id)
    return ChannelListResponse(channels=[ChannelRead.model_validate(c) for c in channels])


@router.get("/{channel_id}", response_model=ChannelResponse)
async def get_channel_endpoint(
    channel_id: ChannelId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChannelResponse:
    channel = await get_channel(db, channel_id)
    if not channel:
        raise HTTPException(status_code=404, detail="Channel not found")
    return ChannelResponse(channel=ChannelRead.model_validate(channel))


@router.put("/{channel_id}", response_model=ChannelMessageResponse)
async def update_channel_endpoint(
    channel_id: ChannelId,
    data: ChannelWrite,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ChannelMessageResponse:
    """Update a channel the caller owns."""
    channel = await _get_owned_channel(db, channel_id, user, "update")

    if data.channel_name != channel.channel_name and await owner_has_channel_named(
        db, user.id, data.channel_name, exclude_id=channel.id
    ):
        raise HTTPException(status_code=400, detail=DUPLICATE_NAME)

    try:
        channel = await update_channel(db, channel, data)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail=DUPLICATE_NAME)

    LogContext(logger, channel_id=channel.id, user_id=user.id).info("Channel updated")
    return ChannelMessageResponse(
        message="Channel updated successfully",
        channel=ChannelRead.model_validate(channel),
    )


@router.delete("/{channel_id}", response_model=MessageResponse)
async def delete_channel_endpoint(
    channel_id: ChannelId,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """Delete a channel the caller owns, with all of its videos."""
    channel = await _get_owned_channel(db, channel_id, user, "delete")
    video_count = len(channel.videos)
    await delete_channel(db, channel)

    LogContext(logger, channel_id=channel_id, user_id=user.id).info(
        f"Channel deleted with {video_count} videos"
    )
    return MessageResponse(message="Channel deleted successfully")
