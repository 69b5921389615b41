"""CRUD operations for channels."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.models.channel import Channel
from src.models.schemas import ChannelWrite
from src.models.video import Video


def _channel_options() -> list:
    """Everything a channel response renders: owner, videos and their uploaders."""
    return [
        selectinload(Channel.owner),
        selectinload(Channel.videos).selectinload(Video.uploader),
    ]


async def get_channel(db: AsyncSession, channel_id: int, with_relations: bool = True) -> Channel | None:
    query = select(Channel).where(Channel.id == channel_id)
    if with_relations:
        # populate_existing so a reload after a write sees fresh collections
        query = query.options(*_channel_options()).execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_channels(db: AsyncSession, owner_id: int | None = None) -> Sequence[Channel]:
    """All channels (or one owner's), newest first."""
    query = select(Channel).options(*_channel_options())
    if owner_id is not None:
        query = query.where(Channel.owner_id == owner_id)
    result = await db.execute(query.order_by(Channel.created_at.desc(), Channel.id.desc()))
    return result.scalars().all()


async def owner_has_channel_named(
    db: AsyncSession,
    owner_id: int,
    channel_name: str,
    exclude_id: int | None = None,
) -> bool:
    """Check the (owner, name) uniqueness rule ahead of the DB constraint."""
    query = select(Channel.id).where(
        Channel.owner_id == owner_id,
        Channel.channel_name == channel_name,
    )
    if exclude_id is not None:
        query = query.where(Channel.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def create_channel(db: AsyncSession, owner_id: int, data: ChannelWrite) -> Channel:
    """Create a channel and return it with relations loaded."""
    channel = Channel(
        owner_id=owner_id,
        channel_name=data.channel_name,
        description=data.description,
        category=data.category,
    )
    if data.channel_banner:
        channel.channel_banner = data.channel_banner
    db.add(channel)
    await db.flush()

    # Reload with all relationships
    return await get_channel(db, channel.id)  # type: ignore[return-value]


async def update_channel(db: AsyncSession, channel: Channel, data: ChannelWrite) -> Channel:
    """Apply a full re-validated update; the banner is kept when not supplied."""
    channel.channel_name = data.channel_name
    channel.description = data.description
    channel.category = data.category
    if data.channel_banner:
        channel.channel_banner = data.channel_banner
    await db.flush()

    return await get_channel(db, channel.id)  # type: ignore[return-value]


async def delete_channel(db: AsyncSession, channel: Channel) -> None:
    """Delete a channel together with its videos, their reactions and comments."""
    # AsyncSession.delete loads the cascaded collections before deleting
    await db.delete(channel)
    await db.flush()
