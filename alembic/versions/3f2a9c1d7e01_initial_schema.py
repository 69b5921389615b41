"""initial_schema

Revision ID: 3f2a9c1d7e01
Revises:
Create Date: 2026-10-19 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORY_NAMES = (
    'GAMING', 'EDUCATION', 'ENTERTAINMENT', 'TECHNOLOGY', 'MUSIC', 'SPORTS',
    'NEWS', 'LIFESTYLE', 'COMEDY', 'TRAVEL', 'FOOD', 'FITNESS',
)
REACTION_NAMES = ('LIKE', 'DISLIKE')

# Shared by channels and videos, so created once up front
category_enum = postgresql.ENUM(*CATEGORY_NAMES, name='category', create_type=False)
reaction_enum = postgresql.ENUM(*REACTION_NAMES, name='reactionkind', create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    postgresql.ENUM(*CATEGORY_NAMES, name='category').create(bind, checkfirst=True)
    postgresql.ENUM(*REACTION_NAMES, name='reactionkind').create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('avatar', sa.String(length=2000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'], unique=False)

    op.create_table(
        'channels',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('channel_name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('channel_banner', sa.String(length=2000), nullable=False),
        sa.Column('subscribers', sa.Integer(), nullable=False),
        sa.Column('category', category_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'channel_name', name='uq_channel_owner_name'),
    )
    op.create_index('ix_channels_owner_id', 'channels', ['owner_id'], unique=False)
    op.create_index('ix_channels_created_at', 'channels', ['created_at'], unique=False)

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('channel_id', sa.Integer(), nullable=False),
        sa.Column('uploader_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('video_url', sa.String(length=2000), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=2000), nullable=False),
        sa.Column('category', category_enum, nullable=False),
        sa.Column('duration', sa.String(length=10), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('likes', sa.Integer(), nullable=False),
        sa.Column('dislikes', sa.Integer(), nullable=False),
        sa.Column('upload_date', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['channel_id'], ['channels.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['uploader_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_videos_channel_id', 'videos', ['channel_id'], unique=False)
    op.create_index('ix_videos_uploader_id', 'videos', ['uploader_id'], unique=False)
    op.create_index('ix_videos_category', 'videos', ['category'], unique=False)
    op.create_index('ix_videos_upload_date', 'videos', ['upload_date'], unique=False)
    op.create_index('ix_videos_channel_upload', 'videos', ['channel_id', 'upload_date'], unique=False)
    op.create_index('ix_videos_uploader_upload', 'videos', ['uploader_id', 'upload_date'], unique=False)

    op.create_table(
        'video_reactions',
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('kind', reaction_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('video_id', 'user_id'),
    )
    op.create_index('ix_video_reactions_user_id', 'video_reactions', ['user_id'], unique=False)

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('comment_id', sa.String(length=64), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('comment_id'),
    )
    op.create_index('ix_comments_video_id', 'comments', ['video_id'], unique=False)
    op.create_index('ix_comments_user_id', 'comments', ['user_id'], unique=False)
    op.create_index('ix_comments_timestamp', 'comments', ['timestamp'], unique=False)


def downgrade() -> None:
    op.drop_table('comments')
    op.drop_table('video_reactions')
    op.drop_table('videos')
    op.drop_table('channels')
    op.drop_table('users')
    bind = op.get_bind()
    postgresql.ENUM(name='reactionkind').drop(bind, checkfirst=True)
    postgresql.ENUM(name='category').drop(bind, checkfirst=True)
