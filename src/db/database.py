"""Database engine and per-request session management."""

import json
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.config import get_settings
from src.utils.logging import get_logger

logger = get_logger(__name__)

settings = get_settings()


def json_serializer(value: object) -> str:
    """JSON column encoder that leaves non-ASCII text unescaped."""
    return json.dumps(value, ensure_ascii=False)


engine = create_async_engine(
    settings.database_url_async,
    echo=settings.is_development,
    json_serializer=json_serializer,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=20,
    pool_timeout=30,
    pool_recycle=1800,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Create missing tables. Schema changes go through Alembic."""
    import src.models  # noqa: F401  registers every mapper on Base.metadata
    from src.models.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def ping(db: AsyncSession) -> bool:
    """Cheap connectivity check used by the health endpoint."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        await db.rollback()
        return False
    return True


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session.

    Everything a request writes is committed together once the handler
    returns, or rolled back if it raises.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
