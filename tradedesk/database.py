"""Async database engine and session factory."""

from sqlalchemy.ext.asyncio import (
    async_sessionmaker,
    create_async_engine,
)

from tradedesk.config import get_settings
from tradedesk.models.base import Base

settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


async def init_db() -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register on Base.metadata
    import tradedesk.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

