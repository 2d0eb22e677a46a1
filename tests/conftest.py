"""Shared test fixtures for the database, key-value store, and log capture."""

import pytest
import pytest_asyncio
from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from tradedesk.models import Base
from tradedesk.storage.kv_store import KeyValueStore


# ---------------------------------------------------------------------------
# Database (function-scoped)
# Each test gets its own SQLite file under tmp_path for isolation.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite database with all tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tradedesk_test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Provide an isolated database session for each test."""
    session = session_factory()

    yield session

    await session.close()


@pytest.fixture
def kv_store(db_session):
    return KeyValueStore(db_session)


# ---------------------------------------------------------------------------
# Log capture
# ---------------------------------------------------------------------------
@pytest.fixture
def log_messages():
    """Collect formatted loguru messages at DEBUG and above."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")

    yield messages

    logger.remove(handler_id)
