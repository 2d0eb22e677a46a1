"""Console entry point: runs the session clock until interrupted."""

import asyncio

from loguru import logger

from tradedesk.config import get_settings
from tradedesk.database import engine, init_db
from tradedesk.utils.logging import setup_logging
from tradedesk.workers.jobs import format_board, tick_sessions
from tradedesk.workers.scheduler import register_jobs, scheduler


async def run() -> None:
    """Create tables, start the scheduler, and block until cancelled."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json)

    logger.info(
        "Starting tradedesk | exchange_timezone={tz} database={db}",
        tz=settings.exchange_timezone,
        db=settings.database_url,
    )

    await init_db()

    statuses = await tick_sessions()
    logger.info(format_board(statuses))

    register_jobs()
    scheduler.start()
    logger.info("Scheduler started")

    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
        await engine.dispose()


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
