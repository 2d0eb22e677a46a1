"""APScheduler setup for the session clock and checklist reset.

Uses AsyncIOScheduler with in-memory job store, running in the exchange
timezone so cron triggers fire on exchange wall-clock time.
"""

from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from tradedesk.config import get_settings
from tradedesk.workers.jobs import reset_checklist, tick_sessions

scheduler = AsyncIOScheduler(
    jobstores={
        "default": MemoryJobStore(),
    },
    job_defaults={
        "coalesce": True,
        "misfire_grace_time": 5,
        "max_instances": 1,
    },
    timezone=get_settings().exchange_zone,
)


def register_jobs() -> None:
    """Register the session tick and the evening checklist reset.

    Schedule:
        tick_sessions:   every tick_interval_seconds (default 1s)
        reset_checklist: daily at checklist_reset_hour:00 exchange time
    """
    settings = get_settings()

    scheduler.add_job(
        tick_sessions,
        trigger=IntervalTrigger(seconds=settings.tick_interval_seconds),
        id="tick_sessions",
        name="Evaluate market sessions",
        replace_existing=True,
    )
    logger.info(
        "Registered job: tick_sessions (every {seconds}s)",
        seconds=settings.tick_interval_seconds,
    )

    scheduler.add_job(
        reset_checklist,
        trigger=CronTrigger(
            hour=settings.checklist_reset_hour,
            minute=0,
            timezone=settings.exchange_zone,
        ),
        id="reset_checklist",
        name="Reset daily checklist",
        replace_existing=True,
        misfire_grace_time=300,
    )
    logger.info(
        "Registered job: reset_checklist (daily at {hour:02d}:00 {tz})",
        hour=settings.checklist_reset_hour,
        tz=settings.exchange_timezone,
    )

    logger.info("All {count} jobs registered", count=2)
