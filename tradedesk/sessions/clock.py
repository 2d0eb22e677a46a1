"""Conversion from aware datetimes to exchange wall-clock components."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from tradedesk.sessions.engine import LocalDateTimeComponents


def _zone(tz: str | ZoneInfo) -> ZoneInfo:
    return tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)


def to_exchange_time(instant: datetime, tz: str | ZoneInfo) -> datetime:
    """Convert ``instant`` to the exchange zone. Naive values are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(_zone(tz))


def to_local_components(instant: datetime, tz: str | ZoneInfo) -> LocalDateTimeComponents:
    """Decompose ``instant`` into Sunday-based exchange wall-clock components."""
    local = to_exchange_time(instant, tz)
    return LocalDateTimeComponents(
        weekday=local.isoweekday() % 7,
        hour=local.hour,
        minute=local.minute,
        second=local.second,
    )


def exchange_now(tz: str | ZoneInfo) -> LocalDateTimeComponents:
    return to_local_components(datetime.now(timezone.utc), tz)


def date_key(instant: datetime, tz: str | ZoneInfo) -> str:
    """Exchange-local calendar date of ``instant`` as ``YYYY-MM-DD``."""
    return to_exchange_time(instant, tz).strftime("%Y-%m-%d")
