"""Countdown to a session's next open/close transition.

Offsets are computed in whole seconds from the current exchange-local
instant. Closed sessions look ahead at most one week, one day at a time.
"""

from collections.abc import Mapping

from tradedesk.sessions.calendar import (
    decimal_time,
    is_market_closed,
    is_valid_session_day,
)
from tradedesk.sessions.definitions import (
    EARLY_CLOSE_RULES,
    EarlyCloseRule,
    SessionDefinition,
)
from tradedesk.sessions.resolver import effective_close_hour

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

MAX_SCAN_DAYS = 7


def _hour_to_seconds(hour: float) -> int:
    return round(hour * SECONDS_PER_HOUR)


def _seconds_of_day(now) -> int:
    return now.hour * SECONDS_PER_HOUR + now.minute * SECONDS_PER_MINUTE + now.second


def seconds_until_close(
    session: SessionDefinition,
    now,
    overrides: Mapping[str, EarlyCloseRule] = EARLY_CLOSE_RULES,
) -> int:
    """Seconds from ``now`` until an open session closes today."""
    close = _hour_to_seconds(effective_close_hour(session, now.weekday, overrides))
    return max(0, close - _seconds_of_day(now))


def next_open_offset(session: SessionDefinition, now) -> tuple[int, int]:
    """Find the next instant at which a closed session opens.

    Scans forward from today (if the start hour is still ahead) or from
    tomorrow, skipping days outside ``valid_days`` and candidates that fall
    inside the weekend closure.

    Returns:
        (days_ahead, seconds_until_open)
    """
    now_seconds = _seconds_of_day(now)
    start_seconds = _hour_to_seconds(session.start_hour)

    first = 0 if decimal_time(now.hour, now.minute) < session.start_hour else 1
    for days_ahead in range(first, first + MAX_SCAN_DAYS):
        weekday = (now.weekday + days_ahead) % 7
        if not is_valid_session_day(session, weekday):
            continue
        if is_market_closed(weekday, session.start_hour):
            continue
        seconds = days_ahead * SECONDS_PER_DAY + start_seconds - now_seconds
        return days_ahead, max(0, seconds)

    # Unreachable for definitions that passed construction checks
    raise RuntimeError(f"{session.name} has no opening within {MAX_SCAN_DAYS} days")


def seconds_until_open(session: SessionDefinition, now) -> int:
    """Seconds from ``now`` until a closed session next opens."""
    return next_open_offset(session, now)[1]


def format_countdown(seconds: int, is_open: bool) -> str:
    """Render a countdown label such as 'Closes in 2h 14m' or 'Opens in 1d 3h'.

    Minutes are dropped once the countdown is a day or longer.
    """
    prefix = "Closes in" if is_open else "Opens in"
    days = seconds // SECONDS_PER_DAY
    hours = (seconds // SECONDS_PER_HOUR) % 24
    minutes = (seconds // SECONDS_PER_MINUTE) % 60
    if days > 0:
        return f"{prefix} {days}d {hours}h"
    return f"{prefix} {hours}h {minutes}m"
