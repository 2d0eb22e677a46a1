"""Resolve whether a session is open at a given exchange-local instant."""

from collections.abc import Mapping

from tradedesk.sessions.calendar import (
    WEEKEND_CLOSURE,
    decimal_time,
    is_market_closed,
    is_valid_session_day,
)
from tradedesk.sessions.definitions import (
    EARLY_CLOSE_RULES,
    EarlyCloseRule,
    SessionDefinition,
)


def effective_close_hour(
    session: SessionDefinition,
    weekday: int,
    overrides: Mapping[str, EarlyCloseRule] = EARLY_CLOSE_RULES,
) -> float:
    """Return the hour at which ``session`` closes on ``weekday``.

    Starts from the session's own close (24 for the midnight-spanning
    session), lowered by an early-close rule or by the weekend closure
    beginning later that same day.
    """
    close = session.close_hour

    rule = overrides.get(session.name)
    if rule is not None and rule.applies(weekday):
        close = min(close, rule.close_hour)

    if weekday == WEEKEND_CLOSURE.start_weekday and session.start_hour < WEEKEND_CLOSURE.start_hour:
        close = min(close, WEEKEND_CLOSURE.start_hour)

    return close


def is_session_open(
    session: SessionDefinition,
    now,
    overrides: Mapping[str, EarlyCloseRule] = EARLY_CLOSE_RULES,
) -> bool:
    """Check if ``session`` is open at ``now``.

    Args:
        session: The session to evaluate.
        now: Exchange-local wall-clock components (weekday, hour, minute).
        overrides: Early-close rule table keyed by session name.

    Returns:
        True if the instant lies in ``[start_hour, close)`` on a valid day
        outside the weekend closure.
    """
    hour = decimal_time(now.hour, now.minute)

    if is_market_closed(now.weekday, hour):
        return False
    if not is_valid_session_day(session, now.weekday):
        return False

    return session.start_hour <= hour < effective_close_hour(session, now.weekday, overrides)
