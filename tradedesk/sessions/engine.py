"""Session evaluation entry points.

``evaluate_session`` combines the resolver and the countdown into a single
``SessionStatus``. Both are pure functions of the session definition and
the supplied exchange-local instant; callers own the clock.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from tradedesk.sessions.calendar import decimal_time, is_market_closed
from tradedesk.sessions.countdown import (
    format_countdown,
    seconds_until_close,
    seconds_until_open,
)
from tradedesk.sessions.definitions import (
    EARLY_CLOSE_RULES,
    SESSIONS,
    EarlyCloseRule,
    SessionDefinition,
)
from tradedesk.sessions.resolver import is_session_open


@dataclass(frozen=True)
class LocalDateTimeComponents:
    """Wall-clock reading in the exchange timezone (weekday 0=Sunday)."""

    weekday: int
    hour: int
    minute: int
    second: int = 0

    def __post_init__(self) -> None:
        limits = {"weekday": 6, "hour": 23, "minute": 59, "second": 59}
        for field_name, upper in limits.items():
            value = getattr(self, field_name)
            if not 0 <= value <= upper:
                raise ValueError(f"{field_name} must be within 0-{upper}, got {value}")

    @property
    def decimal_time(self) -> float:
        return decimal_time(self.hour, self.minute)


@dataclass(frozen=True)
class SessionStatus:
    """Result of evaluating one session at one instant."""

    name: str
    is_open: bool
    seconds_until_transition: int
    label: str
    market_closed: bool = False


def evaluate_session(
    session: SessionDefinition,
    now_local: LocalDateTimeComponents,
    overrides: Mapping[str, EarlyCloseRule] = EARLY_CLOSE_RULES,
) -> SessionStatus:
    """Evaluate open state and countdown for ``session`` at ``now_local``."""
    is_open = is_session_open(session, now_local, overrides)
    if is_open:
        seconds = seconds_until_close(session, now_local, overrides)
    else:
        seconds = seconds_until_open(session, now_local)

    return SessionStatus(
        name=session.name,
        is_open=is_open,
        seconds_until_transition=seconds,
        label=format_countdown(seconds, is_open),
        market_closed=is_market_closed(now_local.weekday, now_local.decimal_time),
    )


def evaluate_all_sessions(
    now_local: LocalDateTimeComponents,
    sessions: Iterable[SessionDefinition] | None = None,
    overrides: Mapping[str, EarlyCloseRule] = EARLY_CLOSE_RULES,
) -> list[SessionStatus]:
    """Evaluate every configured session, in display order."""
    if sessions is None:
        sessions = SESSIONS.values()
    return [evaluate_session(session, now_local, overrides) for session in sessions]
