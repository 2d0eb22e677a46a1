"""Market session definitions and per-session early-close rules.

All hours are decimal exchange wall-clock hours. A session whose
``end_hour`` is at or before its ``start_hour`` spans midnight and closes
at 24:00 (the next midnight), never at 0:00.
"""

from dataclasses import dataclass

from tradedesk.sessions.calendar import (
    FRIDAY,
    HOURS_PER_DAY,
    WEEKDAYS_MON_FRI,
    WEEKDAYS_SUN_THU,
    WEEKDAY_NAMES,
    WEEKEND_CLOSURE,
    Weekdays,
)


class InvalidSessionDefinitionError(ValueError):
    """Raised when a session definition can never be evaluated sensibly."""

    pass


def format_hour(hour: float) -> str:
    """Render a decimal hour as a 12-hour clock label, e.g. 9.5 -> '9:30 AM'."""
    h = int(hour)
    m = round((hour - h) * 60)
    suffix = " PM" if 12 <= h < 24 else " AM"
    display = 12 if h % 12 == 0 else h % 12
    if m > 0:
        return f"{display}:{m:02d}{suffix}"
    return f"{display}{suffix}"


@dataclass(frozen=True)
class SessionDefinition:
    """A named daily trading window with a weekday recurrence rule."""

    name: str
    start_hour: float
    end_hour: float
    valid_days: Weekdays
    display_name: str = ""

    def __post_init__(self) -> None:
        for field_name in ("start_hour", "end_hour"):
            value = getattr(self, field_name)
            if not 0 <= value < HOURS_PER_DAY:
                raise InvalidSessionDefinitionError(
                    f"{self.name}: {field_name}={value} is outside [0, 24)"
                )
        if not self.valid_days:
            raise InvalidSessionDefinitionError(
                f"{self.name}: valid_days must not be empty"
            )
        for day in self.valid_days.days():
            if WEEKEND_CLOSURE.contains(day, self.start_hour):
                raise InvalidSessionDefinitionError(
                    f"{self.name}: {WEEKDAY_NAMES[day]} start falls inside the weekend closure"
                )
        if not self.display_name:
            object.__setattr__(self, "display_name", self.name)

    @property
    def spans_midnight(self) -> bool:
        return self.end_hour <= self.start_hour

    @property
    def close_hour(self) -> float:
        """Close time on the opening day; 24 for midnight-spanning sessions."""
        return float(HOURS_PER_DAY) if self.spans_midnight else self.end_hour

    @property
    def time_label(self) -> str:
        return f"{format_hour(self.start_hour)}–{format_hour(self.close_hour)}"


@dataclass(frozen=True)
class EarlyCloseRule:
    """Close a session at ``close_hour`` on the given weekdays."""

    weekdays: Weekdays
    close_hour: float

    def applies(self, weekday: int) -> bool:
        return self.weekdays.contains(weekday)


ASIA_RANGE = SessionDefinition(
    name="AsiaRange",
    start_hour=20.0,
    end_hour=0.0,
    valid_days=WEEKDAYS_SUN_THU,
    display_name="Asia Range",
)
LONDON_KILLZONE = SessionDefinition(
    name="LondonKillzone",
    start_hour=2.0,
    end_hour=5.0,
    valid_days=WEEKDAYS_MON_FRI,
    display_name="London Killzone",
)
NY_KILLZONE = SessionDefinition(
    name="NYKillzone",
    start_hour=9.5,
    end_hour=11.0,
    valid_days=WEEKDAYS_MON_FRI,
    display_name="NY Killzone",
)
POST_TRADE = SessionDefinition(
    name="PostTrade",
    start_hour=11.0,
    end_hour=20.0,
    valid_days=WEEKDAYS_MON_FRI,
    display_name="Post Trade",
)

# Display order: Asia, London on the first row; NY, Post Trade on the second
SESSIONS: dict[str, SessionDefinition] = {
    session.name: session
    for session in (ASIA_RANGE, LONDON_KILLZONE, NY_KILLZONE, POST_TRADE)
}

# Session name -> early close rule, consulted by the resolver and countdown
EARLY_CLOSE_RULES: dict[str, EarlyCloseRule] = {
    POST_TRADE.name: EarlyCloseRule(weekdays=Weekdays.of(FRIDAY), close_hour=17.0),
}


def get_session(name: str) -> SessionDefinition:
    """Look up one of the configured sessions by name.

    Raises:
        ValueError: If the session name is not recognized.
    """
    if name not in SESSIONS:
        raise ValueError(
            f"Unknown session '{name}'. Available: {list(SESSIONS.keys())}"
        )
    return SESSIONS[name]
