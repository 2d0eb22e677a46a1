"""Weekly calendar classification in exchange wall-clock time.

Weekdays are Sunday-based (0=Sunday .. 6=Saturday) and times of day are
decimal hours (9.5 == 09:30). The weekend closure window is exchange-wide
and overrides every individual session schedule.
"""

from dataclasses import dataclass
from enum import IntFlag

HOURS_PER_DAY = 24
HOURS_PER_WEEK = 7 * HOURS_PER_DAY

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


class Weekdays(IntFlag):
    """Bitmask of weekdays, bit ``n`` set for Sunday-based weekday ``n``."""

    NONE = 0
    SUNDAY = 1 << SUNDAY
    MONDAY = 1 << MONDAY
    TUESDAY = 1 << TUESDAY
    WEDNESDAY = 1 << WEDNESDAY
    THURSDAY = 1 << THURSDAY
    FRIDAY = 1 << FRIDAY
    SATURDAY = 1 << SATURDAY

    @classmethod
    def of(cls, weekday: int) -> "Weekdays":
        """Return the single-day flag for a Sunday-based weekday index."""
        if not 0 <= weekday <= 6:
            raise ValueError(f"weekday must be within 0-6, got {weekday}")
        return cls(1 << weekday)

    def contains(self, weekday: int) -> bool:
        return bool(self & Weekdays.of(weekday))

    def days(self) -> list[int]:
        """Weekday indices in this set, Sunday first."""
        return [day for day in range(7) if self & (1 << day)]


WEEKDAYS_MON_FRI = (
    Weekdays.MONDAY
    | Weekdays.TUESDAY
    | Weekdays.WEDNESDAY
    | Weekdays.THURSDAY
    | Weekdays.FRIDAY
)
WEEKDAYS_SUN_THU = (
    Weekdays.SUNDAY
    | Weekdays.MONDAY
    | Weekdays.TUESDAY
    | Weekdays.WEDNESDAY
    | Weekdays.THURSDAY
)


@dataclass(frozen=True)
class MarketClosureWindow:
    """Weekly window during which every session is forced closed.

    The window starts at ``start_hour`` on ``start_weekday`` (inclusive) and
    ends at ``end_hour`` on ``end_weekday`` (exclusive).
    """

    start_weekday: int
    start_hour: float
    end_weekday: int
    end_hour: float

    @property
    def duration_hours(self) -> float:
        days = (self.end_weekday - self.start_weekday) % 7
        return days * HOURS_PER_DAY + self.end_hour - self.start_hour

    def contains(self, weekday: int, decimal_hour: float) -> bool:
        """Return True if the weekday/time falls inside the window."""
        days = (weekday - self.start_weekday) % 7
        offset = (days * HOURS_PER_DAY + decimal_hour - self.start_hour) % HOURS_PER_WEEK
        return offset < self.duration_hours


# Friday 17:00 through Sunday 18:00, exchange time
WEEKEND_CLOSURE = MarketClosureWindow(
    start_weekday=FRIDAY,
    start_hour=17.0,
    end_weekday=SUNDAY,
    end_hour=18.0,
)


def decimal_time(hour: int, minute: int) -> float:
    """Convert wall-clock hour and minute into a decimal hour in [0, 24)."""
    return hour + minute / 60


def is_market_closed(
    weekday: int,
    decimal_hour: float,
    window: MarketClosureWindow = WEEKEND_CLOSURE,
) -> bool:
    """Check whether the exchange-wide weekend closure is in effect.

    With the default window this is true for Friday from 17:00, all of
    Saturday, and Sunday before 18:00.
    """
    return window.contains(weekday, decimal_hour)


def is_valid_session_day(session, weekday: int) -> bool:
    """Check if ``session`` may open on the given Sunday-based weekday."""
    return session.valid_days.contains(weekday)
