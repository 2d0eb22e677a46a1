"""Unit tests for is_session_open() and effective_close_hour().

Tests cover [start, end) boundary inclusivity, the weekend override, the
Post Trade Friday early close, and the Asia Range midnight span around the
Sunday 18:00 reopen.
"""

import pytest

from tradedesk.sessions.calendar import Weekdays
from tradedesk.sessions.definitions import (
    ASIA_RANGE,
    LONDON_KILLZONE,
    NY_KILLZONE,
    POST_TRADE,
    SESSIONS,
    EarlyCloseRule,
)
from tradedesk.sessions.engine import LocalDateTimeComponents
from tradedesk.sessions.resolver import effective_close_hour, is_session_open

SUN, MON, TUE, WED, THU, FRI, SAT = range(7)


def _at(weekday: int, hour: int, minute: int = 0, second: int = 0) -> LocalDateTimeComponents:
    return LocalDateTimeComponents(weekday=weekday, hour=hour, minute=minute, second=second)


def _hm(decimal_hour: float) -> tuple[int, int]:
    hour = int(decimal_hour)
    return hour, round((decimal_hour - hour) * 60)


class TestBoundaryInclusivity:
    @pytest.mark.parametrize("session", list(SESSIONS.values()), ids=list(SESSIONS))
    def test_open_at_exact_start(self, session):
        hour, minute = _hm(session.start_hour)
        assert is_session_open(session, _at(WED, hour, minute))

    @pytest.mark.parametrize("session", list(SESSIONS.values()), ids=list(SESSIONS))
    def test_closed_one_minute_before_start(self, session):
        hour, minute = _hm(session.start_hour - 1 / 60)
        assert not is_session_open(session, _at(WED, hour, minute))

    @pytest.mark.parametrize(
        "session", [LONDON_KILLZONE, NY_KILLZONE, POST_TRADE], ids=lambda s: s.name
    )
    def test_closed_at_exact_end(self, session):
        hour, minute = _hm(session.end_hour)
        assert not is_session_open(session, _at(WED, hour, minute))

    @pytest.mark.parametrize("session", list(SESSIONS.values()), ids=list(SESSIONS))
    def test_open_one_minute_before_close(self, session):
        hour, minute = _hm(session.close_hour - 1 / 60)
        assert is_session_open(session, _at(WED, hour, minute))

    def test_asia_closed_at_midnight_end(self):
        """Asia's end of 24:00 is the next day's 00:00."""
        assert not is_session_open(ASIA_RANGE, _at(THU, 0, 0))


class TestWeekendOverride:
    @pytest.mark.parametrize("session", list(SESSIONS.values()), ids=list(SESSIONS))
    def test_closed_all_saturday(self, session):
        for hour in range(24):
            for minute in (0, 30, 59):
                assert not is_session_open(session, _at(SAT, hour, minute)), (
                    f"{session.name} open on Saturday {hour:02d}:{minute:02d}"
                )

    def test_friday_morning_sessions_open(self):
        assert is_session_open(LONDON_KILLZONE, _at(FRI, 2, 0))
        assert is_session_open(NY_KILLZONE, _at(FRI, 9, 30))


class TestEarlyClose:
    def test_post_trade_open_friday_before_five(self):
        assert is_session_open(POST_TRADE, _at(FRI, 16, 59))

    def test_post_trade_closed_friday_at_five(self):
        assert not is_session_open(POST_TRADE, _at(FRI, 17, 0))

    def test_post_trade_runs_to_eight_on_thursday(self):
        assert is_session_open(POST_TRADE, _at(THU, 17, 0))
        assert is_session_open(POST_TRADE, _at(THU, 19, 59))

    def test_effective_close_hours(self):
        assert effective_close_hour(POST_TRADE, FRI) == 17.0
        assert effective_close_hour(POST_TRADE, THU) == 20.0
        assert effective_close_hour(ASIA_RANGE, WED) == 24.0
        assert effective_close_hour(NY_KILLZONE, FRI) == 11.0

    def test_custom_rule_table(self):
        """A new exception is added as data without touching the resolver."""
        overrides = {"NYKillzone": EarlyCloseRule(weekdays=Weekdays.WEDNESDAY, close_hour=10.0)}
        assert is_session_open(NY_KILLZONE, _at(WED, 9, 45), overrides)
        assert not is_session_open(NY_KILLZONE, _at(WED, 10, 0), overrides)
        assert is_session_open(NY_KILLZONE, _at(THU, 10, 0), overrides)

    def test_weekend_closure_still_applies_without_rules(self):
        assert not is_session_open(POST_TRADE, _at(FRI, 17, 0), overrides={})


class TestMidnightSpan:
    """Asia Range behaviour across midnight and the Sunday reopen."""

    @pytest.mark.parametrize(
        "weekday, hour, minute, expected",
        [
            (SUN, 17, 59, False),  # weekend closure
            (SUN, 18, 0, False),   # market open, session not started
            (SUN, 19, 59, False),
            (SUN, 20, 0, True),
            (SUN, 23, 59, True),
            (MON, 0, 0, False),
            (MON, 0, 1, False),
            (MON, 20, 0, True),
            (THU, 20, 0, True),
            (THU, 23, 59, True),
            (FRI, 0, 0, False),
            (FRI, 20, 0, False),
            (SAT, 20, 0, False),
        ],
    )
    def test_asia_range(self, weekday, hour, minute, expected):
        assert is_session_open(ASIA_RANGE, _at(weekday, hour, minute)) is expected

    def test_seconds_do_not_affect_open_state(self):
        assert not is_session_open(ASIA_RANGE, _at(SUN, 19, 59, 59))
