"""Market session clock: calendar classifier, resolver, and countdown.

Re-exports key names for convenient access:
    from tradedesk.sessions import evaluate_session, NY_KILLZONE, ...
"""

from tradedesk.sessions.calendar import (
    WEEKEND_CLOSURE,
    MarketClosureWindow,
    Weekdays,
    decimal_time,
    is_market_closed,
    is_valid_session_day,
)
from tradedesk.sessions.clock import (
    date_key,
    exchange_now,
    to_local_components,
)
from tradedesk.sessions.countdown import (
    format_countdown,
    next_open_offset,
    seconds_until_close,
    seconds_until_open,
)
from tradedesk.sessions.definitions import (
    ASIA_RANGE,
    EARLY_CLOSE_RULES,
    LONDON_KILLZONE,
    NY_KILLZONE,
    POST_TRADE,
    SESSIONS,
    EarlyCloseRule,
    InvalidSessionDefinitionError,
    SessionDefinition,
    get_session,
)
from tradedesk.sessions.engine import (
    LocalDateTimeComponents,
    SessionStatus,
    evaluate_all_sessions,
    evaluate_session,
)
from tradedesk.sessions.resolver import effective_close_hour, is_session_open

__all__ = [
    # Calendar
    "Weekdays",
    "MarketClosureWindow",
    "WEEKEND_CLOSURE",
    "decimal_time",
    "is_market_closed",
    "is_valid_session_day",
    # Definitions
    "SessionDefinition",
    "EarlyCloseRule",
    "InvalidSessionDefinitionError",
    "ASIA_RANGE",
    "LONDON_KILLZONE",
    "NY_KILLZONE",
    "POST_TRADE",
    "SESSIONS",
    "EARLY_CLOSE_RULES",
    "get_session",
    # Resolver and countdown
    "is_session_open",
    "effective_close_hour",
    "seconds_until_close",
    "seconds_until_open",
    "next_open_offset",
    "format_countdown",
    # Engine
    "LocalDateTimeComponents",
    "SessionStatus",
    "evaluate_session",
    "evaluate_all_sessions",
    # Clock
    "to_local_components",
    "exchange_now",
    "date_key",
]
