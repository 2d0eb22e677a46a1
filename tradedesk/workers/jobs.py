"""Scheduled job functions for the session clock and checklist reset.

These run from the scheduler, so database sessions are created directly
from async_session_factory. All exceptions are caught to prevent
scheduler crashes.
"""

from datetime import datetime, timezone

from loguru import logger

from tradedesk.config import get_settings
from tradedesk.database import async_session_factory
from tradedesk.services.checklist import ChecklistService
from tradedesk.sessions.clock import date_key, to_local_components
from tradedesk.sessions.definitions import SESSIONS
from tradedesk.sessions.engine import SessionStatus, evaluate_all_sessions
from tradedesk.storage.kv_store import KeyValueStore

# Last observed open state per session name, for transition logging
_last_open: dict[str, bool] = {}


def format_board(statuses: list[SessionStatus]) -> str:
    """Render session statuses as a single line for the console."""
    cells = []
    for status in statuses:
        session = SESSIONS.get(status.name)
        name = session.display_name if session else status.name
        state = "OPEN" if status.is_open else "CLOSED"
        cells.append(f"{name}: {state} ({status.label})")
    board = " | ".join(cells)
    if statuses and statuses[0].market_closed:
        board = f"[Weekend] {board}"
    return board


async def tick_sessions(now: datetime | None = None) -> list[SessionStatus]:
    """Evaluate every session at the current instant and log transitions.

    Registered as a 1-second interval job. Returns the evaluated statuses
    (empty on failure) so callers and tests can inspect them.

    Args:
        now: Aware instant to evaluate; defaults to the system clock.
    """
    try:
        settings = get_settings()
        instant = now or datetime.now(timezone.utc)
        components = to_local_components(instant, settings.exchange_zone)
        statuses = evaluate_all_sessions(components)

        for status in statuses:
            previous = _last_open.get(status.name)
            if previous is not None and previous != status.is_open:
                logger.info(
                    "Session {name} is now {state} | {label}",
                    name=status.name,
                    state="OPEN" if status.is_open else "CLOSED",
                    label=status.label,
                )
            _last_open[status.name] = status.is_open

        logger.debug(format_board(statuses))
        return statuses

    except Exception:
        logger.exception("tick_sessions failed")
        return []


async def reset_checklist(now: datetime | None = None) -> None:
    """Clear the checklist for the current exchange-local date.

    Registered as a daily cron job at the configured reset hour.
    """
    try:
        settings = get_settings()
        instant = now or datetime.now(timezone.utc)
        today = date_key(instant, settings.exchange_zone)

        async with async_session_factory() as session:
            service = ChecklistService(KeyValueStore(session))
            await service.reset(today)

    except Exception:
        logger.exception("reset_checklist failed")
