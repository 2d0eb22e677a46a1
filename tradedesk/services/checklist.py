"""Daily trading checklist split into intraday phases.

The trading day is divided into four phases (exchange time):
    lock  20:00 - 08:30  no-trade lock after the killzone, spans midnight
    pre   08:30 - 09:30  pre-market bias preparation
    kz    09:30 - 11:00  NY killzone execution
    post  11:00 - 20:00  post-trade review

Checked items are persisted per exchange-local date and cleared every
evening at the reset hour.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from pydantic import ValidationError

from tradedesk.schemas.workspace import ChecklistState
from tradedesk.sessions.calendar import decimal_time, is_market_closed
from tradedesk.storage.kv_store import CHECKLIST_KEY, KeyValueStore


class UnknownChecklistItemError(KeyError):
    """Raised when toggling an item id that no phase defines."""

    pass


@dataclass(frozen=True)
class ChecklistItem:
    id: str
    text: str
    num: int


@dataclass(frozen=True)
class ChecklistPhase:
    id: str
    name: str
    color: str
    start_hour: float
    end_hour: float
    title: str
    items: tuple[ChecklistItem, ...]
    subtitle: str | None = None

    def contains(self, hour: float) -> bool:
        if self.start_hour <= self.end_hour:
            return self.start_hour <= hour < self.end_hour
        # Wraps midnight (lock: 20:00 - 08:30)
        return hour >= self.start_hour or hour < self.end_hour


def _items(prefix: str, *texts: str) -> tuple[ChecklistItem, ...]:
    return tuple(
        ChecklistItem(id=f"{prefix}-{num}", text=text, num=num)
        for num, text in enumerate(texts, start=1)
    )


PHASES: dict[str, ChecklistPhase] = {
    "lock": ChecklistPhase(
        id="lock",
        name="Lock",
        color="#FF4D6D",
        start_hour=20.0,
        end_hour=8.5,
        title="NO-TRADE LOCK (POST-KILLZONE)",
        items=_items("lock", "Trading locked"),
    ),
    "pre": ChecklistPhase(
        id="pre",
        name="Pre",
        color="#3D78FF",
        start_hour=8.5,
        end_hour=9.5,
        title="NY PRE-MARKET (ICT BIAS)",
        items=_items(
            "pre",
            "Daily bias",
            "High-impact news",
            "Asia + London high/low",
            "HTF PD arrays",
            "One ICT model only",
        ),
    ),
    "kz": ChecklistPhase(
        id="kz",
        name="KZ",
        color="#28E6A5",
        start_hour=9.5,
        end_hour=11.0,
        title="NY KILLZONE TRADING",
        subtitle="9:30 AM → 11:00 AM",
        items=_items("kz", "Wait for confirmation", "Execute entry", "Manage trade"),
    ),
    "post": ChecklistPhase(
        id="post",
        name="Post",
        color="#FFD34D",
        start_hour=11.0,
        end_hour=20.0,
        title="ICT POST-TRADE REVIEW",
        items=_items(
            "post",
            "Journal setup & outcome",
            "Chart screenshot",
            "Emotion check",
            "Followed ICT rules?",
        ),
    ),
}

ALL_ITEM_IDS: frozenset[str] = frozenset(
    item.id for phase in PHASES.values() for item in phase.items
)


def current_phase(now) -> ChecklistPhase:
    """Return the checklist phase active at exchange-local ``now``."""
    hour = decimal_time(now.hour, now.minute)
    for phase in PHASES.values():
        if phase.contains(hour):
            return phase
    return PHASES["lock"]


def is_checklist_available(now) -> bool:
    """The checklist is hidden while the weekend closure is in effect."""
    return not is_market_closed(now.weekday, decimal_time(now.hour, now.minute))


def progress(phase: ChecklistPhase, items: dict[str, bool]) -> tuple[int, int]:
    """Return (checked, total) for one phase."""
    checked = sum(1 for item in phase.items if items.get(item.id))
    return checked, len(phase.items)


class ChecklistService:
    """Loads, toggles and resets checklist state in the key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def _read_state(self) -> ChecklistState | None:
        raw = await self.store.get(CHECKLIST_KEY)
        if raw is None:
            return None
        try:
            return ChecklistState.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable checklist state: {raw!r}", raw=raw[:100])
            return None

    async def _write_state(self, state: ChecklistState) -> None:
        await self.store.set(CHECKLIST_KEY, state.model_dump_json(by_alias=True))

    async def load(self, date_key: str) -> dict[str, bool]:
        """Checked items for ``date_key``; empty when stored state is stale."""
        state = await self._read_state()
        if state is None or state.date_key != date_key:
            return {}
        return dict(state.items)

    async def toggle(self, item_id: str, date_key: str) -> dict[str, bool]:
        """Flip one item and persist the result.

        Raises:
            UnknownChecklistItemError: If ``item_id`` is not a checklist item.
        """
        if item_id not in ALL_ITEM_IDS:
            raise UnknownChecklistItemError(item_id)

        items = await self.load(date_key)
        items[item_id] = not items.get(item_id, False)
        await self._write_state(ChecklistState(date_key=date_key, items=items))
        return items

    async def reset(self, date_key: str) -> None:
        """Clear every checked item, stamping the state with ``date_key``."""
        await self._write_state(ChecklistState(date_key=date_key, items={}))
        logger.info("Checklist reset for {date_key}", date_key=date_key)
