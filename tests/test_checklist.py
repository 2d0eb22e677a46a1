"""Tests for checklist phases and the persisted ChecklistService."""

import json

import pytest

from tradedesk.services.checklist import (
    ALL_ITEM_IDS,
    PHASES,
    ChecklistService,
    UnknownChecklistItemError,
    current_phase,
    is_checklist_available,
    progress,
)
from tradedesk.sessions.engine import LocalDateTimeComponents
from tradedesk.storage.kv_store import CHECKLIST_KEY

SUN, MON, TUE, WED, THU, FRI, SAT = range(7)
TODAY = "2026-10-21"
TOMORROW = "2026-10-22"


def _at(weekday: int, hour: int, minute: int = 0) -> LocalDateTimeComponents:
    return LocalDateTimeComponents(weekday=weekday, hour=hour, minute=minute)


@pytest.fixture
def service(kv_store):
    return ChecklistService(kv_store)


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


class TestCurrentPhase:
    @pytest.mark.parametrize(
        "hour, minute, phase_id",
        [
            (20, 0, "lock"),
            (23, 59, "lock"),
            (3, 0, "lock"),
            (8, 29, "lock"),
            (8, 30, "pre"),
            (9, 29, "pre"),
            (9, 30, "kz"),
            (10, 59, "kz"),
            (11, 0, "post"),
            (19, 59, "post"),
        ],
    )
    def test_phase_boundaries(self, hour, minute, phase_id):
        assert current_phase(_at(WED, hour, minute)).id == phase_id

    def test_item_count(self):
        assert len(ALL_ITEM_IDS) == 13
        assert [item.id for item in PHASES["kz"].items] == ["kz-1", "kz-2", "kz-3"]


class TestAvailability:
    @pytest.mark.parametrize(
        "weekday, hour, minute, expected",
        [
            (WED, 10, 0, True),
            (FRI, 16, 59, True),
            (FRI, 17, 0, False),
            (SAT, 12, 0, False),
            (SUN, 17, 59, False),
            (SUN, 18, 0, True),
        ],
    )
    def test_hidden_during_weekend(self, weekday, hour, minute, expected):
        assert is_checklist_available(_at(weekday, hour, minute)) is expected


def test_progress_counts_only_phase_items():
    items = {"pre-1": True, "pre-3": True, "pre-4": False, "kz-1": True}
    assert progress(PHASES["pre"], items) == (2, 5)
    assert progress(PHASES["post"], items) == (0, 4)


# ---------------------------------------------------------------------------
# ChecklistService
# ---------------------------------------------------------------------------


class TestChecklistService:
    async def test_load_empty(self, service):
        assert await service.load(TODAY) == {}

    async def test_toggle_on_and_off(self, service):
        assert await service.toggle("pre-1", TODAY) == {"pre-1": True}
        assert await service.toggle("pre-1", TODAY) == {"pre-1": False}

    async def test_state_survives_reload(self, service):
        await service.toggle("kz-2", TODAY)
        assert await service.load(TODAY) == {"kz-2": True}

    async def test_stale_date_starts_empty(self, service):
        await service.toggle("kz-2", TODAY)
        assert await service.load(TOMORROW) == {}

    async def test_toggle_on_new_day_discards_old_items(self, service):
        await service.toggle("kz-2", TODAY)
        assert await service.toggle("post-1", TOMORROW) == {"post-1": True}

    async def test_unknown_item(self, service):
        with pytest.raises(UnknownChecklistItemError):
            await service.toggle("kz-9", TODAY)

    async def test_unknown_item_is_key_error(self, service):
        with pytest.raises(KeyError):
            await service.toggle("bogus", TODAY)

    async def test_reset_clears_items(self, service):
        await service.toggle("pre-1", TODAY)
        await service.toggle("pre-2", TODAY)
        await service.reset(TODAY)

        assert await service.load(TODAY) == {}

    async def test_stored_format(self, service, kv_store):
        await service.toggle("post-4", TODAY)
        payload = json.loads(await kv_store.get(CHECKLIST_KEY))

        assert payload == {"dateKey": TODAY, "items": {"post-4": True}}

    async def test_corrupt_state_treated_as_empty(self, service, kv_store, log_messages):
        await kv_store.set(CHECKLIST_KEY, "[]")

        assert await service.load(TODAY) == {}
        assert any("unreadable checklist state" in m for m in log_messages)
