import json

import pytest

from src.roster_sync.roster_sync.core.constants import SLOT_DATA
from src.roster_sync.roster_sync.core.exceptions import MonthBoundary, ValidationError
from src.roster_sync.roster_sync.cycles.model import Cycle
from src.roster_sync.roster_sync.cycles.store import CycleStore


@pytest.fixture
def store(cache, sample_doc):
    s = CycleStore(cache)
    s.replace(Cycle.from_dict(sample_doc), stream_label="GRUDZIEN")
    return s


def test_new_store_is_locked_and_empty(cache):
    s = CycleStore(cache)

    assert s.is_locked
    assert not s.loaded
    s.set_shift(0, 0, "1")
    assert cache.get(SLOT_DATA) is None


def test_set_shift_uppercases_and_mirrors_to_cache(store, cache):
    store.set_shift(1, 0, "n1")

    assert store.cycle.workers[1].shifts[0] == "N1"
    cached = json.loads(cache.get(SLOT_DATA))
    assert cached["workers"][1]["shifts"][0] == "N1"


def test_set_shift_empty_value_clears_the_cell(store):
    store.set_shift(0, 0, "")
    assert store.cycle.workers[0].shifts[0] == ""


def test_set_shift_rejects_out_of_range_indexes(store):
    with pytest.raises(ValidationError):
        store.set_shift(9, 0, "1")
    with pytest.raises(ValidationError):
        store.set_shift(0, 4, "1")


def test_step_day_stays_inside_the_cycle(store):
    assert not store.step_day(-1)
    assert store.current_day_idx == 0

    assert store.step_day(3)
    assert store.current_day_idx == 3
    assert not store.step_day(1)
    assert store.current_day_idx == 3


def test_step_month_moves_to_range_start(store):
    store.jump_to_day(1)

    month = store.step_month(1)

    assert month.name == "GRUDZIEN"
    assert store.current_day_idx == 2


def test_step_month_past_the_end_raises_and_keeps_cursor(store):
    store.jump_to_day(3)

    with pytest.raises(MonthBoundary):
        store.step_month(1)
    assert store.current_day_idx == 3

    with pytest.raises(MonthBoundary):
        store.step_month(-2)


def test_focus_day_finds_first_match_or_falls_back(store):
    assert store.focus_day(1) == 2
    assert store.focus_day(15) == 0


def test_replace_resets_out_of_range_cursor(store, sample_doc):
    store.jump_to_day(3)
    sample_doc["meta"] = {"days": [1, 2], "weekdays": ["PN", "WT"]}
    for w in sample_doc["workers"]:
        w["shifts"] = w["shifts"][:2]

    store.replace(Cycle.from_dict(sample_doc))

    assert store.current_day_idx == 0
    assert [m.name for m in store.month_ranges] == ["UNKNOWN_CYCLE"]


def test_toggle_lock(store):
    assert store.toggle_lock() is False
    assert store.toggle_lock() is True
