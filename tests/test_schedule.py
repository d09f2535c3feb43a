"""Tests for the per-week timetable."""
import pytest

from ppl_tracker.errors import ValidationError
from ppl_tracker.models import AppState, ScheduleEntry
from ppl_tracker.schedule import (
    current_week_entries, current_week_key, add_entry, remove_entry, shift_week,
    duration_hours, entries_starting_at,
)


def test_current_week_entries_creates_bucket(now):
    state = AppState()
    assert current_week_entries(state, now) == []
    assert "2026-W43" in state.week_buckets


def test_add_entry_rejects_end_before_start(now):
    state = AppState()
    with pytest.raises(ValidationError):
        add_entry(state, 0, "10:00", "09:00", "nav", now=now)
    with pytest.raises(ValidationError):
        add_entry(state, 0, "10:00", "10:00", "nav", now=now)
    assert state.week_buckets.get("2026-W43", []) == []


def test_add_entry_rejects_bad_input(now):
    state = AppState()
    with pytest.raises(ValidationError):
        add_entry(state, 7, "09:00", "10:00", "nav", now=now)
    with pytest.raises(ValidationError):
        add_entry(state, 0, "9:00", "10:00", "nav", now=now)
    with pytest.raises(ValidationError):
        add_entry(state, 0, "", "10:00", "nav", now=now)


def test_add_entry_goes_to_current_week_only(now):
    state = AppState()
    entry = add_entry(state, 1, "09:00", "10:00", "nav", "  Cartes  ", now=now)
    assert entry.description == "Cartes"
    assert state.week_buckets["2026-W43"] == [entry]

    shift_week(state, 1)
    assert current_week_entries(state, now) == []
    shift_week(state, -1)
    assert current_week_entries(state, now) == [entry]


def test_add_entry_after_switching_week(now):
    state = AppState()
    first = add_entry(state, 0, "08:00", "09:00", "nav", now=now)
    shift_week(state, -1)
    second = add_entry(state, 0, "08:00", "09:00", "com", now=now)
    assert state.week_buckets["2026-W42"] == [second]
    assert state.week_buckets["2026-W43"] == [first]


def test_shift_week_does_not_create_bucket(now):
    state = AppState()
    assert shift_week(state, 1) == 1
    assert shift_week(state, 1) == 2
    assert state.week_buckets == {}
    assert current_week_key(state, now) == "2026-W45"


def test_remove_entry(now):
    state = AppState()
    keep = add_entry(state, 0, "08:00", "09:00", "nav", now=now)
    drop = add_entry(state, 2, "10:00", "11:00", "com", now=now)
    assert remove_entry(state, drop.id, now) is True
    assert current_week_entries(state, now) == [keep]


def test_remove_entry_missing_is_noop(now):
    state = AppState()
    assert remove_entry(state, "nope", now) is False
    entry = add_entry(state, 0, "08:00", "09:00", "nav", now=now)
    assert remove_entry(state, "nope", now) is False
    assert current_week_entries(state, now) == [entry]


def test_remove_entry_only_touches_current_week(now):
    state = AppState()
    entry = add_entry(state, 0, "08:00", "09:00", "nav", now=now)
    shift_week(state, 1)
    assert remove_entry(state, entry.id, now) is False
    assert state.week_buckets["2026-W43"] == [entry]


def test_duration_and_grid_cells():
    e1 = ScheduleEntry(id="s1", day_of_week=0, start="09:30", end="11:00", subject_id="nav")
    e2 = ScheduleEntry(id="s2", day_of_week=0, start="10:00", end="10:45", subject_id="com")
    e3 = ScheduleEntry(id="s3", day_of_week=1, start="09:00", end="10:00", subject_id="pdv")
    assert duration_hours(e1) == 1.5
    assert duration_hours(e2) == 0.75
    assert entries_starting_at([e1, e2, e3], 0, 9) == [e1]
    assert entries_starting_at([e1, e2, e3], 0, 10) == [e2]
    assert entries_starting_at([e1, e2, e3], 1, 9) == [e3]
    assert entries_starting_at([e1, e2, e3], 2, 9) == []
