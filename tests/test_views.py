"""Tests for the view models."""
from datetime import datetime

from ppl_tracker.assignments import add_assignment
from ppl_tracker.mock_exams import save_mock_exam
from ppl_tracker.models import AppState
from ppl_tracker.schedule import add_entry
from ppl_tracker.scores import add_score
from ppl_tracker.views import View, render_for, format_countdown, countdown_level


def test_dashboard_view(now):
    state = AppState()
    add_score(state, "nav", 90, now=now)
    add_assignment(state, "En retard", "nav", "2026-10-01")
    add_assignment(state, "Plus tard", "nav", "2026-12-01")
    vm = render_for(View.DASHBOARD, state, now)
    assert vm["global_average"] == 90
    assert vm["ring_color"] == "green"
    assert [u["title"] for u in vm["urgent"]] == ["En retard"]
    assert vm["urgent"][0]["overdue"] is True
    assert vm["stats"]["assignments_total"] == 2


def test_render_for_accepts_view_name(now):
    vm = render_for("scores", AppState(), now)
    assert vm["history"] == []
    assert len(vm["badges"]) == 9


def test_assignments_view_flags(now):
    state = AppState()
    add_assignment(state, "Demain", "nav", "2026-10-20")
    add_assignment(state, "Vieux", "xyz", "2026-10-01", status="done")
    rows = render_for(View.ASSIGNMENTS, state, now)["assignments"]
    assert rows[0]["urgent"] is True
    assert rows[0]["subject"] == "Navigation"
    assert rows[0]["status"] == "À faire"
    # Done work is never shown as late; unknown subjects show the raw id
    assert rows[1]["overdue"] is False
    assert rows[1]["subject"] == "xyz"
    assert rows[1]["color"] == "#888888"


def test_schedule_view(now):
    state = AppState()
    entry = add_entry(state, 2, "09:30", "11:00", "meteo", now=now)
    vm = render_for(View.SCHEDULE, state, now)
    assert vm["week_key"] == "2026-W43"
    assert vm["headers"][0] == "Lundi 19"
    assert vm["headers"][6] == "Dimanche 25"
    assert len(vm["grid"]) == 15
    nine = next(row for row in vm["grid"] if row["hour"] == "09:00")
    assert nine["cells"][2][0]["id"] == entry.id
    assert nine["cells"][2][0]["duration_hours"] == 1.5
    assert vm["entries"] == [entry]


def test_schedule_view_does_not_create_bucket(now):
    state = AppState(week_offset=5)
    vm = render_for(View.SCHEDULE, state, now)
    assert vm["entries"] == []
    assert state.week_buckets == {}


def test_mock_exams_view(now):
    state = AppState()
    save_mock_exam(state, "nav", 74, 5400, now=now)
    row = render_for(View.MOCK_EXAMS, state, now)["history"][0]
    assert row["minutes"] == 90
    assert row["passed"] is False


def test_format_countdown():
    assert format_countdown(3600) == "60:00"
    assert format_countdown(125) == "02:05"
    assert format_countdown(0) == "00:00"


def test_countdown_level():
    assert countdown_level(100, 100) == "normal"
    assert countdown_level(25, 100) == "warning"
    assert countdown_level(10, 100) == "danger"
