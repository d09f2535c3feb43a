"""Pure view models for each screen of the tracker."""
from datetime import datetime
from enum import Enum

from ppl_tracker.assignments import list_assignments, urgent_assignments
from ppl_tracker.catalog import (
    DAYS, HOURS, PRIORITY_LABELS, STATUS_LABELS, subject_color, subject_label,
)
from ppl_tracker.metrics import (
    MOCK_EXAM_PASS, SCORE_PASS, badges, global_average, is_overdue, is_urgent,
    quick_stats, ring_color, subject_averages,
)
from ppl_tracker.mock_exams import mock_exam_history
from ppl_tracker.models import AppState
from ppl_tracker.schedule import duration_hours, entries_starting_at
from ppl_tracker.scores import score_history
from ppl_tracker.weeks import week_days, week_key, week_label


class View(str, Enum):
    DASHBOARD = "dashboard"
    ASSIGNMENTS = "assignments"
    SCHEDULE = "schedule"
    SCORES = "scores"
    MOCK_EXAMS = "mock_exams"


def dashboard_view(state: AppState, now: datetime) -> dict:
    avg = global_average(state)
    return {
        "global_average": avg,
        "ring_color": ring_color(avg),
        "subjects": subject_averages(state),
        "urgent": [
            {
                "id": a.id,
                "title": a.title,
                "due_date": a.due_date,
                "overdue": is_overdue(a.due_date, now),
            }
            for a in urgent_assignments(state, now)
        ],
        "stats": quick_stats(state),
    }


def assignments_view(
    state: AppState, now: datetime, subject_id: str | None = None, status: str | None = None,
) -> dict:
    rows = []
    for a in list_assignments(state, subject_id=subject_id, status=status):
        overdue = is_overdue(a.due_date, now) and a.status != "done"
        rows.append({
            "id": a.id,
            "title": a.title,
            "subject": subject_label(a.subject_id),
            "color": subject_color(a.subject_id),
            "due_date": a.due_date,
            "priority": PRIORITY_LABELS.get(a.priority, a.priority),
            "status": STATUS_LABELS.get(a.status, a.status),
            "done": a.status == "done",
            "overdue": overdue,
            "urgent": not overdue and is_urgent(a.due_date, now),
        })
    return {"assignments": rows}


def schedule_view(state: AppState, now: datetime) -> dict:
    key = week_key(state.week_offset, now)
    # Read-only: an unvisited week shows empty without creating its bucket
    entries = state.week_buckets.get(key, [])
    days = week_days(state.week_offset, now)
    grid = []
    for hour in HOURS:
        h = int(hour.split(":")[0])
        cells = []
        for day_idx in range(7):
            cells.append([
                {
                    "id": e.id,
                    "subject": subject_label(e.subject_id),
                    "color": subject_color(e.subject_id),
                    "start": e.start,
                    "end": e.end,
                    "description": e.description,
                    "duration_hours": duration_hours(e),
                }
                for e in entries_starting_at(entries, day_idx, h)
            ])
        grid.append({"hour": hour, "cells": cells})
    return {
        "week_key": key,
        "week_label": week_label(state.week_offset, now),
        "week_offset": state.week_offset,
        "headers": [f"{name} {d.day}" for name, d in zip(DAYS, days)],
        "grid": grid,
        "entries": sorted(entries, key=lambda e: (e.day_of_week, e.start)),
    }


def scores_view(state: AppState) -> dict:
    return {
        "averages": subject_averages(state),
        "history": [
            {
                "id": s.id,
                "subject": subject_label(s.subject_id),
                "color": subject_color(s.subject_id),
                "score": s.score,
                "passed": s.score >= SCORE_PASS,
                "description": s.description,
                "date": s.date,
            }
            for s in score_history(state)
        ],
        "badges": badges(state),
    }


def mock_exams_view(state: AppState) -> dict:
    return {
        "history": [
            {
                "id": m.id,
                "subject": subject_label(m.subject_id),
                "color": subject_color(m.subject_id),
                "score": m.score,
                "passed": m.score >= MOCK_EXAM_PASS,
                "minutes": m.duration_seconds // 60,
                "date": m.date,
            }
            for m in mock_exam_history(state)
        ],
    }


def render_for(view: View, state: AppState, now: datetime | None = None) -> dict:
    now = now or datetime.now()
    view = View(view)
    if view is View.DASHBOARD:
        return dashboard_view(state, now)
    elif view is View.ASSIGNMENTS:
        return assignments_view(state, now)
    elif view is View.SCHEDULE:
        return schedule_view(state, now)
    elif view is View.SCORES:
        return scores_view(state)
    return mock_exams_view(state)


def format_countdown(seconds: int) -> str:
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def countdown_level(remaining: int, total: int) -> str:
    pct = remaining / total if total else 0
    if pct <= 0.1:
        return "danger"
    elif pct <= 0.25:
        return "warning"
    return "normal"
