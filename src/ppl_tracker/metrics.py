"""Score averages, deadline classification and dashboard statistics."""
import math
from datetime import date, datetime, time, timedelta

from ppl_tracker.catalog import SUBJECTS
from ppl_tracker.models import AppState

URGENT_WINDOW = timedelta(hours=48)
SCORE_PASS = 85
MOCK_EXAM_PASS = 75
BADGE_THRESHOLD = 90


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def average_score(state: AppState, subject_id: str) -> int | None:
    """Rounded mean score for a subject, or None when it has no scores."""
    values = [s.score for s in state.scores if s.subject_id == subject_id]
    if not values:
        return None
    return round_half_up(sum(values) / len(values))


def global_average(state: AppState) -> int:
    if not state.scores:
        return 0
    return round_half_up(sum(s.score for s in state.scores) / len(state.scores))


def subject_averages(state: AppState) -> list[dict]:
    results = []
    for s in SUBJECTS:
        avg = average_score(state, s["id"])
        results.append({
            "subject_id": s["id"],
            "label": s["label"],
            "color": s["color"],
            "average": avg,
            "status": None if avg is None else ("ok" if avg >= SCORE_PASS else "danger"),
        })
    return results


def badges(state: AppState) -> list[dict]:
    results = []
    for s in SUBJECTS:
        avg = average_score(state, s["id"])
        results.append({
            "subject_id": s["id"],
            "label": s["label"],
            "average": avg,
            "earned": avg is not None and avg >= BADGE_THRESHOLD,
        })
    return results


def ring_color(avg: int) -> str:
    if avg >= 85:
        return "green"
    elif avg >= 70:
        return "yellow"
    return "red"


def deadline_of(due: str | date | None) -> datetime | None:
    """End of the due day (23:59:59), or None when there is no usable date."""
    if not due:
        return None
    if isinstance(due, str):
        try:
            due = date.fromisoformat(due)
        except ValueError:
            return None
    return datetime.combine(due, time(23, 59, 59))


def is_urgent(due: str | date | None, now: datetime | None = None) -> bool:
    """True if the deadline is still ahead but less than 48 hours away."""
    deadline = deadline_of(due)
    if deadline is None:
        return False
    now = now or datetime.now()
    return deadline >= now and deadline - now < URGENT_WINDOW


def is_overdue(due: str | date | None, now: datetime | None = None) -> bool:
    deadline = deadline_of(due)
    if deadline is None:
        return False
    return deadline < (now or datetime.now())


def quick_stats(state: AppState) -> dict:
    return {
        "assignments_total": len(state.assignments),
        "assignments_done": sum(1 for a in state.assignments if a.status == "done"),
        "mock_exams": len(state.mock_exams),
        "scores": len(state.scores),
    }
