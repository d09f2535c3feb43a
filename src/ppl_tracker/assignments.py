"""Assignment (homework) management."""
from datetime import date, datetime

from ppl_tracker.catalog import PRIORITIES, STATUSES
from ppl_tracker.errors import ValidationError
from ppl_tracker.metrics import is_overdue, is_urgent
from ppl_tracker.models import AppState, Assignment, new_id


def _clean(title: str, priority: str, status: str, due_date: str | None) -> tuple[str, str | None]:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Le titre est obligatoire")
    if priority not in PRIORITIES:
        raise ValidationError(f"Priorité inconnue : {priority}")
    if status not in STATUSES:
        raise ValidationError(f"Statut inconnu : {status}")
    due_date = (due_date or "").strip() or None
    if due_date:
        try:
            date.fromisoformat(due_date)
        except ValueError:
            raise ValidationError(f"Date invalide : {due_date} (attendu AAAA-MM-JJ)")
    return title, due_date


def get_assignment(state: AppState, assignment_id: str) -> Assignment | None:
    for a in state.assignments:
        if a.id == assignment_id:
            return a
    return None


def add_assignment(
    state: AppState,
    title: str,
    subject_id: str,
    due_date: str | None = None,
    priority: str = "medium",
    status: str = "todo",
) -> Assignment:
    title, due_date = _clean(title, priority, status, due_date)
    assignment = Assignment(
        id=new_id(a.id for a in state.assignments),
        title=title,
        subject_id=subject_id,
        due_date=due_date,
        priority=priority,
        status=status,
    )
    state.assignments.append(assignment)
    return assignment


def update_assignment(
    state: AppState,
    assignment_id: str,
    title: str,
    subject_id: str,
    due_date: str | None = None,
    priority: str = "medium",
    status: str = "todo",
) -> Assignment | None:
    """Replace the fields of an existing assignment. Unknown ids are ignored."""
    title, due_date = _clean(title, priority, status, due_date)
    existing = get_assignment(state, assignment_id)
    if existing is None:
        return None
    existing.title = title
    existing.subject_id = subject_id
    existing.due_date = due_date
    existing.priority = priority
    existing.status = status
    return existing


def delete_assignment(state: AppState, assignment_id: str) -> bool:
    before = len(state.assignments)
    state.assignments = [a for a in state.assignments if a.id != assignment_id]
    return len(state.assignments) != before


def _sort_key(a: Assignment) -> tuple:
    # Done last; undated last within each group
    return (a.status == "done", a.due_date is None, a.due_date or "")


def list_assignments(
    state: AppState,
    subject_id: str | None = None,
    status: str | None = None,
) -> list[Assignment]:
    items = [
        a for a in state.assignments
        if (not subject_id or a.subject_id == subject_id)
        and (not status or a.status == status)
    ]
    return sorted(items, key=_sort_key)


def urgent_assignments(state: AppState, now: datetime | None = None, limit: int = 5) -> list[Assignment]:
    """Open assignments that are overdue or due within 48 hours, soonest first."""
    now = now or datetime.now()
    items = [
        a for a in state.assignments
        if a.status != "done" and (is_urgent(a.due_date, now) or is_overdue(a.due_date, now))
    ]
    items.sort(key=lambda a: a.due_date)
    return items[:limit]
