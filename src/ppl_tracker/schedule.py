"""Weekly timetable, stored per calendar week."""
import re
from datetime import datetime

from ppl_tracker.errors import ValidationError
from ppl_tracker.models import AppState, ScheduleEntry, new_id
from ppl_tracker.weeks import week_key

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def current_week_key(state: AppState, now: datetime | None = None) -> str:
    return week_key(state.week_offset, now or datetime.now())


def current_week_entries(state: AppState, now: datetime | None = None) -> list[ScheduleEntry]:
    """Entries of the displayed week. Creates the bucket on first access."""
    key = current_week_key(state, now)
    return state.week_buckets.setdefault(key, [])


def validate_entry(day_of_week: int, start: str, end: str) -> None:
    if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        raise ValidationError("Le jour doit être compris entre 0 (lundi) et 6 (dimanche)")
    if not start or not end:
        raise ValidationError("L'heure de début et de fin sont obligatoires")
    if not TIME_RE.match(start) or not TIME_RE.match(end):
        raise ValidationError("Les heures doivent être au format HH:MM")
    # Zero-padded HH:MM on the same day compares correctly as text
    if start >= end:
        raise ValidationError("L'heure de fin doit être après l'heure de début")


def add_entry(
    state: AppState,
    day_of_week: int,
    start: str,
    end: str,
    subject_id: str,
    description: str = "",
    now: datetime | None = None,
) -> ScheduleEntry:
    validate_entry(day_of_week, start, end)
    entries = current_week_entries(state, now)
    entry = ScheduleEntry(
        id=new_id(e.id for e in entries),
        day_of_week=day_of_week,
        start=start,
        end=end,
        subject_id=subject_id,
        description=(description or "").strip(),
    )
    entries.append(entry)
    return entry


def remove_entry(state: AppState, entry_id: str, now: datetime | None = None) -> bool:
    """Remove an entry from the displayed week. Returns False if it was not there."""
    key = current_week_key(state, now)
    entries = state.week_buckets.get(key)
    if not entries:
        return False
    remaining = [e for e in entries if e.id != entry_id]
    state.week_buckets[key] = remaining
    return len(remaining) != len(entries)


def shift_week(state: AppState, delta: int) -> int:
    state.week_offset += delta
    return state.week_offset


def _hours(hhmm: str) -> float:
    h, m = (int(p) for p in hhmm.split(":"))
    return h + m / 60


def duration_hours(entry: ScheduleEntry) -> float:
    return _hours(entry.end) - _hours(entry.start)


def entries_starting_at(entries: list[ScheduleEntry], day_of_week: int, hour: int) -> list[ScheduleEntry]:
    """Entries shown in a grid cell: same day, starting within that hour."""
    return [
        e for e in entries
        if e.day_of_week == day_of_week and int(e.start.split(":")[0]) == hour
    ]
