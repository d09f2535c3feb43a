"""Week index: maps a relative week offset to a calendar-week key."""
import math
from datetime import date, datetime, timedelta

MONTHS_SHORT = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]


def _as_date(now: datetime | date) -> date:
    return now.date() if isinstance(now, datetime) else now


def week_start(offset: int, now: datetime | date) -> date:
    """Monday of the week containing ``now + offset`` weeks."""
    today = _as_date(now)
    monday = today - timedelta(days=today.weekday())
    return monday + timedelta(weeks=offset)


def week_key(offset: int, now: datetime | date) -> str:
    """Return the ``YYYY-Www`` key of the week ``offset`` weeks away from ``now``.

    The week number is counted from January 1st of the Monday's year, with
    January 1st's Sunday-based weekday as the starting shift. Mondays late in
    December can therefore get week 53 rather than the next year's W01; stored
    buckets are keyed this way, so the numbering is kept as is.
    """
    monday = week_start(offset, now)
    jan1 = date(monday.year, 1, 1)
    jan1_weekday = jan1.isoweekday() % 7  # 0=Sun..6=Sat
    week_num = math.ceil(((monday - jan1).days + jan1_weekday + 1) / 7)
    return f"{monday.year}-W{week_num:02d}"


def week_days(offset: int, now: datetime | date) -> list[date]:
    monday = week_start(offset, now)
    return [monday + timedelta(days=i) for i in range(7)]


def format_day_month(d: date) -> str:
    return f"{d.day:02d} {MONTHS_SHORT[d.month - 1]}"


def week_label(offset: int, now: datetime | date) -> str:
    monday = week_start(offset, now)
    sunday = monday + timedelta(days=6)
    return f"{format_day_month(monday)} – {format_day_month(sunday)}  ({week_key(offset, now)})"
