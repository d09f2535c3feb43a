"""Score history."""
from datetime import datetime

from ppl_tracker.errors import ValidationError
from ppl_tracker.models import AppState, ScoreRecord, new_id


def validate_score(score) -> int:
    """Coerce a raw score to an int in 0..100 or raise ValidationError."""
    if isinstance(score, bool):
        raise ValidationError("Score invalide (0–100)")
    try:
        value = int(score)
    except (TypeError, ValueError):
        raise ValidationError("Score invalide (0–100)")
    if isinstance(score, float) and score != value:
        raise ValidationError("Score invalide (0–100)")
    if not 0 <= value <= 100:
        raise ValidationError("Score invalide (0–100)")
    return value


def add_score(
    state: AppState,
    subject_id: str,
    score,
    description: str = "",
    now: datetime | None = None,
) -> ScoreRecord:
    value = validate_score(score)
    record = ScoreRecord(
        id=new_id(s.id for s in state.scores),
        subject_id=subject_id,
        score=value,
        description=(description or "").strip(),
        date=(now or datetime.now()).date().isoformat(),
    )
    state.scores.append(record)
    return record


def delete_score(state: AppState, score_id: str) -> bool:
    before = len(state.scores)
    state.scores = [s for s in state.scores if s.id != score_id]
    return len(state.scores) != before


def score_history(state: AppState, subject_id: str | None = None) -> list[ScoreRecord]:
    """Most recent first."""
    items = [s for s in state.scores if not subject_id or s.subject_id == subject_id]
    return sorted(items, key=lambda s: s.date, reverse=True)
