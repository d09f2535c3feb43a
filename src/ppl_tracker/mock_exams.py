"""Timed mock exams ("bac blanc")."""
from datetime import datetime

from ppl_tracker.errors import ValidationError
from ppl_tracker.models import AppState, MockExamRecord, ScoreRecord, new_id
from ppl_tracker.scores import validate_score

MOCK_EXAM_LABEL = "Bac blanc"


def save_mock_exam(
    state: AppState,
    subject_id: str,
    score,
    duration_seconds: int,
    now: datetime | None = None,
) -> tuple[MockExamRecord, ScoreRecord]:
    """Record a mock exam and the matching entry in the score history.

    Both records are validated together before either is written.
    """
    value = validate_score(score)
    if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int) or duration_seconds <= 0:
        raise ValidationError("Durée invalide")
    day = (now or datetime.now()).date().isoformat()
    exam = MockExamRecord(
        id=new_id(m.id for m in state.mock_exams),
        subject_id=subject_id,
        score=value,
        duration_seconds=duration_seconds,
        date=day,
    )
    derived = ScoreRecord(
        id=new_id(s.id for s in state.scores),
        subject_id=subject_id,
        score=value,
        description=MOCK_EXAM_LABEL,
        date=day,
    )
    state.mock_exams.append(exam)
    state.scores.append(derived)
    return exam, derived


def delete_mock_exam(state: AppState, exam_id: str) -> bool:
    """Remove a mock exam. Its entry in the score history is kept."""
    before = len(state.mock_exams)
    state.mock_exams = [m for m in state.mock_exams if m.id != exam_id]
    return len(state.mock_exams) != before


def mock_exam_history(state: AppState) -> list[MockExamRecord]:
    return sorted(state.mock_exams, key=lambda m: m.date, reverse=True)
