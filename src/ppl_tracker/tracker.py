"""Tracker controller: owns one application state and persists every change."""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from ppl_tracker import assignments, metrics, mock_exams, schedule, scores
from ppl_tracker.db import resolve_db_path
from ppl_tracker.errors import ValidationError
from ppl_tracker.storage import load_state, reset_state, save_state
from ppl_tracker.views import View, render_for

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    ok: bool
    category: str  # "success" | "error" | "info"
    message: str
    record: Optional[Any] = None


class Tracker:
    def __init__(self, db_path: str | None = None, clock: Callable[[], datetime] | None = None):
        self.db_path = db_path or resolve_db_path()
        self.clock = clock or datetime.now
        self.state = load_state(self.db_path, self.clock())

    def _save(self) -> None:
        save_state(self.state, self.db_path)

    def _run(self, action: Callable[[], Any], success: str, missing: str | None = None) -> ActionResult:
        """Apply a mutation, persist it and report the outcome.

        ``action`` returning None or False means the target id was not found,
        which is reported as ``info`` without writing anything.
        """
        try:
            record = action()
        except ValidationError as e:
            return ActionResult(ok=False, category="error", message=str(e))
        if record is None or record is False:
            return ActionResult(ok=True, category="info", message=missing or "Rien à modifier")
        self._save()
        return ActionResult(ok=True, category="success", message=success, record=record)

    # Read accessors

    def view(self, view: View) -> dict:
        return render_for(view, self.state, self.clock())

    def average_score(self, subject_id: str) -> int | None:
        return metrics.average_score(self.state, subject_id)

    def global_average(self) -> int:
        return metrics.global_average(self.state)

    def assignments(self, subject_id: str | None = None, status: str | None = None) -> list:
        return assignments.list_assignments(self.state, subject_id=subject_id, status=status)

    def urgent_assignments(self) -> list:
        return assignments.urgent_assignments(self.state, self.clock())

    def week_entries(self) -> list:
        return schedule.current_week_entries(self.state, self.clock())

    def week_key(self) -> str:
        return schedule.current_week_key(self.state, self.clock())

    def score_history(self) -> list:
        return scores.score_history(self.state)

    def mock_exam_history(self) -> list:
        return mock_exams.mock_exam_history(self.state)

    # Assignments

    def add_assignment(self, title, subject_id, due_date=None, priority="medium", status="todo") -> ActionResult:
        return self._run(
            lambda: assignments.add_assignment(self.state, title, subject_id, due_date, priority, status),
            "Devoir ajouté ✓",
        )

    def edit_assignment(self, assignment_id, title, subject_id, due_date=None, priority="medium", status="todo") -> ActionResult:
        return self._run(
            lambda: assignments.update_assignment(
                self.state, assignment_id, title, subject_id, due_date, priority, status,
            ),
            "Devoir modifié ✓",
            missing="Devoir introuvable",
        )

    def delete_assignment(self, assignment_id: str) -> ActionResult:
        return self._run(
            lambda: assignments.delete_assignment(self.state, assignment_id),
            "Devoir supprimé",
            missing="Devoir introuvable",
        )

    # Schedule

    def add_entry(self, day_of_week, start, end, subject_id, description="") -> ActionResult:
        return self._run(
            lambda: schedule.add_entry(
                self.state, day_of_week, start, end, subject_id, description, self.clock(),
            ),
            "Créneau ajouté pour cette semaine ✓",
        )

    def remove_entry(self, entry_id: str) -> ActionResult:
        return self._run(
            lambda: schedule.remove_entry(self.state, entry_id, self.clock()),
            "Créneau supprimé",
            missing="Créneau introuvable",
        )

    def shift_week(self, delta: int) -> ActionResult:
        offset = schedule.shift_week(self.state, delta)
        self._save()
        return ActionResult(ok=True, category="info", message=self.week_key(), record=offset)

    def previous_week(self) -> ActionResult:
        return self.shift_week(-1)

    def next_week(self) -> ActionResult:
        return self.shift_week(1)

    # Scores

    def add_score(self, subject_id, score, description="") -> ActionResult:
        return self._run(
            lambda: scores.add_score(self.state, subject_id, score, description, self.clock()),
            "Note ajoutée ✓",
        )

    def delete_score(self, score_id: str) -> ActionResult:
        return self._run(
            lambda: scores.delete_score(self.state, score_id),
            "Note supprimée",
            missing="Note introuvable",
        )

    # Mock exams

    def save_mock_exam(self, subject_id, score, duration_seconds) -> ActionResult:
        return self._run(
            lambda: mock_exams.save_mock_exam(self.state, subject_id, score, duration_seconds, self.clock()),
            "Score enregistré ✓",
        )

    def delete_mock_exam(self, exam_id: str) -> ActionResult:
        return self._run(
            lambda: mock_exams.delete_mock_exam(self.state, exam_id),
            "Bac blanc supprimé",
            missing="Bac blanc introuvable",
        )

    def reset(self) -> ActionResult:
        self.state = reset_state(self.db_path)
        logger.info("Reset all tracker data in %s", self.db_path)
        return ActionResult(ok=True, category="info", message="Toutes les données ont été effacées")
