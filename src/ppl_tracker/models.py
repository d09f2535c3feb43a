"""Data classes for the tracker domain model."""
import uuid
from dataclasses import dataclass, field
from typing import Optional


def new_id(existing=()) -> str:
    """Return a short random id not present in ``existing``."""
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:12]
        if candidate not in taken:
            return candidate


@dataclass
class Assignment:
    id: str
    title: str
    subject_id: str
    due_date: Optional[str] = None  # YYYY-MM-DD
    priority: str = "medium"
    status: str = "todo"

    def to_jsonable(self) -> dict:
        return {
            "id": self.id,
            "titre": self.title,
            "matiere": self.subject_id,
            "date": self.due_date or "",
            "priorite": self.priority,
            "statut": self.status,
        }

    @staticmethod
    def from_jsonable(raw: dict) -> "Assignment":
        return Assignment(
            id=raw["id"],
            title=raw["titre"],
            subject_id=raw["matiere"],
            due_date=raw.get("date") or None,
            priority=raw.get("priorite", "medium"),
            status=raw.get("statut", "todo"),
        )


@dataclass
class ScheduleEntry:
    id: str
    day_of_week: int  # 0=Mon..6=Sun
    start: str  # HH:MM
    end: str  # HH:MM
    subject_id: str
    description: str = ""

    def to_jsonable(self) -> dict:
        return {
            "id": self.id,
            "day": self.day_of_week,
            "start": self.start,
            "end": self.end,
            "matiere": self.subject_id,
            "desc": self.description,
        }

    @staticmethod
    def from_jsonable(raw: dict) -> "ScheduleEntry":
        return ScheduleEntry(
            id=raw["id"],
            day_of_week=int(raw["day"]),
            start=raw["start"],
            end=raw["end"],
            subject_id=raw["matiere"],
            description=raw.get("desc", ""),
        )


@dataclass
class ScoreRecord:
    id: str
    subject_id: str
    score: int
    date: str  # YYYY-MM-DD
    description: str = ""

    def to_jsonable(self) -> dict:
        return {
            "id": self.id,
            "matiere": self.subject_id,
            "score": self.score,
            "desc": self.description,
            "date": self.date,
        }

    @staticmethod
    def from_jsonable(raw: dict) -> "ScoreRecord":
        return ScoreRecord(
            id=raw["id"],
            subject_id=raw["matiere"],
            score=int(raw["score"]),
            date=raw["date"],
            description=raw.get("desc", ""),
        )


@dataclass
class MockExamRecord:
    id: str
    subject_id: str
    score: int
    duration_seconds: int
    date: str  # YYYY-MM-DD

    def to_jsonable(self) -> dict:
        return {
            "id": self.id,
            "matiere": self.subject_id,
            "score": self.score,
            "duration": self.duration_seconds,
            "date": self.date,
        }

    @staticmethod
    def from_jsonable(raw: dict) -> "MockExamRecord":
        return MockExamRecord(
            id=raw["id"],
            subject_id=raw["matiere"],
            score=int(raw["score"]),
            duration_seconds=int(raw["duration"]),
            date=raw["date"],
        )


@dataclass
class AppState:
    assignments: list[Assignment] = field(default_factory=list)
    week_buckets: dict[str, list[ScheduleEntry]] = field(default_factory=dict)
    scores: list[ScoreRecord] = field(default_factory=list)
    mock_exams: list[MockExamRecord] = field(default_factory=list)
    week_offset: int = 0

    def to_jsonable(self) -> dict:
        return {
            "assignments": [a.to_jsonable() for a in self.assignments],
            "weekSlots": {
                key: [e.to_jsonable() for e in entries]
                for key, entries in self.week_buckets.items()
            },
            "notes": [s.to_jsonable() for s in self.scores],
            "bacblancs": [m.to_jsonable() for m in self.mock_exams],
            "weekOffset": self.week_offset,
        }

    @staticmethod
    def from_jsonable(raw: dict) -> "AppState":
        """Build a state from a decoded blob. Missing keys keep their defaults."""
        state = AppState()
        state.assignments = [Assignment.from_jsonable(a) for a in raw.get("assignments") or []]
        state.week_buckets = {
            key: [ScheduleEntry.from_jsonable(e) for e in entries or []]
            for key, entries in (raw.get("weekSlots") or {}).items()
        }
        state.scores = [ScoreRecord.from_jsonable(s) for s in raw.get("notes") or []]
        state.mock_exams = [MockExamRecord.from_jsonable(m) for m in raw.get("bacblancs") or []]
        state.week_offset = int(raw.get("weekOffset") or 0)
        return state
