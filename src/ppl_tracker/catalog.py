"""Static subject catalog for the PPL theory exam."""

SUBJECTS = [
    {"id": "regl", "label": "Réglementation", "color": "#b07ef0"},
    {"id": "cga", "label": "Connaissance générale de l'aéronef", "color": "#4f9cf0"},
    {"id": "ppv", "label": "Performances et préparation du vol", "color": "#7ecfb3"},
    {"id": "phpl", "label": "Performances humaines et ses limites", "color": "#e8c840"},
    {"id": "meteo", "label": "Météorologie", "color": "#e87f5c"},
    {"id": "nav", "label": "Navigation", "color": "#5abf80"},
    {"id": "proc", "label": "Procédures opérationnelles", "color": "#e05a5a"},
    {"id": "pdv", "label": "Principes du vol", "color": "#f07ac0"},
    {"id": "com", "label": "Communication", "color": "#f0b44f"},
]

SUBJECT_IDS = [s["id"] for s in SUBJECTS]

DEFAULT_COLOR = "#888888"

DAYS = ["Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi", "Dimanche"]

# 07:00 -> 21:00
HOURS = [f"{h:02d}:00" for h in range(7, 22)]

PRIORITIES = ("low", "medium", "high")
STATUSES = ("todo", "inprogress", "done")

PRIORITY_LABELS = {"low": "Faible", "medium": "Moyenne", "high": "Haute"}
STATUS_LABELS = {"todo": "À faire", "inprogress": "En cours", "done": "Terminé"}


def get_subject(subject_id: str) -> dict | None:
    for s in SUBJECTS:
        if s["id"] == subject_id:
            return s
    return None


def subject_label(subject_id: str) -> str:
    s = get_subject(subject_id)
    return s["label"] if s else subject_id


def subject_color(subject_id: str) -> str:
    s = get_subject(subject_id)
    return s["color"] if s else DEFAULT_COLOR
