"""Load, save and migrate the persisted application state."""
import json
import logging
from datetime import datetime

from ppl_tracker.db import delete_value, get_value, init_db, set_value
from ppl_tracker.errors import StorageReadError
from ppl_tracker.models import AppState
from ppl_tracker.weeks import week_key

logger = logging.getLogger(__name__)

STATE_KEY = "ppl_state"


def migrate_legacy(raw: dict, now: datetime | None = None) -> dict:
    """Upgrade an older blob layout in place and return it.

    A flat ``slots`` list from before per-week buckets is moved under the key
    of the week that was active (``weekOffset``). The old ``devoirs`` name of
    the assignment list is renamed. Blobs that already carry ``weekSlots`` are
    left alone for the schedule part, so running this twice changes nothing.
    A null ``weekSlots`` counts as absent.
    """
    now = now or datetime.now()
    if isinstance(raw.get("slots"), list) and raw.get("weekSlots") is None:
        slots = raw.pop("slots")
        raw["weekSlots"] = {}
        if slots:
            key = week_key(raw.get("weekOffset") or 0, now)
            raw["weekSlots"][key] = slots
            logger.info("Migrated %d legacy schedule entries to week %s", len(slots), key)
    if "devoirs" in raw and raw.get("assignments") is None:
        raw["assignments"] = raw.pop("devoirs")
        logger.info("Renamed legacy 'devoirs' list to 'assignments'")
    return raw


def decode_state(blob: str, now: datetime | None = None) -> AppState:
    """Decode a serialized blob, raising StorageReadError if it is unusable."""
    try:
        raw = json.loads(blob)
    except ValueError as e:
        raise StorageReadError(f"state blob is not valid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise StorageReadError(f"state blob is a {type(raw).__name__}, expected an object")
    try:
        raw = migrate_legacy(raw, now)
        return AppState.from_jsonable(raw)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise StorageReadError(f"state blob has malformed records: {e!r}") from e


def load_state(db_path: str, now: datetime | None = None) -> AppState:
    init_db(db_path)
    blob = get_value(db_path, STATE_KEY)
    if blob is None:
        logger.debug("No stored state in %s, starting fresh", db_path)
        return AppState()
    try:
        return decode_state(blob, now)
    except StorageReadError as e:
        logger.warning("Could not load state: %s", e)
        return AppState()


def save_state(state: AppState, db_path: str) -> None:
    init_db(db_path)
    set_value(db_path, STATE_KEY, json.dumps(state.to_jsonable(), ensure_ascii=False))


def reset_state(db_path: str) -> AppState:
    """Drop the stored blob and return a fresh state."""
    init_db(db_path)
    delete_value(db_path, STATE_KEY)
    return AppState()
