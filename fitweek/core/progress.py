"""
Body-measurement tracking.

Entries live at `users/{uid}/measurements/{YYYY-MM-DD}`, one per day. Older
accounts may also have weight-only entries under `users/{uid}/progress`;
those are read and merged in but never written.
"""

import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from fitweek.core.validation import ValidationError, parse_positive
from fitweek.data_access.dal import DataAccessLayer
from fitweek.data_access.paths import (
    legacy_progress_collection,
    measurement_path,
    measurements_collection,
)
from fitweek.infra import log_utils
from fitweek.infra.time_utils import timestamp

OPTIONAL_FIELDS = ("waistCm", "chestCm", "hipCm", "armCm", "thighCm")

METRIC_LABELS = {
    "weightKg": "Weight (kg)",
    "waistCm": "Waist (cm)",
    "chestCm": "Chest (cm)",
    "hipCm": "Hips (cm)",
    "armCm": "Arm (cm)",
    "thighCm": "Thigh (cm)",
}


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _optional_measurements(source: Mapping[str, Any]) -> Dict[str, float]:
    out = {}
    for field in OPTIONAL_FIELDS:
        value = parse_positive(source.get(field))
        if value is not None:
            out[field] = value
    return out


def normalize_measurement_entry(source: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Clean up a stored entry; None when it has no date or no numeric weight."""
    day = source.get("date") or source.get("dateISO")
    if not day:
        return None
    weight = _to_float(source.get("weightKg"))
    if weight is None:
        return None

    entry: Dict[str, Any] = {
        "date": day,
        "dateISO": source.get("dateISO") or day,
        "weightKg": weight,
    }
    entry.update(_optional_measurements(source))
    if source.get("createdAt"):
        entry["createdAt"] = source["createdAt"]
    return entry


def record_measurement(
    dal: DataAccessLayer,
    user_id: str,
    weight_kg: Any,
    extras: Optional[Mapping[str, Any]] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Save today's measurement, merging into an entry already saved today.

    The weight must be a positive number; optional measurements are kept only
    when positive and otherwise ignored.
    """
    weight = parse_positive(weight_kg)
    if weight is None:
        raise ValidationError("Enter a valid weight.")

    day = (today or date.today()).isoformat()
    path = measurement_path(user_id, day)
    payload: Dict[str, Any] = {"date": day, "dateISO": day, "weightKg": weight}
    payload.update(_optional_measurements(extras or {}))

    if dal.get_document(path) is None:
        payload["createdAt"] = timestamp()
    dal.set_document(path, payload, merge=True)
    log_utils.log_message(f"[progress] Recorded {weight}kg for {user_id} on {day}")
    return payload


def load_progress_entries(dal: DataAccessLayer, user_id: str) -> List[Dict[str, Any]]:
    """Measurements plus legacy entries for dates without a measurement, by date."""
    measurements = [
        entry
        for entry in (normalize_measurement_entry(doc) for doc in dal.list_documents(measurements_collection(user_id)))
        if entry is not None
    ]
    measured_dates = {entry["date"] for entry in measurements}

    merged = list(measurements)
    for legacy in dal.list_documents(legacy_progress_collection(user_id)):
        weight = _to_float(legacy.get("weightKg"))
        day = legacy.get("date")
        if not day or weight is None or day in measured_dates:
            continue
        merged.append({"date": day, "dateISO": day, "weightKg": weight})
        measured_dates.add(day)

    return sorted(merged, key=lambda e: e["date"])


def _iso_day(value: Any) -> str:
    """Calendar day of a timestamp, taken in UTC when the timestamp is aware."""
    if value and not isinstance(value, date):
        text = str(value)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.today().isoformat()


def ensure_initial_measurement(
    dal: DataAccessLayer, user_id: str, profile: Optional[Mapping[str, Any]]
) -> bool:
    """
    Seed a measurement from the profile weight, dated when the profile was
    created, unless one already exists for that day. Returns True if written.
    """
    if not user_id or not profile or not profile.get("weightKg"):
        return False

    day = _iso_day(profile.get("createdAt"))
    path = measurement_path(user_id, day)
    if dal.get_document(path) is not None:
        return False

    dal.set_document(
        path,
        {"date": day, "dateISO": day, "weightKg": profile["weightKg"], "createdAt": timestamp()},
        merge=True,
    )
    return True


def weight_change(entries: List[Dict[str, Any]]) -> Optional[float]:
    """Latest weight minus the first one, rounded to 0.1 kg; None with no entries."""
    if not entries:
        return None
    return round(entries[-1]["weightKg"] - entries[0]["weightKg"], 1)
