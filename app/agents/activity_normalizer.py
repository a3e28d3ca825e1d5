"""Coerce loosely-shaped webhook activity records into ``Activity`` values."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from app.schemas import ACTIVITY_TYPES, Activity

_REQUIRED_DEFAULTS: Dict[str, str] = {
    "time": "09:00",
    "name": "Activity",
    "type": "activity",
    "duration": "1h",
}

_NUMERIC_FIELDS = ("cost", "rating")
_TEXT_FIELDS = (
    "notes",
    "booking_url",
    "image_url",
    "flight_class",
    "address",
    "phone",
    "website",
    "confirmation_code",
    "provider",
    "category",
)


def normalize_activity(raw: Any, fallback_location: str) -> Activity:
    """Build an ``Activity`` from an arbitrary record without ever raising.

    Missing or falsy required fields take fixed defaults (``location`` falls back
    to ``fallback_location``). Optional fields are copied only when present and
    not ``None``; values of the wrong shape are treated as absent.
    """
    record: Dict[str, Any] = raw if isinstance(raw, dict) else {}

    fields: Dict[str, Any] = {
        "time": _required_text(record.get("time"), _REQUIRED_DEFAULTS["time"]),
        "name": _required_text(record.get("name"), _REQUIRED_DEFAULTS["name"]),
        "type": _activity_type(record.get("type")),
        "duration": _required_text(record.get("duration"), _REQUIRED_DEFAULTS["duration"]),
        "location": _required_text(record.get("location"), fallback_location),
    }

    for key in _NUMERIC_FIELDS:
        value = coerce_number(record.get(key))
        if value is not None:
            fields[key] = value

    for key in _TEXT_FIELDS:
        if record.get(key) is None:
            continue
        value = _text(record[key])
        if value is not None:
            fields[key] = value

    amenities = _string_list(record.get("amenities"))
    if amenities is not None:
        fields["amenities"] = amenities

    return Activity(**fields)


def _activity_type(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in ACTIVITY_TYPES:
            return candidate
    return _REQUIRED_DEFAULTS["type"]


def _required_text(value: Any, default: str) -> str:
    if not value:
        return default
    return _text(value) or default


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return str(value)
        except ValueError:
            # int beyond the interpreter's str conversion digit limit
            return None
    return None


def coerce_number(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _string_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return list(value)
