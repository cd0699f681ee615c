import copy
import logging
import math
import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO-8601 string to a date.

    Returns None for missing or unparseable values instead of raising, so
    callers can fall back to their "no data" branch.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            logger.debug(f"Unparseable date value: {value!r}")
            return None
    return None


def days_between(first: date, second: date) -> int:
    """Absolute number of days between two dates."""
    return abs((first - second).days)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))


def as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Parse a UUID, returning None when the value is malformed."""
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def merge_maps(existing: Optional[Dict[str, Any]], update: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge `update` into a copy of `existing` key-wise; nested dicts merge recursively."""
    merged = copy.deepcopy(existing) if existing else {}
    for key, value in (update or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_maps(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
