"""
Tolerant parsing helpers for stored profile data.

Profiles arrive from the database with `qualities` and `requirements`
either as already-decoded objects or as JSON text, and with loosely typed
scalar fields. Nothing in here raises on bad input: every helper degrades
to a fixed default so the scorer can always produce a result.
"""

import json
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


def parse_or_default(raw: Any, fallback: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Decode a serialized profile sub-object, falling back on failure.

    Args:
        raw: A mapping, JSON text, or None
        fallback: Value returned when `raw` is empty or unparseable
            (default: a new empty dict)

    Returns:
        A plain dict. JSON that decodes to anything other than an object
        is treated as unparseable.
    """
    if fallback is None:
        fallback = {}

    if raw is None or raw == "" or _is_nan(raw):
        return fallback

    if isinstance(raw, Mapping):
        return dict(raw)

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")

    if not isinstance(raw, str):
        logger.warning(f"Could not parse JSON: unsupported type {type(raw).__name__}")
        return fallback

    try:
        decoded = json.loads(raw)
    except ValueError as e:
        logger.warning(f"Could not parse JSON: {e}")
        return fallback

    if not isinstance(decoded, dict):
        logger.warning(f"Could not parse JSON: expected an object, got {type(decoded).__name__}")
        return fallback

    return decoded


def coerce_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """
    Read a numeric field, treating empty, zero and non-numeric values as absent.

    Zero counts as absent because stored ranges use 0 for "not set".
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return default
        try:
            value = float(value)
        except ValueError:
            return default

    if not isinstance(value, (int, float)) or _is_nan(value) or value == 0:
        return default

    return value


def coerce_list(value: Any) -> List[Any]:
    """
    Read a list-valued field.

    A bare string is read as a one-item list; any other non-list value
    (including None) becomes an empty list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [value] if value else []
    return []


def coerce_text(value: Any) -> str:
    """Read a string field; None and NaN become the empty string."""
    if value is None or _is_nan(value):
        return ""
    return value if isinstance(value, str) else str(value)


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date of birth.

    Accepts date/datetime objects and ISO 8601 strings (a time part is
    ignored). Returns None when the value cannot be read.
    """
    if value is None or _is_nan(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug(f"Unparseable date of birth: {value!r}")
        return None


def calculate_age(date_of_birth: Any, today: date) -> Optional[int]:
    """
    Age in completed calendar years at `today`.

    One year is subtracted when this year's birthday has not happened yet.

    Returns:
        The age, or None if the date of birth cannot be parsed
    """
    birth = parse_date(date_of_birth)
    if birth is None:
        return None

    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def age_in_years(date_of_birth: Any, today: date) -> Optional[int]:
    """Age as whole 365.25-day years, as the profile QCS job computes it."""
    birth = parse_date(date_of_birth)
    if birth is None:
        return None
    return math.floor((today - birth).days / 365.25)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)
