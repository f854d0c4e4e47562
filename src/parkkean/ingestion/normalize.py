"""Normalization helpers.

Centralizes defensive parsing of loosely-typed feed values: numbers,
strings, status tokens and timestamps. Every function here is total; bad
input maps to ``None`` or a documented default, never to an exception.
"""

from __future__ import annotations

import math
import time
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

from parkkean.models import CanonicalStatus

# Magnitudes above this are epoch milliseconds; below are epoch seconds.
_MS_THRESHOLD = 1e12

# Fraction of capacity at which a lot counts as LIMITED.
LIMITED_RATIO = 0.75

STATUS_SYNONYMS: dict[str, CanonicalStatus] = {
    "AVAILABLE": CanonicalStatus.OPEN,
    "OPEN": CanonicalStatus.OPEN,
    "FREE": CanonicalStatus.OPEN,
    "EMPTY": CanonicalStatus.OPEN,
    "PARTIAL": CanonicalStatus.LIMITED,
    "LIMITED": CanonicalStatus.LIMITED,
    "NEAR CAPACITY": CanonicalStatus.LIMITED,
    "ALMOST FULL": CanonicalStatus.LIMITED,
    "CROWDED": CanonicalStatus.LIMITED,
    "FULL": CanonicalStatus.FULL,
    "CLOSED": CanonicalStatus.FULL,
    "BLOCKED": CanonicalStatus.FULL,
}


def now_ms() -> int:
    return int(time.time() * 1000)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def first_present(raw: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the value of the first key in *keys* that is present and non-blank."""
    for key in keys:
        value = raw.get(key)
        if not is_blank(value):
            return value
    return None


def safe_float(value: Any) -> float | None:
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def non_negative_or_none(value: Any) -> float | None:
    parsed = safe_float(value)
    if parsed is None or parsed < 0:
        return None
    return parsed


def safe_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text if text else None


def normalize_status(
    raw_status: Any,
    capacity: float | None = None,
    occupancy: float | None = None,
) -> CanonicalStatus:
    """Map a raw status token, or failing that an occupancy ratio, to a canonical status.

    - A recognized token (synonym or canonical name, any case/spacing) wins.
    - Otherwise with ``capacity > 0`` and a known ``occupancy``:
      FULL at or above capacity, LIMITED at or above 75%, else OPEN.
    - Otherwise OPEN.
    """
    if not is_blank(raw_status):
        token = str(raw_status).strip().upper()
        mapped = STATUS_SYNONYMS.get(token)
        if mapped is not None:
            return mapped
        canonical = CanonicalStatus.parse(token)
        if canonical is not None:
            return canonical

    if capacity is not None and capacity > 0 and occupancy is not None:
        if occupancy >= capacity:
            return CanonicalStatus.FULL
        if occupancy >= capacity * LIMITED_RATIO:
            return CanonicalStatus.LIMITED
    return CanonicalStatus.OPEN


def _epoch_to_ms(value: float) -> int:
    if abs(value) > _MS_THRESHOLD:
        return int(value)
    return int(value * 1000)


def _parse_datetime(text: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def coerce_timestamp_ms(value: Any, now: int | None = None) -> int:
    """Coerce a feed timestamp of unknown shape to epoch milliseconds.

    - Missing (``None``, ``""``, ``0``) -> *now*
    - Numbers and numeric strings: seconds unless the magnitude exceeds 1e12
    - ISO 8601, then RFC 2822 date strings
    - Anything unparseable -> *now*
    """
    fallback = now if now is not None else now_ms()

    if is_blank(value) or isinstance(value, bool) or value == 0:
        return fallback

    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)

    number = safe_float(value)
    if number is not None:
        return _epoch_to_ms(number)

    if isinstance(value, str):
        parsed = _parse_datetime(value.strip())
        if parsed is not None:
            return int(parsed.timestamp() * 1000)

    return fallback
