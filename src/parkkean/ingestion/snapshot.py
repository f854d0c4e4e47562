"""Live snapshot normalization.

Turns whatever the external feed returned into an ordered list of
:class:`~parkkean.models.LiveLot`. The feed is not guaranteed to agree with
us (or with itself) on field names, so each logical field is looked up
through an ordered alias tuple in :data:`FIELD_ALIASES`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from parkkean.ingestion.normalize import (
    coerce_timestamp_ms,
    first_present,
    non_negative_or_none,
    normalize_status,
    now_ms,
    safe_str,
)
from parkkean.models import LiveLot

_logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "code": ("code", "lotCode", "lot_code", "id", "lotId", "lot_id"),
    "name": ("name", "lotName", "lot_name"),
    "capacity": ("capacity", "totalCapacity", "max", "total"),
    "occupancy": ("occupancy", "occupied", "used", "vehicles"),
    "walk_time": ("walk_time", "walkTime", "walking_minutes"),
    "full_by": ("full_by", "fullBy"),
    "status": ("status", "state"),
    "last_updated": ("last_updated", "lastUpdated", "updated_at", "timestamp"),
}

# Key under which wrapped payloads carry the lot list.
WRAPPER_KEY = "lots"


def _resolve(raw: Mapping[str, Any], field: str) -> Any:
    return first_present(raw, FIELD_ALIASES[field])


def extract_entries(payload: Any) -> list[Any]:
    """Return the raw lot entries from a bare list or a ``{"lots": [...]}`` wrapper."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        wrapped = payload.get(WRAPPER_KEY)
        if isinstance(wrapped, list):
            return wrapped
    return []


def normalize_lot(raw: Any, *, now: int) -> LiveLot | None:
    """Normalize one raw feed entry, or return ``None`` if it has no usable code."""
    if not isinstance(raw, Mapping):
        return None

    code = _resolve(raw, "code")
    if code is None:
        return None
    code_text = str(code).strip().upper()
    if not code_text:
        return None

    name = _resolve(raw, "name")
    capacity = non_negative_or_none(_resolve(raw, "capacity"))
    occupancy = non_negative_or_none(_resolve(raw, "occupancy"))

    try:
        return LiveLot(
            code=code_text,
            name=str(name) if name is not None else code_text,
            capacity=capacity,
            occupancy=occupancy,
            status=normalize_status(_resolve(raw, "status"), capacity, occupancy),
            walk_time=non_negative_or_none(_resolve(raw, "walk_time")),
            full_by=safe_str(_resolve(raw, "full_by")),
            last_updated=coerce_timestamp_ms(_resolve(raw, "last_updated"), now),
        )
    except ValidationError:
        _logger.debug("Dropping unusable feed entry for code %r", code_text, exc_info=True)
        return None


def normalize_lots(payload: Any, *, now: int | None = None) -> list[LiveLot]:
    """Normalize a raw feed payload into live lots, preserving input order.

    Entries without a resolvable code are dropped. Never raises; an empty
    list means the feed had nothing usable.
    """
    ingested_at = now if now is not None else now_ms()
    lots: list[LiveLot] = []
    for entry in extract_entries(payload):
        lot = normalize_lot(entry, now=ingested_at)
        if lot is not None:
            lots.append(lot)
    return lots
