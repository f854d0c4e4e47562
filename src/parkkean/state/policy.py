"""Field ownership policy for merging live data into stored lots.

This module intentionally contains *no* payload parsing. The ingestion
boundary hands over normalized :class:`~parkkean.models.LiveLot` records;
this module only decides which of their values may replace stored ones.
"""

from __future__ import annotations

from typing import Any, TypeVar

from parkkean.models import CanonicalStatus

T = TypeVar("T")

# Fields the live feed may override. Everything else on a stored lot
# (id, code, name, last_report) belongs to the local store.
LIVE_OWNED_FIELDS: tuple[str, ...] = (
    "capacity",
    "occupancy",
    "status",
    "walk_time",
    "full_by",
    "last_updated",
)


def prefer_live(live_value: T | None, stored_value: T | None) -> T | None:
    """A known live value wins; an unknown one keeps the stored value."""
    return live_value if live_value is not None else stored_value


def prefer_live_status(live_status: Any, stored_status: CanonicalStatus) -> CanonicalStatus:
    """Accept the live status only if it is still a canonical status."""
    canonical = CanonicalStatus.parse(live_status)
    return canonical if canonical is not None else stored_status
