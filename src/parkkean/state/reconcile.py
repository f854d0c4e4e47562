"""Reconciliation of a live snapshot against stored lots.

Everything here is pure: no I/O, no clock. Persisting the resulting
:class:`~parkkean.models.LotFieldUpdate` values is a separate step
(:func:`parkkean.state.gateway.apply_writeback`).
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from parkkean.models import LiveLot, LotFieldUpdate, MergedLot, StoredLot
from parkkean.state.policy import LIVE_OWNED_FIELDS, prefer_live, prefer_live_status


@dataclass(frozen=True)
class Reconciliation:
    """Merged lot view plus the writeback delta for every matched lot."""

    lots: list[MergedLot]
    updates: list[LotFieldUpdate] = field(default_factory=list)

    @property
    def matched_ids(self) -> list[int]:
        return [update.lot_id for update in self.updates]


def index_live_lots(live_lots: Iterable[LiveLot]) -> dict[str, LiveLot]:
    """Map upper-cased code to live lot. On duplicate codes the last entry wins."""
    return {lot.code.upper(): lot for lot in live_lots}


def merge_lot(stored: StoredLot, live: LiveLot) -> MergedLot:
    """Overlay the live-owned fields of *live* onto *stored*."""
    return stored.model_copy(
        update={
            "occupancy": prefer_live(live.occupancy, stored.occupancy),
            "capacity": prefer_live(live.capacity, stored.capacity),
            "status": prefer_live_status(live.status, stored.status),
            "walk_time": prefer_live(live.walk_time, stored.walk_time),
            "full_by": prefer_live(live.full_by, stored.full_by),
            "last_updated": prefer_live(live.last_updated, stored.last_updated),
        }
    )


def build_field_update(merged: MergedLot) -> LotFieldUpdate:
    """Writeback delta for *merged*. Stored occupancy is a whole, non-negative count."""
    values = {name: getattr(merged, name) for name in LIVE_OWNED_FIELDS}
    if values["occupancy"] is not None:
        values["occupancy"] = max(0, math.floor(values["occupancy"] + 0.5))
    return LotFieldUpdate(lot_id=merged.id, **values)


def reconcile_snapshot(stored_lots: Sequence[StoredLot], live_lots: Sequence[LiveLot] | None) -> Reconciliation:
    """Merge *live_lots* into *stored_lots* and plan the writeback.

    Stored lots without a live match are passed through as the same
    object and produce no update. An empty or missing snapshot merges
    nothing.
    """
    if not live_lots:
        return Reconciliation(lots=list(stored_lots))

    by_code = index_live_lots(live_lots)
    merged_lots: list[MergedLot] = []
    updates: list[LotFieldUpdate] = []
    for stored in stored_lots:
        live = by_code.get(stored.code.upper()) if stored.code else None
        if live is None:
            merged_lots.append(stored)
            continue
        merged = merge_lot(stored, live)
        merged_lots.append(merged)
        updates.append(build_field_update(merged))
    return Reconciliation(lots=merged_lots, updates=updates)


def reconcile(stored_lots: Sequence[StoredLot], live_lots: Sequence[LiveLot] | None) -> list[MergedLot]:
    """Return the merged lot view for *stored_lots* given a live snapshot."""
    return reconcile_snapshot(stored_lots, live_lots).lots
