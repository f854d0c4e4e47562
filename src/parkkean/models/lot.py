"""Lot models: live feed entries, stored lots and writeback deltas."""

from __future__ import annotations

from typing import Any, TypeAlias

from pydantic import field_validator, model_validator

from parkkean.models._base import CanonicalStatus, ParkBaseModel


class LiveLot(ParkBaseModel):
    """One normalized entry of the external occupancy feed.

    Instances only come out of
    :func:`parkkean.ingestion.snapshot.normalize_lots`; the raw feed shape
    never travels past it.

    Parameters
    ----------
    code : str
        Lot identifier, trimmed and upper-cased. Never empty.
    name : str
        Display name. Defaults to ``code``.
    capacity : float or None
        Total spaces, ``None`` when unknown.
    occupancy : float or None
        Occupied spaces, ``None`` when unknown.
    status : CanonicalStatus
        Reported or derived occupancy tier.
    walk_time : float or None
        Walking minutes to campus, ``None`` when unknown.
    full_by : str or None
        Free-form "expected full by" hint.
    last_updated : int
        Epoch milliseconds. Ingestion time when the feed omitted it.
    """

    code: str
    name: str = ""
    capacity: float | None = None
    occupancy: float | None = None
    status: CanonicalStatus = CanonicalStatus.OPEN
    walk_time: float | None = None
    full_by: str | None = None
    last_updated: int

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        code = value.strip().upper()
        if not code:
            raise ValueError("code must be non-empty")
        return code

    @model_validator(mode="after")
    def _default_name(self) -> LiveLot:
        name = self.name.strip()
        object.__setattr__(self, "name", name or self.code)
        return self


class LotReport(ParkBaseModel):
    """Most recent user-submitted status report for a lot.

    Owned by the reporting subsystem; reconciliation only reads it through.
    """

    id: int
    lot_id: int
    reported_status: CanonicalStatus
    note: str | None = None
    created_at: int
    user: str | None = None


class StoredLot(ParkBaseModel):
    """Authoritative lot record held by a :class:`~parkkean.state.gateway.PersistenceGateway`."""

    id: int
    code: str
    name: str
    capacity: float | None = None
    occupancy: float | None = None
    status: CanonicalStatus = CanonicalStatus.OPEN
    walk_time: float | None = None
    full_by: str | None = None
    last_updated: int | None = None
    last_report: LotReport | None = None


MergedLot: TypeAlias = StoredLot
"""A stored lot whose live-owned fields may have been replaced by feed values."""


class LotFieldUpdate(ParkBaseModel):
    """Field values to write back into one stored lot after a merge."""

    lot_id: int
    capacity: float | None = None
    occupancy: float | None = None
    status: CanonicalStatus
    walk_time: float | None = None
    full_by: str | None = None
    last_updated: int | None = None

    def fields(self) -> dict[str, Any]:
        """Mapping handed to ``PersistenceGateway.update_lot_fields``."""
        return self.model_dump(exclude={"lot_id"})
