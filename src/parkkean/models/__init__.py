"""Data models for parkkean lot records."""

from parkkean.models._base import CanonicalStatus, ParkBaseModel
from parkkean.models.lot import LiveLot, LotFieldUpdate, LotReport, MergedLot, StoredLot

__all__ = [
    "CanonicalStatus",
    "LiveLot",
    "LotFieldUpdate",
    "LotReport",
    "MergedLot",
    "ParkBaseModel",
    "StoredLot",
]
