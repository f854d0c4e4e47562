"""parkkean - Live parking occupancy ingestion and reconciliation."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("parkkean")
except PackageNotFoundError:
    __version__ = "0+local"
from parkkean.config import LiveFeedConfig
from parkkean.exceptions import (
    FeedTransportError,
    ParkKeanConfigError,
    ParkKeanError,
    PersistenceError,
)
from parkkean.ingestion.feed import FeedClient
from parkkean.ingestion.normalize import coerce_timestamp_ms, normalize_status
from parkkean.ingestion.snapshot import normalize_lots
from parkkean.models import (
    CanonicalStatus,
    LiveLot,
    LotFieldUpdate,
    LotReport,
    MergedLot,
    StoredLot,
)
from parkkean.service import LotStatusService, LotsView
from parkkean.state.gateway import (
    InMemoryLotStore,
    PersistenceGateway,
    WritebackResult,
    apply_writeback,
    write_lot_fields,
)
from parkkean.state.reconcile import Reconciliation, reconcile, reconcile_snapshot
from parkkean.state.simulator import OccupancySimulator, RandomWalkSimulator

__all__ = [
    "__version__",
    "CanonicalStatus",
    "FeedClient",
    "FeedTransportError",
    "InMemoryLotStore",
    "LiveFeedConfig",
    "LiveLot",
    "LotFieldUpdate",
    "LotReport",
    "LotStatusService",
    "LotsView",
    "MergedLot",
    "OccupancySimulator",
    "ParkKeanConfigError",
    "ParkKeanError",
    "PersistenceError",
    "PersistenceGateway",
    "RandomWalkSimulator",
    "Reconciliation",
    "StoredLot",
    "WritebackResult",
    "apply_writeback",
    "coerce_timestamp_ms",
    "normalize_lots",
    "normalize_status",
    "reconcile",
    "reconcile_snapshot",
    "write_lot_fields",
]
