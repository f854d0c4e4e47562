"""Request-level orchestration of the live occupancy pipeline.

Each call runs one reconciliation cycle: read stored lots, fetch the live
snapshot, merge, write back matched lots one at a time, return the merged
view. There is no background polling and no cross-request locking; the
writes are idempotent "set to latest known value" updates, so overlapping
cycles converge with last write wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from parkkean.ingestion.feed import FeedClient
from parkkean.ingestion.normalize import now_ms
from parkkean.models import MergedLot
from parkkean.state.gateway import PersistenceGateway, apply_writeback, write_lot_fields
from parkkean.state.reconcile import reconcile_snapshot
from parkkean.state.simulator import OccupancySimulator, RandomWalkSimulator

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LotsView:
    """Lots returned to the status API, and whether live data was applied."""

    lots: list[MergedLot]
    live: bool


class LotStatusService:
    """Serves the lot list, overlaying live feed data when available."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        feed: FeedClient,
        *,
        simulator: OccupancySimulator | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._gateway = gateway
        self._feed = feed
        self._simulator = simulator if simulator is not None else RandomWalkSimulator()
        self._clock = clock

    async def _sync_live(self) -> tuple[LotsView | None, list[MergedLot]]:
        stored = await self._gateway.list_lots()
        live = await self._feed.fetch_live_snapshot()
        if not live:
            return None, stored

        reconciliation = reconcile_snapshot(stored, live)
        result = await apply_writeback(self._gateway, reconciliation.updates)
        if not result.ok:
            _logger.warning(
                "Persisted live fields for %d of %d lots",
                len(result.written),
                len(reconciliation.updates),
            )
        return LotsView(lots=reconciliation.lots, live=True), stored

    async def get_lots(self) -> LotsView:
        """Stored lots merged with the live snapshot, or stored lots as-is without one."""
        view, stored = await self._sync_live()
        if view is not None:
            return view
        return LotsView(lots=stored, live=False)

    async def refresh_lots(self) -> LotsView:
        """Like :meth:`get_lots`, but without live data advance the occupancy simulator."""
        view, stored = await self._sync_live()
        if view is not None:
            return view

        await self._simulate(stored)
        return LotsView(lots=await self._gateway.list_lots(), live=False)

    async def _simulate(self, stored: list[MergedLot]) -> None:
        timestamp = self._clock()
        for lot in stored:
            fields = {"occupancy": self._simulator.next_occupancy(lot), "last_updated": timestamp}
            await write_lot_fields(self._gateway, lot.id, fields)
