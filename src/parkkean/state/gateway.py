"""Persistence gateway for stored lots.

The relational store lives outside this package; it is consumed through the
:class:`PersistenceGateway` protocol. :class:`InMemoryLotStore` is a complete
implementation for tests and for embedding without a database.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import ValidationError

from parkkean.exceptions import PersistenceError
from parkkean.models import LotFieldUpdate, StoredLot
from parkkean.state.policy import LIVE_OWNED_FIELDS

_logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """Store of authoritative lots.

    ``update_lot_fields`` raises :class:`~parkkean.exceptions.PersistenceError`
    when a write fails. ``list_lots`` failing is fatal to the request and is
    left to propagate.
    """

    async def list_lots(self) -> list[StoredLot]:
        ...

    async def get_lot(self, lot_id: int) -> StoredLot | None:
        ...

    async def update_lot_fields(self, lot_id: int, fields: Mapping[str, Any]) -> None:
        ...


class InMemoryLotStore:
    """Dict-backed :class:`PersistenceGateway` keyed by lot id.

    Lots are listed by name, matching the status API's ordering. Only
    live-owned fields may be updated; identity fields are rejected.
    """

    def __init__(self, lots: Iterable[StoredLot] = ()) -> None:
        self._lots: dict[int, StoredLot] = {lot.id: lot for lot in lots}
        self._lock = asyncio.Lock()

    async def list_lots(self) -> list[StoredLot]:
        async with self._lock:
            return sorted(self._lots.values(), key=lambda lot: lot.name)

    async def get_lot(self, lot_id: int) -> StoredLot | None:
        async with self._lock:
            return self._lots.get(lot_id)

    async def update_lot_fields(self, lot_id: int, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - set(LIVE_OWNED_FIELDS)
        if unknown:
            raise PersistenceError(f"Refusing to update fields {sorted(unknown)} of lot {lot_id}", lot_id=lot_id)
        async with self._lock:
            current = self._lots.get(lot_id)
            if current is None:
                raise PersistenceError(f"Lot {lot_id} does not exist", lot_id=lot_id)
            try:
                updated = StoredLot.model_validate({**current.model_dump(), **fields})
            except ValidationError as exc:
                raise PersistenceError(f"Invalid field values for lot {lot_id}: {exc}", lot_id=lot_id) from exc
            self._lots[lot_id] = updated


@dataclass
class WritebackResult:
    """Outcome of a best-effort writeback; writes are not atomic as a batch."""

    written: list[int] = field(default_factory=list)
    failed: dict[int, PersistenceError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


async def write_lot_fields(gateway: PersistenceGateway, lot_id: int, fields: Mapping[str, Any]) -> PersistenceError | None:
    """Write one lot's fields, returning the failure instead of raising it.

    Gateways backed by a real database may raise their own error types;
    those are wrapped in :class:`PersistenceError`.
    """
    try:
        await gateway.update_lot_fields(lot_id, fields)
    except PersistenceError as exc:
        _logger.warning("Failed to persist fields for lot %s: %s", lot_id, exc)
        return exc
    except Exception as exc:
        _logger.warning("Failed to persist fields for lot %s", lot_id, exc_info=True)
        wrapped = PersistenceError(str(exc), lot_id=lot_id)
        wrapped.__cause__ = exc
        return wrapped
    return None


async def apply_writeback(gateway: PersistenceGateway, updates: Iterable[LotFieldUpdate]) -> WritebackResult:
    """Write each update in order, continuing past individual failures."""
    result = WritebackResult()
    for update in updates:
        error = await write_lot_fields(gateway, update.lot_id, update.fields())
        if error is not None:
            result.failed[update.lot_id] = error
            continue
        result.written.append(update.lot_id)
    return result
