"""Custom exception hierarchy for parkkean."""

from __future__ import annotations


class ParkKeanError(Exception):
    """Base exception for all parkkean errors."""


class ParkKeanConfigError(ParkKeanError):
    """Invalid or missing configuration."""


class FeedTransportError(ParkKeanError):
    """HTTP-level failure fetching the live feed (network, non-2xx, invalid JSON).

    Never escapes :meth:`parkkean.ingestion.feed.FeedClient.fetch_live_snapshot`;
    the client downgrades it to "no data".
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class PersistenceError(ParkKeanError):
    """The lot store rejected a read or write."""

    def __init__(
        self,
        message: str,
        *,
        lot_id: int | None = None,
    ) -> None:
        self.lot_id = lot_id
        super().__init__(message)
