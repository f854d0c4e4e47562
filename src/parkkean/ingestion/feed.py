"""Live feed client.

One call to :meth:`FeedClient.fetch_live_snapshot` is one bounded attempt
to fetch and normalize the external occupancy feed. It fails closed: any
problem (disabled feed, transport error, timeout, nothing usable) is
reported as ``None``, which callers treat as "serve stored values".
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from yarl import URL

from parkkean._redact import redact_for_log
from parkkean._transport import FeedTransport, HttpFeedTransport
from parkkean.config import LiveFeedConfig
from parkkean.exceptions import FeedTransportError, ParkKeanConfigError
from parkkean.ingestion.normalize import now_ms
from parkkean.ingestion.snapshot import normalize_lots
from parkkean.models import LiveLot

_logger = logging.getLogger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_feed_url(value: str) -> str:
    """Return *value* if it is an absolute http(s) URL, else raise :class:`ParkKeanConfigError`."""
    try:
        url = URL(value)
    except (TypeError, ValueError) as exc:
        raise ParkKeanConfigError(f"Invalid live feed URL {value!r}: {exc}") from exc
    if not url.is_absolute() or url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise ParkKeanConfigError(f"Live feed URL must be an absolute http(s) URL, got {value!r}")
    return str(url)


class FeedClient:
    """Fetches one normalized live snapshot per call.

    Parameters
    ----------
    config : LiveFeedConfig
        Resolved feed configuration; never re-read from the environment.
    transport : FeedTransport or None
        Defaults to :class:`~parkkean._transport.HttpFeedTransport`.
    clock : callable
        Returns the ingestion instant in epoch milliseconds.
    """

    def __init__(
        self,
        config: LiveFeedConfig,
        transport: FeedTransport | None = None,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._config = config
        self._transport = transport if transport is not None else HttpFeedTransport()
        self._clock = clock
        self._url: str | None = None
        if config.url:
            try:
                self._url = validate_feed_url(config.url)
            except ParkKeanConfigError:
                _logger.error("Live feed disabled: invalid PARKKEAN_LIVE_API_URL", exc_info=True)

    @property
    def config(self) -> LiveFeedConfig:
        return self._config

    def is_live_mode_configured(self) -> bool:
        """True when a feed URL is configured (whether or not it is valid)."""
        return self._config.live_mode_configured

    async def fetch_live_snapshot(self) -> list[LiveLot] | None:
        """Fetch and normalize the feed.

        Returns a non-empty list of live lots, or ``None`` for "no data".
        Never raises (task cancellation from outside still propagates).
        """
        if self._url is None:
            return None

        headers = self._config.request_headers()
        _logger.debug(
            "Fetching live feed %s headers=%s",
            self._url,
            redact_for_log(headers, extra_keys=(self._config.api_key_header,)),
        )

        try:
            async with asyncio.timeout(self._config.timeout_seconds):
                payload = await self._transport.get_json(self._url, headers)
        except TimeoutError:
            _logger.error("Live feed request timed out after %d ms", self._config.timeout_ms)
            return None
        except FeedTransportError as exc:
            _logger.error("Failed to fetch live feed: %s", exc)
            return None
        except Exception:
            _logger.error("Unexpected error fetching live feed", exc_info=True)
            return None

        lots = normalize_lots(payload, now=self._clock())
        if not lots:
            _logger.warning("Live feed returned no usable lot data")
            return None
        _logger.debug("Live feed returned %d lots", len(lots))
        return lots
