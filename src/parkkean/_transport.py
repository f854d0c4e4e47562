"""HTTP transport for the live occupancy feed."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from parkkean.exceptions import FeedTransportError

_logger = logging.getLogger(__name__)


class FeedTransport(Protocol):
    """Structural transport interface used by :class:`~parkkean.ingestion.feed.FeedClient`.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpFeedTransport`) concrete.
    """

    async def get_json(self, url: str, headers: Mapping[str, str]) -> Any:
        ...


class HttpFeedTransport:
    """aiohttp transport issuing a single GET and decoding the JSON body.

    When no shared ``http_session`` is given, a session is opened and closed
    around every request. Either way the response is held inside
    ``async with`` so its connection is released on success, on error and
    when the surrounding task is cancelled by a deadline.
    """

    def __init__(self, http_session: aiohttp.ClientSession | None = None) -> None:
        self._http = http_session

    async def get_json(self, url: str, headers: Mapping[str, str]) -> Any:
        if self._http is not None:
            return await self._get(self._http, url, headers)
        async with aiohttp.ClientSession() as http:
            return await self._get(http, url, headers)

    async def _get(self, http: aiohttp.ClientSession, url: str, headers: Mapping[str, str]) -> Any:
        _logger.debug("GET %s", url)

        try:
            async with http.get(url, headers=dict(headers)) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise FeedTransportError(
                        f"HTTP {resp.status} from live feed: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except FeedTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise FeedTransportError(f"Request to live feed failed: {exc}", url=url) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise FeedTransportError(f"Invalid JSON from live feed: {text[:200]}", url=url) from exc
