"""Live feed configuration for parkkean."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

DEFAULT_API_KEY_HEADER = "Authorization"
DEFAULT_TIMEOUT_MS = 5000


def _env_str(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _env_positive_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclasses.dataclass(frozen=True)
class LiveFeedConfig:
    """Live occupancy feed configuration.

    Resolved once at process start and passed into
    :class:`parkkean.ingestion.feed.FeedClient`. Nothing in the request
    path reads the environment again.

    Parameters
    ----------
    url : str or None
        Absolute URL of the external occupancy feed. ``None`` disables
        live mode entirely.
    api_key : str or None
        Credential sent with every feed request, verbatim.
    api_key_header : str
        Header carrying ``api_key``. Defaults to ``Authorization``.
    timeout_ms : int
        Hard deadline for one feed request, in milliseconds.
    """

    url: str | None = None
    api_key: str | None = None
    api_key_header: str = DEFAULT_API_KEY_HEADER
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    @property
    def live_mode_configured(self) -> bool:
        return bool(self.url)

    def request_headers(self) -> dict[str, str]:
        """Headers for a feed request (the credential header, if any)."""
        if not self.api_key:
            return {}
        return {self.api_key_header: self.api_key}

    @classmethod
    def from_env(cls, **overrides: Any) -> LiveFeedConfig:
        """Create configuration from environment variables.

        Reads ``PARKKEAN_LIVE_API_URL``, ``PARKKEAN_LIVE_API_KEY``,
        ``PARKKEAN_LIVE_API_KEY_HEADER`` and ``PARKKEAN_LIVE_TIMEOUT_MS``.
        Blank values count as unset. A timeout that is not a positive
        integer falls back to the default. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LiveFeedConfig
            Populated configuration.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {
            "url": _env_str(env.get("PARKKEAN_LIVE_API_URL")),
            "api_key": _env_str(env.get("PARKKEAN_LIVE_API_KEY")),
            "api_key_header": _env_str(env.get("PARKKEAN_LIVE_API_KEY_HEADER")) or DEFAULT_API_KEY_HEADER,
            "timeout_ms": _env_positive_int(env.get("PARKKEAN_LIVE_TIMEOUT_MS"), DEFAULT_TIMEOUT_MS),
        }
        config_kwargs.update(overrides)

        return cls(**config_kwargs)
