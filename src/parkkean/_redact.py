"""Helpers for safe debug logging.

Feed requests carry an API credential in a configurable header. This module
redacts credential-bearing keys from headers and payloads before they are
emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "x-api-key",
        "api-key",
        "apikey",
        "api_key",
        "token",
        "access_token",
        "cookie",
        "set-cookie",
    }
)


def redact_for_log(
    value: Any,
    *,
    extra_keys: Iterable[str] = (),
    max_string: int = 256,
    _depth: int = 0,
) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    ``extra_keys`` names additional keys (case-insensitive) to hide, e.g. a
    custom credential header.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None or isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    sensitive = _SENSITIVE_KEYS | {key.lower() for key in extra_keys}

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in sensitive:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, extra_keys=sensitive, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, bytearray):
        return [redact_for_log(v, extra_keys=sensitive, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
