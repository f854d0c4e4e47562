#!/usr/bin/env python3
"""Fetch one live occupancy snapshot and print the normalized lots.

Configuration comes from the same environment variables the service reads:
- PARKKEAN_LIVE_API_URL
- PARKKEAN_LIVE_API_KEY
- PARKKEAN_LIVE_API_KEY_HEADER (default: Authorization)
- PARKKEAN_LIVE_TIMEOUT_MS (default: 5000)

Command-line flags override the environment. Exit status is 0 when the feed
produced at least one lot, 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from parkkean import FeedClient, LiveFeedConfig  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", help="Feed URL (overrides PARKKEAN_LIVE_API_URL)")
    parser.add_argument("--timeout-ms", type=int, help="Request timeout in milliseconds")
    parser.add_argument("--by-alias", action="store_true", help="Emit camelCase keys as the status API does")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.url:
        overrides["url"] = args.url
    if args.timeout_ms is not None and args.timeout_ms > 0:
        overrides["timeout_ms"] = args.timeout_ms
    config = LiveFeedConfig.from_env(**overrides)

    client = FeedClient(config)
    if not client.is_live_mode_configured():
        print("Live mode is not configured (set PARKKEAN_LIVE_API_URL or pass --url).", file=sys.stderr)
        return 1

    lots = await client.fetch_live_snapshot()
    if lots is None:
        print("No data from live feed.", file=sys.stderr)
        return 1

    payload = [lot.model_dump(mode="json", by_alias=args.by_alias) for lot in lots]
    print(json.dumps(payload, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
