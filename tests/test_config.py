from __future__ import annotations

import pytest

from parkkean.config import DEFAULT_TIMEOUT_MS, LiveFeedConfig

_ENV_KEYS = (
    "PARKKEAN_LIVE_API_URL",
    "PARKKEAN_LIVE_API_KEY",
    "PARKKEAN_LIVE_API_KEY_HEADER",
    "PARKKEAN_LIVE_TIMEOUT_MS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = LiveFeedConfig.from_env()

    assert config.url is None
    assert config.api_key is None
    assert config.api_key_header == "Authorization"
    assert config.timeout_ms == DEFAULT_TIMEOUT_MS
    assert config.live_mode_configured is False
    assert config.request_headers() == {}


def test_reads_and_strips_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARKKEAN_LIVE_API_URL", "  https://feed.example.edu/lots ")
    monkeypatch.setenv("PARKKEAN_LIVE_API_KEY", " k3y ")
    monkeypatch.setenv("PARKKEAN_LIVE_API_KEY_HEADER", "X-Api-Key")
    monkeypatch.setenv("PARKKEAN_LIVE_TIMEOUT_MS", "1500")

    config = LiveFeedConfig.from_env()

    assert config.url == "https://feed.example.edu/lots"
    assert config.live_mode_configured is True
    assert config.request_headers() == {"X-Api-Key": "k3y"}
    assert config.timeout_ms == 1500
    assert config.timeout_seconds == 1.5


@pytest.mark.parametrize("raw", ["", "abc", "0", "-20", "1.5"])
def test_invalid_timeout_uses_default(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PARKKEAN_LIVE_TIMEOUT_MS", raw)
    assert LiveFeedConfig.from_env().timeout_ms == DEFAULT_TIMEOUT_MS


def test_blank_values_count_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARKKEAN_LIVE_API_URL", "   ")
    monkeypatch.setenv("PARKKEAN_LIVE_API_KEY_HEADER", "")

    config = LiveFeedConfig.from_env()

    assert config.url is None
    assert config.api_key_header == "Authorization"


def test_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PARKKEAN_LIVE_API_URL", "https://env.example.edu/lots")

    config = LiveFeedConfig.from_env(url="https://override.example.edu/lots", timeout_ms=250)

    assert config.url == "https://override.example.edu/lots"
    assert config.timeout_ms == 250
