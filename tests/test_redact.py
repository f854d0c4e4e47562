from __future__ import annotations

from parkkean._redact import redact_for_log


def test_redact_for_log_redacts_credential_headers() -> None:
    headers = {
        "Authorization": "Bearer abc",
        "X-Api-Key": "k3y",
        "Accept": "application/json",
        "nested": {"token": "t", "cookie": "c"},
    }

    redacted = redact_for_log(headers)

    assert redacted["Authorization"] == "<redacted>"
    assert redacted["X-Api-Key"] == "<redacted>"
    assert redacted["Accept"] == "application/json"
    assert redacted["nested"] == {"token": "<redacted>", "cookie": "<redacted>"}


def test_redact_for_log_honours_custom_header_names() -> None:
    redacted = redact_for_log({"X-Campus-Secret": "s", "Accept": "*/*"}, extra_keys=("x-campus-secret",))

    assert redacted == {"X-Campus-Secret": "<redacted>", "Accept": "*/*"}


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
