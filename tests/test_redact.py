from __future__ import annotations

from pykutuku._redact import REDACTED, redact_for_log, redact_headers


def test_masks_credentials_in_nested_payloads() -> None:
    payload = {
        "username": "emilys",
        "password": "emilyspass",
        "user": {"accessToken": "abc", "refresh_token": "def"},
        "items": [{"token": "x", "id": 1}],
    }

    redacted = redact_for_log(payload)

    assert redacted == {
        "username": "emilys",
        "password": REDACTED,
        "user": {"accessToken": REDACTED, "refresh_token": REDACTED},
        "items": [{"token": REDACTED, "id": 1}],
    }
    assert payload["password"] == "emilyspass"


def test_truncates_long_strings() -> None:
    out = redact_for_log("x" * 20, max_string=5)
    assert out.startswith("xxxxx")
    assert out.endswith("<truncated>")


def test_bytes_are_summarized() -> None:
    assert redact_for_log(b"\x00\x01") == "<bytes:2b>"


def test_headers_keep_scheme() -> None:
    headers = {"Authorization": "Bearer tok-123", "Cookie": "sid=1", "Accept": "application/json"}
    assert redact_headers(headers) == {
        "Authorization": f"Bearer {REDACTED}",
        "Cookie": REDACTED,
        "Accept": "application/json",
    }
