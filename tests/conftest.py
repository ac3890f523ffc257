"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from tests.helpers import RecordingTransport, json_response


@pytest.fixture
def ntfy_ok() -> RecordingTransport:
    """Provide an ntfy transport that accepts every publish."""
    return json_response({"id": "msg-1", "event": "message"})


@pytest.fixture(autouse=True)
def _clean_denmon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep operator environment variables from leaking into tests."""
    for name in (
        "DENMON_NTFY_TOPIC",
        "DENMON_NTFY_SERVER",
        "DENMON_HTTP_TIMEOUT_S",
        "DENMON_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
