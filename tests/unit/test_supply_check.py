"""Unit tests for the supply check pipeline and threshold notifier."""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

import pytest

from denmon.errors import ConfigError
from denmon.ntfy import NtfyConfig, SendFailedError
from denmon.supply_check import (
    NOTIFICATION_TITLE,
    SUPPLY_CHART_URL,
    RunConfig,
    build_notification,
    check_tether_supply,
    fetch_usdt_supply,
    is_below_threshold,
    notify_if_below_threshold,
)
from denmon.transparency import (
    InvalidFieldValueError,
    MalformedPayloadError,
    NoMatchingFieldsError,
    UnexpectedStatusError,
)
from tests.helpers import (
    TEST_TRANSPARENCY_URL,
    json_response,
    ntfy_dispatcher,
    text_response,
    transparency_client,
)

if typ.TYPE_CHECKING:
    from tests.helpers import RecordingTransport

_EXAMPLE_PAYLOAD = {
    "data": {"usdt": {"totaltokens1": "1000000.5", "totaltokensEth": 500000}}
}


class TestRunConfig:
    """Tests for RunConfig validation."""

    def test_holds_topic_and_threshold(self) -> None:
        """Valid inputs are stored unchanged."""
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=2e6)
        assert config.ntfy_topic == "usdt-alerts"
        assert config.supply_min == 2e6

    def test_rejects_blank_topic(self) -> None:
        """A blank topic is a configuration error."""
        with pytest.raises(ConfigError, match="topic"):
            RunConfig(ntfy_topic="   ", supply_min=1.0)

    @pytest.mark.parametrize("supply_min", [float("nan"), float("inf")])
    def test_rejects_non_finite_threshold(self, supply_min: float) -> None:
        """NaN and infinite thresholds are configuration errors."""
        with pytest.raises(ConfigError):
            RunConfig(ntfy_topic="usdt-alerts", supply_min=supply_min)


@pytest.mark.parametrize(
    ("supply", "supply_min", "expected"),
    [
        pytest.param(1999999.0, 2000000.0, True, id="one-below"),
        pytest.param(2000000.0, 2000000.0, False, id="equal"),
        pytest.param(2000001.0, 2000000.0, False, id="above"),
    ],
)
def test_threshold_is_strict(
    supply: float, supply_min: float, expected: bool
) -> None:
    """Only a supply strictly below the minimum triggers an alert."""
    assert is_below_threshold(supply, supply_min) is expected


def test_build_notification_fields() -> None:
    """The alert carries the fixed title, tag and chart link."""
    request = build_notification("usdt-alerts", "123,456,789")

    assert request.topic == "usdt-alerts"
    assert request.title == NOTIFICATION_TITLE == "USDT supply decreased"
    assert request.message == "Current supply: 123,456,789"
    assert request.markdown is True
    assert request.tags == ("warning",)
    assert request.click == SUPPLY_CHART_URL


class TestNotifyIfBelowThreshold:
    """Tests for notify_if_below_threshold."""

    @pytest.mark.asyncio
    async def test_equal_supply_sends_nothing(self, ntfy_ok: RecordingTransport) -> None:
        """Supply equal to the minimum performs no network activity."""
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=2000000.0)
        try:
            sent = await notify_if_below_threshold(
                2000000.0, config, dispatcher=dispatcher
            )
        finally:
            await dispatcher.aclose()

        assert sent is False
        assert ntfy_ok.requests == []

    @pytest.mark.asyncio
    async def test_one_unit_below_sends_once(self, ntfy_ok: RecordingTransport) -> None:
        """Supply one unit below the minimum sends exactly one alert."""
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=2000000.0)
        try:
            sent = await notify_if_below_threshold(
                1999999.0, config, dispatcher=dispatcher
            )
        finally:
            await dispatcher.aclose()

        assert sent is True
        bodies = ntfy_ok.json_bodies()
        assert len(bodies) == 1
        assert bodies[0]["topic"] == "usdt-alerts"
        assert bodies[0]["message"] == "Current supply: 1,999,999"

    @pytest.mark.asyncio
    async def test_no_dispatcher_is_built_above_threshold(self) -> None:
        """An invalid server is never touched when no alert is due."""
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=10.0)
        sent = await notify_if_below_threshold(
            11.0, config, ntfy_config=NtfyConfig(server="not a url")
        )
        assert sent is False

    @pytest.mark.asyncio
    async def test_send_failure_propagates(self) -> None:
        """A rejected publish surfaces as SendFailedError."""
        transport = json_response({}, status_code=HTTPStatus.BAD_GATEWAY)
        dispatcher = ntfy_dispatcher(transport)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=10.0)
        try:
            with pytest.raises(SendFailedError):
                await notify_if_below_threshold(1.0, config, dispatcher=dispatcher)
        finally:
            await dispatcher.aclose()


@pytest.mark.asyncio
async def test_fetch_usdt_supply_uses_given_client() -> None:
    """The supplied client fetches once and its body is aggregated."""
    transport = json_response(_EXAMPLE_PAYLOAD)
    client = transparency_client(transport)
    try:
        supply = await fetch_usdt_supply(client)
    finally:
        await client.aclose()

    assert supply == 1500000.5
    assert len(transport.requests) == 1
    assert str(transport.requests[0].url) == TEST_TRANSPARENCY_URL


class TestCheckTetherSupply:
    """Tests for the end-to-end check_tether_supply pipeline."""

    @pytest.mark.asyncio
    async def test_below_threshold_dispatches_formatted_supply(
        self, ntfy_ok: RecordingTransport
    ) -> None:
        """The documented example aggregates to 1500000.5 and alerts once."""
        client = transparency_client(json_response(_EXAMPLE_PAYLOAD))
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=2000000.0)
        try:
            outcome = await check_tether_supply(
                config, transparency_client=client, dispatcher=dispatcher
            )
        finally:
            await client.aclose()
            await dispatcher.aclose()

        assert outcome.supply == 1500000.5
        assert outcome.supply_formatted == "1,500,001"
        assert outcome.notified is True
        bodies = ntfy_ok.json_bodies()
        assert len(bodies) == 1
        assert "1,500,001" in bodies[0]["message"]

    @pytest.mark.asyncio
    async def test_above_threshold_completes_without_alert(
        self, ntfy_ok: RecordingTransport
    ) -> None:
        """A healthy supply completes the run with no notification."""
        client = transparency_client(json_response(_EXAMPLE_PAYLOAD))
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=1000000.0)
        try:
            outcome = await check_tether_supply(
                config, transparency_client=client, dispatcher=dispatcher
            )
        finally:
            await client.aclose()
            await dispatcher.aclose()

        assert outcome.notified is False
        assert ntfy_ok.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("transport", "error_type"),
        [
            pytest.param(
                text_response("boom", status_code=HTTPStatus.INTERNAL_SERVER_ERROR),
                UnexpectedStatusError,
                id="http-500",
            ),
            pytest.param(text_response("<html>"), MalformedPayloadError, id="html"),
            pytest.param(
                json_response({"data": {"usdt": {"other": "1"}}}),
                NoMatchingFieldsError,
                id="no-fields",
            ),
            pytest.param(
                json_response({"data": {"usdt": {"totaltokens1": "abc"}}}),
                InvalidFieldValueError,
                id="bad-value",
            ),
        ],
    )
    async def test_stage_failures_abort_before_notifying(
        self,
        ntfy_ok: RecordingTransport,
        transport: RecordingTransport,
        error_type: type[Exception],
    ) -> None:
        """Any stage failure propagates and no notification is attempted."""
        client = transparency_client(transport)
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=1e12)
        try:
            with pytest.raises(error_type):
                await check_tether_supply(
                    config, transparency_client=client, dispatcher=dispatcher
                )
        finally:
            await client.aclose()
            await dispatcher.aclose()

        assert ntfy_ok.requests == []

    @pytest.mark.asyncio
    async def test_http_500_reports_status(self, ntfy_ok: RecordingTransport) -> None:
        """An HTTP 500 from the feed is reported with its status code."""
        client = transparency_client(text_response("", status_code=500))
        dispatcher = ntfy_dispatcher(ntfy_ok)
        config = RunConfig(ntfy_topic="usdt-alerts", supply_min=1e12)
        try:
            with pytest.raises(UnexpectedStatusError) as exc:
                await check_tether_supply(
                    config, transparency_client=client, dispatcher=dispatcher
                )
        finally:
            await client.aclose()
            await dispatcher.aclose()

        assert exc.value.status_code == 500
        assert ntfy_ok.requests == []
