"""Check the USDT supply and alert through ntfy when it falls too low.

The run is a single forward pipeline: fetch the transparency document, parse
it, aggregate the ``totaltokens*`` fields, then notify when the total is
strictly below the configured minimum. The first failure aborts the run.

Usage
-----
>>> import asyncio
>>> config = RunConfig(ntfy_topic="usdt-alerts", supply_min=100_000_000_000)
>>> outcome = asyncio.run(check_tether_supply(config))  # doctest: +SKIP
>>> outcome.notified  # doctest: +SKIP
False

"""

from __future__ import annotations

import dataclasses
import math

from denmon.errors import ConfigError
from denmon.formatting import format_supply
from denmon.logging import get_logger, log_info
from denmon.ntfy import NotificationRequest, NtfyConfig, NtfyDispatcher
from denmon.ntfy import build_dispatcher as build_ntfy_dispatcher
from denmon.transparency import (
    TransparencyClient,
    TransparencyConfig,
    aggregate_supply,
    parse_payload,
)

logger = get_logger(__name__)

NOTIFICATION_TITLE = "USDT supply decreased"
NOTIFICATION_TAGS = ("warning",)
SUPPLY_CHART_URL = (
    "https://studio.glassnode.com/charts/supply.Current?a=USDT&category=Supply"
)


@dataclasses.dataclass(frozen=True, slots=True)
class RunConfig:
    """Inputs for one supply check.

    Attributes
    ----------
    ntfy_topic
        Topic the alert is published to.
    supply_min
        Alert threshold. A supply equal to it does not alert.

    """

    ntfy_topic: str
    supply_min: float

    def __post_init__(self) -> None:
        """Reject blank topics and non-finite thresholds."""
        if not self.ntfy_topic.strip():
            raise ConfigError.empty("ntfy topic")
        if not math.isfinite(self.supply_min):
            msg = f"supply minimum must be finite, got: {self.supply_min}"
            raise ConfigError(msg)


@dataclasses.dataclass(frozen=True, slots=True)
class SupplyCheckOutcome:
    """Result of a completed supply check."""

    supply: float
    supply_formatted: str
    notified: bool


def is_below_threshold(supply: float, supply_min: float) -> bool:
    """Return whether ``supply`` is strictly below ``supply_min``."""
    return supply < supply_min


def build_notification(topic: str, supply_formatted: str) -> NotificationRequest:
    """Build the low-supply alert for ``topic``."""
    return NotificationRequest(
        topic=topic,
        title=NOTIFICATION_TITLE,
        message=f"Current supply: {supply_formatted}",
        markdown=True,
        tags=NOTIFICATION_TAGS,
        click=SUPPLY_CHART_URL,
    )


async def fetch_usdt_supply(client: TransparencyClient) -> float:
    """Fetch the transparency document through ``client`` and sum its supply.

    Raises
    ------
    FetchError
        If the document could not be retrieved.
    ParseError
        If the body is not a transparency document.
    AggregateError
        If no supply field is present or one cannot be coerced.

    """
    body = await client.fetch_body()
    payload = parse_payload(body)
    return aggregate_supply(payload.data.usdt)


async def notify_if_below_threshold(
    supply: float,
    config: RunConfig,
    *,
    dispatcher: NtfyDispatcher | None = None,
    ntfy_config: NtfyConfig | None = None,
) -> bool:
    """Send one alert when ``supply`` is below ``config.supply_min``.

    Parameters
    ----------
    supply
        Aggregated supply.
    config
        Topic and threshold for this run.
    dispatcher
        Dispatcher to publish through. When omitted one is built from
        ``ntfy_config`` only if an alert is due, and closed afterwards.
    ntfy_config
        Server settings for a dispatcher built here.

    Returns
    -------
    bool
        ``True`` when a notification was sent.

    Raises
    ------
    BuildDispatcherFailedError
        If a dispatcher was needed and could not be built.
    SendFailedError
        If the notification could not be delivered.

    """
    if not is_below_threshold(supply, config.supply_min):
        return False

    log_info(logger, "Sending notification")
    request = build_notification(config.ntfy_topic, format_supply(supply))
    if dispatcher is not None:
        await dispatcher.send(request)
        return True

    async with build_ntfy_dispatcher(ntfy_config) as owned:
        await owned.send(request)
    return True


async def check_tether_supply(
    config: RunConfig,
    *,
    transparency_client: TransparencyClient | None = None,
    transparency_config: TransparencyConfig | None = None,
    dispatcher: NtfyDispatcher | None = None,
    ntfy_config: NtfyConfig | None = None,
) -> SupplyCheckOutcome:
    """Run the full fetch, parse, aggregate and notify pipeline once.

    Clients passed in are used as-is and left open; clients created here are
    closed before returning.

    Raises
    ------
    DenmonError
        The first failure of any stage, with its cause chained.

    """
    if transparency_client is not None:
        supply = await fetch_usdt_supply(transparency_client)
    else:
        async with TransparencyClient(transparency_config) as client:
            supply = await fetch_usdt_supply(client)

    supply_formatted = format_supply(supply)
    log_info(logger, "Current supply: %s", supply_formatted)

    notified = await notify_if_below_threshold(
        supply,
        config,
        dispatcher=dispatcher,
        ntfy_config=ntfy_config,
    )
    return SupplyCheckOutcome(
        supply=supply,
        supply_formatted=supply_formatted,
        notified=notified,
    )
