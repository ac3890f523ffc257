"""Command-line entry point for denmon.

Usage:
    denmon check-tether-supply --ntfy-topic usdt-alerts --supply-min 1.5e11

Environment variables:
    DENMON_NTFY_TOPIC     - Default for ``--ntfy-topic``
    DENMON_NTFY_SERVER    - ntfy server (default: https://ntfy.sh)
    DENMON_HTTP_TIMEOUT_S - HTTP timeout in seconds (default: 5)
    DENMON_LOG_LEVEL      - Log level (default: INFO)
"""

from __future__ import annotations

import asyncio
import sys
import typing as typ

from cyclopts import App, Parameter

from denmon import __version__
from denmon.errors import DenmonError, render_error_chain
from denmon.logging import (
    LOG_LEVEL_ENV,
    configure_logging_from_env,
    get_logger,
    log_error,
    log_warning,
)
from denmon.ntfy import NtfyConfig
from denmon.supply_check import RunConfig, check_tether_supply
from denmon.transparency import TransparencyConfig

logger = get_logger(__name__)

app = App(
    name="denmon",
    help="Monitor stablecoin supply and alert through ntfy",
    version=__version__,
)


async def _run_check(ntfy_topic: str, supply_min: float) -> None:
    config = RunConfig(ntfy_topic=ntfy_topic, supply_min=supply_min)
    await check_tether_supply(
        config,
        transparency_config=TransparencyConfig.from_env(),
        ntfy_config=NtfyConfig.from_env(),
    )


def run_check_tether_supply(ntfy_topic: str, supply_min: float) -> int:
    """Run one supply check and translate the outcome into an exit code.

    Returns
    -------
    int
        0 when the check completed, whether or not an alert was sent;
        1 when any stage failed.

    """
    try:
        asyncio.run(_run_check(ntfy_topic, supply_min))
    except DenmonError as exc:
        log_error(logger, "Supply check failed: %s", render_error_chain(exc))
        return 1
    return 0


@app.command(name="check-tether-supply")
def check_tether_supply_command(
    *,
    ntfy_topic: typ.Annotated[
        str, Parameter(name=["--ntfy-topic", "-n"], env_var="DENMON_NTFY_TOPIC")
    ],
    supply_min: typ.Annotated[float, Parameter(name=["--supply-min", "-s"])],
) -> int:
    """Alert when the aggregated USDT supply drops below a minimum.

    Parameters
    ----------
    ntfy_topic
        ntfy topic that receives the alert.
    supply_min
        Alert when the supply is strictly below this value.

    """
    return run_check_tether_supply(ntfy_topic, supply_min)


def main() -> int:
    """Entry point for the CLI."""
    normalized_level, invalid_level = configure_logging_from_env()
    if invalid_level:
        log_warning(
            logger,
            "Invalid %s value, falling back to %s",
            LOG_LEVEL_ENV,
            normalized_level,
        )
    return app()


if __name__ == "__main__":
    sys.exit(main())
