"""denmon: stablecoin supply monitoring with ntfy alerts.

The package checks the Tether transparency feed once per invocation,
aggregates every ``totaltokens*`` figure into a single USDT supply and
publishes an ntfy alert when that supply falls below a configured minimum.

Quick example::

    >>> import asyncio
    >>> from denmon.supply_check import RunConfig, check_tether_supply
    >>> config = RunConfig(ntfy_topic="usdt-alerts", supply_min=1.5e11)
    >>> asyncio.run(check_tether_supply(config))  # doctest: +SKIP
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
