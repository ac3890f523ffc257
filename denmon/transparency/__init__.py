"""Tether transparency feed: fetch, parse and supply aggregation.

Quick example::

    >>> from denmon.transparency import aggregate_supply
    >>> aggregate_supply({"totaltokens_eth": "2.5", "totaltokens_tron": 4})
    6.5
"""

from __future__ import annotations

from .client import TRANSPARENCY_URL, TransparencyClient, TransparencyConfig
from .errors import (
    AggregateError,
    FetchError,
    InvalidFieldValueError,
    InvalidNumericStringError,
    MalformedPayloadError,
    NoMatchingFieldsError,
    NonFiniteValueError,
    NumberOutOfRangeError,
    ParseError,
    SupplyValueError,
    TransportFailedError,
    UnexpectedStatusError,
    UnsupportedValueTypeError,
)
from .models import JSONValue, TransparencyData, TransparencyPayload
from .parsing import parse_payload
from .supply import SUPPLY_KEY_PREFIX, aggregate_supply, coerce_supply_value

__all__ = [
    "SUPPLY_KEY_PREFIX",
    "TRANSPARENCY_URL",
    "AggregateError",
    "FetchError",
    "InvalidFieldValueError",
    "InvalidNumericStringError",
    "JSONValue",
    "MalformedPayloadError",
    "NoMatchingFieldsError",
    "NonFiniteValueError",
    "NumberOutOfRangeError",
    "ParseError",
    "SupplyValueError",
    "TransparencyClient",
    "TransparencyConfig",
    "TransparencyData",
    "TransparencyPayload",
    "TransportFailedError",
    "UnexpectedStatusError",
    "UnsupportedValueTypeError",
    "aggregate_supply",
    "coerce_supply_value",
    "parse_payload",
]
