"""Aggregate USDT supply figures from the transparency document.

Every ``data.usdt`` key beginning with ``totaltokens`` contributes to the
total. Values are coerced strictly: a field whose type changes upstream fails
the whole aggregation instead of being skipped.
"""

from __future__ import annotations

import collections.abc as cabc
import math
import typing as typ

from .errors import (
    InvalidFieldValueError,
    InvalidNumericStringError,
    NoMatchingFieldsError,
    NonFiniteValueError,
    NumberOutOfRangeError,
    SupplyValueError,
    UnsupportedValueTypeError,
)

if typ.TYPE_CHECKING:
    from .models import JSONValue

SUPPLY_KEY_PREFIX = "totaltokens"


def _ensure_finite(value: float) -> float:
    if not math.isfinite(value):
        raise NonFiniteValueError(value)
    return value


def _json_type_name(value: object) -> str:
    match value:
        case list():
            return "array"
        case dict():
            return "object"
        case None:
            return "null"
        case _:
            return type(value).__name__


def _parse_float_literal(text: str) -> float:
    """Parse ``text`` as a bare float literal.

    ``float()`` tolerates surrounding whitespace, ``_`` digit separators and
    non-ASCII Unicode digits; all of them are rejected here.
    """
    try:
        if text != text.strip() or "_" in text or not text.isascii():
            msg = f"not a float literal: {text!r}"
            raise ValueError(msg)  # noqa: TRY301 - share the wrapping below
        return float(text)
    except ValueError as exc:
        raise InvalidNumericStringError(text) from exc


def coerce_supply_value(value: JSONValue) -> float:
    """Convert one supply field to a finite float.

    Parameters
    ----------
    value
        A decoded JSON value.

    Returns
    -------
    float
        The numeric value.

    Raises
    ------
    NumberOutOfRangeError
        If a JSON integer is too large for a float.
    InvalidNumericStringError
        If a string is not a float literal.
    UnsupportedValueTypeError
        If the value is a boolean, array, object or null.
    NonFiniteValueError
        If the result is NaN or infinite.

    """
    # bool is an int subclass and must be rejected before the numeric case.
    if isinstance(value, bool):
        raise UnsupportedValueTypeError("bool")
    if isinstance(value, int):
        try:
            return _ensure_finite(float(value))
        except OverflowError as exc:
            raise NumberOutOfRangeError(str(value)) from exc
    if isinstance(value, float):
        return _ensure_finite(value)
    if isinstance(value, str):
        return _ensure_finite(_parse_float_literal(value))
    raise UnsupportedValueTypeError(_json_type_name(value))


def aggregate_supply(fields: cabc.Mapping[str, JSONValue]) -> float:
    """Sum every ``totaltokens*`` field in ``fields``.

    The prefix match is case-sensitive and accepts any suffix, so both
    ``totaltokens1`` and ``totaltokensEth`` qualify.

    Raises
    ------
    InvalidFieldValueError
        On the first selected field that fails coercion; the specific
        :class:`SupplyValueError` is chained as the cause.
    NoMatchingFieldsError
        If no key carries the prefix.

    Examples
    --------
    >>> aggregate_supply({"totaltokens1": "1000000.5", "totaltokensEth": 500000})
    1500000.5

    """
    total = 0.0
    seen = False
    for key, value in fields.items():
        if not key.startswith(SUPPLY_KEY_PREFIX):
            continue
        seen = True
        try:
            total += coerce_supply_value(value)
        except SupplyValueError as exc:
            raise InvalidFieldValueError(key, exc) from exc

    if not seen:
        raise NoMatchingFieldsError
    return total

