"""Human-readable rendering of supply figures."""

from __future__ import annotations

import decimal

# Enough digits to quantize any finite float without InvalidOperation.
_CONTEXT = decimal.Context(prec=400, rounding=decimal.ROUND_HALF_UP)
_WHOLE = decimal.Decimal(1)


def format_supply(value: float) -> str:
    """Render ``value`` with ``,`` thousands separators and no decimals.

    Halves round away from zero.

    Examples
    --------
    >>> format_supply(1500000.5)
    '1,500,001'
    >>> format_supply(123456789.2)
    '123,456,789'
    >>> format_supply(-0.4)
    '0'

    """
    rounded = decimal.Decimal(value).quantize(_WHOLE, context=_CONTEXT)
    if rounded.is_zero():
        # Drop the sign so -0.4 renders as "0".
        rounded = rounded.copy_abs()
    return f"{rounded:,f}"
