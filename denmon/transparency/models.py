"""Typed structures for the Tether transparency document."""

from __future__ import annotations

import typing as typ

import msgspec

# Python values msgspec produces for untyped JSON. ``bool`` is listed
# separately from ``int`` because callers must test for it first.
JSONValue: typ.TypeAlias = (
    bool | int | float | str | list[typ.Any] | dict[str, typ.Any] | None
)


class TransparencyData(msgspec.Struct):
    """The ``data`` object of the transparency document.

    Attributes
    ----------
    usdt
        Per-chain USDT figures keyed by arbitrary field names such as
        ``totaltokens_eth``. Values are left as decoded (see :data:`JSONValue`)
        and coerced later.

    """

    usdt: dict[str, typ.Any]


class TransparencyPayload(msgspec.Struct):
    """Decoded transparency document, ``{"data": {"usdt": {...}}}``."""

    data: TransparencyData
