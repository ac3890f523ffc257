"""Decode raw transparency bodies into typed payloads."""

from __future__ import annotations

import msgspec

from .errors import MalformedPayloadError
from .models import TransparencyPayload

_DECODER = msgspec.json.Decoder(TransparencyPayload)


def parse_payload(body: str | bytes) -> TransparencyPayload:
    """Decode ``body`` as a :class:`TransparencyPayload`.

    Unknown fields are ignored. Any syntax error or shape mismatch, such as a
    missing ``data`` or ``usdt`` object or a non-object top level, is reported
    as a single :class:`MalformedPayloadError` carrying msgspec's diagnostic.

    Examples
    --------
    >>> payload = parse_payload('{"data": {"usdt": {"totaltokens_eth": 5}}}')
    >>> payload.data.usdt
    {'totaltokens_eth': 5}

    """
    try:
        return _DECODER.decode(body)
    except msgspec.DecodeError as exc:
        raise MalformedPayloadError.from_decode_error(str(exc)) from exc
