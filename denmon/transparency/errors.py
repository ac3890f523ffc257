"""Errors raised while fetching, parsing and aggregating transparency data."""

from __future__ import annotations

from denmon.errors import DenmonError


class FetchError(DenmonError):
    """Base class for failures retrieving the transparency document."""


class TransportFailedError(FetchError):
    """Raised when the request fails before a usable response arrives.

    Covers DNS, connection, timeout and body-read failures. The underlying
    ``httpx`` exception is kept as ``__cause__``.
    """

    @classmethod
    def from_request_error(cls, detail: str) -> TransportFailedError:
        """Return an error describing a transport failure."""
        return cls(f"failed to fetch transparency data: {detail}")


class UnexpectedStatusError(FetchError):
    """Raised when the transparency endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int) -> None:
        """Initialise with the HTTP status code that was returned."""
        self.status_code = status_code
        super().__init__(
            f"transparency endpoint returned unexpected status {status_code}"
        )


class ParseError(DenmonError):
    """Base class for failures decoding the transparency document."""


class MalformedPayloadError(ParseError):
    """Raised when the body is not JSON of the expected shape."""

    @classmethod
    def from_decode_error(cls, detail: str) -> MalformedPayloadError:
        """Return an error wrapping the decoder's diagnostic."""
        return cls(f"failed to parse transparency payload: {detail}")


class AggregateError(DenmonError):
    """Base class for failures summing supply fields."""


class NoMatchingFieldsError(AggregateError):
    """Raised when no ``totaltokens*`` field is present.

    An empty selection is never reported as a zero supply.
    """

    def __init__(self) -> None:
        """Initialise with a fixed message."""
        super().__init__("no supply fields found in transparency payload")


class InvalidFieldValueError(AggregateError):
    """Raised when a selected field cannot be coerced to a finite float.

    Attributes
    ----------
    key
        Payload key whose value was rejected. The specific
        :class:`SupplyValueError` is available as ``__cause__``.

    """

    def __init__(self, key: str, reason: SupplyValueError) -> None:
        """Initialise with the offending key and the coercion failure."""
        self.key = key
        self.reason = reason
        super().__init__(f"invalid supply value for key {key}")


class SupplyValueError(DenmonError):
    """Base class for per-value coercion failures."""


class NumberOutOfRangeError(SupplyValueError):
    """Raised when a JSON number cannot be represented as a float."""

    def __init__(self, value: str) -> None:
        """Initialise with the textual form of the number."""
        self.value = value
        super().__init__(f"number exceeds f64 range: {value}")


class InvalidNumericStringError(SupplyValueError):
    """Raised when a string value is not a float literal."""

    def __init__(self, value: str) -> None:
        """Initialise with the string that failed to parse."""
        self.value = value
        super().__init__(f"failed to parse string as number: {value!r}")


class UnsupportedValueTypeError(SupplyValueError):
    """Raised for booleans, arrays, objects and nulls."""

    def __init__(self, type_name: str) -> None:
        """Initialise with the JSON type name of the rejected value."""
        self.type_name = type_name
        super().__init__(f"unsupported value type {type_name}")


class NonFiniteValueError(SupplyValueError):
    """Raised when coercion yields NaN or an infinity."""

    def __init__(self, value: float) -> None:
        """Initialise with the non-finite value."""
        self.value = value
        super().__init__(f"non-finite number encountered: {value}")
