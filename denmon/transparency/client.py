"""HTTP client for the Tether transparency endpoint."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

import httpx

from denmon.errors import ConfigError
from denmon.logging import get_logger, log_debug

from .errors import TransportFailedError, UnexpectedStatusError

if typ.TYPE_CHECKING:
    import types

logger = get_logger(__name__)

TRANSPARENCY_URL = "https://app.tether.to/transparency.json"
HTTP_TIMEOUT_ENV = "DENMON_HTTP_TIMEOUT_S"
# httpx's own default; overridable through DENMON_HTTP_TIMEOUT_S.
DEFAULT_TIMEOUT_S = 5.0


def read_timeout_from_env(default: float = DEFAULT_TIMEOUT_S) -> float:
    """Return ``DENMON_HTTP_TIMEOUT_S`` as a positive float, or ``default``.

    Raises
    ------
    ConfigError
        If the variable is set but not a positive number.

    """
    raw = os.environ.get(HTTP_TIMEOUT_ENV, "")
    if not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError.invalid_float(HTTP_TIMEOUT_ENV, raw) from exc
    if not value > 0:
        raise ConfigError.not_positive(HTTP_TIMEOUT_ENV, value)
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class TransparencyConfig:
    """Configuration for :class:`TransparencyClient`.

    Attributes
    ----------
    endpoint
        URL of the transparency document.
    timeout_s
        Per-request timeout in seconds.

    """

    endpoint: str = TRANSPARENCY_URL
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> TransparencyConfig:
        """Build configuration, reading the timeout from the environment."""
        return cls(timeout_s=read_timeout_from_env())


class TransparencyClient:
    """Fetch the raw transparency document.

    Parameters
    ----------
    config
        Endpoint and timeout settings.
    http_client
        Optional ``httpx.AsyncClient``, mainly for tests. When omitted the
        instance creates and owns its own client.

    """

    def __init__(
        self,
        config: TransparencyConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with configuration."""
        self._config = config or TransparencyConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._config.timeout_s
        )

    @property
    def config(self) -> TransparencyConfig:
        """Return the configuration used by this client."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TransparencyClient:
        """Return the client for use in ``async with`` blocks."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned resources on exit."""
        await self.aclose()

    async def fetch_body(self) -> str:
        """Issue one GET and return the response body text.

        Returns
        -------
        str
            Body of a 2xx response.

        Raises
        ------
        TransportFailedError
            If the request or the body read fails at the transport level.
        UnexpectedStatusError
            If the response status is outside the 2xx range.

        """
        log_debug(logger, "Fetching %s", self._config.endpoint)
        try:
            response = await self._client.get(self._config.endpoint)
        except httpx.RequestError as exc:
            raise TransportFailedError.from_request_error(str(exc)) from exc

        if not response.is_success:
            raise UnexpectedStatusError(response.status_code)

        # The body has already been read; decoding failures surfaced above.
        return response.text
