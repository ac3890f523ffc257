"""Async ntfy publisher built on httpx."""

from __future__ import annotations

import typing as typ

import httpx

from denmon.logging import get_logger, log_debug

from .config import NtfyConfig
from .errors import BuildDispatcherFailedError, SendFailedError

if typ.TYPE_CHECKING:
    import types

    from .models import NotificationRequest

logger = get_logger(__name__)

_ALLOWED_SCHEMES = frozenset({"http", "https"})


def _publish_url(server: str) -> httpx.URL:
    """Return the JSON publish URL (the server root) for ``server``."""
    url = httpx.URL(server)
    if url.scheme not in _ALLOWED_SCHEMES:
        msg = f"unsupported scheme {url.scheme!r}"
        raise ValueError(msg)
    if not url.host:
        msg = "missing host"
        raise ValueError(msg)
    return url.join("/")


class NtfyDispatcher:
    """Publish :class:`NotificationRequest` messages to an ntfy server.

    Parameters
    ----------
    config
        Server and timeout settings.
    http_client
        Optional ``httpx.AsyncClient`` for tests. When omitted the instance
        creates and owns its own client.

    Raises
    ------
    BuildDispatcherFailedError
        If ``config.server`` is not an absolute http(s) URL.

    """

    def __init__(
        self,
        config: NtfyConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Validate the server URL and prepare the HTTP client."""
        self._config = config or NtfyConfig()
        try:
            self._url = _publish_url(self._config.server)
        except (httpx.InvalidURL, ValueError) as exc:
            raise BuildDispatcherFailedError.invalid_server(
                self._config.server, str(exc)
            ) from exc

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._config.timeout_s
        )

    @property
    def url(self) -> httpx.URL:
        """Return the URL messages are published to."""
        return self._url

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> NtfyDispatcher:
        """Return the dispatcher for use in ``async with`` blocks."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close owned resources on exit."""
        await self.aclose()

    async def send(self, request: NotificationRequest) -> None:
        """Publish one notification.

        Raises
        ------
        SendFailedError
            If the request fails in transit or ntfy answers with a non-2xx
            status. Nothing is retried.

        """
        log_debug(logger, "Publishing to topic %s via %s", request.topic, self._url)
        try:
            response = await self._client.post(
                self._url,
                content=request.encode(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as exc:
            raise SendFailedError.network_error(str(exc)) from exc

        if not response.is_success:
            raise SendFailedError.http_error(response.status_code)


def build_dispatcher(
    config: NtfyConfig | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> NtfyDispatcher:
    """Build an :class:`NtfyDispatcher`, defaulting to ``https://ntfy.sh``."""
    return NtfyDispatcher(config, http_client=http_client)
