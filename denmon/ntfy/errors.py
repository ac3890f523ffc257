"""Errors raised while dispatching ntfy notifications."""

from __future__ import annotations

from denmon.errors import DenmonError


class NotifyError(DenmonError):
    """Base class for notification failures."""


class BuildDispatcherFailedError(NotifyError):
    """Raised when a dispatcher cannot be built for the configured server."""

    @classmethod
    def invalid_server(cls, server: str, detail: str) -> BuildDispatcherFailedError:
        """Return an error for an unusable ntfy server URL."""
        return cls(f"failed to build ntfy dispatcher for {server!r}: {detail}")


class SendFailedError(NotifyError):
    """Raised when a notification could not be delivered.

    Attributes
    ----------
    status_code
        HTTP status returned by the server, when one was received.

    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int) -> SendFailedError:
        """Return an error for non-2xx ntfy responses."""
        return cls(
            f"failed to send notification: ntfy HTTP {status_code}",
            status_code=status_code,
        )

    @classmethod
    def network_error(cls, detail: str) -> SendFailedError:
        """Return an error for DNS, connection, TLS or timeout failures."""
        return cls(f"failed to send notification: {detail}")
