"""Configuration for the ntfy dispatcher."""

from __future__ import annotations

import dataclasses
import os

from denmon.transparency.client import DEFAULT_TIMEOUT_S, read_timeout_from_env

NTFY_SERVER_ENV = "DENMON_NTFY_SERVER"
DEFAULT_NTFY_SERVER = "https://ntfy.sh"


@dataclasses.dataclass(frozen=True, slots=True)
class NtfyConfig:
    """Settings for :class:`~denmon.ntfy.dispatcher.NtfyDispatcher`.

    Attributes
    ----------
    server
        Base URL of the ntfy server. Messages are published as JSON to the
        server root, with the topic carried in the body.
    timeout_s
        Request timeout in seconds.

    """

    server: str = DEFAULT_NTFY_SERVER
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> NtfyConfig:
        """Build configuration from environment variables.

        Reads ``DENMON_NTFY_SERVER`` (default ``https://ntfy.sh``) and
        ``DENMON_HTTP_TIMEOUT_S``.

        Raises
        ------
        ConfigError
            If the timeout is not a positive number.

        """
        server = os.environ.get(NTFY_SERVER_ENV, "").strip() or DEFAULT_NTFY_SERVER
        return cls(server=server, timeout_s=read_timeout_from_env())
