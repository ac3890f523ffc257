"""ntfy push-notification dispatch."""

from __future__ import annotations

from .config import DEFAULT_NTFY_SERVER, NtfyConfig
from .dispatcher import NtfyDispatcher, build_dispatcher
from .errors import BuildDispatcherFailedError, NotifyError, SendFailedError
from .models import NotificationRequest

__all__ = [
    "DEFAULT_NTFY_SERVER",
    "BuildDispatcherFailedError",
    "NotificationRequest",
    "NotifyError",
    "NtfyConfig",
    "NtfyDispatcher",
    "SendFailedError",
    "build_dispatcher",
]
