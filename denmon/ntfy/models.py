"""ntfy publish request model."""

from __future__ import annotations

import msgspec


class NotificationRequest(msgspec.Struct, kw_only=True, frozen=True):
    """One ntfy message, encoded as the JSON publish body.

    Attributes
    ----------
    topic
        ntfy topic the message is published to.
    title
        Notification title.
    message
        Notification body; rendered as Markdown when ``markdown`` is set.
    markdown
        Enable Markdown rendering in ntfy clients.
    tags
        Tags, which ntfy also maps to emoji (``warning`` shows a warning sign).
    click
        URL opened when the notification is tapped.

    """

    topic: str
    title: str
    message: str
    markdown: bool = False
    tags: tuple[str, ...] = ()
    click: str | None = None

    def encode(self) -> bytes:
        """Return the JSON publish body."""
        return msgspec.json.encode(self)
