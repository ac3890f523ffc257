"""HTTP fakes and client builders shared by unit and feature tests."""

from __future__ import annotations

import dataclasses
import json
import typing as typ

import httpx

from denmon.ntfy import NtfyConfig, NtfyDispatcher
from denmon.transparency import TransparencyClient, TransparencyConfig

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TEST_TRANSPARENCY_URL = "https://transparency.example.test/transparency.json"
TEST_NTFY_SERVER = "https://ntfy.example.test"


@dataclasses.dataclass(slots=True)
class RecordingTransport:
    """Serve canned responses and record every request received.

    ``responder`` is called with each request; it returns the response or
    raises an ``httpx`` exception to simulate transport failures.
    """

    responder: cabc.Callable[[httpx.Request], httpx.Response]
    requests: list[httpx.Request] = dataclasses.field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Record ``request`` and delegate to the responder."""
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        """Return an ``httpx.AsyncClient`` backed by this transport."""
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def json_bodies(self) -> list[dict[str, typ.Any]]:
        """Decode the JSON bodies of the recorded requests."""
        return [json.loads(request.content.decode("utf-8")) for request in self.requests]


def json_response(payload: object, status_code: int = 200) -> RecordingTransport:
    """Return a transport that always answers with ``payload``."""
    return RecordingTransport(
        lambda _request: httpx.Response(status_code=status_code, json=payload)
    )


def text_response(body: str, status_code: int = 200) -> RecordingTransport:
    """Return a transport that always answers with a raw text body."""
    return RecordingTransport(
        lambda _request: httpx.Response(status_code=status_code, text=body)
    )


def failing_transport(exc_type: type[httpx.RequestError]) -> RecordingTransport:
    """Return a transport whose requests fail with ``exc_type``."""

    def _raise(request: httpx.Request) -> httpx.Response:
        msg = "simulated transport failure"
        raise exc_type(msg, request=request)

    return RecordingTransport(_raise)


def transparency_client(transport: RecordingTransport) -> TransparencyClient:
    """Build a transparency client routed through ``transport``."""
    return TransparencyClient(
        TransparencyConfig(endpoint=TEST_TRANSPARENCY_URL),
        http_client=transport.client(),
    )


def ntfy_dispatcher(transport: RecordingTransport) -> NtfyDispatcher:
    """Build an ntfy dispatcher routed through ``transport``."""
    return NtfyDispatcher(
        NtfyConfig(server=TEST_NTFY_SERVER),
        http_client=transport.client(),
    )
