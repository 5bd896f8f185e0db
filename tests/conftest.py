import httpx
import pytest

from core.config import XAPIHubConfig
from core.transport import Transport
from core.xapihub_client import XAPIHubClient

BASE_URL = "https://api.xapihub.test"
TOKEN = "secret-token"


class RecordingHandler:
    """httpx.MockTransport handler that remembers every request it served."""

    def __init__(self, respond):
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config():
    return XAPIHubConfig(base_url=BASE_URL, token=TOKEN)


@pytest.fixture
def make_transport(config):
    """Build a Transport whose HTTP traffic goes to ``respond``."""
    transports = []

    def _make(respond):
        handler = RecordingHandler(respond)
        transport = Transport(config, transport=httpx.MockTransport(handler))
        transports.append(transport)
        return transport, handler

    yield _make

    for transport in transports:
        transport.close()


@pytest.fixture
def make_client(config):
    """Build an XAPIHubClient whose HTTP traffic goes to ``respond``.

    ``respond`` is either a callable taking the httpx.Request or a JSON
    payload to answer every request with (status 200).
    """
    clients = []

    def _make(respond):
        if not callable(respond):
            payload = respond
            respond = lambda request: httpx.Response(200, json=payload)  # noqa: E731
        handler = RecordingHandler(respond)
        transport = Transport(config, transport=httpx.MockTransport(handler))
        client = XAPIHubClient(transport)
        clients.append(client)
        return client, handler

    yield _make

    for client in clients:
        client.close()
