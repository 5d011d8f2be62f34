"""Pytest configuration and fixtures."""

import socket
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import httpx
import pytest
from fastapi.testclient import TestClient

from celine.broker_auth.config import BrokerAuthSettings
from celine.broker_auth.delegate import HttpTransport
from celine.broker_auth.stub import StubAuthority, create_app

USER_URI = "http://authority.celine.localhost/api/v1/validUser"
ACL_URI = "http://authority.celine.localhost/api/v1/validACL"


class FakeStructLogger:
    def __init__(self):
        self.calls = []

    def info(self, **kwargs):
        self.calls.append(("info", kwargs))

    def warning(self, **kwargs):
        self.calls.append(("warning", kwargs))

    def error(self, **kwargs):
        self.calls.append(("error", kwargs))


class RecordingFactory:
    """Client factory backed by httpx.MockTransport that records requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []
        self.clients: list[httpx.Client] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def __call__(self, timeout: float) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(self._handle), timeout=timeout)
        self.clients.append(client)
        return client


def status_factory(status_code: int) -> RecordingFactory:
    return RecordingFactory(lambda request: httpx.Response(status_code))


def raising_factory(exc: Exception) -> RecordingFactory:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    return RecordingFactory(handler)


@pytest.fixture
def settings() -> BrokerAuthSettings:
    """Settings pointing at a fake authority."""
    return BrokerAuthSettings(user_uri=USER_URI, acl_uri=ACL_URI, request_timeout=1.0)


@pytest.fixture
def fake_logger() -> FakeStructLogger:
    return FakeStructLogger()


@pytest.fixture
def authority() -> StubAuthority:
    """Permissive stub authority."""
    return StubAuthority()


@pytest.fixture
def stub_transport(authority) -> HttpTransport:
    """Transport whose clients talk to the stub authority app in-process."""
    app = create_app(authority)
    return HttpTransport(timeout=1.0, client_factory=lambda timeout: TestClient(app))


@contextmanager
def drip_server(head: bytes, drip: bytes, interval: float = 0.2) -> Iterator[str]:
    """Raw socket server that sends ``head`` then ``drip`` every ``interval``
    seconds until the test is done, never finishing its response."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5.0)
    stop = threading.Event()

    def serve() -> None:
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            try:
                conn.recv(65536)
                conn.sendall(head)
                while not stop.wait(interval):
                    conn.sendall(drip)
            except OSError:
                pass

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        port = listener.getsockname()[1]
        yield f"http://127.0.0.1:{port}/api/v1/validUser"
    finally:
        stop.set()
        listener.close()
        thread.join(2.0)
