"""Pytest configuration and fixtures."""

import pytest
from minihttp.connection import RawResponse


class FakeConnection:
    """Stands in for minihttp.connection.Connection and records what it was given."""

    def __init__(self, responder, host, port, tls=False, verify=True,
                 read_timeout=30, connect_timeout=10):
        self.responder = responder
        self.host = host
        self.port = port
        self.tls = tls
        self.verify = verify
        self.read_timeout = read_timeout
        self.connect_timeout = connect_timeout
        self.requests = []
        self.closed = False

    def dispatch(self, request):
        self.requests.append(request)
        return self.responder(request)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FakeTransport:
    """Connection factory that replays a canned RawResponse or raises an error."""

    def __init__(self):
        self.connections = []
        self.status = 200
        self.body = b""
        self.headers = []
        self.error = None

    def respond(self, status=200, body=b"", headers=None):
        self.status = status
        self.body = body.encode() if isinstance(body, str) else body
        self.headers = list(headers or [])
        return self

    def fail(self, error):
        self.error = error
        return self

    def _reply(self, request):
        if self.error is not None:
            raise self.error
        return RawResponse(self.status, "", "1.1", self.headers, self.body)

    def __call__(self, host, port, **kwargs):
        conn = FakeConnection(self._reply, host, port, **kwargs)
        self.connections.append(conn)
        return conn

    @property
    def last(self):
        return self.connections[-1]

    @property
    def last_request(self):
        return self.connections[-1].requests[-1]


@pytest.fixture
def transport():
    """Fake transport factory to hand to Client(connection_factory=...)."""
    return FakeTransport()


@pytest.fixture
def raw_json_response():
    """A RawResponse carrying a small JSON document."""
    return RawResponse(
        status=200,
        reason="OK",
        http_version="1.1",
        headers=[("Content-Type", "application/json")],
        body=b'{"test": true}',
    )


@pytest.fixture
def mock_socket(mocker):
    """Create a mock socket."""
    return mocker.MagicMock()
