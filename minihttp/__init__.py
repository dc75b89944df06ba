from minihttp.client import Client, DEFAULT_TIMEOUT
from minihttp.builder import Method, Request, RequestBuilder
from minihttp.connection import Connection, RawResponse
from minihttp.models import Response
from minihttp.errors import (
    MiniHttpError,
    InvalidURL,
    UnsupportedMethod,
    TransportError,
    ConnectionError,
    ConnectTimeout,
    TLSNegotiationError,
    ReadTimeout,
    ProtocolError,
)

__version__ = "0.1.0"

_default_client = Client()


def request(method, url, body=None, headers=None, timeout=DEFAULT_TIMEOUT) -> Response:
    return _default_client.request(method, url, body=body, headers=headers, timeout=timeout)


def get(url, headers=None, timeout=DEFAULT_TIMEOUT) -> Response:
    return _default_client.get(url, headers=headers, timeout=timeout)


def post(url, body=None, headers=None, timeout=DEFAULT_TIMEOUT) -> Response:
    return _default_client.post(url, body=body, headers=headers, timeout=timeout)


def put(url, body=None, headers=None, timeout=DEFAULT_TIMEOUT) -> Response:
    return _default_client.put(url, body=body, headers=headers, timeout=timeout)


def delete(url, headers=None, timeout=DEFAULT_TIMEOUT) -> Response:
    return _default_client.delete(url, headers=headers, timeout=timeout)


__all__ = [
    "__version__",
    "Client",
    "Method",
    "Request",
    "RequestBuilder",
    "Connection",
    "RawResponse",
    "Response",
    "MiniHttpError",
    "InvalidURL",
    "UnsupportedMethod",
    "TransportError",
    "ConnectionError",
    "ConnectTimeout",
    "TLSNegotiationError",
    "ReadTimeout",
    "ProtocolError",
    "request",
    "get",
    "post",
    "put",
    "delete",
]
