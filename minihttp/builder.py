from __future__ import annotations

import json
from enum import Enum
from collections.abc import Mapping

from .compression import DEFAULT_ACCEPT_ENCODING
from .errors import UnsupportedMethod
from .headers import HeaderList
from .utils import URL

JSON_CONTENT_TYPE = "application/json"


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def coerce(cls, method: str | Method) -> Method:
        if isinstance(method, Method):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise UnsupportedMethod(f"Unsupported HTTP method: {method}") from None

    @property
    def allows_body(self) -> bool:
        return self in (Method.POST, Method.PUT)


class Request:
    """
    Transport-ready request: method, target URL, ordered headers and encoded body.
    """

    def __init__(
        self,
        method: Method,
        url: URL,
        headers: HeaderList,
        body: bytes | None = None,
    ) -> None:
        self.method = method
        self.url = url
        self.headers = headers
        self.body = body

    def __repr__(self) -> str:
        return f"<Request [{self.method.value}] {self.url.raw}>"


def serialize_body(body: object) -> str:
    """Strings pass through unchanged; anything else is encoded as compact JSON."""
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(",", ":"))


class RequestBuilder:
    """Turns verb-call arguments into a :class:`Request`."""

    def build(
        self,
        method: str | Method,
        url: URL,
        body: object = None,
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        method = Method.coerce(method)
        request_headers = HeaderList(headers)

        payload: bytes | None = None
        if method.allows_body:
            if body is not None:
                payload = serialize_body(body).encode("utf-8")
                request_headers.setdefault("Content-Type", JSON_CONTENT_TYPE)
            request_headers.setdefault("Content-Length", str(len(payload or b"")))

        request_headers.setdefault("Host", url.netloc)
        request_headers.setdefault("Accept-Encoding", DEFAULT_ACCEPT_ENCODING)
        # No connection reuse: every request owns its connection.
        request_headers.setdefault("Connection", "close")

        return Request(method, url, request_headers, payload)
