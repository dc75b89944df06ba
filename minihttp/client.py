from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from .builder import Method, RequestBuilder
from .connection import Connection
from .models import Response
from .utils import connect_timeout_for, parse_url

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class Client:
    """
    Blocking HTTP client with one connection per request.

    Bodies passed to ``post``/``put`` are sent as-is when they are strings and
    JSON-encoded otherwise; ``Content-Type`` defaults to ``application/json``
    unless the caller sets it. HTTPS peers are always verified.

    ``timeout`` is the read timeout in seconds. The connect phase gets
    ``min(timeout // 3, 10)`` seconds, but never less than one second.

    Args:
        connection_factory: Callable returning a transport connection. Called
            with ``host, port, tls=, verify=, read_timeout=, connect_timeout=``
            and used as a context manager exposing ``dispatch(request)``.
        builder: RequestBuilder used to assemble outbound requests.
    """

    def __init__(
        self,
        connection_factory: Callable[..., Connection] = Connection,
        builder: RequestBuilder | None = None,
    ) -> None:
        self.connection_factory = connection_factory
        self.builder = builder or RequestBuilder()

    def request(
        self,
        method: str | Method,
        url: str,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Response:
        """
        Send a request and wrap the reply.

        Transport failures (timeouts, refused connections, TLS and DNS errors)
        propagate unchanged as subclasses of :class:`minihttp.errors.TransportError`.

        Raises:
            InvalidURL: ``url`` is not an absolute http/https URI.
            UnsupportedMethod: ``method`` is not GET, POST, PUT or DELETE.
        """
        target = parse_url(url)
        request = self.builder.build(method, target, body, headers)

        conn = self.connection_factory(
            target.host,
            target.port,
            tls=target.is_tls,
            verify=True,
            read_timeout=timeout,
            connect_timeout=connect_timeout_for(timeout),
        )
        with conn:
            raw = conn.dispatch(request)

        response = Response.wrap(raw)
        logger.debug("%s %s returned %s", request.method.value, url, response.code)
        return response

    def get(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Response:
        return self.request(Method.GET, url, headers=headers, timeout=timeout)

    def post(
        self,
        url: str,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Response:
        return self.request(Method.POST, url, body=body, headers=headers, timeout=timeout)

    def put(
        self,
        url: str,
        body: object = None,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Response:
        return self.request(Method.PUT, url, body=body, headers=headers, timeout=timeout)

    def delete(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Response:
        return self.request(Method.DELETE, url, headers=headers, timeout=timeout)
