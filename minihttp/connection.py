from __future__ import annotations

import logging
import socket
import ssl
from collections.abc import Iterable
from typing import BinaryIO

from .builder import Request
from .compression import decode_content
from .errors import (
    ConnectionError,
    ConnectTimeout,
    ProtocolError,
    ReadTimeout,
    TLSNegotiationError,
)

logger = logging.getLogger(__name__)

MAX_LINE = 65536
MAX_HEADERS = 100


class RawResponse:
    """Response exactly as read off the wire, body already content-decoded."""

    def __init__(
        self,
        status: int,
        reason: str,
        http_version: str,
        headers: Iterable[tuple[str, str]],
        body: bytes,
    ) -> None:
        self.status = status
        self.reason = reason
        self.http_version = http_version
        self.headers: list[tuple[str, str]] = list(headers)
        self.body = body

    def __repr__(self) -> str:
        return f"<RawResponse [{self.status}] {len(self.body)} bytes>"


class Connection:
    """
    Single TCP/TLS connection carrying exactly one HTTP/1.1 exchange.

    Args:
        host: Server host name or address
        port: Server port
        tls: Wrap the socket in TLS
        verify: Require a valid peer certificate and matching host name
        read_timeout: Seconds to wait on each socket read
        connect_timeout: Seconds allowed for TCP connect and TLS handshake
    """

    def __init__(
        self,
        host: str,
        port: int,
        tls: bool = False,
        verify: bool = True,
        read_timeout: float = 30,
        connect_timeout: float = 10,
    ) -> None:
        self.host = host
        self.port = port
        self.tls = tls
        self.verify = verify
        self.read_timeout = read_timeout
        self.connect_timeout = connect_timeout
        self.sock: socket.socket | ssl.SSLSocket | None = None
        self.closed = True

    def connect(self) -> None:
        logger.debug("Connecting to %s:%s (tls=%s)", self.host, self.port, self.tls)
        raw = self._open_tcp()
        try:
            sock = self._start_tls(raw) if self.tls else raw
            sock.settimeout(self.read_timeout)
        except BaseException:
            raw.close()
            raise
        self.sock = sock
        self.closed = False

    def _start_tls(self, raw: socket.socket) -> ssl.SSLSocket:
        context = ssl.create_default_context()
        if not self.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        try:
            return context.wrap_socket(raw, server_hostname=self.host)
        except socket.timeout as exc:
            raise ConnectTimeout(f"TLS handshake timed out: {exc}") from exc
        except ssl.SSLError as exc:
            raise TLSNegotiationError(f"TLS handshake failed: {exc}") from exc
        except OSError as exc:
            raise ConnectionError(f"TLS handshake failed: {exc}") from exc

    def dispatch(self, request: Request) -> RawResponse:
        """Send ``request`` and read the complete response, connecting first if needed."""
        if self.closed or self.sock is None:
            self.connect()
        assert self.sock is not None

        logger.debug("%s %s", request.method.value, request.url.raw)
        try:
            self.sock.sendall(encode_request(request))
        except socket.timeout as exc:
            self.close()
            raise ReadTimeout(f"Send timed out: {exc}") from exc
        except OSError as exc:
            self.close()
            raise ConnectionError(f"Send failed: {exc}") from exc

        try:
            with self.sock.makefile("rb") as stream:
                response = read_response(stream)
        except socket.timeout as exc:
            self.close()
            raise ReadTimeout(f"No response within {self.read_timeout}s: {exc}") from exc
        except OSError as exc:
            self.close()
            raise ConnectionError(f"Receive failed: {exc}") from exc
        logger.debug("%s %s -> %s", request.method.value, request.url.raw, response.status)
        return response

    def close(self) -> None:
        sock, self.sock = self.sock, None
        self.closed = True
        if sock is not None:
            sock.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _open_tcp(self) -> socket.socket:
        try:
            return socket.create_connection(
                (self.host, self.port), timeout=self.connect_timeout
            )
        except socket.timeout as exc:
            raise ConnectTimeout(
                f"Connection to {self.host}:{self.port} timed out: {exc}"
            ) from exc
        except OSError as exc:
            raise ConnectionError(f"TCP connection failed: {exc}") from exc


def encode_request(request: Request) -> bytes:
    head = [f"{request.method.value} {request.url.path} HTTP/1.1"]
    head.extend(f"{name}: {value}" for name, value in request.headers.items())
    wire = ("\r\n".join(head) + "\r\n\r\n").encode("latin-1")
    return wire + (request.body or b"")


def read_response(stream: BinaryIO) -> RawResponse:
    """Parse one HTTP/1.x response from a buffered binary stream."""
    status_line = _read_line(stream)
    if not status_line:
        raise ProtocolError("Empty response")
    version, status, reason = _parse_status_line(status_line)
    headers = _read_header_block(stream)
    fields = {name.lower(): value for name, value in headers}
    body = _read_body(stream, status, fields)
    return RawResponse(
        status, reason, version, headers,
        decode_content(body, fields.get("content-encoding", "")),
    )


def _read_line(stream: BinaryIO) -> bytes:
    line = stream.readline(MAX_LINE + 1)
    if len(line) > MAX_LINE:
        raise ProtocolError("Line too long")
    return line


def _parse_status_line(line: bytes) -> tuple[str, int, str]:
    # HTTP/1.1 200 OK
    protocol, _, rest = line.decode("latin-1").strip().partition(" ")
    code, _, reason = rest.partition(" ")
    if not protocol.startswith("HTTP/") or not (len(code) == 3 and code.isdigit()):
        raise ProtocolError(f"Malformed status line: {line!r}")
    return protocol[len("HTTP/"):], int(code), reason


def _read_header_block(stream: BinaryIO) -> list[tuple[str, str]]:
    headers: list[tuple[str, str]] = []
    while True:
        line = _read_line(stream)
        if not line.strip():
            return headers
        name, sep, value = line.decode("latin-1").partition(":")
        if not sep:
            raise ProtocolError(f"Malformed header line: {line!r}")
        headers.append((name.strip(), value.strip()))
        if len(headers) > MAX_HEADERS:
            raise ProtocolError(f"More than {MAX_HEADERS} response headers")


def _read_body(stream: BinaryIO, status: int, fields: dict[str, str]) -> bytes:
    if status < 200 or status in (204, 304):
        return b""
    if "chunked" in fields.get("transfer-encoding", "").lower():
        return _read_chunks(stream)
    if "content-length" not in fields:
        # Connection: close is always sent, so EOF ends the body.
        return stream.read()
    try:
        length = int(fields["content-length"])
    except ValueError as exc:
        raise ProtocolError("Invalid Content-Length") from exc
    if length < 0:
        raise ProtocolError("Invalid Content-Length")
    return _read_exactly(stream, length)


def _read_exactly(stream: BinaryIO, length: int) -> bytes:
    data = stream.read(length)
    if len(data) < length:
        raise ProtocolError(
            f"Unexpected EOF while reading body ({len(data)} of {length} bytes)"
        )
    return data


def _read_chunks(stream: BinaryIO) -> bytes:
    body = bytearray()
    while True:
        size_line = _read_line(stream)
        if not size_line:
            raise ProtocolError("Unexpected EOF while reading chunked body")
        try:
            size = int(size_line.split(b";", 1)[0].strip(), 16)
        except ValueError as exc:
            raise ProtocolError(f"Invalid chunk size line: {size_line!r}") from exc
        if size == 0:
            # Trailers are read and dropped.
            _read_header_block(stream)
            return bytes(body)
        body += _read_exactly(stream, size)
        if _read_line(stream).strip():
            raise ProtocolError("Missing CRLF after chunk data")
