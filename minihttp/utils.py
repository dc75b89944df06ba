from __future__ import annotations

from typing import NamedTuple
from urllib.parse import urlsplit

from .errors import InvalidURL

MAX_CONNECT_TIMEOUT = 10


class URL(NamedTuple):
    scheme: str
    host: str
    port: int
    path: str
    raw: str

    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"

    @property
    def netloc(self) -> str:
        """Host header value; the port is omitted when it is the scheme default."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        default_port = 443 if self.is_tls else 80
        return host if self.port == default_port else f"{host}:{self.port}"


def parse_url(url: str) -> URL:
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidURL("not an HTTP URI") from exc
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidURL("not an HTTP URI")
    port = port or (443 if parsed.scheme == "https" else 80)
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    return URL(parsed.scheme, parsed.hostname, port, path, url)


def connect_timeout_for(timeout: float) -> float:
    """
    Connect phase budget: a third of the read timeout, capped at
    MAX_CONNECT_TIMEOUT and never below one second.
    """
    return max(min(timeout // 3, MAX_CONNECT_TIMEOUT), 1)
