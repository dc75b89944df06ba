from __future__ import annotations

import json
import threading
from collections.abc import Iterable, Mapping

from .headers import group_headers

SUCCESS_RANGE = range(200, 300)
CLIENT_ERROR_RANGE = range(400, 500)
SERVER_ERROR_RANGE = range(500, 600)

_UNSET = object()


class Response:
    """
    Completed HTTP response with status-class helpers and cached JSON parsing.

    ``code``, ``body`` and ``headers`` are fixed at construction. The only
    state that changes afterwards is the JSON cache, filled on the first
    read of :attr:`json` and reused for the lifetime of the instance.
    """

    def __init__(
        self,
        code: int | str,
        body: str | None,
        headers: Mapping[str, list[str]] | None = None,
        reason: str = "",
    ) -> None:
        self._code = int(code)
        self._body = body
        self._headers = {name: list(values) for name, values in (headers or {}).items()}
        self.reason = reason
        self._json = _UNSET
        self._json_lock = threading.Lock()

    @classmethod
    def wrap(cls, raw) -> Response:
        """
        Build a Response from a transport response.

        ``raw`` must expose ``status`` (str or int), ``body`` (bytes or str)
        and ``headers`` as either ``(name, value)`` tuples or a mapping of
        name to list of values.
        """
        headers = raw.headers
        if isinstance(headers, Mapping):
            headers = [
                (name, value)
                for name, values in headers.items()
                for value in ([values] if isinstance(values, str) else values)
            ]
        headers = group_headers(headers)
        body = raw.body
        if isinstance(body, bytes):
            body = _decode_text(body, headers)
        return cls(raw.status, body, headers, reason=getattr(raw, "reason", ""))

    @property
    def code(self) -> int:
        return self._code

    @property
    def body(self) -> str | None:
        return self._body

    @property
    def headers(self) -> dict[str, list[str]]:
        return self._headers

    @property
    def text(self) -> str:
        return self._body or ""

    @property
    def success(self) -> bool:
        return self._code in SUCCESS_RANGE

    @property
    def client_error(self) -> bool:
        return self._code in CLIENT_ERROR_RANGE

    @property
    def server_error(self) -> bool:
        return self._code in SERVER_ERROR_RANGE

    @property
    def json(self) -> object:
        """
        Body decoded as JSON, or None when the body is empty or not valid JSON.
        Parsing happens at most once per instance.
        """
        if self._json is _UNSET:
            with self._json_lock:
                if self._json is _UNSET:
                    self._json = self._parse_json()
        return self._json

    def _parse_json(self) -> object:
        if not self._body:
            return None
        try:
            return json.loads(self._body)
        except (ValueError, RecursionError):
            return None

    def __repr__(self) -> str:
        return f"<Response [{self._code}]>"


def _decode_text(body: bytes, headers: Mapping[str, Iterable[str]]) -> str:
    encoding = "utf-8"
    for ctype in headers.get("content-type", []):
        if "charset=" in ctype:
            encoding = ctype.split("charset=")[-1].split(";")[0].strip() or encoding
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")
