from __future__ import annotations

from collections.abc import Iterable, Mapping


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Sanitize header name and value to prevent HTTP header injection (CRLF injection).
    Strips CR, LF, and null bytes from both name and value.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


class HeaderList:
    """
    Ordered request headers with case-insensitive replacement.

    Setting a header that already exists (in any case) replaces its value in
    place and keeps the caller's spelling of the most recent name.
    """

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        if headers:
            for name, value in headers.items():
                self[name] = value

    def __setitem__(self, name: str, value) -> None:
        name, value = _sanitize_header(str(name), str(value))
        self._items[name.lower()] = (name, value)

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, name: str, default: str | None = None) -> str | None:
        item = self._items.get(name.lower())
        return item[1] if item else default

    def setdefault(self, name: str, value) -> str:
        if name not in self:
            self[name] = value
        return self[name]

    def items(self) -> list[tuple[str, str]]:
        return list(self._items.values())


def group_headers(raw_headers: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Collect response header tuples into lower-cased name -> list of values."""
    out: dict[str, list[str]] = {}
    for name, value in raw_headers:
        out.setdefault(name.lower(), []).append(value)
    return out
