"""
Content-Encoding handling for response bodies read by the transport.

Codings listed in a ``Content-Encoding`` header are undone last-applied
first. If any coding is unknown or its data is corrupt, the body is handed
back exactly as it arrived so the caller still sees the server's bytes.
"""

from __future__ import annotations

import gzip
import zlib
from collections.abc import Callable

import brotli


def _inflate(data: bytes) -> bytes:
    # Servers disagree on whether "deflate" carries the zlib wrapper.
    try:
        return zlib.decompress(data)
    except zlib.error:
        return zlib.decompress(data, -zlib.MAX_WBITS)


DECODERS: dict[str, Callable[[bytes], bytes]] = {
    "gzip": gzip.decompress,
    "x-gzip": gzip.decompress,
    "deflate": _inflate,
    "br": brotli.decompress,
}

DEFAULT_ACCEPT_ENCODING = "gzip, deflate, br"


def decode_content(body: bytes, content_encoding: str) -> bytes:
    codings = [
        coding
        for coding in (part.strip().lower() for part in content_encoding.split(","))
        if coding and coding != "identity"
    ]
    if not body or not codings:
        return body
    if any(coding not in DECODERS for coding in codings):
        return body

    decoded = body
    try:
        for coding in reversed(codings):
            decoded = DECODERS[coding](decoded)
    except (OSError, EOFError, zlib.error, brotli.error):
        return body
    return decoded
