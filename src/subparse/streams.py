"""Byte stream helpers: seekability checks, buffering and decoding."""

from __future__ import annotations

import codecs
import io
from typing import Any, BinaryIO

from .errors import InvalidStreamError

CHUNK_SIZE = 64 * 1024
PREVIEW_LENGTH = 500

_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def _flag(stream: Any, name: str) -> bool:
    probe = getattr(stream, name, None)
    return bool(probe()) if callable(probe) else False


def is_readable(stream: Any) -> bool:
    return _flag(stream, "readable")


def is_seekable(stream: Any) -> bool:
    return _flag(stream, "seekable")


def require_seekable(stream: Any) -> None:
    """Raise :class:`InvalidStreamError` unless ``stream`` is readable and seekable."""

    readable = is_readable(stream)
    seekable = is_seekable(stream)
    if not (readable and seekable):
        raise InvalidStreamError(
            "Stream must be seekable and readable in a subtitles parser. "
            f"Operation interrupted; isSeekable: {seekable} - isReadable: {readable}"
        )


def buffer_stream(stream: BinaryIO) -> BinaryIO:
    """Return ``stream`` when seekable, otherwise an in-memory copy of its content."""

    if is_seekable(stream):
        return stream
    buffer = io.BytesIO()
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.write(chunk)
    buffer.seek(0)
    return buffer


def decode_bytes(data: bytes, encoding: str) -> str:
    """Decode ``data``, letting a byte order mark override ``encoding``."""

    for bom, bom_encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom):].decode(bom_encoding, errors="replace")
    return data.decode(encoding, errors="replace")


def read_text(stream: BinaryIO, encoding: str) -> str:
    """Rewind ``stream`` and decode its whole content."""

    require_seekable(stream)
    stream.seek(0)
    return decode_bytes(stream.read(), encoding)


def preview_text(stream: BinaryIO, encoding: str, limit: int = PREVIEW_LENGTH) -> str:
    """Return the first ``limit`` characters of ``stream`` for diagnostics."""

    if not is_seekable(stream):
        return f"Tried to log the first {limit} characters of a non-seekable stream"
    stream.seek(0)
    return decode_bytes(stream.read(), encoding)[:limit]


async def read_all_async(stream: Any) -> bytes:
    """Drain an object exposing a coroutine ``read(n)`` such as ``asyncio.StreamReader``."""

    chunks = []
    while True:
        chunk = await stream.read(CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)
