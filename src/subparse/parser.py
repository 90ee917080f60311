"""Format dispatcher trying every supported parser against one input."""

from __future__ import annotations

import io
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Tuple

from .errors import AllFormatsFailedError, FormatError, InvalidStreamError, StructuralParseError
from .models import (
    SUBRIP,
    SUBSTATION_ALPHA,
    WEBVTT,
    ParseResult,
    ParserOptions,
    SubtitleCue,
    SubtitleFormat,
)
from .srt import parse_srt
from .ssa import parse_ssa
from .streams import buffer_stream, is_readable, preview_text, read_all_async
from .vtt import parse_vtt

logger = logging.getLogger(__name__)

FormatParser = Callable[[BinaryIO, ParserOptions], List[SubtitleCue]]
Candidate = Tuple[SubtitleFormat, FormatParser]

DEFAULT_PARSERS: Dict[SubtitleFormat, FormatParser] = {
    SUBRIP: parse_srt,
    SUBSTATION_ALPHA: parse_ssa,
    WEBVTT: parse_vtt,
}


def ordinal_distance(left: str, right: str) -> int:
    """Signed ordinal comparison: first differing code point, else length difference."""

    for a, b in zip(left, right):
        if a != b:
            return ord(a) - ord(b)
    return len(left) - len(right)


class SubtitleParser:
    """Tries each format parser in turn and returns the first successful result."""

    def __init__(self, parsers: Optional[Dict[SubtitleFormat, FormatParser]] = None) -> None:
        self._parsers: Dict[SubtitleFormat, FormatParser] = dict(parsers or DEFAULT_PARSERS)

    @property
    def formats(self) -> Tuple[SubtitleFormat, ...]:
        return tuple(self._parsers)

    def get_most_likely_format(self, filename: str | Path) -> Optional[SubtitleFormat]:
        """Guess the format from the filename extension, or ``None`` if unknown."""

        for fmt in self._parsers:
            if fmt.matches_filename(filename):
                return fmt
        return None

    def candidates(self, options: ParserOptions) -> List[Candidate]:
        """Return ``(format, parser)`` pairs in the order they will be tried.

        With a prioritized format, candidates are stably sorted by the absolute
        ordinal distance between their name and the prioritized name.
        """

        pairs = list(self._parsers.items())
        prioritized = options.prioritized_format
        if prioritized is None:
            return pairs
        return sorted(pairs, key=lambda pair: abs(ordinal_distance(pair[0].name, prioritized.name)))

    def attempt(self, fmt: SubtitleFormat, stream: BinaryIO, options: ParserOptions) -> ParseResult:
        """Run the parser registered for ``fmt`` and capture its outcome."""

        stream.seek(0)
        try:
            cues = self._parsers[fmt](stream, options)
        except FormatError as exc:
            return ParseResult.failure(exc)
        return ParseResult.success(cues)

    def parse_stream(self, stream: BinaryIO, options: ParserOptions | None = None) -> List[SubtitleCue]:
        """Parse ``stream`` with the first format that yields cues.

        Raises:
            InvalidStreamError: If the stream is not readable.
            AllFormatsFailedError: If every candidate failed or returned nothing.
        """

        options = options or ParserOptions()
        if not is_readable(stream):
            raise InvalidStreamError("Cannot parse a non-readable stream")

        seekable_stream = buffer_stream(stream)
        failures: Dict[str, Optional[FormatError]] = {}
        for fmt, _ in self.candidates(options):
            logger.debug("Trying %s parser", fmt.name)
            result = self.attempt(fmt, seekable_stream, options)
            if result.ok and result.cues:
                logger.debug("%s parser produced %d cues", fmt.name, len(result.cues))
                return list(result.cues)
            failures[fmt.name] = result.error
            logger.debug("%s parser failed: %s", fmt.name, result.error or "no cues")

        preview = preview_text(seekable_stream, options.encoding)
        raise AllFormatsFailedError(preview, failures)

    def parse_text(self, content: str, options: ParserOptions | None = None) -> List[SubtitleCue]:
        """Encode ``content`` with the configured encoding and parse it."""

        options = options or ParserOptions()
        if not content or not content.strip():
            raise StructuralParseError("Subtitle text cannot be empty.")
        return self.parse_stream(io.BytesIO(content.encode(options.encoding)), options)

    def parse_file(self, path: str | Path, options: ParserOptions | None = None) -> List[SubtitleCue]:
        """Parse a file, prioritizing the format suggested by its extension."""

        options = options or ParserOptions()
        if options.prioritized_format is None:
            detected = self.get_most_likely_format(path)
            if detected is not None:
                options = replace(options, prioritized_format=detected)
        with open(path, "rb") as fh:
            return self.parse_stream(fh, options)

    async def parse_stream_async(self, stream: Any, options: ParserOptions | None = None) -> List[SubtitleCue]:
        """Await the stream's reads, then parse like :meth:`parse_stream`."""

        data = await read_all_async(stream)
        return self.parse_stream(io.BytesIO(data), options)


_default_parser = SubtitleParser()


def parse_stream(stream: BinaryIO, options: ParserOptions | None = None) -> List[SubtitleCue]:
    return _default_parser.parse_stream(stream, options)


def parse_text(content: str, options: ParserOptions | None = None) -> List[SubtitleCue]:
    return _default_parser.parse_text(content, options)


def parse_file(path: str | Path, options: ParserOptions | None = None) -> List[SubtitleCue]:
    return _default_parser.parse_file(path, options)


def get_most_likely_format(filename: str | Path) -> Optional[SubtitleFormat]:
    return _default_parser.get_most_likely_format(filename)
