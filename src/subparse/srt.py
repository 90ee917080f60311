"""SRT (SubRip) subtitle parser.

A typical file looks like::

    1
    00:18:03,875 --> 00:18:04,231
    Oh?

    2
    00:18:05,194 --> 00:18:05,905
    What was that?
"""

from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional

from .blocks import Block, iter_srt_blocks
from .errors import EmptyResultError, StructuralParseError, TimecodeError
from .models import ParserOptions, SubtitleCue, TimecodeMode
from .streams import read_text
from .utils import (
    DummySchedule,
    has_timecode_delimiter,
    is_counter_line,
    parse_srt_timecode,
    strip_formatting,
    try_parse_srt_timecode_line,
)

logger = logging.getLogger(__name__)

# Public names for the SRT grammar.
parse_timecode = parse_srt_timecode
try_parse_timecode_line = try_parse_srt_timecode_line


def _clean_lines(block: Block) -> List[str]:
    lines = [line.strip() for line in block]
    return [line for line in lines if line and not is_counter_line(line)]


def _missing_timecode(lines: List[str]) -> TimecodeError:
    for line in lines:
        if has_timecode_delimiter(line):
            return TimecodeError(f"Invalid timecode in line: {line!r}")
    return TimecodeError(
        f"Subtitle block with missing or invalid timecode or text: {', '.join(lines)}"
    )


def _make_cue(start: int, end: int, lines: List[str]) -> SubtitleCue:
    return SubtitleCue(
        start_time=start,
        end_time=end,
        lines=tuple(lines),
        plaintext_lines=tuple(strip_formatting(line) for line in lines),
    )


def _parse_block(block: Block, options: ParserOptions, schedule: DummySchedule) -> Optional[SubtitleCue]:
    lines = _clean_lines(block)
    if not lines:
        return None

    if options.timecode_mode is TimecodeMode.NONE:
        return _make_cue(0, 0, lines)

    for position, line in enumerate(lines):
        start, end, success = try_parse_srt_timecode_line(line)
        if success:
            text = lines[:position] + lines[position + 1:]
            if text:
                return _make_cue(start, end, text)
            if options.timecode_mode is TimecodeMode.REQUIRED:
                raise StructuralParseError(
                    f"Subtitle block with missing or invalid timecode or text: {', '.join(lines)}"
                )
            return None

    if options.timecode_mode is TimecodeMode.OPTIONAL:
        start, end = schedule.next_interval()
        return _make_cue(start, end, lines)
    raise _missing_timecode(lines)


def parse_srt(stream: BinaryIO, options: ParserOptions | None = None) -> List[SubtitleCue]:
    """Parse an SRT stream and return its cues.

    Args:
        stream: A readable, seekable binary stream. It is rewound before reading.
        options: Decoding and timecode handling options.

    Raises:
        InvalidStreamError: If the stream is not readable and seekable.
        StructuralParseError: If no block is found or a block has no text.
        TimecodeError: If a block has no usable timecode in ``REQUIRED`` mode.
        EmptyResultError: If no cue could be produced.
    """

    options = options or ParserOptions()
    text = read_text(stream, options.encoding)
    schedule = DummySchedule(duration=options.default_duration)

    cues: list[SubtitleCue] = []
    found_block = False
    for block in iter_srt_blocks(text):
        found_block = True
        cue = _parse_block(block, options, schedule)
        if cue is not None:
            cues.append(cue)

    if not found_block:
        raise StructuralParseError("Parsing as SRT returned no subtitle parts.")
    if not cues:
        raise EmptyResultError("No valid subtitle items found in the stream.")
    logger.debug("Parsed %d SRT cues", len(cues))
    return cues
