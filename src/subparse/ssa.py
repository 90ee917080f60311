"""SubStation Alpha (SSA/ASS) subtitle parser.

Only the ``[Events]`` table is read; styles and the rest of the script
header are ignored apart from ``WrapStyle``.
"""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from typing import BinaryIO, Iterator, List, Optional

from .errors import EmptyResultError, StructuralParseError
from .models import ParserOptions, SubtitleCue, TimecodeMode
from .streams import read_text
from .utils import INVALID_TIMECODE, DummySchedule, parse_ssa_timecode, strip_formatting

logger = logging.getLogger(__name__)

EVENT_LINE = "[Events]"
SEPARATOR = ","
COMMENT_PREFIX = ";"
COMMENT_ROW_PREFIX = "Comment:"
WRAP_STYLE_PREFIX = "WrapStyle:"
START_COLUMN = "Start"
END_COLUMN = "End"
TEXT_COLUMN = "Text"

_HARD_BREAK = re.compile(r"\\N")
_ANY_BREAK = re.compile(r"\\n|\\N")


class WrapStyle(IntEnum):
    SMART = 0
    END_OF_LINE = 1
    NONE = 2
    SMART_WIDE_LOWER_LINE = 3

    @classmethod
    def from_string(cls, raw: str) -> "WrapStyle":
        """Map a ``WrapStyle`` header value, defaulting to ``NONE``."""

        try:
            return cls(int(raw.strip()))
        except ValueError:
            return cls.NONE


def _split_text(text: str, wrap_style: WrapStyle) -> List[str]:
    pattern = _ANY_BREAK if wrap_style is WrapStyle.NONE else _HARD_BREAK
    return [line.lstrip() for line in pattern.split(text)]


def _read_wrap_style(lines: Iterator[str]) -> WrapStyle:
    """Consume header lines up to ``[Events]`` and return the declared wrap style."""

    wrap_style = WrapStyle.NONE
    line_number = 0
    last_line = ""
    for line_number, line in enumerate(lines, start=1):
        last_line = line
        stripped = line.strip()
        if stripped == EVENT_LINE:
            return wrap_style
        if stripped.startswith(WRAP_STYLE_PREFIX):
            wrap_style = WrapStyle.from_string(stripped[len(WRAP_STYLE_PREFIX):])
    raise StructuralParseError(
        f"Reached end of header at line {last_line!r} (line #{line_number}) "
        f"without finding the Event section ({EVENT_LINE})"
    )


def _column_index(headers: List[str], name: str) -> int:
    return headers.index(name) if name in headers else -1


def parse_ssa(stream: BinaryIO, options: ParserOptions | None = None) -> List[SubtitleCue]:
    """Parse an SSA/ASS stream and return the dialogue cues.

    Raises:
        InvalidStreamError: If the stream is not readable and seekable.
        StructuralParseError: If the ``[Events]`` section or its ``Start``,
            ``End`` and ``Text`` columns cannot be found.
        EmptyResultError: If no dialogue row produced a cue.
    """

    options = options or ParserOptions()
    lines = iter(read_text(stream, options.encoding).splitlines())
    wrap_style = _read_wrap_style(lines)

    header_line = next((line for line in lines if line.strip()), None)
    if header_line is None:
        raise StructuralParseError(
            f"The header line after the line '{EVENT_LINE}' was missing -> no need to continue parsing"
        )
    headers = [head.strip() for head in header_line.split(SEPARATOR)]
    start_index = _column_index(headers, START_COLUMN)
    end_index = _column_index(headers, END_COLUMN)
    text_index = _column_index(headers, TEXT_COLUMN)
    if min(start_index, end_index, text_index) <= 0:
        raise StructuralParseError(
            f"Couldn't find all the necessary columns headers ({START_COLUMN}, {END_COLUMN}, "
            f"{TEXT_COLUMN}) in header line {header_line!r}"
        )

    schedule = DummySchedule(duration=options.default_duration)
    required_columns = max(start_index, end_index, text_index) + 1
    cues: list[SubtitleCue] = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith((COMMENT_PREFIX, COMMENT_ROW_PREFIX)):
            continue
        if stripped.startswith("["):
            break
        columns = line.split(SEPARATOR)
        if len(columns) < required_columns:
            raise StructuralParseError(
                f"Event row has {len(columns)} columns but the header declares "
                f"{len(headers)}: {line!r}"
            )
        cue = _parse_row(columns, start_index, end_index, text_index, wrap_style, options, schedule)
        if cue is not None:
            cues.append(cue)

    if not cues:
        raise EmptyResultError("Stream is not in a valid SSA format")
    logger.debug("Parsed %d SSA cues", len(cues))
    return cues


def _parse_row(
    columns: List[str],
    start_index: int,
    end_index: int,
    text_index: int,
    wrap_style: WrapStyle,
    options: ParserOptions,
    schedule: DummySchedule,
) -> Optional[SubtitleCue]:
    text = SEPARATOR.join(columns[text_index:])
    lines = [line for line in _split_text(text, wrap_style) if line.strip()]
    if not lines:
        return None

    if options.timecode_mode is TimecodeMode.NONE:
        start = end = 0
    else:
        start = parse_ssa_timecode(columns[start_index])
        end = parse_ssa_timecode(columns[end_index])
        if start == INVALID_TIMECODE or end == INVALID_TIMECODE:
            if options.timecode_mode is not TimecodeMode.OPTIONAL:
                logger.debug("Dropping SSA row with unparseable timecodes: %r", columns[:text_index])
                return None
            start, end = schedule.next_interval()

    return SubtitleCue(
        start_time=start,
        end_time=end,
        lines=tuple(lines),
        plaintext_lines=tuple(strip_formatting(line) for line in lines),
    )
