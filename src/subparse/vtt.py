"""WebVTT subtitle parser.

Only timing and text are extracted; cue settings and formatting tags are
left untouched in the text. A typical file looks like::

    WEBVTT

    CUE - 1
    00:00:10.500 --> 00:00:13.000
    Elephant's Dream
"""

from __future__ import annotations

import logging
from typing import BinaryIO, List, Optional

from .blocks import Block, iter_blank_line_blocks
from .errors import EmptyResultError, StructuralParseError, TimecodeError
from .models import ParserOptions, SubtitleCue, TimecodeMode
from .streams import read_text
from .utils import DummySchedule, try_parse_vtt_timecode_line

logger = logging.getLogger(__name__)

HEADER_MARKER = "WEBVTT"
# Blocks opened by these keywords carry no cue.
NON_CUE_KEYWORDS = frozenset({"NOTE", "STYLE", "REGION"})


def _has_timing_line(lines: List[str]) -> bool:
    return any(try_parse_vtt_timecode_line(line)[2] for line in lines)


def _is_cue_block(lines: List[str]) -> bool:
    first = lines[0]
    if first.startswith(HEADER_MARKER):
        # A cue may follow the header without a blank line in between.
        return _has_timing_line(lines[1:])
    return first.split(maxsplit=1)[0] not in NON_CUE_KEYWORDS


def _parse_block(block: Block, options: ParserOptions, schedule: DummySchedule) -> Optional[SubtitleCue]:
    lines = [line.strip() for line in block if line.strip()]
    if not lines or not _is_cue_block(lines):
        return None
    if lines[0].startswith(HEADER_MARKER):
        lines = lines[1:]

    if options.timecode_mode is TimecodeMode.NONE:
        return SubtitleCue(start_time=0, end_time=0, lines=tuple(lines))

    for position, line in enumerate(lines):
        start, end, success = try_parse_vtt_timecode_line(line)
        if not success:
            continue
        # Lines ahead of the timing line are cue identifiers.
        text = lines[position + 1:]
        if text:
            return SubtitleCue(start_time=start, end_time=end, lines=tuple(text))
        if options.timecode_mode is TimecodeMode.REQUIRED:
            raise StructuralParseError(
                f"Subtitle block with missing or invalid timecode or text: {', '.join(lines)}"
            )
        return None

    if options.timecode_mode is TimecodeMode.OPTIONAL:
        start, end = schedule.next_interval()
        return SubtitleCue(start_time=start, end_time=end, lines=tuple(lines))
    raise TimecodeError(
        f"Subtitle block with missing or invalid timecode or text: {', '.join(lines)}"
    )


def parse_vtt(stream: BinaryIO, options: ParserOptions | None = None) -> List[SubtitleCue]:
    """Parse a WebVTT stream and return its cues.

    ``plaintext_lines`` is left empty on every cue.
    """

    options = options or ParserOptions()
    text = read_text(stream, options.encoding)
    schedule = DummySchedule(duration=options.default_duration)

    cues: list[SubtitleCue] = []
    found_block = False
    for block in iter_blank_line_blocks(text.splitlines()):
        found_block = True
        cue = _parse_block(block, options, schedule)
        if cue is not None:
            cues.append(cue)

    if not found_block:
        raise StructuralParseError("Parsing as VTT returned no VTT parts.")
    if not cues:
        raise EmptyResultError("Parsing as VTT returned no valid cues.")
    logger.debug("Parsed %d VTT cues", len(cues))
    return cues
