"""
Subtitle parsing for SubRip, WebVTT and SubStation Alpha files.

All formats are read into a list of :class:`SubtitleCue` objects and can be
written back out as SRT.
"""

from .errors import (
    AllFormatsFailedError,
    EmptyResultError,
    FormatError,
    InvalidStreamError,
    StructuralParseError,
    TimecodeError,
)
from .models import (
    SUBRIP,
    SUBSTATION_ALPHA,
    SUPPORTED_FORMATS,
    WEBVTT,
    ParseResult,
    ParserOptions,
    SubtitleCue,
    SubtitleFormat,
    TimecodeMode,
    WriterOptions,
)
from .parser import SubtitleParser, get_most_likely_format, parse_file, parse_stream, parse_text
from .srt import parse_srt
from .ssa import parse_ssa
from .vtt import parse_vtt
from .writer import SubtitleWriter, to_srt_text

__all__ = [
    "AllFormatsFailedError",
    "EmptyResultError",
    "FormatError",
    "InvalidStreamError",
    "ParseResult",
    "ParserOptions",
    "StructuralParseError",
    "SUBRIP",
    "SUBSTATION_ALPHA",
    "SUPPORTED_FORMATS",
    "SubtitleCue",
    "SubtitleFormat",
    "SubtitleParser",
    "SubtitleWriter",
    "TimecodeError",
    "TimecodeMode",
    "WEBVTT",
    "WriterOptions",
    "get_most_likely_format",
    "parse_file",
    "parse_srt",
    "parse_ssa",
    "parse_stream",
    "parse_text",
    "parse_vtt",
    "to_srt_text",
]
