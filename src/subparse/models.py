"""Data models shared by the parsers, the dispatcher and the writer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import List, Optional, Tuple

from .errors import FormatError


@dataclass(slots=True, frozen=True)
class SubtitleCue:
    """Represents a single timed subtitle entry."""

    start_time: int
    end_time: int
    lines: Tuple[str, ...] = ()
    plaintext_lines: Tuple[str, ...] = ()

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def text(self) -> str:
        """Return the raw lines joined with newlines."""

        return "\n".join(self.lines)


class TimecodeMode(Enum):
    """How a parser treats missing or invalid timecodes."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"

    @classmethod
    def from_string(cls, value: str) -> "TimecodeMode":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown timecode mode {value!r} (expected one of: {choices})") from exc


@dataclass(slots=True, frozen=True)
class SubtitleFormat:
    """Identifies a supported format by name and filename extension pattern."""

    name: str
    extension: str

    def matches_filename(self, filename: str | PurePath) -> bool:
        suffix = PurePath(filename).suffix
        if not suffix:
            return False
        return re.fullmatch(self.extension, suffix, re.IGNORECASE) is not None

    @classmethod
    def from_name(cls, name: str) -> "SubtitleFormat":
        for fmt in SUPPORTED_FORMATS:
            if fmt.name.lower() == name.strip().lower():
                return fmt
        names = ", ".join(fmt.name for fmt in SUPPORTED_FORMATS)
        raise ValueError(f"Unknown subtitle format {name!r} (expected one of: {names})")


SUBRIP = SubtitleFormat(name="SubRip", extension=r"\.srt")
SUBSTATION_ALPHA = SubtitleFormat(name="SubStationAlpha", extension=r"\.(?:ssa|ass)")
WEBVTT = SubtitleFormat(name="WebVTT", extension=r"\.vtt")

SUPPORTED_FORMATS: Tuple[SubtitleFormat, ...] = (SUBRIP, SUBSTATION_ALPHA, WEBVTT)


@dataclass(slots=True)
class ParserOptions:
    """Options controlling how subtitle streams are decoded and parsed."""

    encoding: str = "utf-8"
    timecode_mode: TimecodeMode = TimecodeMode.REQUIRED
    prioritized_format: Optional[SubtitleFormat] = None
    default_duration: int = 1000


@dataclass(slots=True)
class WriterOptions:
    """Options controlling SRT output."""

    include_formatting: bool = True
    include_timecode: bool = True
    newline: str = "\n"


@dataclass(slots=True, frozen=True)
class ParseResult:
    """Outcome of one parser attempt: either cues or the error that stopped it."""

    cues: Tuple[SubtitleCue, ...] = ()
    error: Optional[FormatError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, cues: List[SubtitleCue]) -> "ParseResult":
        return cls(cues=tuple(cues))

    @classmethod
    def failure(cls, error: FormatError) -> "ParseResult":
        return cls(error=error)

    def unwrap(self) -> List[SubtitleCue]:
        """Return the cues, raising the stored error for a failed attempt."""

        if self.error is not None:
            raise self.error
        return list(self.cues)
