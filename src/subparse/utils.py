"""Timecode grammars and text helpers shared by the format parsers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Tuple

# Returned by every timecode parser when the input does not match its grammar.
INVALID_TIMECODE = -1

TIMECODE_DELIMITERS = ("-->", "- >", "->")
_DELIMITER_PATTERN = re.compile("|".join(re.escape(d) for d in TIMECODE_DELIMITERS))

_SRT_TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}),(?P<millis>\d{3})$",
    re.ASCII,
)
_VTT_LONG_PATTERN = re.compile(
    r"(?P<hour>[0-9]+):(?P<minute>[0-9]+):(?P<second>[0-9]+)[,.](?P<millis>[0-9]+)"
)
_VTT_SHORT_PATTERN = re.compile(r"(?P<minute>[0-9]+):(?P<second>[0-9]+)[,.](?P<millis>[0-9]+)")
_SSA_TIME_PATTERN = re.compile(
    r"^\s*(?:(?P<days>\d+)\.)?(?P<hour>\d{1,2}):(?P<minute>\d{1,2})"
    r"(?::(?P<second>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?\s*$",
    re.ASCII,
)
_FORMATTING_PATTERN = re.compile(r"\{.*?\}|<.*?>")

TimecodeLine = Tuple[int, int, bool]


def _to_milliseconds(hours: int, minutes: int, seconds: int, milliseconds: int) -> int:
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + milliseconds


def parse_srt_timecode(value: str) -> int:
    """Parse an SRT ``HH:MM:SS,mmm`` timecode into milliseconds.

    Returns ``INVALID_TIMECODE`` instead of raising when the value does not match.
    """

    match = _SRT_TIME_PATTERN.match(value)
    if not match:
        return INVALID_TIMECODE
    return _to_milliseconds(
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second")),
        int(match.group("millis")),
    )


def parse_vtt_timecode(value: str) -> int:
    """Parse a WebVTT ``HH:MM:SS.mmm`` or ``MM:SS.mmm`` timecode into milliseconds."""

    match = _VTT_LONG_PATTERN.search(value)
    if match:
        return _to_milliseconds(
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second")),
            int(match.group("millis")),
        )
    match = _VTT_SHORT_PATTERN.search(value)
    if match:
        return _to_milliseconds(
            0,
            int(match.group("minute")),
            int(match.group("second")),
            int(match.group("millis")),
        )
    return INVALID_TIMECODE


def parse_ssa_timecode(value: str) -> int:
    """Parse an SSA duration such as ``0:00:01.50`` into milliseconds.

    Accepts ``[d.]h:mm[:ss[.fraction]]`` with hours below 24 and minutes and
    seconds below 60.
    """

    match = _SSA_TIME_PATTERN.match(value)
    if not match:
        return INVALID_TIMECODE

    hours = int(match.group("hour"))
    minutes = int(match.group("minute"))
    seconds = int(match.group("second") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        return INVALID_TIMECODE

    fraction = match.group("fraction") or ""
    try:
        duration = timedelta(
            days=int(match.group("days") or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=int(fraction[:6].ljust(6, "0")),
        )
    except (OverflowError, ValueError):
        # timedelta caps the day count
        return INVALID_TIMECODE
    return duration // timedelta(milliseconds=1)


def _split_timecode_line(line: str) -> list[str]:
    return _DELIMITER_PATTERN.split(line)


def try_parse_srt_timecode_line(line: str) -> TimecodeLine:
    """Parse ``start --> end`` into ``(start, end, success)``.

    A half that fails to parse keeps the ``INVALID_TIMECODE`` sentinel.
    """

    parts = _split_timecode_line(line)
    if len(parts) != 2:
        return INVALID_TIMECODE, INVALID_TIMECODE, False
    start = parse_srt_timecode(parts[0].strip())
    end = parse_srt_timecode(parts[1].strip())
    return start, end, start != INVALID_TIMECODE and end != INVALID_TIMECODE


def try_parse_vtt_timecode_line(line: str) -> TimecodeLine:
    parts = _split_timecode_line(line)
    if len(parts) != 2:
        return INVALID_TIMECODE, INVALID_TIMECODE, False
    start = parse_vtt_timecode(parts[0])
    end = parse_vtt_timecode(parts[1])
    return start, end, start != INVALID_TIMECODE and end != INVALID_TIMECODE


def has_timecode_delimiter(line: str) -> bool:
    return _DELIMITER_PATTERN.search(line) is not None


def format_srt_timecode(milliseconds: int) -> str:
    """Render milliseconds as an SRT ``HH:MM:SS,mmm`` string."""

    seconds, millis = divmod(max(milliseconds, 0), 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def strip_formatting(line: str) -> str:
    """Remove ``{...}`` override codes and ``<...>`` tags from a line."""

    return _FORMATTING_PATTERN.sub("", line)


def is_counter_line(line: str) -> bool:
    """Return ``True`` for a line made only of ASCII digits (an SRT sequence number)."""

    return bool(line) and line.isascii() and line.isdigit()


@dataclass(slots=True)
class DummySchedule:
    """Hands out consecutive dummy intervals for cues without timecodes."""

    duration: int = 1000
    cursor: int = 0

    def next_interval(self) -> Tuple[int, int]:
        start = self.cursor
        self.cursor += self.duration
        return start, start + self.duration
