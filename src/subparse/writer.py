"""SRT output for parsed cues."""

from __future__ import annotations

from typing import Any, BinaryIO, Iterable, Iterator, List

from .models import SubtitleCue, WriterOptions
from .utils import format_srt_timecode


def format_timecode_line(cue: SubtitleCue) -> str:
    return f"{format_srt_timecode(cue.start_time)} --> {format_srt_timecode(cue.end_time)}"


class SubtitleWriter:
    """Renders cues as numbered SRT entries separated by blank lines."""

    def entry_lines(self, cue: SubtitleCue, number: int, options: WriterOptions) -> List[str]:
        lines = [str(number)]
        if options.include_timecode:
            lines.append(format_timecode_line(cue))
        if not options.include_formatting and cue.plaintext_lines:
            lines.extend(cue.plaintext_lines)
        else:
            lines.extend(cue.lines)
        return lines

    def iter_lines(self, cues: Iterable[SubtitleCue], options: WriterOptions) -> Iterator[str]:
        for number, cue in enumerate(cues, start=1):
            yield from self.entry_lines(cue, number, options)
            yield ""

    def write_text(self, cues: Iterable[SubtitleCue], options: WriterOptions | None = None) -> str:
        options = options or WriterOptions()
        return "".join(line + options.newline for line in self.iter_lines(cues, options))

    def write_stream(
        self,
        stream: BinaryIO,
        cues: Iterable[SubtitleCue],
        options: WriterOptions | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Write encoded SRT text to a binary stream, leaving it open."""

        options = options or WriterOptions()
        for line in self.iter_lines(cues, options):
            stream.write((line + options.newline).encode(encoding))
        stream.flush()

    async def write_stream_async(
        self,
        writer: Any,
        cues: Iterable[SubtitleCue],
        options: WriterOptions | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Write to an ``asyncio.StreamWriter``-like object, draining after each entry."""

        options = options or WriterOptions()
        for number, cue in enumerate(cues, start=1):
            entry = self.entry_lines(cue, number, options) + [""]
            writer.write("".join(line + options.newline for line in entry).encode(encoding))
            await writer.drain()


def to_srt_text(cues: Iterable[SubtitleCue], options: WriterOptions | None = None) -> str:
    """Convert cues to an SRT formatted string."""

    return SubtitleWriter().write_text(cues, options)
