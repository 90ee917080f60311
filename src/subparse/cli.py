"""Command line interface for the subparse toolkit."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .errors import FormatError
from .logging_config import setup_logging
from .models import ParserOptions, SubtitleFormat, TimecodeMode, WriterOptions
from .parser import SubtitleParser
from .workbook import create_cue_workbook, save_workbook
from .writer import to_srt_text

app = typer.Typer(help="Subtitle parsing utilities (SRT, WebVTT, SSA)")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG shows parser attempts)"),
) -> None:
    """Parse SubRip, WebVTT and SubStation Alpha subtitles."""
    setup_logging(log_level)


def _build_options(encoding: str, timecode_mode: str, fmt: Optional[str]) -> ParserOptions:
    try:
        return ParserOptions(
            encoding=encoding,
            timecode_mode=TimecodeMode.from_string(timecode_mode),
            prioritized_format=SubtitleFormat.from_name(fmt) if fmt else None,
        )
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc


def _parse(src: Path, options: ParserOptions):
    try:
        return SubtitleParser().parse_file(src, options)
    except FormatError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc


@app.command("convert")
def convert(
    src: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Subtitle file"),
    out: Optional[Path] = typer.Option(None, dir_okay=False, help="Output SRT file (stdout when omitted)"),
    encoding: str = typer.Option("utf-8", help="Text encoding of the input"),
    timecode_mode: str = typer.Option("required", help="required, optional or none"),
    fmt: Optional[str] = typer.Option(None, "--format", help="Format to try first (SubRip, SubStationAlpha, WebVTT)"),
    plain: bool = typer.Option(False, "--plain", help="Strip formatting tags"),
    no_timecode: bool = typer.Option(False, "--no-timecode", help="Omit timecode lines"),
    crlf: bool = typer.Option(False, "--crlf", help="Use CRLF line endings"),
) -> None:
    """Convert a subtitle file to SRT."""
    cues = _parse(src, _build_options(encoding, timecode_mode, fmt))
    text = to_srt_text(cues, WriterOptions(
        include_formatting=not plain,
        include_timecode=not no_timecode,
        newline="\r\n" if crlf else "\n",
    ))
    if out is None:
        typer.echo(text, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(text.encode("utf-8"))
    typer.secho(f"Wrote {len(cues)} cues -> {out}", fg=typer.colors.GREEN, err=True)


@app.command("detect")
def detect(
    src: Path = typer.Argument(..., dir_okay=False, help="Subtitle file name"),
) -> None:
    """Print the format suggested by the file extension."""
    fmt = SubtitleParser().get_most_likely_format(src)
    if fmt is None:
        typer.secho(f"Unknown subtitle extension: {src.suffix or '(none)'}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(fmt.name)


@app.command("make-sheet")
def make_sheet(
    src: Path = typer.Option(..., exists=True, dir_okay=False, readable=True, help="Subtitle file"),
    out: Path = typer.Option(..., dir_okay=False, help="Output Excel file"),
    encoding: str = typer.Option("utf-8", help="Text encoding of the input"),
    timecode_mode: str = typer.Option("required", help="required, optional or none"),
) -> None:
    """Create a workbook listing every cue of a subtitle file."""
    cues = _parse(src, _build_options(encoding, timecode_mode, None))
    save_workbook(create_cue_workbook(cues), out)
    typer.secho(f"Workbook created: {out}", fg=typer.colors.GREEN)
