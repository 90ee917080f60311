"""Functions for exporting cues to, and reading them back from, Excel workbooks."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List

from openpyxl import Workbook, load_workbook

from .errors import StructuralParseError, TimecodeError
from .models import SubtitleCue
from .utils import INVALID_TIMECODE, format_srt_timecode, parse_srt_timecode

CUES_SHEET = "CUES"
CUE_HEADERS = ["Index", "Start", "End", "Text", "Plaintext"]


def _write_headers(sheet, headers: Iterable[str]) -> None:
    for col, header in enumerate(headers, start=1):
        sheet.cell(row=1, column=col, value=header)


def create_cue_workbook(cues: Iterable[SubtitleCue]) -> Workbook:
    """Build a workbook holding one row per cue on the ``CUES`` sheet."""

    wb = Workbook(); wb.remove(wb.active)
    sheet = wb.create_sheet(CUES_SHEET)
    _write_headers(sheet, CUE_HEADERS)
    for row_index, cue in enumerate(cues, start=2):
        sheet.cell(row=row_index, column=1, value=row_index - 1)
        sheet.cell(row=row_index, column=2, value=format_srt_timecode(cue.start_time))
        sheet.cell(row=row_index, column=3, value=format_srt_timecode(cue.end_time))
        sheet.cell(row=row_index, column=4, value="\n".join(cue.lines))
        sheet.cell(row=row_index, column=5, value="\n".join(cue.plaintext_lines))
    return wb


def save_workbook(workbook: Workbook, path: str | Path) -> None:
    path = Path(path); path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)


def load_sheet_dictionaries(sheet) -> list[dict[str, Any]]:
    if not sheet or sheet.max_row < 1: return []
    headers = [str(cell.value or "").strip() for cell in sheet[1]]
    return [
        {h: row[i] for i, h in enumerate(headers) if h}
        for row in sheet.iter_rows(min_row=2, values_only=True)
    ]


def load_workbook_cues(path: str | Path) -> List[SubtitleCue]:
    """Read cues back from a workbook written by :func:`create_cue_workbook`.

    Raises:
        StructuralParseError: If the workbook has no ``CUES`` sheet.
        TimecodeError: If a row holds an unparseable start or end timecode.
    """

    wb = load_workbook(Path(path), data_only=True)
    if CUES_SHEET not in wb.sheetnames:
        raise StructuralParseError(f"Workbook {path} has no {CUES_SHEET} sheet")

    cues: list[SubtitleCue] = []
    for record in load_sheet_dictionaries(wb[CUES_SHEET]):
        if not any(value not in (None, "") for value in record.values()):
            continue
        start = parse_srt_timecode(_string_or_empty(record.get("Start")))
        end = parse_srt_timecode(_string_or_empty(record.get("End")))
        if start == INVALID_TIMECODE or end == INVALID_TIMECODE:
            raise TimecodeError(
                f"Invalid timecode in row {record.get('Index')!r}: "
                f"{record.get('Start')!r} --> {record.get('End')!r}"
            )
        cues.append(SubtitleCue(
            start_time=start, end_time=end,
            lines=tuple(_split_cell(record.get("Text"))),
            plaintext_lines=tuple(_split_cell(record.get("Plaintext"))),
        ))
    return cues


def _string_or_empty(v): return str(v).strip() if v is not None else ""
def _split_cell(v): return str(v).split("\n") if v not in (None, "") else []
