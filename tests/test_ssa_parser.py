import io
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from subparse.errors import EmptyResultError, StructuralParseError
from subparse.models import ParserOptions, TimecodeMode
from subparse.ssa import WrapStyle, parse_ssa

DATA_DIR = Path(__file__).resolve().parent / "data"

EVENTS_HEADER = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def _script(*rows: str, wrap_style: str | None = None) -> io.BytesIO:
    info = ["[Script Info]", "Title: test"]
    if wrap_style is not None:
        info.append(f"WrapStyle: {wrap_style}")
    text = "\n".join(info + ["", "[Events]", EVENTS_HEADER, *rows]) + "\n"
    return io.BytesIO(text.encode("utf-8"))


class SsaParserTest(unittest.TestCase):
    def test_parses_valid_file(self) -> None:
        with open(DATA_DIR / "sample.ssa", "rb") as fh:
            cues = parse_ssa(fh)

        self.assertEqual(len(cues), 3)
        self.assertEqual((cues[0].start_time, cues[0].end_time), (1000, 4500))
        self.assertEqual(cues[0].lines, ("Hello, world",))
        self.assertEqual(cues[1].lines, ("{\\i1}First line{\\i0}", "Second line"))
        self.assertEqual(cues[1].plaintext_lines, ("First line", "Second line"))
        # WrapStyle 0 only breaks on \N
        self.assertEqual(cues[2].lines, ("Keeps\\nsoft break",))

    def test_wrap_style_none_splits_on_both_escapes(self) -> None:
        stream = _script(
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,one\\ntwo\\N three",
            wrap_style="2",
        )
        cues = parse_ssa(stream)
        self.assertEqual(cues[0].lines, ("one", "two", "three"))

    def test_missing_wrap_style_defaults_to_none(self) -> None:
        stream = _script("Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,a\\nb")
        self.assertEqual(parse_ssa(stream)[0].lines, ("a", "b"))

    def test_wrap_style_parsing(self) -> None:
        self.assertIs(WrapStyle.from_string(" 1"), WrapStyle.END_OF_LINE)
        self.assertIs(WrapStyle.from_string("3"), WrapStyle.SMART_WIDE_LOWER_LINE)
        self.assertIs(WrapStyle.from_string("x"), WrapStyle.NONE)
        self.assertIs(WrapStyle.from_string("9"), WrapStyle.NONE)

    def test_cue_starting_at_zero_is_kept(self) -> None:
        cues = parse_ssa(_script("Dialogue: 0,0:00:00.00,0:00:02.00,Default,,0,0,0,,From the start"))
        self.assertEqual((cues[0].start_time, cues[0].end_time), (0, 2000))

    def test_unparseable_rows_are_dropped_when_required(self) -> None:
        cues = parse_ssa(_script(
            "Dialogue: 0,bad,0:00:02.00,Default,,0,0,0,,dropped",
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,kept",
        ))
        self.assertEqual([cue.lines for cue in cues], [("kept",)])

    def test_unparseable_rows_get_dummy_timecodes_when_optional(self) -> None:
        cues = parse_ssa(
            _script(
                "Dialogue: 0,bad,worse,Default,,0,0,0,,first",
                "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,real",
                "Dialogue: 0,,,Default,,0,0,0,,second",
            ),
            ParserOptions(timecode_mode=TimecodeMode.OPTIONAL),
        )
        self.assertEqual(
            [(cue.start_time, cue.end_time) for cue in cues],
            [(0, 1000), (3000, 4000), (1000, 2000)],
        )

    def test_none_mode_ignores_timing_columns(self) -> None:
        cues = parse_ssa(
            _script("Dialogue: 0,bad,worse,Default,,0,0,0,,text"),
            ParserOptions(timecode_mode=TimecodeMode.NONE),
        )
        self.assertEqual((cues[0].start_time, cues[0].end_time, cues[0].lines), (0, 0, ("text",)))

    def test_blank_text_rows_are_skipped(self) -> None:
        cues = parse_ssa(_script(
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,   ",
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,visible",
        ))
        self.assertEqual(len(cues), 1)

    def test_rows_with_only_line_breaks_are_skipped(self) -> None:
        cues = parse_ssa(_script(
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,\\N",
            "Dialogue: 0,0:00:02.00,0:00:03.00,Default,,0,0,0,,\\N \\n ",
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,visible",
        ))
        self.assertEqual([cue.lines for cue in cues], [("visible",)])

    def test_blank_lines_inside_text_are_dropped(self) -> None:
        cues = parse_ssa(_script("Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,top\\N\\Nbottom"))
        self.assertEqual(cues[0].lines, ("top", "bottom"))
        self.assertEqual(cues[0].plaintext_lines, ("top", "bottom"))

    def test_skipped_blank_rows_do_not_consume_dummy_intervals(self) -> None:
        cues = parse_ssa(
            _script(
                "Dialogue: 0,bad,bad,Default,,0,0,0,,\\N",
                "Dialogue: 0,bad,bad,Default,,0,0,0,,shown",
            ),
            ParserOptions(timecode_mode=TimecodeMode.OPTIONAL),
        )
        self.assertEqual([(cue.start_time, cue.end_time) for cue in cues], [(0, 1000)])

    def test_out_of_range_day_count_drops_the_row(self) -> None:
        cues = parse_ssa(_script(
            "Dialogue: 0,9999999999.0:00:01.00,0:00:02.00,Default,,0,0,0,,dropped",
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,kept",
        ))
        self.assertEqual([cue.lines for cue in cues], [("kept",)])

    def test_stops_at_next_section(self) -> None:
        cues = parse_ssa(_script(
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,inside",
            "",
            "[Fonts]",
            "fontname: something.ttf",
        ))
        self.assertEqual([cue.lines for cue in cues], [("inside",)])

    def test_missing_events_section(self) -> None:
        stream = io.BytesIO(b"[Script Info]\nTitle: nothing\n")
        with self.assertRaises(StructuralParseError) as ctx:
            parse_ssa(stream)
        self.assertIn("without finding the Event section", str(ctx.exception))

    def test_missing_text_column(self) -> None:
        stream = io.BytesIO(b"[Events]\nFormat: Layer, Start, End, Style\nDialogue: 0,0:00:01.00,0:00:02.00,Default\n")
        with self.assertRaises(StructuralParseError) as ctx:
            parse_ssa(stream)
        self.assertIn("Couldn't find all the necessary columns headers", str(ctx.exception))

    def test_missing_header_line(self) -> None:
        with self.assertRaises(StructuralParseError):
            parse_ssa(io.BytesIO(b"[Script Info]\n[Events]\n\n"))

    def test_short_rows_are_structural_errors(self) -> None:
        with self.assertRaises(StructuralParseError):
            parse_ssa(_script("Dialogue: 0,0:00:01.00"))

    def test_no_rows_is_empty(self) -> None:
        with self.assertRaises(EmptyResultError):
            parse_ssa(_script())


if __name__ == "__main__":
    unittest.main()
