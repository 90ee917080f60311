import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from subparse.srt import parse_timecode, try_parse_timecode_line
from subparse.utils import (
    DummySchedule,
    format_srt_timecode,
    parse_ssa_timecode,
    parse_vtt_timecode,
    strip_formatting,
    try_parse_vtt_timecode_line,
)


class SrtTimecodeTest(unittest.TestCase):
    def test_parse_timecode(self) -> None:
        cases = [
            ("00:00:01,000", 1000),
            ("01:30:15,250", 5415250),
            ("00:00:00,000", 0),
            ("00:00:00,500", 500),
            ("invalid_timecode", -1),
            ("00:00:00,abc", -1),
            ("00:00:01.000", -1),
            ("0:00:01,000", -1),
            ("00:00:01,00", -1),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(parse_timecode(value), expected)

    def test_try_parse_timecode_line(self) -> None:
        cases = [
            ("00:00:01,000 --> 00:00:04,000", (1000, 4000, True)),
            ("00:00:01,000 --> 00:00:01,000", (1000, 1000, True)),
            ("00:00:01,000 -> 00:00:04,000", (1000, 4000, True)),
            ("00:00:01,000 - > 00:00:04,000", (1000, 4000, True)),
            ("invalid_timecode --> 00:00:04,000", (-1, 4000, False)),
            ("00:00:01,000 --> invalid_timecode", (1000, -1, False)),
            ("no delimiter here", (-1, -1, False)),
        ]
        for line, expected in cases:
            with self.subTest(line=line):
                self.assertEqual(try_parse_timecode_line(line), expected)

    def test_invalid_start_reports_failure_with_sentinel_start(self) -> None:
        start, _, success = try_parse_timecode_line("invalid_timecode --> 00:00:04,000")
        self.assertFalse(success)
        self.assertEqual(start, -1)

    def test_format_timecode(self) -> None:
        cases = [
            (0, "00:00:00,000"),
            (1000, "00:00:01,000"),
            (5415250, "01:30:15,250"),
            (100 * 3600 * 1000, "100:00:00,000"),
        ]
        for milliseconds, expected in cases:
            with self.subTest(milliseconds=milliseconds):
                self.assertEqual(format_srt_timecode(milliseconds), expected)


class VttTimecodeTest(unittest.TestCase):
    def test_parse_timecode(self) -> None:
        cases = [
            ("00:00:10.500", 10500),
            ("01:02:03.004", 3723004),
            ("00:20.000", 20000),
            ("00:00:01,250", 1250),
            (" 00:00:18.000 align:start", 18000),
            ("garbage", -1),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(parse_vtt_timecode(value), expected)

    def test_try_parse_timecode_line_short_form(self) -> None:
        self.assertEqual(try_parse_vtt_timecode_line("00:20.000 --> 00:22.500"), (20000, 22500, True))
        self.assertEqual(try_parse_vtt_timecode_line("CUE - 1"), (-1, -1, False))


class SsaTimecodeTest(unittest.TestCase):
    def test_parse_timecode(self) -> None:
        cases = [
            ("0:00:01.00", 1000),
            ("0:00:05.25", 5250),
            ("1:02:03.5", 3723500),
            ("0:01", 60000),
            ("1.00:00:00", 86400000),
            ("0:61:00.00", -1),
            ("24:00:00.00", -1),
            ("abc", -1),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(parse_ssa_timecode(value), expected)

    def test_day_count_beyond_timedelta_range_is_invalid(self) -> None:
        self.assertEqual(parse_ssa_timecode("9999999999.0:00:01.00"), -1)
        self.assertEqual(parse_ssa_timecode("1000000000.0:00:00"), -1)


class TextHelpersTest(unittest.TestCase):
    def test_strip_formatting_removes_braces_and_tags(self) -> None:
        self.assertEqual(strip_formatting("{\\an8}<i>Hello</i> <b>there</b>"), "Hello there")
        self.assertEqual(strip_formatting("plain"), "plain")

    def test_dummy_schedule_advances_by_duration(self) -> None:
        schedule = DummySchedule(duration=1000)
        self.assertEqual(
            [schedule.next_interval() for _ in range(3)],
            [(0, 1000), (1000, 2000), (2000, 3000)],
        )


if __name__ == "__main__":
    unittest.main()
