"""Tests for the CSV repair filter and the CSV/JSON decoders.

WHY: Decoders are the only place malformed input is caught. They must
accept everything whisper.cpp writes and reject everything else loudly.

HOW: Decoders are fed io.StringIO sources. Error cases assert on the
exception type and on the position named in its message.

RULES:
- Malformed input raises InputFormatError, never a bare ValueError
- Read failures raise InputReadError
"""

import io

import pytest

from transcript_transform.core.ir import Event
from transcript_transform.errors import InputFormatError, InputReadError
from transcript_transform.readers import READERS
from transcript_transform.readers.csv_events import read_csv_events
from transcript_transform.readers.csv_repair import (
    QuoteRepairReader,
    repair_line,
    strip_bookending_quotes,
)
from transcript_transform.readers.json_events import read_json_events


class _FailingStream(io.StringIO):
    def read(self, *args):
        raise OSError("device unplugged")

    def __iter__(self):
        raise OSError("device unplugged")


class TestQuoteRepair:
    """Lines with exactly two commas lose their first and last quote."""

    def test_quoted_text_unwrapped(self):
        assert repair_line('0,100," Hello"\n') == "0,100, Hello\n"

    def test_inner_quotes_kept(self):
        assert repair_line('0,100," He said "hi""\n') == '0,100, He said "hi"\n'

    def test_other_comma_counts_untouched(self):
        line = '0,100," Hello, world"\n'
        assert repair_line(line) == line

    def test_header_untouched(self):
        assert repair_line("start,end,text\n") == "start,end,text\n"

    def test_single_quote_untouched(self):
        assert repair_line('0,100," oops\n') == '0,100," oops\n'

    def test_non_ascii(self):
        assert repair_line('0,100," Grüße "aus" Köln"') == '0,100, Grüße "aus" Köln'

    def test_strip_bookending_quotes_without_quotes(self):
        assert strip_bookending_quotes("abc") == "abc"

    def test_reader_wraps_any_line_iterable(self):
        lines = ["start,end,text\n", '0,1," a"\n', '1,2," b, c"\n']
        assert list(QuoteRepairReader(lines)) == ["start,end,text\n", "0,1, a\n", '1,2," b, c"\n']


class TestCsvReader:
    """CSV decoding with and without the repair filter."""

    def test_whisper_csv(self, whisper_csv):
        events = list(read_csv_events(io.StringIO(whisper_csv)))
        assert events[0] == Event(0, 320, " And")
        assert events[5] == Event(1800, 2050, "icans")
        assert events[6] == Event(2050, 2100, ",,")
        assert len(events) == 8

    def test_repair_allows_unescaped_inner_quotes(self):
        raw = 'start,end,text\n0,900," He said "hi" twice"\n'
        assert list(read_csv_events(io.StringIO(raw))) == [Event(0, 900, ' He said "hi" twice')]

    def test_strict_csv_keeps_leading_space_inside_quotes(self):
        raw = 'start,end,text\n0,100," Hi"\n'
        assert list(read_csv_events(io.StringIO(raw), repair=False)) == [Event(0, 100, " Hi")]

    def test_extra_columns_ignored(self):
        raw = "start,end,text,speaker\n0,100, Hi,1\n"
        assert list(read_csv_events(io.StringIO(raw), repair=False)) == [Event(0, 100, " Hi")]

    def test_blank_lines_skipped(self):
        raw = "start,end,text\n\n0,100, Hi\n\n"
        assert list(read_csv_events(io.StringIO(raw))) == [Event(0, 100, " Hi")]

    def test_empty_input(self):
        assert list(read_csv_events(io.StringIO(""))) == []

    def test_header_only(self):
        assert list(read_csv_events(io.StringIO("start,end,text\n"))) == []

    def test_missing_header_column(self):
        with pytest.raises(InputFormatError, match="text"):
            list(read_csv_events(io.StringIO("start,end\n0,1\n")))

    def test_non_integer_time_names_line(self):
        raw = "start,end,text\n0,100, ok\nabc,200, bad\n"
        with pytest.raises(InputFormatError, match="line 3"):
            list(read_csv_events(io.StringIO(raw)))

    def test_missing_field(self):
        raw = "start,end,text\n0,100\n"
        with pytest.raises(InputFormatError):
            list(read_csv_events(io.StringIO(raw)))

    def test_end_before_start(self):
        raw = "start,end,text\n500,100, backwards\n"
        with pytest.raises(InputFormatError):
            list(read_csv_events(io.StringIO(raw)))

    def test_rows_are_decoded_lazily(self):
        raw = "start,end,text\n0,100, ok\nbad,row, here\n"
        events = read_csv_events(io.StringIO(raw))
        assert next(events) == Event(0, 100, " ok")
        with pytest.raises(InputFormatError):
            next(events)

    def test_read_failure(self):
        with pytest.raises(InputReadError):
            list(read_csv_events(_FailingStream()))

    def test_start_going_backwards_names_line(self):
        raw = "start,end,text\n1000,1200, a\n0,100, b\n"
        with pytest.raises(InputFormatError, match="line 3"):
            list(read_csv_events(io.StringIO(raw)))

    def test_equal_starts_accepted(self):
        raw = "start,end,text\n0,100, a\n0,50, b\n"
        assert list(read_csv_events(io.StringIO(raw))) == [Event(0, 100, " a"), Event(0, 50, " b")]


class TestJsonReader:
    """JSON arrays and whitespace-separated object streams."""

    def test_array(self):
        raw = '[{"start": 0, "end": 100, "text": " a"}, {"start": 100, "end": 200, "text": "b"}]'
        assert list(read_json_events(io.StringIO(raw))) == [Event(0, 100, " a"), Event(100, 200, "b")]

    def test_object_stream(self):
        raw = '{"start": 0, "end": 100, "text": " a"}\n{"start": 100, "end": 200, "text": " b"}\n'
        assert list(read_json_events(io.StringIO(raw))) == [Event(0, 100, " a"), Event(100, 200, " b")]

    def test_objects_without_separator(self):
        raw = '{"start":0,"end":1,"text":" a"}{"start":1,"end":2,"text":" b"}'
        assert len(list(read_json_events(io.StringIO(raw)))) == 2

    def test_empty(self):
        assert list(read_json_events(io.StringIO("  \n"))) == []

    def test_extra_keys_ignored(self):
        raw = '{"start": 0, "end": 100, "text": " a", "p": 0.9}'
        assert list(read_json_events(io.StringIO(raw))) == [Event(0, 100, " a")]

    def test_invalid_json(self):
        with pytest.raises(InputFormatError, match="Invalid JSON"):
            list(read_json_events(io.StringIO('{"start": 0,')))

    def test_non_object(self):
        with pytest.raises(InputFormatError, match="offset 0"):
            list(read_json_events(io.StringIO("[1, 2]")))

    def test_missing_field(self):
        with pytest.raises(InputFormatError, match="text"):
            list(read_json_events(io.StringIO('{"start": 0, "end": 1}')))

    def test_float_time_rejected(self):
        with pytest.raises(InputFormatError):
            list(read_json_events(io.StringIO('{"start": 0.5, "end": 1, "text": " a"}')))

    def test_read_failure(self):
        with pytest.raises(InputReadError):
            list(read_json_events(_FailingStream()))

    def test_start_going_backwards_names_offset(self):
        raw = '{"start": 500, "end": 600, "text": " a"}\n{"start": 100, "end": 200, "text": " b"}'
        with pytest.raises(InputFormatError, match="offset 41"):
            list(read_json_events(io.StringIO(raw)))

    def test_start_going_backwards_inside_array(self):
        raw = '[{"start": 500, "end": 600, "text": " a"}, {"start": 100, "end": 200, "text": " b"}]'
        with pytest.raises(InputFormatError, match="before the previous record"):
            list(read_json_events(io.StringIO(raw)))


class TestRegistry:
    """READERS exposes exactly the CLI's input formats."""

    def test_keys(self):
        assert set(READERS) == {"csv-fix", "csv", "json"}

    def test_csv_fix_repairs_and_csv_does_not(self):
        raw = 'start,end,text\n0,900," He said "hi" twice"\n'
        assert list(READERS["csv-fix"](io.StringIO(raw))) == [Event(0, 900, ' He said "hi" twice')]
        # strict CSV reads the malformed quoting differently
        assert list(READERS["csv"](io.StringIO(raw))) != [Event(0, 900, ' He said "hi" twice')]
