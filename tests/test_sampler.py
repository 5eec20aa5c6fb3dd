# ==============================================
# Tests for Sampler
# ==============================================

import pytest

from csvtype.config import DialectConfig
from csvtype.detection.column_type import ColumnType, DetectionFlags
from csvtype.exceptions import ColumnCountError, SchemaError
from csvtype.reading.column_namer import ColumnNamer
from csvtype.reading.sampler import Sampler, is_blank, sample_lines, strip_terminator

T = ColumnType


class TestHelpers:
    def test_strip_terminator(self):
        assert strip_terminator("a,b\r\n") == "a,b"
        assert strip_terminator("a,b\n") == "a,b"
        assert strip_terminator("a,b") == "a,b"

    def test_is_blank(self):
        assert is_blank("", " \t")
        assert is_blank(" \t ", " \t")
        assert not is_blank(" x ", " \t")


class TestHeaderDetection:
    def test_detects_header(self, csv_lines, flags):
        schema = sample_lines(csv_lines, flags=flags)
        assert schema.has_header is True
        assert schema.names == ("id", "name", "score", "active", "mask")
        assert schema.types == (T.INT16, T.STRING, T.FLOAT64, T.BOOLEAN, T.UINT16)
        assert schema.lines_sampled == 4

    def test_all_text_file_has_no_header(self, flags):
        lines = ["a,b\n", "c,d\n", "e,f\n"]
        schema = sample_lines(lines, flags=flags)
        assert schema.has_header is False
        assert schema.names == ("column_1", "column_2")
        assert schema.types == (T.STRING, T.STRING)
        assert schema.lines_sampled == 3

    def test_numeric_first_line_is_data(self, flags):
        schema = sample_lines(["1,2\n", "3,x\n"], flags=flags)
        assert schema.has_header is False
        assert schema.types == (T.INT8, T.STRING)

    def test_single_line_is_data(self, flags):
        schema = sample_lines(["id,name\n"], flags=flags)
        assert schema.has_header is False
        assert schema.lines_sampled == 1

    def test_forced_header(self, flags):
        lines = ["a,b\n", "c,d\n"]
        schema = sample_lines(lines, flags=flags | DetectionFlags.HAS_HEADER_ROW)
        assert schema.has_header is True
        assert schema.names == ("a", "b")
        assert schema.lines_sampled == 1

    def test_forced_no_header(self, csv_lines, flags):
        schema = sample_lines(csv_lines, flags=flags | DetectionFlags.NO_HEADER_ROW)
        assert schema.has_header is False
        assert schema.names[0] == "column_1"
        assert schema.types == (T.STRING,) * 5
        assert schema.lines_sampled == 5

    def test_header_only_file(self, flags):
        schema = sample_lines(["x,y\n"], flags=flags | DetectionFlags.HAS_HEADER_ROW)
        assert schema.names == ("x", "y")
        assert schema.types == (T.UNKNOWN, T.UNKNOWN)
        assert schema.lines_sampled == 0

    def test_header_shorter_than_data(self, flags):
        schema = sample_lines(["a\n", "1,2\n"], flags=flags | DetectionFlags.HAS_HEADER_ROW)
        assert schema.names == ("a", "column_2")
        assert schema.types == (T.INT8, T.INT8)

    def test_snake_case_names(self, flags):
        schema = sample_lines(["userId,Full Name\n", "1,x\n"], flags=flags, snake_case_names=True)
        assert schema.names == ("user_id", "full_name")


class TestSampling:
    def test_stops_after_max_lines(self, flags):
        lines = ["1\n", "2\n", "x\n"]
        assert sample_lines(lines, max_lines=2, flags=flags).types == (T.INT8,)
        assert sample_lines(lines, max_lines=3, flags=flags).types == (T.STRING,)

    def test_reads_lazily(self, flags):
        def endless():
            while True:
                yield "1,2\n"

        schema = sample_lines(endless(), max_lines=5, flags=flags)
        assert schema.lines_sampled == 5

    def test_empty_input(self, flags):
        schema = sample_lines([], flags=flags)
        assert schema.column_count == 0
        assert schema.has_header is False

    def test_empty_lines_skipped_by_flag(self):
        lines = ["1\n", "\n", "  \n", "2\n"]
        skipping = DetectionFlags.SKIP_EMPTY_LINES | DetectionFlags.NO_HEADER_ROW
        assert sample_lines(lines, flags=skipping).lines_sampled == 2

        keeping = DetectionFlags.NO_HEADER_ROW
        schema = sample_lines(lines, flags=keeping)
        assert schema.lines_sampled == 4
        assert schema.types == (T.INT8,)

    def test_ragged_lines_grow_columns(self, flags):
        lines = ["1\n", "2,a\n", "3,b,0x1\n"]
        schema = sample_lines(lines, flags=flags | DetectionFlags.NO_HEADER_ROW)
        assert schema.types == (T.INT8, T.STRING, T.UINT8)

    def test_dialect(self, flags):
        dialect = DialectConfig(separators=";", quote_lead="'", quote_trail="'")
        lines = ["'a;b';1\n", "'c';2\n"]
        schema = sample_lines(lines, flags=flags | DetectionFlags.NO_HEADER_ROW, dialect=dialect)
        assert schema.types == (T.STRING, T.INT8)

    def test_overrides(self, csv_lines, flags):
        schema = sample_lines(csv_lines, flags=flags, overrides={"id": T.INT64, 4: T.STRING})
        assert schema.types[0] == T.INT64
        assert schema.types[4] == T.STRING

    def test_override_unknown_column(self, csv_lines, flags):
        with pytest.raises(SchemaError):
            sample_lines(csv_lines, flags=flags, overrides={"nope": T.STRING})

    def test_known_column_count(self, flags):
        sampler = Sampler(flags=flags | DetectionFlags.NO_HEADER_ROW, column_count=3)
        schema = sampler.sample(["1\n"])
        assert schema.types == (T.INT8, T.UNKNOWN, T.UNKNOWN)


class TestFixedColumnCount:
    def test_mismatch_raises(self, flags):
        fixed = flags | DetectionFlags.FIXED_COLUMN_COUNT
        with pytest.raises(ColumnCountError) as excinfo:
            sample_lines(["a,b\n", "1,2\n", "1,2,3\n"], flags=fixed)
        assert excinfo.value.line_number == 3
        assert excinfo.value.expected == 2
        assert excinfo.value.found == 3

    def test_header_sets_the_width(self, flags):
        fixed = flags | DetectionFlags.FIXED_COLUMN_COUNT | DetectionFlags.HAS_HEADER_ROW
        with pytest.raises(ColumnCountError):
            sample_lines(["a,b,c\n", "1,2\n"], flags=fixed)

    def test_skipped_blank_lines_are_not_checked(self, flags):
        fixed = flags | DetectionFlags.FIXED_COLUMN_COUNT
        schema = sample_lines(["1,2\n", "\n", "3,4\n"], flags=fixed)
        assert schema.types == (T.INT8, T.INT8)


class TestColumnStats:
    def test_stats_cover_data_lines(self, csv_lines, flags):
        sampler = Sampler(flags=flags, namer=ColumnNamer())
        sampler.sample(csv_lines)

        stats = sampler.column_stats
        assert len(stats) == 5
        assert stats[0].type_counts == {"int8": 3, "int16": 1}
        assert stats[2].blank_count == 1
        assert stats[3].resolved_type == T.BOOLEAN

    def test_stats_include_first_line_when_not_a_header(self, flags):
        sampler = Sampler(flags=flags)
        sampler.sample(["1\n", "2\n"])
        assert sampler.column_stats[0].presence_count == 2

    def test_stats_reset_between_runs(self, flags):
        sampler = Sampler(flags=flags)
        sampler.sample(["1\n", "2\n"])
        sampler.sample(["x\n"])
        assert sampler.column_stats[0].presence_count == 1
