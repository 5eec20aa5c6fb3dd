# ==============================================
# Sampler
# ==============================================
#
# PURPOSE:
#   Phase 1 of a two-phase read: scan the first N lines of a file,
#   classify every field, and fold the results into one type per
#   column. The output is a ColumnSchema that the RowReader uses
#   for phase 2.
#
# PROCESS:
# --------
#   for each line (until max_lines data lines were sampled):
#     1. Strip the line terminator
#     2. Skip it if blank and SKIP_EMPTY_LINES is set
#     3. First line + HAS_HEADER_ROW → keep as header, go on
#     4. LineTokenizer.split → field spans
#     5. FieldClassifier → per-line type vector
#     6. FIXED_COLUMN_COUNT → field count must match the first line
#     7. TypeAccumulator.observe + ColumnAnalyzer.observe_line
#
#   Header detection (neither HAS_HEADER_ROW nor NO_HEADER_ROW):
#     the first line is held aside. It is a header when all of its
#     fields are text (string/unknown) while at least one column of
#     the remaining lines resolves to a boolean, integer or float.
#     Otherwise it is merged back in as data; merging is order
#     independent, so this gives the same types as a straight scan.
#
# CLASS: Sampler
# --------------
#   - sample(lines, overrides=None) -> ColumnSchema
#   - column_stats -> list[ColumnStats]       (from the last run)
#
# FUNCTION:
# ---------
#   - sample_lines(lines, max_lines, flags, dialect, overrides) -> ColumnSchema
#
# ==============================================

import logging
from typing import Iterable, List, Mapping, Optional

from csvtype.analysis.column_stats import ColumnAnalyzer, ColumnStats
from csvtype.analysis.type_accumulator import TypeAccumulator
from csvtype.config import DialectConfig
from csvtype.detection.column_type import ColumnType, DetectionFlags, DEFAULT_FLAGS
from csvtype.detection.field_classifier import FieldClassifier
from csvtype.detection.line_tokenizer import LineTokenizer
from csvtype.exceptions import ColumnCountError
from .column_namer import ColumnNamer
from .schema import ColumnKey, ColumnSchema

logger = logging.getLogger(__name__)

TEXT_TYPES = {ColumnType.STRING, ColumnType.UNKNOWN}


def strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


def is_blank(line: str, whitespace: Iterable[str]) -> bool:
    """True if the line holds only whitespace characters (or nothing)."""
    return all(ch in whitespace for ch in line)


class Sampler:
    """
    Infers a ColumnSchema from the first lines of delimited text.
    """

    def __init__(
        self,
        tokenizer: Optional[LineTokenizer] = None,
        flags: DetectionFlags = DEFAULT_FLAGS,
        max_lines: int = 100,
        namer: Optional[ColumnNamer] = None,
        column_count: Optional[int] = None,
    ):
        """
        Args:
            tokenizer: Dialect-aware line splitter (default: comma, double quotes)
            flags: Detection flags
            max_lines: Maximum number of data lines to sample
            namer: Column name builder
            column_count: Optional number of columns known up front
        """
        self.tokenizer = tokenizer or LineTokenizer()
        self.flags = flags
        self.max_lines = max_lines
        self.namer = namer or ColumnNamer()
        self.column_count = column_count
        self._analyzer = ColumnAnalyzer()

    @property
    def column_stats(self) -> List[ColumnStats]:
        return self._analyzer.get_stats()

    def sample(
        self,
        lines: Iterable[str],
        overrides: Optional[Mapping[ColumnKey, ColumnType]] = None,
    ) -> ColumnSchema:
        """
        Scan up to max_lines data lines and build the column schema.

        Args:
            lines: Any iterable of text lines (e.g. an open file)
            overrides: Optional {column name or index: ColumnType} applied
                       after inference

        Returns:
            The finalized ColumnSchema

        Raises:
            ColumnCountError: FIXED_COLUMN_COUNT is set and a line has a
                              different number of fields than the first
            SchemaError: An override names an unknown column
        """
        self._analyzer.reset()
        accumulator = TypeAccumulator(self.column_count)

        header_mode = self.flags & DetectionFlags.HEADER_MASK
        has_header = header_mode == DetectionFlags.HAS_HEADER_ROW
        detect_header = header_mode not in (DetectionFlags.HAS_HEADER_ROW, DetectionFlags.NO_HEADER_ROW)
        skip_empty = bool(self.flags & DetectionFlags.SKIP_EMPTY_LINES)
        fixed_width = bool(self.flags & DetectionFlags.FIXED_COLUMN_COUNT)

        header_fields: Optional[List[str]] = None
        first_types: Optional[List[ColumnType]] = None
        expected_width: Optional[int] = None
        data_lines = 0

        for line_number, raw in enumerate(lines, start=1):
            if data_lines >= self.max_lines:
                break

            line = strip_terminator(raw)
            if skip_empty and is_blank(line, self.tokenizer.whitespace):
                continue

            spans = self.tokenizer.split(line)
            values = [line[start:end] for start, end in spans]

            if fixed_width:
                if expected_width is None:
                    expected_width = len(spans)
                elif len(spans) != expected_width:
                    raise ColumnCountError(line_number, expected_width, len(spans))

            if has_header and header_fields is None:
                header_fields = values
                continue

            types = [FieldClassifier.classify(line, self.flags, start, end) for start, end in spans]
            data_lines += 1

            if detect_header and first_types is None:
                header_fields = values
                first_types = types
                continue

            accumulator.observe(types)
            self._analyzer.observe_line(values, types)

        if detect_header and first_types is not None:
            has_header = self._looks_like_header(first_types, accumulator.types)
            if has_header:
                data_lines -= 1
                logger.info("Detected header row: %s", header_fields)
            else:
                accumulator.observe(first_types)
                self._analyzer.observe_line(header_fields, first_types)
                header_fields = None

        types = accumulator.types
        if has_header and header_fields is not None:
            types.extend([ColumnType.UNKNOWN] * (len(header_fields) - len(types)))
            names = self.namer.name_columns(header_fields, len(types))
        else:
            has_header = False
            names = self.namer.default_names(len(types))

        schema = ColumnSchema(
            names=tuple(names),
            types=tuple(types),
            lines_sampled=data_lines,
            has_header=has_header,
        )
        logger.info("Sampled %d lines, %d columns", data_lines, schema.column_count)
        return schema.with_overrides(overrides or {})

    @staticmethod
    def _looks_like_header(first_types: List[ColumnType], data_types: List[ColumnType]) -> bool:
        if not data_types:
            return False
        if not all(t in TEXT_TYPES for t in first_types):
            return False
        if ColumnType.STRING not in first_types:
            return False
        return any(t not in TEXT_TYPES for t in data_types)


def sample_lines(
    lines: Iterable[str],
    max_lines: int = 100,
    flags: DetectionFlags = DEFAULT_FLAGS,
    dialect: Optional[DialectConfig] = None,
    overrides: Optional[Mapping[ColumnKey, ColumnType]] = None,
    snake_case_names: bool = False,
) -> ColumnSchema:
    """
    Infer column names and types from the first lines of a file.

    Args:
        lines: Iterable of text lines
        max_lines: Maximum number of data lines to sample
        flags: Detection flags (header mode, empty lines, width, bool forms)
        dialect: Separators, quotes and whitespace (default: DialectConfig())
        overrides: Caller-chosen types for some columns
        snake_case_names: Normalize header names to snake_case

    Returns:
        ColumnSchema for the sampled lines
    """
    dialect = dialect or DialectConfig()
    tokenizer = LineTokenizer(
        dialect.separators,
        dialect.quote_lead,
        dialect.quote_trail,
        dialect.whitespace,
    )
    sampler = Sampler(
        tokenizer=tokenizer,
        flags=flags,
        max_lines=max_lines,
        namer=ColumnNamer(snake_case=snake_case_names),
    )
    return sampler.sample(lines, overrides)
