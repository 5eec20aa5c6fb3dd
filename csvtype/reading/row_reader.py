# ==============================================
# RowReader
# ==============================================
#
# PURPOSE:
#   Phase 2 of a two-phase read: turn every line into typed Python
#   values using the ColumnSchema produced by the Sampler.
#
# CONVERSIONS:
# ------------
#   ColumnType        Python value      Blank field
#   ----------        ------------      -----------
#   boolean           bool              False
#   int8 .. int64     int (range-checked)  0
#   uint8 .. uint64   int (range-checked)  0
#   float64           float             0.0
#   string            str               ""
#   unknown           str               None
#
#   Any integer column accepts 0x hex when UNSIGNED_INT is set. Hex
#   text is range-checked against the unsigned type of the column's
#   width, so an int8 column sampled from "1" and "0xFF" reads 255.
#
#   Booleans accept true/false and yes/no (per flags, case-insensitive);
#   with INTEGER_BOOL any integer is accepted (0 → False).
#   A value that does not fit its column type raises
#   ValueConversionError, since the sample did not cover it.
#
# CLASSES:
# --------
# - CsvRow (dataclass): names, types, values, line_number
#     - as_dict() -> dict[str, Any]
#
# - RowReader
#     - read(lines, skip_header=None) -> Iterator[CsvRow]
#     - convert(text, column_type) -> Any
#
# FUNCTION:
# ---------
#   - read_rows(lines, schema, flags, dialect, skip_header) -> Iterator[CsvRow]
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from csvtype.config import DialectConfig
from csvtype.detection.column_type import (
    ColumnType,
    DetectionFlags,
    DEFAULT_FLAGS,
    INT_RANGES,
    int_bits,
    is_int,
    make_unsigned,
)
from csvtype.detection.field_classifier import FieldClassifier, decimal_value
from csvtype.detection.line_tokenizer import LineTokenizer
from csvtype.exceptions import ValueConversionError
from .column_namer import ColumnNamer
from .sampler import is_blank, strip_terminator
from .schema import ColumnSchema


BLANK_DEFAULTS = {
    ColumnType.BOOLEAN: False,
    ColumnType.FLOAT64: 0.0,
    ColumnType.STRING: "",
    ColumnType.UNKNOWN: None,
}


@dataclass
class CsvRow:
    """
    One materialized line. names/types are shared with the schema
    (plus any extra columns found on this line).
    """
    names: Tuple[str, ...]
    types: Tuple[ColumnType, ...]
    values: List[Any]
    line_number: int

    def as_dict(self) -> Dict[str, Any]:
        return dict(zip(self.names, self.values))


class RowReader:
    """
    Reads lines into CsvRow objects using a finalized ColumnSchema.
    """

    def __init__(
        self,
        schema: ColumnSchema,
        tokenizer: Optional[LineTokenizer] = None,
        flags: DetectionFlags = DEFAULT_FLAGS,
    ):
        """
        Args:
            schema: Column names and types from the sampling pass
            tokenizer: Line splitter for the same dialect used when sampling
            flags: Detection flags (empty lines, boolean and integer forms)
        """
        self.schema = schema
        self.tokenizer = tokenizer or LineTokenizer()
        self.flags = flags

    def read(self, lines: Iterable[str], skip_header: Optional[bool] = None) -> Iterator[CsvRow]:
        """
        Yield one CsvRow per data line.

        Args:
            lines: The lines to read
            skip_header: Drop the first non-skipped line. Defaults to
                         whether the schema was sampled with a header.

        Raises:
            ValueConversionError: A field does not fit its column type
        """
        skip_empty = bool(self.flags & DetectionFlags.SKIP_EMPTY_LINES)
        header_pending = self.schema.has_header if skip_header is None else skip_header

        for line_number, raw in enumerate(lines, start=1):
            line = strip_terminator(raw)
            if skip_empty and is_blank(line, self.tokenizer.whitespace):
                continue
            if header_pending:
                header_pending = False
                continue
            yield self.read_line(line, line_number)

    def read_line(self, line: str, line_number: int = 0) -> CsvRow:
        """
        Convert a single line.

        Fields past the schema width are typed on the fly; missing
        trailing fields get their column's blank value.
        """
        spans = self.tokenizer.split(line)
        names = list(self.schema.names)
        types = list(self.schema.types)

        for position in range(len(types), len(spans)):
            start, end = spans[position]
            names.append(f"{ColumnNamer.DEFAULT_PREFIX}{position + 1}")
            types.append(FieldClassifier.classify(line, self.flags, start, end))

        values: List[Any] = []
        for position, column_type in enumerate(types):
            if position < len(spans):
                start, end = spans[position]
                text = line[start:end]
            else:
                text = ""
            try:
                values.append(self.convert(text, column_type))
            except ValueError:
                raise ValueConversionError(line_number, names[position], text, column_type.value) from None

        return CsvRow(names=tuple(names), types=tuple(types), values=values, line_number=line_number)

    def convert(self, text: str, column_type: ColumnType) -> Any:
        """
        Convert field text to the Python value for a column type.

        Raises:
            ValueError: The text cannot be represented by column_type
        """
        if text == "":
            return BLANK_DEFAULTS.get(column_type, 0)

        if column_type in (ColumnType.STRING, ColumnType.UNKNOWN):
            return text
        if column_type is ColumnType.BOOLEAN:
            return self._to_bool(text)
        if is_int(column_type):
            value, is_hex = self._parse_int(text)
            # Hex text is bounded by the unsigned type of the same width.
            bounds = make_unsigned(int_bits(column_type)) if is_hex else column_type
            low, high = INT_RANGES[bounds]
            if not low <= value <= high:
                raise ValueError(f"{value} out of range for {column_type.value}")
            return value
        # float64
        return self._to_float(text)

    def _to_bool(self, text: str) -> bool:
        lowered = text.lower()
        if self.flags & DetectionFlags.TRUE_FALSE_BOOL and lowered in FieldClassifier.TRUE_FALSE_VARIANTS:
            return lowered == "true"
        if self.flags & DetectionFlags.YES_NO_BOOL and lowered in FieldClassifier.YES_NO_VARIANTS:
            return lowered == "yes"
        if self.flags & DetectionFlags.INTEGER_BOOL:
            return self._parse_int(text)[0] != 0
        raise ValueError(f"{text!r} is not a boolean")

    def _parse_int(self, text: str) -> Tuple[int, bool]:
        """
        Integer value of decimal or 0x hex text, and whether it was hex.
        Hex is only accepted with UNSIGNED_INT.
        """
        if text[:2] in ("0x", "0X"):
            digits = text[2:]
            if self.flags & DetectionFlags.UNSIGNED_INT and FieldClassifier.HEX_PATTERN.fullmatch(digits):
                return int(digits, 16), True
            raise ValueError(f"{text!r} is not an integer")
        digits = text[1:] if text.startswith("+") else text
        if not FieldClassifier.INT_PATTERN.fullmatch(digits):
            raise ValueError(f"{text!r} is not an integer")
        return decimal_value(digits), False

    def _to_float(self, text: str) -> float:
        if text[:2] in ("0x", "0X"):
            return float(self._parse_int(text)[0])
        digits = text[1:] if text.startswith("+") else text
        if not FieldClassifier.FLOAT_PATTERN.fullmatch(digits):
            raise ValueError(f"{text!r} is not a number")
        return float(digits)


def read_rows(
    lines: Iterable[str],
    schema: ColumnSchema,
    flags: DetectionFlags = DEFAULT_FLAGS,
    dialect: Optional[DialectConfig] = None,
    skip_header: Optional[bool] = None,
) -> Iterator[CsvRow]:
    """
    Materialize typed rows from lines using a sampled schema.

    Args:
        lines: Iterable of text lines (the whole file, header included)
        schema: Schema returned by sample_lines for the same file
        flags: Detection flags used when sampling
        dialect: Separators, quotes and whitespace
        skip_header: Override schema.has_header for this read

    Yields:
        CsvRow per data line
    """
    dialect = dialect or DialectConfig()
    tokenizer = LineTokenizer(
        dialect.separators,
        dialect.quote_lead,
        dialect.quote_trail,
        dialect.whitespace,
    )
    return RowReader(schema, tokenizer, flags).read(lines, skip_header)
