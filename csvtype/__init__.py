# ==============================================
# csvtype: column type inference for delimited text
# ==============================================
#
# Package Structure:
#
# csvtype/
# ├── detection/      # Classify fields and split lines
# ├── analysis/       # Merge per-line types into per-column types
# ├── reading/        # Sampling pass, schema, row reading
# ├── persistence/    # Save/load schemas
# ├── config.py       # Configuration management
# ├── exceptions.py   # Errors raised outside the detection core
# ├── log.py          # Logger setup
# └── cli.py          # Command line entry point
#
# ==============================================

from .detection import (
    ColumnType,
    DetectionFlags,
    DEFAULT_FLAGS,
    FieldClassifier,
    LineTokenizer,
    classify_field,
    classify_line,
    split_fields,
)
from .analysis import TypeAccumulator, merge_type, merge_types, reduce_types
from .reading import ColumnSchema, CsvRow, RowReader, Sampler, read_rows, sample_lines

__version__ = "0.1.0"

__all__ = [
    "ColumnType",
    "DetectionFlags",
    "DEFAULT_FLAGS",
    "FieldClassifier",
    "LineTokenizer",
    "classify_field",
    "classify_line",
    "split_fields",
    "TypeAccumulator",
    "merge_type",
    "merge_types",
    "reduce_types",
    "ColumnSchema",
    "CsvRow",
    "RowReader",
    "Sampler",
    "read_rows",
    "sample_lines",
]
