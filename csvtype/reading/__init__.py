# ==============================================
# READING
# ==============================================
#
# Two-phase read of delimited text:
#   Phase 1 (Sampler):   first N lines → ColumnSchema
#   Phase 2 (RowReader): every line + ColumnSchema → CsvRow values
#
# Modules:
# --------
# - column_namer.py → Header text → unique column names
# - schema.py       → ColumnSchema snapshot, overrides, (de)serialization
# - sampler.py      → Sampling pass
# - row_reader.py   → Typed row materialization
#
# ==============================================

from .column_namer import ColumnNamer
from .schema import ColumnSchema
from .sampler import Sampler, sample_lines
from .row_reader import CsvRow, RowReader, read_rows

__all__ = [
    "ColumnNamer",
    "ColumnSchema",
    "Sampler",
    "sample_lines",
    "CsvRow",
    "RowReader",
    "read_rows",
]
