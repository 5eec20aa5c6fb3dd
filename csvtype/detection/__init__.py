# ==============================================
# DETECTION
# ==============================================
#
# This package turns raw text into types: one ColumnType per
# field, one type vector per line. Pure functions, no I/O,
# never raises on any input string.
#
# Modules:
# --------
# - column_type.py      → ColumnType enum, DetectionFlags, width helpers
# - field_classifier.py → Classify one field's text
# - line_tokenizer.py   → Split a line into fields and classify each
#
# ==============================================

from .column_type import ColumnType, DetectionFlags, DEFAULT_FLAGS
from .field_classifier import FieldClassifier, classify_field
from .line_tokenizer import LineTokenizer, classify_line, split_fields

__all__ = [
    "ColumnType",
    "DetectionFlags",
    "DEFAULT_FLAGS",
    "FieldClassifier",
    "classify_field",
    "LineTokenizer",
    "classify_line",
    "split_fields",
]
