# ==============================================
# ANALYSIS
# ==============================================
#
# This package folds the per-line type vectors of a sampling
# pass into one definitive type per column.
#
# Modules:
# --------
# - type_accumulator.py → Merge rules (promotion lattice) and TypeAccumulator
# - column_stats.py     → Per-column counters explaining the merged type
#
# ==============================================

from .type_accumulator import TypeAccumulator, merge_type, merge_types, reduce_types
from .column_stats import ColumnAnalyzer, ColumnStats

__all__ = [
    "TypeAccumulator",
    "merge_type",
    "merge_types",
    "reduce_types",
    "ColumnAnalyzer",
    "ColumnStats",
]
