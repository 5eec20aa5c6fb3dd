# ==============================================
# TypeAccumulator
# ==============================================
#
# PURPOSE:
#   Fold the per-line type vectors produced by the LineTokenizer
#   into one running type per column.
#
# MERGE RULES (A = accumulated, L = newly observed):
# --------------------------------------------------
#   unknown  + L            → L          (unknown is the identity)
#   string   + anything     → string     (string is absorbing)
#   int      + int          → wider int of the same signedness, or
#                             for mixed signedness a signed int as wide
#                             as the widest of the two
#   int      + float        → float
#   int      + boolean      → string
#   boolean  + boolean      → boolean
#   boolean  + int/float    → string
#   float    + int          → float
#   float    + boolean      → string
#   anything + unknown      → A
#   anything + string       → string
#
#   Every rule is commutative and associative, so the result does not
#   depend on the order in which lines are observed, and partial
#   accumulators can be merged pairwise.
#
# FUNCTIONS:
# ----------
#   - merge_type(accumulated, observed) -> ColumnType
#   - merge_types(accumulated, observed) -> None     (in place)
#   - reduce_types(vectors) -> list[ColumnType]
#
# CLASS: TypeAccumulator
# ----------------------
#   Stateful wrapper holding the running vector.
#   - observe(line_types) -> None
#   - merge(other) -> None
#   - types -> list[ColumnType]      (copy)
#   - lines_observed -> int
#   - reset() -> None
#
# ==============================================

from typing import Iterable, List, Optional

from csvtype.detection.column_type import (
    ColumnType,
    is_float,
    is_int,
    is_signed_int,
    is_unsigned_int,
    make_signed,
    signed_bits,
    unsigned_bits,
    int_bits,
)


def merge_type(accumulated: ColumnType, observed: ColumnType) -> ColumnType:
    """
    Common type able to hold both an accumulated and an observed type.

    Args:
        accumulated: The column's type so far
        observed: The type seen in the current line

    Returns:
        The merged column type. Never lower in the promotion lattice
        than accumulated.
    """
    if accumulated is ColumnType.UNKNOWN:
        return observed
    if observed is ColumnType.UNKNOWN or accumulated is ColumnType.STRING:
        return accumulated
    if observed is ColumnType.STRING:
        return observed

    if is_int(accumulated):
        if is_int(observed):
            return _merge_ints(accumulated, observed)
        if is_float(observed):
            return observed
        # boolean
        return ColumnType.STRING

    if accumulated is ColumnType.BOOLEAN:
        if observed is ColumnType.BOOLEAN:
            return accumulated
        return ColumnType.STRING

    # float64
    if observed is ColumnType.BOOLEAN:
        return ColumnType.STRING
    return accumulated


def _merge_ints(accumulated: ColumnType, observed: ColumnType) -> ColumnType:
    if is_signed_int(accumulated) == is_signed_int(observed):
        return accumulated if int_bits(accumulated) >= int_bits(observed) else observed

    # Mixed signedness: go signed, wide enough for the wider side.
    if is_unsigned_int(accumulated):
        accumulated, observed = observed, accumulated
    return make_signed(max(signed_bits(accumulated), unsigned_bits(observed)))


def merge_types(accumulated: List[ColumnType], observed: List[ColumnType]) -> None:
    """
    Merge one line's types into the running column types, in place.

    Columns present in both are merged with merge_type. Columns only
    present in observed are appended unchanged. Columns are never
    removed or reordered.

    Args:
        accumulated: Per-column type vector (modified in place)
        observed: Per-line type vector
    """
    common = min(len(accumulated), len(observed))
    for i in range(common):
        accumulated[i] = merge_type(accumulated[i], observed[i])
    accumulated.extend(observed[common:])


def reduce_types(vectors: Iterable[List[ColumnType]]) -> List[ColumnType]:
    """
    Merge any number of type vectors into one.

    Args:
        vectors: Per-line or partially accumulated type vectors

    Returns:
        A new per-column type vector
    """
    result: List[ColumnType] = []
    for vector in vectors:
        merge_types(result, vector)
    return result


class TypeAccumulator:
    """
    Running per-column types for one sampling pass.
    """

    def __init__(self, column_count: Optional[int] = None):
        """
        Args:
            column_count: Optional number of columns known up front.
                          Those columns start as unknown.
        """
        self._types: List[ColumnType] = [ColumnType.UNKNOWN] * (column_count or 0)
        self.lines_observed: int = 0

    def observe(self, line_types: List[ColumnType]) -> None:
        """Fold one line's type vector into the running types."""
        merge_types(self._types, line_types)
        self.lines_observed += 1

    def merge(self, other: "TypeAccumulator") -> None:
        """
        Fold another accumulator (e.g. built from a different chunk of
        lines) into this one.
        """
        merge_types(self._types, other._types)
        self.lines_observed += other.lines_observed

    @property
    def types(self) -> List[ColumnType]:
        return list(self._types)

    @property
    def column_count(self) -> int:
        return len(self._types)

    def reset(self) -> None:
        self._types = []
        self.lines_observed = 0
