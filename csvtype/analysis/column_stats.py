# ==============================================
# ColumnStats / ColumnAnalyzer
# ==============================================
#
# PURPOSE:
#   Keep per-column evidence gathered during the sampling pass:
#   how often a column had a value, which field types were seen,
#   and a few sample values for inspection.
#
#   The resolved column type itself comes from the merge rules in
#   type_accumulator; the counters here explain *why* a column ended
#   up with that type (e.g. 98 int8 + 2 string → string).
#
# CLASS: ColumnStats (dataclass)
# ------------------------------
#   - index: int                    → 0-based column position
#   - presence_count: int           → lines that had this column at all
#   - blank_count: int              → lines where the field was blank
#   - type_counts: dict[str, int]   → {"int8": 45, "string": 3}
#   - resolved_type: ColumnType     → merge of every observed type
#   - sample_values: list[str]      → first few non-blank values
#
#   Computed Properties:
#   --------------------
#   - dominant_type -> ColumnType | None
#   - type_stability -> float
#
# CLASS: ColumnAnalyzer
# ---------------------
#   - observe_line(values, types) -> None
#   - get_stats() -> list[ColumnStats]
#   - reset() -> None
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from csvtype.detection.column_type import ColumnType
from .type_accumulator import merge_type


@dataclass
class ColumnStats:
    """
    Observed statistics for a single column across the sampled lines.
    """

    index: int

    presence_count: int = 0
    blank_count: int = 0
    type_counts: Dict[str, int] = field(default_factory=dict)
    resolved_type: ColumnType = ColumnType.UNKNOWN

    sample_values: List[str] = field(default_factory=list)
    max_samples: int = 5

    def update(self, value: str, detected_type: ColumnType) -> None:
        """
        Record one field of this column.

        Args:
            value: The field text (quotes removed, whitespace trimmed)
            detected_type: Type assigned by the FieldClassifier
        """
        self.presence_count += 1
        self.resolved_type = merge_type(self.resolved_type, detected_type)

        if detected_type is ColumnType.UNKNOWN:
            self.blank_count += 1
            return

        self.type_counts[detected_type.value] = self.type_counts.get(detected_type.value, 0) + 1

        if len(self.sample_values) < self.max_samples:
            self.sample_values.append(value)

    @property
    def dominant_type(self) -> Optional[ColumnType]:
        """
        Most frequently observed non-blank type, or None if the column
        was always blank.
        """
        if not self.type_counts:
            return None
        return ColumnType(max(self.type_counts, key=self.type_counts.get))

    @property
    def type_stability(self) -> float:
        """
        Fraction of non-blank fields that had the dominant type.

        Returns:
            0.0 .. 1.0, 1.0 meaning every value had the same type
        """
        observed = self.presence_count - self.blank_count
        if observed <= 0:
            return 0.0
        return self.type_counts[self.dominant_type.value] / observed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "presence_count": self.presence_count,
            "blank_count": self.blank_count,
            "type_counts": dict(self.type_counts),
            "resolved_type": self.resolved_type.value,
            "sample_values": list(self.sample_values),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnStats":
        stats = cls(index=data["index"])
        stats.presence_count = data.get("presence_count", 0)
        stats.blank_count = data.get("blank_count", 0)
        stats.type_counts = dict(data.get("type_counts", {}))
        stats.resolved_type = ColumnType(data.get("resolved_type", ColumnType.UNKNOWN.value))
        stats.sample_values = list(data.get("sample_values", []))
        return stats


class ColumnAnalyzer:
    """
    Accumulates ColumnStats for every column seen in a sampling pass.
    """

    def __init__(self):
        self.stats: List[ColumnStats] = []
        self.total_lines: int = 0

    def observe_line(self, values: List[str], types: List[ColumnType]) -> None:
        """
        Record one line.

        Args:
            values: Field texts of the line
            types: Matching per-field types (same length as values)
        """
        for index, (value, detected_type) in enumerate(zip(values, types)):
            if index == len(self.stats):
                self.stats.append(ColumnStats(index=index))
            self.stats[index].update(value, detected_type)
        self.total_lines += 1

    def get_stats(self) -> List[ColumnStats]:
        return self.stats

    def get_presence_ratio(self, index: int) -> float:
        """
        Fraction of observed lines that reached column `index`.
        """
        if self.total_lines == 0 or index >= len(self.stats):
            return 0.0
        return self.stats[index].presence_count / self.total_lines

    def reset(self) -> None:
        self.stats = []
        self.total_lines = 0
