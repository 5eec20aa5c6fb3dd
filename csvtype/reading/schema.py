# ==============================================
# ColumnSchema
# ==============================================
#
# PURPOSE:
#   The finalized result of a sampling pass: one name and one type
#   per column. Produced once by the Sampler, then used read-only by
#   the RowReader for the second pass.
#
# CLASS: ColumnSchema (frozen dataclass)
# --------------------------------------
#   - names: tuple[str, ...]
#   - types: tuple[ColumnType, ...]
#   - lines_sampled: int
#   - has_header: bool
#
#   Methods:
#   --------
#   - column_count -> int
#   - type_of(column) -> ColumnType        by name or index
#   - with_overrides(overrides) -> ColumnSchema
#   - to_dict() / from_dict(data)
#
# ==============================================

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Tuple, Union

from csvtype.detection.column_type import ColumnType
from csvtype.exceptions import SchemaError

ColumnKey = Union[str, int]


@dataclass(frozen=True)
class ColumnSchema:
    """
    Column names and types inferred from a sample of lines.

    Immutable: overriding a type returns a new schema.
    """

    names: Tuple[str, ...]
    types: Tuple[ColumnType, ...]
    lines_sampled: int = 0
    has_header: bool = False

    def __post_init__(self):
        if len(self.names) != len(self.types):
            raise SchemaError(
                f"Schema has {len(self.names)} names but {len(self.types)} types"
            )

    @property
    def column_count(self) -> int:
        return len(self.types)

    def index_of(self, column: ColumnKey) -> int:
        """
        Position of a column given by name or by 0-based index.

        Raises:
            SchemaError: If no such column exists
        """
        if isinstance(column, int) and not isinstance(column, bool):
            if 0 <= column < len(self.types):
                return column
            raise SchemaError(f"Column index {column} out of range (0..{len(self.types) - 1})")
        try:
            return self.names.index(column)
        except ValueError:
            raise SchemaError(f"Unknown column {column!r}") from None

    def type_of(self, column: ColumnKey) -> ColumnType:
        return self.types[self.index_of(column)]

    def with_overrides(self, overrides: Mapping[ColumnKey, ColumnType]) -> "ColumnSchema":
        """
        Copy of this schema with caller-chosen column types.

        Args:
            overrides: {column name or index: ColumnType}

        Returns:
            A new ColumnSchema

        Raises:
            SchemaError: If a key names no column or a type is invalid
        """
        if not overrides:
            return self
        types: List[ColumnType] = list(self.types)
        for column, column_type in overrides.items():
            try:
                types[self.index_of(column)] = ColumnType(column_type)
            except ValueError:
                raise SchemaError(f"Unknown column type {column_type!r} for {column!r}") from None
        return replace(self, types=tuple(types))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [
                {"name": name, "type": column_type.value}
                for name, column_type in zip(self.names, self.types)
            ],
            "lines_sampled": self.lines_sampled,
            "has_header": self.has_header,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnSchema":
        """
        Rebuild a schema from its to_dict() form.

        Raises:
            SchemaError: If the data is malformed
        """
        try:
            columns = data["columns"]
            names = tuple(column["name"] for column in columns)
            types = tuple(ColumnType(column["type"]) for column in columns)
        except (KeyError, TypeError, ValueError) as e:
            raise SchemaError(f"Malformed schema data: {e}") from e
        return cls(
            names=names,
            types=types,
            lines_sampled=data.get("lines_sampled", 0),
            has_header=data.get("has_header", False),
        )
