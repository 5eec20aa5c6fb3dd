# ==============================================
# Tests for ColumnSchema
# ==============================================

import dataclasses

import pytest

from csvtype.detection.column_type import ColumnType
from csvtype.exceptions import SchemaError
from csvtype.reading.schema import ColumnSchema


@pytest.fixture
def schema():
    return ColumnSchema(
        names=("id", "name", "score"),
        types=(ColumnType.INT16, ColumnType.STRING, ColumnType.FLOAT64),
        lines_sampled=4,
        has_header=True,
    )


class TestColumnSchema:
    def test_lengths_must_match(self):
        with pytest.raises(SchemaError):
            ColumnSchema(names=("a", "b"), types=(ColumnType.INT8,))

    def test_is_frozen(self, schema):
        with pytest.raises(dataclasses.FrozenInstanceError):
            schema.names = ("x",)

    def test_lookup_by_name_and_index(self, schema):
        assert schema.column_count == 3
        assert schema.type_of("score") == ColumnType.FLOAT64
        assert schema.type_of(0) == ColumnType.INT16
        assert schema.index_of("name") == 1

    def test_unknown_column(self, schema):
        with pytest.raises(SchemaError):
            schema.index_of("missing")
        with pytest.raises(SchemaError):
            schema.index_of(3)
        with pytest.raises(SchemaError):
            schema.index_of(-1)


class TestOverrides:
    def test_returns_new_schema(self, schema):
        changed = schema.with_overrides({"id": ColumnType.STRING, 2: "int64"})
        assert changed.types == (ColumnType.STRING, ColumnType.STRING, ColumnType.INT64)
        assert schema.types[0] == ColumnType.INT16
        assert changed.names == schema.names
        assert changed.has_header is True

    def test_no_overrides_is_identity(self, schema):
        assert schema.with_overrides({}) is schema

    def test_bad_column(self, schema):
        with pytest.raises(SchemaError):
            schema.with_overrides({"nope": ColumnType.STRING})

    def test_bad_type(self, schema):
        with pytest.raises(SchemaError):
            schema.with_overrides({"id": "decimal"})


class TestSerialization:
    def test_to_dict(self, schema):
        data = schema.to_dict()
        assert data["columns"][0] == {"name": "id", "type": "int16"}
        assert data["lines_sampled"] == 4
        assert data["has_header"] is True

    def test_from_dict(self, schema):
        assert ColumnSchema.from_dict(schema.to_dict()) == schema

    @pytest.mark.parametrize("data", [
        {},
        {"columns": [{"name": "a"}]},
        {"columns": [{"name": "a", "type": "decimal"}]},
        {"columns": None},
    ])
    def test_malformed(self, data):
        with pytest.raises(SchemaError):
            ColumnSchema.from_dict(data)
