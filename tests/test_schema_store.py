# ==============================================
# Tests for SchemaStore
# ==============================================

import json

import pytest

from csvtype.detection.column_type import ColumnType
from csvtype.exceptions import SchemaError
from csvtype.persistence.schema_store import SchemaStore
from csvtype.reading.schema import ColumnSchema


@pytest.fixture
def schema():
    return ColumnSchema(
        names=("id", "mask"),
        types=(ColumnType.INT16, ColumnType.UINT8),
        lines_sampled=10,
        has_header=True,
    )


class TestSchemaStore:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "schemas"
        SchemaStore(str(target))
        assert target.is_dir()

    def test_save_and_load(self, schema_store, schema):
        path = schema_store.save_schema("orders", schema)
        assert path.name == "orders.schema.json"
        assert schema_store.load_schema("orders") == schema

    def test_saved_file_format(self, schema_store, schema):
        path = schema_store.save_schema("orders", schema)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == SchemaStore.VERSION
        assert data["name"] == "orders"
        assert data["columns"] == [
            {"name": "id", "type": "int16"},
            {"name": "mask", "type": "uint8"},
        ]

    def test_load_missing_returns_none(self, schema_store):
        assert schema_store.load_schema("nothing") is None

    def test_load_invalid_json(self, schema_store):
        schema_store.path_for("broken").write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaError):
            schema_store.load_schema("broken")

    def test_load_malformed_schema(self, schema_store):
        schema_store.path_for("odd").write_text('{"columns": [{"name": "a"}]}', encoding="utf-8")
        with pytest.raises(SchemaError):
            schema_store.load_schema("odd")

    def test_names_are_sanitized(self, schema_store):
        path = schema_store.path_for("../etc/passwd")
        assert path.parent == schema_store.storage_dir
        assert "/" not in path.name

    def test_list_and_delete(self, schema_store, schema):
        schema_store.save_schema("b", schema)
        schema_store.save_schema("a", schema)
        assert schema_store.list_schemas() == ["a", "b"]

        assert schema_store.delete_schema("a") is True
        assert schema_store.delete_schema("a") is False
        assert schema_store.list_schemas() == ["b"]
