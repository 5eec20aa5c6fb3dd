import json
import re
from pathlib import Path
from typing import List, Optional

from csvtype.exceptions import SchemaError
from csvtype.reading.schema import ColumnSchema


# ==============================================
# SchemaStore
# ==============================================
#
# PURPOSE:
#   Persist finalized ColumnSchemas to disk so that a file sampled
#   once can be read again later (or by another process) without a
#   new sampling pass, and so callers can hand-edit column types.
#
# FILES:
#   <storage_dir>/<name>.schema.json
#
# CLASS: SchemaStore
# ------------------
#   - save_schema(name, schema) -> Path
#   - load_schema(name) -> ColumnSchema | None
#   - list_schemas() -> list[str]
#   - delete_schema(name) -> bool
#
class SchemaStore:
    """
    Saves and loads ColumnSchema objects as JSON files.
    """

    SUFFIX = ".schema.json"
    VERSION = "1.0"

    def __init__(self, storage_dir: str = "schemas/"):
        """
        Initialize the schema store.

        Args:
            storage_dir: Directory to store schema files
        """
        self.storage_dir = Path(storage_dir)

        # Create directory if it doesn't exist
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        """
        File path for a schema name. Characters outside [A-Za-z0-9_.-]
        are replaced so the name is always a plain file name.
        """
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", name).strip(".") or "schema"
        return self.storage_dir / f"{safe}{self.SUFFIX}"

    def save_schema(self, name: str, schema: ColumnSchema) -> Path:
        """
        Save a schema to disk.

        Args:
            name: Schema name (usually the data file's stem)
            schema: The schema to store

        Returns:
            Path of the written file
        """
        payload = {"version": self.VERSION, "name": name, **schema.to_dict()}
        path = self.path_for(name)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        print(f"Saved schema '{name}' ({schema.column_count} columns) to {path}")
        return path

    def load_schema(self, name: str) -> Optional[ColumnSchema]:
        """
        Load a schema from disk.

        Returns:
            The stored ColumnSchema, or None if none was saved under name

        Raises:
            SchemaError: If the file exists but is not a valid schema
        """
        path = self.path_for(name)
        if not path.exists():
            print(f"No schema file found at {path}")
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON in {path}: {e}") from e

        schema = ColumnSchema.from_dict(data)
        print(f"Loaded schema '{name}' from {path}")
        return schema

    def list_schemas(self) -> List[str]:
        """Names of all stored schemas, sorted."""
        return sorted(
            path.name[: -len(self.SUFFIX)]
            for path in self.storage_dir.glob(f"*{self.SUFFIX}")
        )

    def delete_schema(self, name: str) -> bool:
        """
        Delete a stored schema.

        Returns:
            True if a file was removed
        """
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        print(f"Deleted {path}")
        return True
