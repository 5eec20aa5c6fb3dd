# ==============================================
# ColumnNamer
# ==============================================
#
# PURPOSE:
#   Turn the raw texts of a header row into a list of column names
#   that are non-empty and unique, and invent names for files
#   without a header.
#
# RULES:
# ------
#   1. Surrounding whitespace is stripped
#   2. Blank names            → column_<n>  (1-based position)
#   3. Optional snake_case    → "userName" → "user_name", "IP" → "ip"
#   4. Duplicates get a suffix → "id", "id_2", "id_3"
#   5. Missing trailing names  → column_<n>
#
# CLASS: ColumnNamer
# ------------------
#   - name_columns(raw_names, count) -> list[str]
#   - default_names(count) -> list[str]
#   - to_snake_case(name) -> str
#
# ==============================================

import re
from typing import Dict, List, Optional


class ColumnNamer:
    """
    Builds unique column names from header text.
    """

    DEFAULT_PREFIX = "column_"

    def __init__(self, snake_case: bool = False):
        """
        Args:
            snake_case: Convert header names to snake_case
        """
        self.snake_case = snake_case
        self._mappings: Dict[str, str] = {}

    def name_columns(self, raw_names: List[str], count: Optional[int] = None) -> List[str]:
        """
        Build column names from a header row.

        Args:
            raw_names: Field texts of the header line
            count: Number of columns in the data (may exceed the header)

        Returns:
            One unique, non-empty name per column
        """
        total = max(len(raw_names), count or 0)
        names: List[str] = []
        seen: Dict[str, int] = {}

        for position in range(total):
            raw = raw_names[position].strip() if position < len(raw_names) else ""
            name = self.normalize(raw) if raw else ""
            if not name:
                name = f"{self.DEFAULT_PREFIX}{position + 1}"

            candidate = name
            while candidate in seen:
                seen[name] += 1
                candidate = f"{name}_{seen[name]}"
            seen.setdefault(name, 1)
            seen.setdefault(candidate, 1)
            names.append(candidate)

        return names

    def default_names(self, count: int) -> List[str]:
        """Names for a file without a header: column_1 .. column_<count>."""
        return [f"{self.DEFAULT_PREFIX}{position + 1}" for position in range(count)]

    def normalize(self, name: str) -> str:
        if not self.snake_case:
            return name
        if name not in self._mappings:
            self._mappings[name] = self.to_snake_case(name)
        return self._mappings[name]

    @staticmethod
    def to_snake_case(name: str) -> str:
        """
        Convert camelCase/PascalCase/UPPERCASE to snake_case.

        Args:
            name: Input column name

        Returns:
            snake_case version of the name (may be empty)
        """
        # Remove any non-alphanumeric characters except underscores
        name = re.sub(r"[^a-zA-Z0-9_]", "_", name)

        # "XMLParser" -> "XML_Parser"
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)

        # "userName" -> "user_Name"
        name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)
        return name.strip("_")
