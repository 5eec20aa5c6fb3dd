# ==============================================
# Tests for ColumnNamer
# ==============================================

import pytest

from csvtype.reading.column_namer import ColumnNamer


class TestToSnakeCase:
    @pytest.mark.parametrize("raw, expected", [
        ("userName", "user_name"),
        ("UserName", "user_name"),
        ("IP", "ip"),
        ("XMLParser", "xml_parser"),
        ("First Name", "first_name"),
        ("price-USD", "price_usd"),
        ("already_snake", "already_snake"),
        ("__id__", "id"),
    ])
    def test_conversion(self, raw, expected):
        assert ColumnNamer.to_snake_case(raw) == expected


class TestNameColumns:
    def test_names_are_stripped(self):
        assert ColumnNamer().name_columns([" id ", "name"]) == ["id", "name"]

    def test_blank_names_get_positional_defaults(self):
        assert ColumnNamer().name_columns(["", "x", "  "]) == ["column_1", "x", "column_3"]

    def test_duplicates_get_suffixes(self):
        assert ColumnNamer().name_columns(["id", "id", "id"]) == ["id", "id_2", "id_3"]

    def test_suffix_does_not_collide_with_existing_name(self):
        assert ColumnNamer().name_columns(["a", "a_2", "a"]) == ["a", "a_2", "a_3"]

    def test_extra_data_columns_get_defaults(self):
        assert ColumnNamer().name_columns(["a"], count=3) == ["a", "column_2", "column_3"]

    def test_snake_case_option(self):
        namer = ColumnNamer(snake_case=True)
        assert namer.name_columns(["userId", "User ID", "!!!"]) == ["user_id", "user_id_2", "column_3"]

    def test_header_names_kept_without_snake_case(self):
        assert ColumnNamer().name_columns(["userId"]) == ["userId"]

    def test_default_names(self):
        assert ColumnNamer().default_names(3) == ["column_1", "column_2", "column_3"]
        assert ColumnNamer().default_names(0) == []
