# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - flags          → DetectionFlags with every bool/int form enabled
# - tokenizer      → LineTokenizer for comma / double quote / space+tab
# - csv_lines      → small CSV file (with header) as a list of lines
# - schema_store   → SchemaStore in a temporary directory
# - clean_env      → config singleton reset, CSV_* variables removed
#
# ==============================================

import pytest

from csvtype.config import reset_config
from csvtype.detection.column_type import DetectionFlags
from csvtype.detection.line_tokenizer import LineTokenizer
from csvtype.persistence.schema_store import SchemaStore


CONFIG_ENV_VARS = (
    "CSV_SEPARATORS",
    "CSV_QUOTE_LEAD",
    "CSV_QUOTE_TRAIL",
    "CSV_WHITESPACE",
    "CSV_SAMPLE_LINES",
    "CSV_HEADER",
    "CSV_SKIP_EMPTY_LINES",
    "CSV_FIXED_COLUMNS",
    "CSV_SNAKE_CASE_NAMES",
    "SCHEMA_DIR",
    "LOG_LEVEL",
)


@pytest.fixture
def flags():
    """Detect every integer and boolean form, detect the header."""
    return DetectionFlags.ANY_INT | DetectionFlags.ANY_BOOL | DetectionFlags.SKIP_EMPTY_LINES


@pytest.fixture
def tokenizer():
    return LineTokenizer(",", '"', '"', " \t")


@pytest.fixture
def csv_lines():
    """A small CSV file with a header and mixed column types."""
    return [
        "id,name,score,active,mask\n",
        "1,alice,3.5,true,0x01\n",
        "2,bob,4,false,0xFF\n",
        "\n",
        "300,\"carol, jr\",2.25,yes,0x1FF\n",
        "-4,dave,,no,0x00\n",
    ]


@pytest.fixture
def schema_store(tmp_path):
    """SchemaStore writing into a temporary directory."""
    return SchemaStore(str(tmp_path / "schemas"))


@pytest.fixture
def clean_env(monkeypatch):
    """Fresh config singleton with no CSV_* overrides in the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()
