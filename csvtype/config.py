# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - DialectConfig (dataclass)
#     separators: str     (default ",")
#     quote_lead: str     (default '"')
#     quote_trail: str    (default '"')
#     whitespace: str     (default " \t")
#
# - SamplingConfig (dataclass)
#     max_lines: int              (default 100)
#     header: str                 ("yes" | "no" | "detect", default "detect")
#     skip_empty_lines: bool      (default True)
#     fixed_column_count: bool    (default False)
#     snake_case_names: bool      (default False)
#
# - AppConfig (dataclass)
#     dialect: DialectConfig
#     sampling: SamplingConfig
#     schema_dir: str     (default "schemas/")
#     log_level: str      (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the singleton (used by tests).
#
# USAGE:
# ------
#   from csvtype.config import get_config
#   config = get_config()
#   print(config.dialect.separators)
#   print(config.sampling.flags())
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from csvtype.detection.column_type import DetectionFlags
from csvtype.exceptions import ConfigError


HEADER_MODES = ("yes", "no", "detect")

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass
class DialectConfig:
    """Characters that shape a line into fields."""
    separators: str = ","
    quote_lead: str = '"'
    quote_trail: str = '"'
    whitespace: str = " \t"


@dataclass
class SamplingConfig:
    """How the sampling pass reads the first lines of a file."""
    max_lines: int = 100
    header: str = "detect"
    skip_empty_lines: bool = True
    fixed_column_count: bool = False
    snake_case_names: bool = False

    def flags(self) -> DetectionFlags:
        """
        Detection flags matching these options. Every integer and
        boolean form is detectable.
        """
        flags = DetectionFlags.ANY_INT | DetectionFlags.ANY_BOOL
        if self.header == "yes":
            flags |= DetectionFlags.HAS_HEADER_ROW
        elif self.header == "no":
            flags |= DetectionFlags.NO_HEADER_ROW
        if self.skip_empty_lines:
            flags |= DetectionFlags.SKIP_EMPTY_LINES
        if self.fixed_column_count:
            flags |= DetectionFlags.FIXED_COLUMN_COUNT
        return flags


@dataclass
class AppConfig:
    """Main application configuration."""
    dialect: DialectConfig = field(default_factory=DialectConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    schema_dir: str = "schemas/"
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _env_header(name: str, default: str) -> str:
    value = (os.getenv(name) or default).strip().lower()
    if value not in HEADER_MODES:
        raise ConfigError(f"{name} must be one of {', '.join(HEADER_MODES)}, got {value!r}")
    return value


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Separators, quotes and whitespace are taken verbatim (no strip)
    dialect_config = DialectConfig(
        separators=os.getenv("CSV_SEPARATORS", ","),
        quote_lead=os.getenv("CSV_QUOTE_LEAD", '"'),
        quote_trail=os.getenv("CSV_QUOTE_TRAIL", '"'),
        whitespace=os.getenv("CSV_WHITESPACE", " \t"),
    )

    sampling_config = SamplingConfig(
        max_lines=_env_int("CSV_SAMPLE_LINES", 100),
        header=_env_header("CSV_HEADER", "detect"),
        skip_empty_lines=_env_bool("CSV_SKIP_EMPTY_LINES", True),
        fixed_column_count=_env_bool("CSV_FIXED_COLUMNS", False),
        snake_case_names=_env_bool("CSV_SNAKE_CASE_NAMES", False),
    )

    _config_instance = AppConfig(
        dialect=dialect_config,
        sampling=sampling_config,
        schema_dir=os.getenv("SCHEMA_DIR", "schemas/"),
        log_level=os.getenv("LOG_LEVEL", "WARNING"),
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
