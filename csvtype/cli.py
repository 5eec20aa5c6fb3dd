# ==============================================
# CLI - Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to infer and read CSV files.
#
# COMMANDS:
# ---------
# 1. Infer column types from the first lines of a file:
#    python -m csvtype.cli infer data.csv
#    python -m csvtype.cli infer data.csv --sample 500 --header no --stats
#    python -m csvtype.cli infer data.csv --override id=string --save data
#
# 2. Read typed rows (samples first, or uses a saved schema):
#    python -m csvtype.cli read data.csv --limit 10
#    python -m csvtype.cli read data.csv --schema data
#
# 3. List saved schemas:
#    python -m csvtype.cli schemas
#
# Defaults for every option come from csvtype.config (env / .env).
# On/off options also take a --no- form, e.g. --no-fixed-columns.
#
# ==============================================

import argparse
import json
import math
import sys
from typing import Any, Dict, List, Optional

from csvtype.config import AppConfig, DialectConfig, SamplingConfig, get_config
from csvtype.detection.column_type import ColumnType, DetectionFlags
from csvtype.detection.line_tokenizer import LineTokenizer
from csvtype.exceptions import CsvTypeError
from csvtype.log import get_logger
from csvtype.persistence.schema_store import SchemaStore
from csvtype.reading.column_namer import ColumnNamer
from csvtype.reading.row_reader import RowReader
from csvtype.reading.sampler import Sampler
from csvtype.reading.schema import ColumnKey, ColumnSchema


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvtype",
        description="Infer column types of delimited text files",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_file_options(p: argparse.ArgumentParser) -> None:
        p.add_argument("file", help="Path to the delimited text file")
        p.add_argument("--sample", type=int, default=config.sampling.max_lines,
                       help="Number of lines to sample")
        p.add_argument("--header", choices=["yes", "no", "detect"], default=config.sampling.header)
        p.add_argument("--separators", default=config.dialect.separators)
        p.add_argument("--quote", default=config.dialect.quote_lead)
        p.add_argument("--quote-trail", default=config.dialect.quote_trail)
        p.add_argument("--include-empty-lines", action=argparse.BooleanOptionalAction,
                       default=not config.sampling.skip_empty_lines)
        p.add_argument("--fixed-columns", action=argparse.BooleanOptionalAction,
                       default=config.sampling.fixed_column_count)
        p.add_argument("--snake-case", action=argparse.BooleanOptionalAction,
                       default=config.sampling.snake_case_names)
        p.add_argument("--override", action="append", default=[], metavar="COLUMN=TYPE",
                       help="Force a column type, e.g. id=string (repeatable)")

    infer = sub.add_parser("infer", help="Infer column names and types")
    add_file_options(infer)
    infer.add_argument("--stats", action="store_true", help="Show per-column type counts")
    infer.add_argument("--save", metavar="NAME", help="Save the schema under NAME")

    read = sub.add_parser("read", help="Print typed rows as JSON lines")
    add_file_options(read)
    read.add_argument("--schema", metavar="NAME", help="Use a saved schema instead of sampling")
    read.add_argument("--limit", type=int, default=None, help="Stop after N rows")

    sub.add_parser("schemas", help="List saved schemas")
    return parser


def parse_overrides(items: List[str]) -> Dict[ColumnKey, ColumnType]:
    """
    Parse COLUMN=TYPE pairs. A purely numeric COLUMN is a 0-based index.
    """
    overrides: Dict[ColumnKey, ColumnType] = {}
    for item in items:
        column, sep, type_name = item.partition("=")
        if not sep or not column:
            raise CsvTypeError(f"Invalid override {item!r}, expected COLUMN=TYPE")
        try:
            column_type = ColumnType(type_name.strip().lower())
        except ValueError:
            raise CsvTypeError(f"Unknown column type {type_name!r}") from None
        key: ColumnKey = int(column) if column.isdigit() else column
        overrides[key] = column_type
    return overrides


def json_safe(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace NaN and infinite floats (not valid JSON) with their text
    form: "nan", "inf", "-inf".
    """
    return {
        key: str(value) if isinstance(value, float) and not math.isfinite(value) else value
        for key, value in record.items()
    }


def _flags(args: argparse.Namespace) -> DetectionFlags:
    return SamplingConfig(
        max_lines=args.sample,
        header=args.header,
        skip_empty_lines=not args.include_empty_lines,
        fixed_column_count=args.fixed_columns,
        snake_case_names=args.snake_case,
    ).flags()


def _tokenizer(args: argparse.Namespace, dialect: DialectConfig) -> LineTokenizer:
    return LineTokenizer(args.separators, args.quote, args.quote_trail, dialect.whitespace)


def _sample(args: argparse.Namespace, config: AppConfig) -> Sampler:
    return Sampler(
        tokenizer=_tokenizer(args, config.dialect),
        flags=_flags(args),
        max_lines=args.sample,
        namer=ColumnNamer(snake_case=args.snake_case),
    )


def _print_schema(schema: ColumnSchema) -> None:
    width = max((len(name) for name in schema.names), default=0)
    header = "with header" if schema.has_header else "no header"
    print(f"{schema.column_count} columns, {schema.lines_sampled} lines sampled ({header})")
    for name, column_type in zip(schema.names, schema.types):
        print(f"  {name:<{width}}  {column_type.value}")


def cmd_infer(args: argparse.Namespace, config: AppConfig) -> int:
    sampler = _sample(args, config)
    with open(args.file, encoding="utf-8", newline="") as f:
        schema = sampler.sample(f, parse_overrides(args.override))

    _print_schema(schema)

    if args.stats:
        for stats in sampler.column_stats:
            name = schema.names[stats.index] if stats.index < schema.column_count else str(stats.index)
            print(f"  {name}: {stats.type_counts} blank={stats.blank_count} "
                  f"stability={stats.type_stability:.2f}")

    if args.save:
        SchemaStore(config.schema_dir).save_schema(args.save, schema)
    return 0


def cmd_read(args: argparse.Namespace, config: AppConfig) -> int:
    flags = _flags(args)
    overrides = parse_overrides(args.override)

    if args.schema:
        schema = SchemaStore(config.schema_dir).load_schema(args.schema)
        if schema is None:
            raise CsvTypeError(f"No saved schema named {args.schema!r}")
        schema = schema.with_overrides(overrides)
    else:
        with open(args.file, encoding="utf-8", newline="") as f:
            schema = _sample(args, config).sample(f, overrides)

    reader = RowReader(schema, _tokenizer(args, config.dialect), flags)
    with open(args.file, encoding="utf-8", newline="") as f:
        for count, row in enumerate(reader.read(f)):
            if args.limit is not None and count >= args.limit:
                break
            print(json.dumps(json_safe(row.as_dict()), allow_nan=False))
    return 0


def cmd_schemas(args: argparse.Namespace, config: AppConfig) -> int:
    names = SchemaStore(config.schema_dir).list_schemas()
    if not names:
        print("No saved schemas")
    for name in names:
        print(name)
    return 0


COMMANDS = {
    "infer": cmd_infer,
    "read": cmd_read,
    "schemas": cmd_schemas,
}


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = get_config()
    except CsvTypeError as e:
        print(f"✗ {e}")
        return 1

    get_logger("csvtype", config.log_level)
    args = build_parser(config).parse_args(argv)

    try:
        return COMMANDS[args.command](args, config)
    except (CsvTypeError, OSError) as e:
        print(f"✗ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
