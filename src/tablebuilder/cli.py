"""Command-line interface for tablebuilder."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tablebuilder.config import Config
from tablebuilder.engine import Engine
from tablebuilder.exceptions import ConfigError, SchemaValidationError, TableBuilderError
from tablebuilder.schema.loader import load_schemas
from tablebuilder.schema.validator import SchemaValidator
from tablebuilder.store import RecordingTableStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tablebuilder",
        description="Compile declarative table schemas into CREATE/DROP TABLE SQL",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("validate", "Validate schema files"),
        ("create", "Print CREATE TABLE statements"),
        ("drop", "Print DROP TABLE statements"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "schema_path",
            nargs="?",
            type=Path,
            help="YAML file or directory (default: config schema_path)",
        )
        sub.add_argument("--prefix", help="Table name prefix")
        sub.add_argument("--config", type=Path, help="Path to tablebuilder.cfg")
        if name == "create":
            sub.add_argument("--collate", help="Collation appended to CREATE TABLE")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env(
            prefix=args.prefix,
            collate=getattr(args, "collate", None),
            config_file=args.config,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    schema_path = args.schema_path or Path(config.schema_path)

    if args.command == "validate":
        return cmd_validate(schema_path, config)
    return cmd_render(schema_path, config, drop=args.command == "drop")


def cmd_validate(schema_path: Path, config: Config) -> int:
    """Validate schema files."""
    try:
        schemas = load_schemas(schema_path, prefix=config.prefix)
    except TableBuilderError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        return 1

    validator = SchemaValidator()
    failed = False
    print(f"Validated {len(schemas)} tables:")
    for schema in schemas:
        result = validator.validate(schema)
        status = "ok" if result.ok else f"{len(result.issues)} errors"
        print(f"  - {schema.table_name} ({len(schema.columns)} columns): {status}")
        for issue in result.issues:
            print(f"      {issue.message}")
        failed = failed or not result.ok
    return 1 if failed else 0


def cmd_render(schema_path: Path, config: Config, drop: bool) -> int:
    """Print the CREATE or DROP statement of every schema, in file order."""
    trailer = f"COLLATE {config.collate}" if config.collate else ""
    store = RecordingTableStore(trailer=trailer)
    engine = Engine(store)
    try:
        for schema in load_schemas(schema_path, prefix=config.prefix):
            if drop:
                engine.drop_table(schema)
            else:
                engine.create_table(schema)
    except SchemaValidationError as e:
        print(f"Validation error: {e}", file=sys.stderr)
        return 1
    except TableBuilderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for sql in store.statements:
        print(sql if sql.endswith(";") else f"{sql};")
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
