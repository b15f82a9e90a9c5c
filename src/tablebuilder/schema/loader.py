"""Load schema definitions from YAML files."""

from pathlib import Path
from typing import Optional

import yaml

from tablebuilder.exceptions import SchemaLoadError
from tablebuilder.schema.models import Schema
from tablebuilder.types import IndexKind

VALID_TABLE_FIELDS = {
    "table",
    "prefix",
    "description",
    "columns",
    "indexes",
    "foreign_keys",
}

VALID_COLUMN_FIELDS = {
    "name",
    "type",
    "length",
    "precision",
    "nullable",
    "default",
    "unsigned",
    "auto_increment",
}

VALID_INDEX_FIELDS = {"column", "key_name", "kind"}

VALID_FOREIGN_KEY_FIELDS = {
    "column",
    "key_name",
    "reference_table",
    "reference_column",
    "on_update",
    "on_delete",
}

INDEX_KINDS = {
    "plain": IndexKind.PLAIN,
    "unique": IndexKind.UNIQUE,
    "fulltext": IndexKind.FULLTEXT,
    "full_text": IndexKind.FULLTEXT,
    "primary": IndexKind.PRIMARY,
}


def load_schemas(schema_path: Path, prefix: Optional[str] = None) -> list[Schema]:
    """Load schemas from a directory of YAML files or a single file.

    Args:
        schema_path: YAML file or directory of ``*.yaml`` files.
        prefix: Prefix applied to tables that do not declare their own.
    """
    if schema_path.is_file():
        schemas = _load_single_file(schema_path)
    elif schema_path.is_dir():
        schemas = _load_directory(schema_path)
    else:
        raise SchemaLoadError(f"Schema path does not exist: {schema_path}")

    if prefix:
        for schema in schemas:
            if not schema.has_prefix():
                schema.prefix(prefix)
    return schemas


def _load_directory(directory: Path) -> list[Schema]:
    """Load schemas from a directory of YAML files."""
    schemas: list[Schema] = []
    for yaml_file in sorted(directory.glob("*.yaml")):
        schemas.extend(_load_single_file(yaml_file))
    _check_duplicates(schemas, f"directory {directory}")
    return schemas


def _load_single_file(file_path: Path) -> list[Schema]:
    """Load one table, or a ``tables:`` list of tables, from a YAML file."""
    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        raise SchemaLoadError(f"Empty YAML file: {file_path}")
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a mapping at the top of {file_path}")

    if "tables" in data:
        schemas = [_parse_table_dict(table_data) for table_data in data["tables"] or []]
        _check_duplicates(schemas, f"file {file_path}")
        return schemas
    return [_parse_table_dict(data)]


def _check_duplicates(schemas: list[Schema], where: str) -> None:
    seen = set()
    for schema in schemas:
        if schema.table_name in seen:
            raise SchemaLoadError(
                f"Duplicate table name '{schema.table_name}' found in {where}"
            )
        seen.add(schema.table_name)


def _check_fields(data: dict, valid: set[str], what: str) -> None:
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a {what} mapping, got: {data!r}")
    unknown_fields = set(data.keys()) - valid
    if unknown_fields:
        raise SchemaLoadError(
            f"Unknown field(s) in {what} definition: {', '.join(sorted(unknown_fields))}"
        )


def _parse_table_dict(data: dict) -> Schema:
    """Parse a table definition from a dictionary."""
    _check_fields(data, VALID_TABLE_FIELDS, "table")

    name = data.get("table")
    if not name:
        raise SchemaLoadError("Table definition missing 'table' field")

    schema = Schema(name)
    if prefix := data.get("prefix"):
        schema.prefix(prefix)

    for col_data in data.get("columns") or []:
        _parse_column(schema, col_data)
    for index_data in data.get("indexes") or []:
        _parse_index(schema, index_data)
    for fk_data in data.get("foreign_keys") or []:
        _parse_foreign_key(schema, fk_data)
    return schema


def _parse_column(schema: Schema, data: dict) -> None:
    """Declare a column from a dictionary. A missing type is left to validation."""
    _check_fields(data, VALID_COLUMN_FIELDS, "column")

    name = data.get("name")
    if not name:
        raise SchemaLoadError(
            f"Column definition missing 'name' field in table '{schema.table_name}'"
        )

    column = schema.column(name)
    if col_type := data.get("type"):
        column.type(str(col_type))
    if data.get("length") is not None:
        column.length(_parse_int(data, "length", name))
    if data.get("precision") is not None:
        column.precision(_parse_int(data, "precision", name))
    if data.get("default") is not None:
        column.default(str(data["default"]))
    column.nullable(bool(data.get("nullable", False)))
    column.unsigned(bool(data.get("unsigned", False)))
    column.auto_increment(bool(data.get("auto_increment", False)))


def _parse_int(data: dict, field: str, column: str) -> int:
    try:
        return int(data[field])
    except (TypeError, ValueError) as e:
        raise SchemaLoadError(
            f"Invalid {field} '{data[field]}' for column '{column}': expected an integer"
        ) from e


def _parse_index(schema: Schema, data: dict) -> None:
    _check_fields(data, VALID_INDEX_FIELDS, "index")

    column = data.get("column")
    if not column:
        raise SchemaLoadError(
            f"Index definition missing 'column' field in table '{schema.table_name}'"
        )

    kind_name = str(data.get("kind", "plain")).lower()
    if kind_name not in INDEX_KINDS:
        raise SchemaLoadError(
            f"Unknown index kind '{kind_name}' on column '{column}', "
            f"expected one of: {', '.join(sorted(INDEX_KINDS))}"
        )
    schema.index(column, data.get("key_name")).kind(INDEX_KINDS[kind_name])


def _parse_foreign_key(schema: Schema, data: dict) -> None:
    _check_fields(data, VALID_FOREIGN_KEY_FIELDS, "foreign key")

    column = data.get("column")
    if not column:
        raise SchemaLoadError(
            f"Foreign key definition missing 'column' field in table "
            f"'{schema.table_name}'"
        )

    fk = schema.foreign_key(column, data.get("key_name"))
    if reference_table := data.get("reference_table"):
        fk.reference_table(reference_table)
    if reference_column := data.get("reference_column"):
        fk.reference_column(reference_column)
    fk.on_update(data.get("on_update"))
    fk.on_delete(data.get("on_delete"))
