"""Translate schemas into dialect-specific CREATE TABLE body fragments."""

from typing import Optional, Protocol

from tablebuilder.schema.models import (
    ColumnDefinition,
    ForeignKeyDefinition,
    IndexDefinition,
    Schema,
)
from tablebuilder.types import IndexKind

__all__ = ["SchemaTranslator", "MySQLTranslator"]


def _escape_sql_string(value: str) -> str:
    """Escape single quotes for SQL string literals."""
    return value.replace("'", "''")


class SchemaTranslator(Protocol):
    """Renders the fragments of a CREATE TABLE body for one dialect."""

    def translate_columns(self, schema: Schema) -> list[str]: ...

    def translate_primary_key(self, schema: Schema) -> list[str]: ...

    def translate_indexes(self, schema: Schema) -> list[str]: ...

    def translate_foreign_keys(self, schema: Schema) -> list[str]: ...

    def translate(self, schema: Schema) -> list[str]: ...


class MySQLTranslator:
    """MySQL / MariaDB rendering, as accepted by WordPress dbDelta-style stores.

    Pure: translating the same schema twice gives identical fragments.
    """

    SIZED_TYPES = frozenset(
        {
            # Strings
            "CHAR",
            "VARCHAR",
            "BINARY",
            "VARBINARY",
            "TEXT",
            "BLOB",
            # Integers
            "BIT",
            "TINYINT",
            "SMALLINT",
            "MEDIUMINT",
            "INT",
            "INTEGER",
            "BIGINT",
            # Floats
            "FLOAT",
            "DOUBLE",
            "DOUBLE PRECISION",
            "DECIMAL",
            "DEC",
            # Dates
            "DATETIME",
            "TIMESTAMP",
            "TIME",
        }
    )

    PRECISION_TYPES = frozenset({"FLOAT", "DOUBLE", "DOUBLE PRECISION", "DECIMAL", "DEC"})

    STRING_TYPES = frozenset({"CHAR", "VARCHAR", "BINARY", "VARBINARY", "TEXT", "BLOB"})

    def translate(self, schema: Schema) -> list[str]:
        """All body fragments in statement order."""
        return (
            self.translate_columns(schema)
            + self.translate_primary_key(schema)
            + self.translate_indexes(schema)
            + self.translate_foreign_keys(schema)
        )

    def translate_columns(self, schema: Schema) -> list[str]:
        return [self._column_sql(col) for col in schema.columns]

    def translate_primary_key(self, schema: Schema) -> list[str]:
        return [
            f"PRIMARY KEY ({index.column})"
            for index in schema.indexes
            if index.is_primary
        ]

    def translate_indexes(self, schema: Schema) -> list[str]:
        """Group non-primary index entries by (key name, kind) into composite clauses."""
        groups: dict[tuple[str, IndexKind], list[IndexDefinition]] = {}
        for index in schema.indexes:
            if index.is_primary:
                continue
            groups.setdefault((index.key_name, index.kind), []).append(index)

        clauses = []
        for (key_name, kind), entries in groups.items():
            columns = ", ".join(entry.column for entry in entries)
            prefix = f"{kind.value.upper()} " if kind.value else ""
            clauses.append(f"{prefix}INDEX {key_name} ({columns})")
        return clauses

    def translate_foreign_keys(self, schema: Schema) -> list[str]:
        return [self._foreign_key_sql(fk) for fk in schema.foreign_keys]

    def _column_sql(self, col: ColumnDefinition) -> str:
        col_type = col.normalized_type
        col_def = f"{col.name} {self._type_sql(col_type, col.length, col.precision)}"
        if col.unsigned:
            col_def += " UNSIGNED"
        col_def += " NULL" if col.nullable else " NOT NULL"
        if col.auto_increment:
            col_def += " AUTO_INCREMENT"
        col_def += self._default_sql(col_type, col.default)
        return col_def

    def _type_sql(
        self, col_type: str, length: Optional[int], precision: Optional[int]
    ) -> str:
        if col_type not in self.SIZED_TYPES or length is None:
            return col_type
        if precision is not None and col_type in self.PRECISION_TYPES:
            return f"{col_type}({length},{precision})"
        return f"{col_type}({length})"

    def _default_sql(self, col_type: str, default: Optional[str]) -> str:
        if default is None:
            return ""
        if col_type in self.STRING_TYPES:
            return f" DEFAULT '{_escape_sql_string(default)}'"
        return f" DEFAULT {default}"

    def _foreign_key_sql(self, fk: ForeignKeyDefinition) -> str:
        sql = (
            f"FOREIGN KEY {fk.key_name}({fk.column}) "
            f"REFERENCES {fk.reference_table}({fk.reference_column})"
        )
        if fk.on_update:
            sql += f" ON UPDATE {fk.on_update}"
        if fk.on_delete:
            sql += f" ON DELETE {fk.on_delete}"
        return sql
