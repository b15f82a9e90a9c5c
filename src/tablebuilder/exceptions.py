"""Exception classes for tablebuilder.

Every error carries a stable numeric ``code`` and, where one is known, the
``schema`` it originated from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from tablebuilder.schema.models import Schema
    from tablebuilder.schema.validator import ValidationIssue

__all__ = [
    "TableBuilderError",
    "SchemaError",
    "SchemaValidationError",
    "StoreError",
    "SchemaLoadError",
    "ConfigError",
    "COLUMN_REMOVE_NOT_FOUND",
    "CREATE_TABLE_FAILED",
    "DROP_TABLE_FAILED",
    "SCHEMA_INVALID",
    "COLUMN_NOT_FOUND",
]

COLUMN_REMOVE_NOT_FOUND = 1
CREATE_TABLE_FAILED = 101
DROP_TABLE_FAILED = 102
SCHEMA_INVALID = 201
COLUMN_NOT_FOUND = 301


class TableBuilderError(Exception):
    """Base exception for tablebuilder."""

    def __init__(
        self, message: str = "", code: int = 0, schema: Optional[Schema] = None
    ):
        self.code = code
        self.schema = schema
        super().__init__(message)


class SchemaError(TableBuilderError):
    """Malformed schema construction, e.g. referencing an undefined column."""

    @classmethod
    def column_not_removable(cls, schema: Schema, column: str) -> SchemaError:
        return cls(
            f"Column '{column}' cannot be removed from '{schema.table_name}', "
            "it is not defined",
            COLUMN_REMOVE_NOT_FOUND,
            schema,
        )

    @classmethod
    def column_not_exist(cls, schema: Schema, column: str) -> SchemaError:
        return cls(
            f"Column with name '{column}' is not currently defined",
            COLUMN_NOT_FOUND,
            schema,
        )


class SchemaValidationError(TableBuilderError):
    """Schema failed validation; no SQL was generated."""

    def __init__(
        self,
        schema: Schema,
        issues: list[ValidationIssue],
        message: str = "",
        code: int = SCHEMA_INVALID,
    ):
        self.issues = issues
        super().__init__(message, code, schema)

    @classmethod
    def failed_validation(
        cls, schema: Schema, issues: list[ValidationIssue]
    ) -> SchemaValidationError:
        details = "\n  - ".join(issue.message for issue in issues)
        return cls(
            schema,
            issues,
            f"{schema.table_name} failed with {len(issues)} errors:\n  - {details}",
        )


class StoreError(TableBuilderError):
    """The table store reported a failure while executing generated SQL."""

    def __init__(self, schema: Schema, detail: str, message: str, code: int):
        self.table_name = schema.table_name
        self.detail = detail
        super().__init__(message, code, schema)

    @classmethod
    def create_table(cls, schema: Schema, detail: str) -> StoreError:
        return cls(
            schema,
            detail,
            f"Failed to create table {schema.table_name}: {detail}",
            CREATE_TABLE_FAILED,
        )

    @classmethod
    def drop_table(cls, schema: Schema, detail: str) -> StoreError:
        return cls(
            schema,
            detail,
            f"Failed to drop table {schema.table_name}: {detail}",
            DROP_TABLE_FAILED,
        )


class SchemaLoadError(TableBuilderError):
    """Error loading schema definition files."""


class ConfigError(TableBuilderError):
    """Error in configuration."""
