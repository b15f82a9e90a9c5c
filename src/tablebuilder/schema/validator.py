"""Schema validation: structural consistency checks run before translation."""

from dataclasses import dataclass
from typing import Literal, Optional

from tablebuilder.schema.models import Schema

__all__ = [
    "IssueKind",
    "SchemaValidator",
    "ValidationIssue",
    "ValidationResult",
    "validate",
]

IssueKind = Literal[
    "column_missing_type",
    "multiple_primary_keys",
    "index_column_missing",
    "foreign_key_column_missing",
    "foreign_key_reference_missing",
]


@dataclass(frozen=True)
class ValidationIssue:
    """A single structural defect found in a schema."""

    kind: IssueKind
    message: str
    column: Optional[str] = None
    key_name: Optional[str] = None
    count: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of schema validation.

    ok is True iff issues is empty.
    """

    ok: bool
    issues: list[ValidationIssue]


class SchemaValidator:
    """Validate that a schema can be translated into a CREATE TABLE statement.

    Every check runs; issues accumulate rather than stopping at the first.
    """

    def validate(self, schema: Schema) -> ValidationResult:
        issues: list[ValidationIssue] = []
        issues.extend(self._check_column_types(schema))
        issues.extend(self._check_primary_keys(schema))
        issues.extend(self._check_index_columns(schema))
        issues.extend(self._check_foreign_key_columns(schema))
        issues.extend(self._check_foreign_key_references(schema))
        return ValidationResult(ok=len(issues) == 0, issues=issues)

    def _check_column_types(self, schema: Schema) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                kind="column_missing_type",
                message=f'Column "{col.name}" has no type defined',
                column=col.name,
            )
            for col in schema.columns
            if not col.normalized_type
        ]

    def _check_primary_keys(self, schema: Schema) -> list[ValidationIssue]:
        count = sum(1 for index in schema.indexes if index.is_primary)
        if count <= 1:
            return []
        return [
            ValidationIssue(
                kind="multiple_primary_keys",
                message=f"{count} primary keys defined, only 1 is allowed",
                count=count,
            )
        ]

    def _check_index_columns(self, schema: Schema) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                kind="index_column_missing",
                message=(
                    f'Index "{index.key_name}" references undefined '
                    f'column "{index.column}"'
                ),
                column=index.column,
                key_name=index.key_name,
            )
            for index in schema.indexes
            if not schema.has_column(index.column)
        ]

    def _check_foreign_key_columns(self, schema: Schema) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                kind="foreign_key_column_missing",
                message=(
                    f'Foreign key "{fk.key_name}" references undefined '
                    f'column "{fk.column}"'
                ),
                column=fk.column,
                key_name=fk.key_name,
            )
            for fk in schema.foreign_keys
            if not schema.has_column(fk.column)
        ]

    def _check_foreign_key_references(self, schema: Schema) -> list[ValidationIssue]:
        return [
            ValidationIssue(
                kind="foreign_key_reference_missing",
                message=(
                    f'Foreign key "{fk.key_name}" requires both a reference '
                    "table and a reference column"
                ),
                column=fk.column,
                key_name=fk.key_name,
            )
            for fk in schema.foreign_keys
            if not fk.reference_table or not fk.reference_column
        ]


def validate(schema: Schema) -> list[ValidationIssue]:
    """Return every validation issue of a schema (empty when valid)."""
    return SchemaValidator().validate(schema).issues
