"""Schema definition, validation and translation modules."""

from tablebuilder.schema.models import (
    Column,
    ColumnDefinition,
    ForeignKey,
    ForeignKeyDefinition,
    Index,
    IndexDefinition,
    Schema,
    TableDefinition,
)
from tablebuilder.schema.translator import MySQLTranslator, SchemaTranslator
from tablebuilder.schema.validator import (
    SchemaValidator,
    ValidationIssue,
    ValidationResult,
    validate,
)

__all__ = [
    "Column",
    "ColumnDefinition",
    "ForeignKey",
    "ForeignKeyDefinition",
    "Index",
    "IndexDefinition",
    "MySQLTranslator",
    "Schema",
    "SchemaTranslator",
    "SchemaValidator",
    "TableDefinition",
    "ValidationIssue",
    "ValidationResult",
    "validate",
]
