"""tablebuilder: compile declarative table schemas into DDL."""

from tablebuilder.engine import Builder, Engine
from tablebuilder.exceptions import (
    ConfigError,
    SchemaError,
    SchemaLoadError,
    SchemaValidationError,
    StoreError,
    TableBuilderError,
)
from tablebuilder.schema import MySQLTranslator, Schema, SchemaValidator, validate
from tablebuilder.store import (
    ConnectionTableStore,
    RecordingTableStore,
    StoreResult,
    TableStore,
)
from tablebuilder.types import IndexKind, ReferentialAction

__all__ = [
    "Builder",
    "ConfigError",
    "ConnectionTableStore",
    "Engine",
    "IndexKind",
    "MySQLTranslator",
    "RecordingTableStore",
    "ReferentialAction",
    "Schema",
    "SchemaError",
    "SchemaLoadError",
    "SchemaValidationError",
    "SchemaValidator",
    "StoreError",
    "StoreResult",
    "TableBuilderError",
    "TableStore",
    "validate",
]
