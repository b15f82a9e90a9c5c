"""Core type definitions for tablebuilder."""

from enum import Enum
from typing import TypeAlias

TableName: TypeAlias = str
ColumnName: TypeAlias = str
KeyName: TypeAlias = str

__all__ = [
    "TableName",
    "ColumnName",
    "KeyName",
    "IndexKind",
    "ReferentialAction",
]


class IndexKind(Enum):
    """Kind of a non-foreign-key index.

    A single index carries exactly one kind. PRIMARY implies unique semantics
    and is rendered as the table's PRIMARY KEY clause rather than an INDEX.
    """

    PLAIN = ""
    UNIQUE = "unique"
    FULLTEXT = "fulltext"
    PRIMARY = "primary"


class ReferentialAction(Enum):
    """Actions accepted by ON UPDATE / ON DELETE clauses."""

    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    RESTRICT = "RESTRICT"
    NO_ACTION = "NO ACTION"
