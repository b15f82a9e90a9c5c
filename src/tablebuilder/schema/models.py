"""Schema representation classes.

Columns, indexes and foreign keys are declared through fluent builders owned
by a ``Schema``. Readers (validator, translator) only see the frozen
``*Definition`` snapshots returned by ``export()`` and the ``Schema``
accessors, so a schema cannot be changed by translating it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from tablebuilder.exceptions import SchemaError
from tablebuilder.types import (
    ColumnName,
    IndexKind,
    KeyName,
    ReferentialAction,
    TableName,
)

__all__ = [
    "Column",
    "ColumnDefinition",
    "ForeignKey",
    "ForeignKeyDefinition",
    "Index",
    "IndexDefinition",
    "Schema",
    "TableDefinition",
]


@dataclass(frozen=True)
class ColumnDefinition:
    """Snapshot of a declared column."""

    name: str
    type: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    nullable: bool = False
    default: Optional[str] = None
    unsigned: bool = False
    auto_increment: bool = False

    @property
    def normalized_type(self) -> str:
        """Return the stripped, uppercase type ('' when no type is set)."""
        return (self.type or "").strip().upper()


@dataclass(frozen=True)
class IndexDefinition:
    """Snapshot of a declared index entry.

    Entries sharing ``key_name`` and ``kind`` form one composite index.
    """

    key_name: str
    column: str
    kind: IndexKind = IndexKind.PLAIN

    @property
    def is_primary(self) -> bool:
        return self.kind is IndexKind.PRIMARY


@dataclass(frozen=True)
class ForeignKeyDefinition:
    """Snapshot of a declared foreign key."""

    key_name: str
    column: str
    reference_table: Optional[str] = None
    reference_column: Optional[str] = None
    on_update: Optional[str] = None
    on_delete: Optional[str] = None


@dataclass(frozen=True)
class TableDefinition:
    """Read-only view of a whole schema."""

    table_name: str
    columns: tuple[ColumnDefinition, ...]
    indexes: tuple[IndexDefinition, ...]
    foreign_keys: tuple[ForeignKeyDefinition, ...]


class Column:
    """Fluent builder for a single column."""

    def __init__(self, name: ColumnName):
        self._definition = ColumnDefinition(name=name)

    @property
    def name(self) -> str:
        return self._definition.name

    def export(self) -> ColumnDefinition:
        return self._definition

    def _set(self, **changes) -> Column:
        self._definition = replace(self._definition, **changes)
        return self

    def type(self, type_name: str) -> Column:
        return self._set(type=type_name)

    def length(self, length: Optional[int]) -> Column:
        return self._set(length=length)

    def precision(self, precision: Optional[int]) -> Column:
        return self._set(precision=precision)

    def nullable(self, nullable: bool = True) -> Column:
        return self._set(nullable=nullable)

    def default(self, default: Optional[str]) -> Column:
        """Set the default literal; None clears it.

        String-family columns get the value quoted when rendered, every other
        type emits it verbatim, so numeric and date defaults must be raw SQL.
        """
        return self._set(default=default)

    def unsigned(self, unsigned: bool = True) -> Column:
        return self._set(unsigned=unsigned)

    def auto_increment(self, auto_increment: bool = True) -> Column:
        return self._set(auto_increment=auto_increment)

    # Type shortcuts

    def _sized(
        self,
        type_name: str,
        length: Optional[int] = None,
        precision: Optional[int] = None,
    ) -> Column:
        self.type(type_name)
        if length is not None:
            self.length(length)
        if precision is not None:
            self.precision(precision)
        return self

    def varchar(self, length: Optional[int] = None) -> Column:
        return self._sized("varchar", length)

    def text(self, length: Optional[int] = None) -> Column:
        return self._sized("text", length)

    def int(self, length: Optional[int] = None) -> Column:
        return self._sized("int", length)

    def unsigned_int(self, length: Optional[int] = None) -> Column:
        return self._sized("int", length).unsigned()

    def unsigned_medium(self, length: Optional[int] = None) -> Column:
        return self._sized("mediumint", length).unsigned()

    def float(
        self, length: Optional[int] = None, precision: Optional[int] = None
    ) -> Column:
        return self._sized("float", length, precision)

    def double(
        self, length: Optional[int] = None, precision: Optional[int] = None
    ) -> Column:
        return self._sized("double", length, precision)

    def decimal(
        self, length: Optional[int] = None, precision: Optional[int] = None
    ) -> Column:
        return self._sized("decimal", length, precision)

    def datetime(self, default: Optional[str] = None) -> Column:
        self.type("datetime")
        if default is not None:
            self.default(default)
        return self

    def timestamp(self, default: Optional[str] = None) -> Column:
        self.type("timestamp")
        if default is not None:
            self.default(default)
        return self

    def json(self) -> Column:
        return self.type("json")


class Index:
    """Fluent builder for one index entry.

    The kind is a single value: the last ``primary()``, ``unique()`` or
    ``full_text()`` call wins. Passing False only resets the kind to PLAIN
    when that kind is the current one.
    """

    def __init__(self, column: ColumnName, key_name: Optional[KeyName] = None):
        self._definition = IndexDefinition(
            key_name=key_name or f"ix_{column}", column=column
        )

    @property
    def key_name(self) -> str:
        return self._definition.key_name

    @property
    def column(self) -> str:
        return self._definition.column

    def export(self) -> IndexDefinition:
        return self._definition

    def kind(self, kind: IndexKind) -> Index:
        self._definition = replace(self._definition, kind=kind)
        return self

    def _toggle(self, kind: IndexKind, enabled: bool) -> Index:
        if enabled:
            return self.kind(kind)
        if self._definition.kind is kind:
            return self.kind(IndexKind.PLAIN)
        return self

    def primary(self, primary: bool = True) -> Index:
        return self._toggle(IndexKind.PRIMARY, primary)

    def unique(self, unique: bool = True) -> Index:
        return self._toggle(IndexKind.UNIQUE, unique)

    def full_text(self, full_text: bool = True) -> Index:
        return self._toggle(IndexKind.FULLTEXT, full_text)


Action = Union[str, ReferentialAction]


def _action_value(action: Optional[Action]) -> Optional[str]:
    if isinstance(action, ReferentialAction):
        return action.value
    return action


class ForeignKey:
    """Fluent builder for a single-column foreign key."""

    def __init__(self, column: ColumnName, key_name: Optional[KeyName] = None):
        self._definition = ForeignKeyDefinition(
            key_name=key_name or f"fk_{column}", column=column
        )

    @property
    def key_name(self) -> str:
        return self._definition.key_name

    @property
    def column(self) -> str:
        return self._definition.column

    def export(self) -> ForeignKeyDefinition:
        return self._definition

    def _set(self, **changes) -> ForeignKey:
        self._definition = replace(self._definition, **changes)
        return self

    def reference_table(self, table: TableName) -> ForeignKey:
        return self._set(reference_table=table)

    def reference_column(self, column: ColumnName) -> ForeignKey:
        return self._set(reference_column=column)

    def on_update(self, action: Optional[Action]) -> ForeignKey:
        return self._set(on_update=_action_value(action))

    def on_delete(self, action: Optional[Action]) -> ForeignKey:
        return self._set(on_delete=_action_value(action))


class Schema:
    """Desired-state definition of one table.

    Args:
        table_name: Table name without prefix.
        configure: Optional callback invoked with the new schema to declare
            its columns, indexes and foreign keys.
    """

    def __init__(
        self,
        table_name: TableName,
        configure: Optional[Callable[[Schema], None]] = None,
    ):
        self._table_name = table_name
        self._prefix: Optional[str] = None
        self._columns: dict[str, Column] = {}
        self._indexes: list[Index] = []
        self._foreign_keys: list[ForeignKey] = []
        if configure is not None:
            configure(self)

    def __repr__(self) -> str:
        return f"Schema({self.table_name!r}, columns={list(self._columns)!r})"

    @property
    def table_name(self) -> str:
        """Table name including the prefix, if any."""
        return f"{self._prefix or ''}{self._table_name}"

    def prefix(self, prefix: Optional[str]) -> Schema:
        self._prefix = prefix
        return self

    def has_prefix(self) -> bool:
        return bool(self._prefix)

    def column(self, name: ColumnName) -> Column:
        """Declare a column, replacing any column already using this name.

        A replaced column keeps its original position.
        """
        column = Column(name)
        self._columns[name] = column
        return column

    def index(self, column: ColumnName, key_name: Optional[KeyName] = None) -> Index:
        index = Index(column, key_name)
        self._indexes.append(index)
        return index

    def foreign_key(
        self, column: ColumnName, key_name: Optional[KeyName] = None
    ) -> ForeignKey:
        foreign_key = ForeignKey(column, key_name)
        self._foreign_keys.append(foreign_key)
        return foreign_key

    def remove_column(self, name: ColumnName) -> Schema:
        """Remove a declared column.

        Raises:
            SchemaError: code 1 if no column with this name is defined.
        """
        if name not in self._columns:
            raise SchemaError.column_not_removable(self, name)
        del self._columns[name]
        return self

    def get_column(self, name: ColumnName) -> Column:
        """Get the builder of a declared column.

        Raises:
            SchemaError: code 301 if no column with this name is defined.
        """
        if name not in self._columns:
            raise SchemaError.column_not_exist(self, name)
        return self._columns[name]

    def has_column(self, name: ColumnName) -> bool:
        return name in self._columns

    def has_indexes(self) -> bool:
        return len(self._indexes) > 0

    def has_foreign_keys(self) -> bool:
        return len(self._foreign_keys) > 0

    def column_names(self) -> list[ColumnName]:
        return list(self._columns)

    @property
    def columns(self) -> tuple[ColumnDefinition, ...]:
        return tuple(column.export() for column in self._columns.values())

    @property
    def indexes(self) -> tuple[IndexDefinition, ...]:
        return tuple(index.export() for index in self._indexes)

    @property
    def foreign_keys(self) -> tuple[ForeignKeyDefinition, ...]:
        return tuple(fk.export() for fk in self._foreign_keys)

    def export(self) -> TableDefinition:
        return TableDefinition(
            table_name=self.table_name,
            columns=self.columns,
            indexes=self.indexes,
            foreign_keys=self.foreign_keys,
        )
