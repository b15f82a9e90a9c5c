"""Shared test helpers for tablebuilder tests."""

from unittest.mock import MagicMock

from tablebuilder.schema.models import Schema
from tablebuilder.store import StoreResult


class FakeStore:
    """Table store returning a canned result and recording every statement."""

    def __init__(self, result: StoreResult | None = None, trailer: str = ""):
        self.result = result or StoreResult()
        self.trailer = trailer
        self.statements: list[str] = []

    def execute(self, sql: str) -> StoreResult:
        self.statements.append(sql)
        return self.result


class RaisingStore:
    """Table store whose execute() raises the given exception."""

    trailer = ""

    def __init__(self, exc: Exception):
        self.exc = exc

    def execute(self, sql: str) -> StoreResult:
        raise self.exc


def make_users_schema(prefix: str | None = None) -> Schema:
    """A valid schema exercising columns, indexes and a foreign key."""

    def configure(schema: Schema) -> None:
        schema.prefix(prefix)
        schema.column("id").unsigned_int(11).auto_increment()
        schema.column("email").varchar(255)
        schema.column("name").varchar(255).nullable()
        schema.column("group_id").unsigned_int(11)
        schema.column("created_at").datetime("CURRENT_TIMESTAMP")
        schema.index("id").primary()
        schema.index("email", "uq_email").unique()
        schema.foreign_key("group_id").reference_table("groups").reference_column(
            "id"
        ).on_delete("CASCADE")

    return Schema("users", configure)


def make_mock_connection(messages: list | None = None) -> MagicMock:
    """Create a mock DB-API connection whose cursor reports the given messages."""
    connection = MagicMock()
    cursor = MagicMock()
    cursor.messages = messages or []
    connection.cursor.return_value = cursor
    return connection
