"""Table stores: the collaborators that execute generated SQL."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

__all__ = [
    "StoreResult",
    "TableStore",
    "ConnectionTableStore",
    "RecordingTableStore",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of executing one statement.

    Any diagnostic output or stored error message counts as a failure.
    """

    diagnostic_output: str = ""
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.diagnostic_output or self.error_message)

    @property
    def detail(self) -> str:
        return "\n".join(p for p in (self.diagnostic_output, self.error_message) if p)


class TableStore(Protocol):
    """Executes CREATE/DROP statements against a live database.

    ``trailer`` is appended after the closing parenthesis of CREATE TABLE
    (e.g. ``COLLATE utf8mb4_unicode_ci``); it may be empty. Idempotent
    reconciliation of an existing table is the store's responsibility.
    """

    trailer: str

    def execute(self, sql: str) -> StoreResult: ...


class ConnectionTableStore:
    """Store backed by a PEP 249 (DB-API 2.0) connection.

    Driver errors propagate to the caller. Messages reported through the
    optional ``cursor.messages`` extension are returned as diagnostic output.
    """

    def __init__(self, connection: Any, collate: Optional[str] = None):
        self.connection = connection
        self.trailer = f"COLLATE {collate}" if collate else ""

    def execute(self, sql: str) -> StoreResult:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            messages = list(getattr(cursor, "messages", None) or [])
        finally:
            cursor.close()
        self.connection.commit()

        if messages:
            diagnostics = "\n".join(str(value) for _, value in messages)
            logger.debug(f"Store reported diagnostics: {diagnostics}")
            return StoreResult(diagnostic_output=diagnostics)
        return StoreResult()


class RecordingTableStore:
    """Store that records statements instead of executing them (dry runs)."""

    def __init__(self, trailer: str = ""):
        self.trailer = trailer
        self.statements: list[str] = []

    def execute(self, sql: str) -> StoreResult:
        self.statements.append(sql)
        return StoreResult()
