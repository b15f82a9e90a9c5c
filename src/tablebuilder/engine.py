"""Engine: validate, translate and hand table statements to a store."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from tablebuilder.exceptions import SchemaValidationError, StoreError
from tablebuilder.schema.models import Schema
from tablebuilder.schema.translator import MySQLTranslator, SchemaTranslator
from tablebuilder.schema.validator import SchemaValidator
from tablebuilder.store import StoreResult, TableStore

__all__ = ["Engine", "Builder"]

logger = logging.getLogger(__name__)


class Engine:
    """
    Compiles schemas into CREATE/DROP statements and submits them to a store.

    Each call is self-contained: a schema is validated first and nothing is
    generated or executed when it has issues.
    """

    def __init__(
        self,
        store: TableStore,
        translator: Optional[SchemaTranslator] = None,
        validator: Optional[SchemaValidator] = None,
    ) -> None:
        self._store = store
        self._translator = translator or MySQLTranslator()
        self._validator = validator or SchemaValidator()

    @property
    def store(self) -> TableStore:
        return self._store

    @property
    def translator(self) -> SchemaTranslator:
        return self._translator

    @property
    def validator(self) -> SchemaValidator:
        return self._validator

    def _ensure_valid(self, schema: Schema) -> None:
        result = self._validator.validate(schema)
        if not result.ok:
            logger.warning(
                f"Schema {schema.table_name} failed validation "
                f"with {len(result.issues)} errors"
            )
            raise SchemaValidationError.failed_validation(schema, result.issues)

    def create_table_query(self, schema: Schema) -> str:
        """Build the CREATE TABLE statement without executing it.

        Raises:
            SchemaValidationError: If the schema has validation issues.
        """
        self._ensure_valid(schema)
        body = ",\n".join(self._translator.translate(schema))
        sql = f"CREATE TABLE {schema.table_name} (\n{body}\n)"
        trailer = self._store.trailer
        return f"{sql} {trailer}" if trailer else sql

    def drop_table_query(self, schema: Schema) -> str:
        """Build the DROP TABLE statement without executing it.

        Raises:
            SchemaValidationError: If the schema has validation issues.
        """
        self._ensure_valid(schema)
        return f"DROP TABLE IF EXISTS {schema.table_name};"

    def create_table(self, schema: Schema) -> bool:
        """Create (or reconcile) the table described by the schema.

        Raises:
            SchemaValidationError: If the schema has validation issues.
            StoreError: If the store reported a failure (code 101).
        """
        sql = self.create_table_query(schema)
        logger.info(f"Creating table {schema.table_name}")
        self._submit(sql, schema, StoreError.create_table)
        return True

    def drop_table(self, schema: Schema) -> bool:
        """Drop the table described by the schema if it exists.

        Raises:
            SchemaValidationError: If the schema has validation issues.
            StoreError: If the store reported a failure (code 102).
        """
        sql = self.drop_table_query(schema)
        logger.info(f"Dropping table {schema.table_name}")
        self._submit(sql, schema, StoreError.drop_table)
        return True

    def _submit(
        self,
        sql: str,
        schema: Schema,
        error: Callable[[Schema, str], StoreError],
    ) -> StoreResult:
        logger.debug(sql)
        try:
            result = self._store.execute(sql)
        except Exception as exc:
            logger.error(f"Store raised while executing on {schema.table_name}: {exc}")
            raise error(schema, str(exc)) from exc

        if result.failed:
            logger.error(f"Store reported failure on {schema.table_name}: {result.detail}")
            raise error(schema, result.detail)
        return result


class Builder:
    """Entry point wrapping an engine.

    Args:
        engine: Engine used for every operation.
        engine_config: Optional callable receiving the engine and returning
            the (possibly replaced) engine to use.
    """

    def __init__(
        self,
        engine: Engine,
        engine_config: Optional[Callable[[Engine], Engine]] = None,
    ) -> None:
        self._engine = engine_config(engine) if engine_config else engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def create_table(self, schema: Schema) -> bool:
        return self._engine.create_table(schema)

    def drop_table(self, schema: Schema) -> bool:
        return self._engine.drop_table(schema)
