"""Tests for table store implementations."""

import pytest

from tablebuilder.store import ConnectionTableStore, RecordingTableStore, StoreResult
from tests.helpers import make_mock_connection


class TestStoreResult:
    def test_empty_result_succeeds(self):
        result = StoreResult()
        assert result.failed is False
        assert result.detail == ""

    def test_any_output_fails(self):
        assert StoreResult(diagnostic_output="warning").failed is True
        assert StoreResult(error_message="error").failed is True

    def test_detail_joins_both(self):
        result = StoreResult(diagnostic_output="out", error_message="err")
        assert result.detail == "out\nerr"


class TestConnectionTableStore:
    def test_trailer_from_collate(self):
        assert ConnectionTableStore(make_mock_connection()).trailer == ""
        store = ConnectionTableStore(make_mock_connection(), collate="utf8mb4_bin")
        assert store.trailer == "COLLATE utf8mb4_bin"

    def test_execute_runs_and_commits(self):
        connection = make_mock_connection()
        store = ConnectionTableStore(connection)

        result = store.execute("DROP TABLE IF EXISTS t;")

        cursor = connection.cursor.return_value
        cursor.execute.assert_called_once_with("DROP TABLE IF EXISTS t;")
        cursor.close.assert_called_once()
        connection.commit.assert_called_once()
        assert result == StoreResult()

    def test_cursor_messages_become_diagnostics(self):
        connection = make_mock_connection(
            messages=[(Warning, "Table 't' already exists")]
        )

        result = ConnectionTableStore(connection).execute("CREATE TABLE t (a INT)")

        assert result.failed is True
        assert result.diagnostic_output == "Table 't' already exists"

    def test_driver_errors_propagate_and_close_cursor(self):
        connection = make_mock_connection()
        cursor = connection.cursor.return_value
        cursor.execute.side_effect = RuntimeError("syntax error")

        with pytest.raises(RuntimeError, match="syntax error"):
            ConnectionTableStore(connection).execute("CREATE TABLE")

        cursor.close.assert_called_once()
        connection.commit.assert_not_called()


class TestRecordingTableStore:
    def test_records_statements(self):
        store = RecordingTableStore(trailer="COLLATE x")
        assert store.execute("A") == StoreResult()
        store.execute("B")
        assert store.statements == ["A", "B"]
        assert store.trailer == "COLLATE x"
