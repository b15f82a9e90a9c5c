"""Tests for tablebuilder.types module."""

from tablebuilder.types import IndexKind, ReferentialAction


class TestIndexKind:
    def test_index_kind_values(self):
        """Kinds render to the keyword used in index clauses."""
        assert IndexKind.PLAIN.value == ""
        assert IndexKind.UNIQUE.value == "unique"
        assert IndexKind.FULLTEXT.value == "fulltext"
        assert IndexKind.PRIMARY.value == "primary"


class TestReferentialAction:
    def test_referential_action_values_are_sql(self):
        assert ReferentialAction.CASCADE.value == "CASCADE"
        assert ReferentialAction.SET_NULL.value == "SET NULL"
        assert ReferentialAction.RESTRICT.value == "RESTRICT"
        assert ReferentialAction.NO_ACTION.value == "NO ACTION"
