"""Tests for schema validation."""

import pytest

from tablebuilder.schema.models import Schema
from tablebuilder.schema.validator import SchemaValidator, validate


@pytest.fixture
def validator() -> SchemaValidator:
    return SchemaValidator()


def kinds(issues) -> list[str]:
    return [issue.kind for issue in issues]


class TestValidSchema:
    def test_valid_schema_has_no_issues(self, validator: SchemaValidator):
        schema = Schema("t")
        schema.column("id").unsigned_int(11).auto_increment()
        schema.column("user_id").int()
        schema.index("id").primary()
        schema.foreign_key("user_id").reference_table("users").reference_column("id")

        result = validator.validate(schema)

        assert result.ok is True
        assert result.issues == []

    def test_empty_schema_is_valid(self):
        assert validate(Schema("t")) == []


class TestColumnTypes:
    def test_column_missing_type(self, validator: SchemaValidator):
        schema = Schema("t")
        schema.column("typed").int()
        schema.column("untyped")

        result = validator.validate(schema)

        assert result.ok is False
        assert kinds(result.issues) == ["column_missing_type"]
        assert result.issues[0].column == "untyped"
        assert result.issues[0].message == 'Column "untyped" has no type defined'

    def test_blank_type_is_missing(self):
        schema = Schema("t")
        schema.column("blank").type("   ")
        assert kinds(validate(schema)) == ["column_missing_type"]

    def test_one_issue_per_untyped_column(self):
        schema = Schema("t")
        schema.column("a")
        schema.column("b")
        issues = validate(schema)
        assert [i.column for i in issues] == ["a", "b"]


class TestPrimaryKeys:
    def test_single_primary_key_is_valid(self):
        schema = Schema("t")
        schema.column("id").int()
        schema.index("id").primary()
        assert validate(schema) == []

    @pytest.mark.parametrize("count", [2, 3])
    def test_multiple_primary_keys_reported_once(self, count):
        schema = Schema("t")
        for i in range(count):
            schema.column(f"c{i}").int()
            schema.index(f"c{i}").primary()

        issues = validate(schema)

        assert kinds(issues) == ["multiple_primary_keys"]
        assert issues[0].count == count


class TestIndexColumns:
    def test_index_on_undefined_column(self):
        schema = Schema("t")
        schema.column("a").int()
        schema.index("missing", "ix_custom").unique()

        issues = validate(schema)

        assert kinds(issues) == ["index_column_missing"]
        assert issues[0].key_name == "ix_custom"
        assert issues[0].column == "missing"


class TestForeignKeys:
    def test_foreign_key_on_undefined_column(self):
        schema = Schema("t")
        schema.foreign_key("missing").reference_table("x").reference_column("id")

        issues = validate(schema)

        assert kinds(issues) == ["foreign_key_column_missing"]
        assert issues[0].key_name == "fk_missing"

    def test_foreign_key_missing_both_references(self):
        schema = Schema("t")
        schema.column("a").int()
        schema.foreign_key("a")

        issues = validate(schema)

        assert kinds(issues) == ["foreign_key_reference_missing"]
        assert issues[0].key_name == "fk_a"

    @pytest.mark.parametrize(
        "table,column",
        [("users", None), (None, "id")],
    )
    def test_foreign_key_missing_one_reference(self, table, column):
        schema = Schema("t")
        schema.column("a").int()
        fk = schema.foreign_key("a")
        if table:
            fk.reference_table(table)
        if column:
            fk.reference_column(column)

        assert kinds(validate(schema)) == ["foreign_key_reference_missing"]


class TestAccumulation:
    def test_all_checks_run_and_accumulate(self, validator: SchemaValidator):
        schema = Schema("t")
        schema.column("untyped")
        schema.column("a").int()
        schema.column("b").int()
        schema.index("a").primary()
        schema.index("b").primary()
        schema.index("ghost")
        schema.foreign_key("phantom")

        result = validator.validate(schema)

        assert result.ok is False
        assert kinds(result.issues) == [
            "column_missing_type",
            "multiple_primary_keys",
            "index_column_missing",
            "foreign_key_column_missing",
            "foreign_key_reference_missing",
        ]

    def test_validation_does_not_mutate_schema(self):
        schema = Schema("t")
        schema.column("a")
        before = schema.export()
        validate(schema)
        assert schema.export() == before
