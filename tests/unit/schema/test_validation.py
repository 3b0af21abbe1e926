"""
Unit tests for reserved-word validation.
"""

from schemaport.schema.schema import Schema
from schemaport.schema.validation import ReservedWordViolation, find_reserved_word_violations
from schemaport.sql.keywords import KeywordList


def _schema() -> Schema:
    schema = Schema()
    table = schema.create_table("select")
    table.add_column("id", "integer")
    table.add_column("groups", "integer")
    table.add_column('"order"', "integer")
    table.add_index(["id"], name="user")
    schema.create_sequence("seq")
    return schema


class TestReservedWords:
    """Tests for find_reserved_word_violations."""

    def test_violations_per_list(self, oracle, mysql):
        """Every unquoted reserved name is reported with the lists it collides in."""
        violations = find_reserved_word_violations(_schema(), [oracle.keywords, mysql.keywords])

        assert [(v.object_type, v.name, v.keyword_lists) for v in violations] == [
            ("table", "select", ("oracle", "mysql")),
            ("column", "groups", ("mysql",)),
            ("index", "user", ("oracle",)),
        ]

    def test_quoted_names_skipped(self, oracle):
        """Names quoted by the user are exempt."""
        violations = find_reserved_word_violations(_schema(), [oracle.keywords])
        assert "order" not in [v.name for v in violations]

    def test_clean_schema(self):
        """No keywords, no violations."""
        assert find_reserved_word_violations(_schema(), [KeywordList("empty", [])]) == []

    def test_message(self):
        """Messages name the object, table and lists."""
        violation = ReservedWordViolation("column", "groups", ("mysql",), table="select")
        assert violation.message == "Column 'groups' in table 'select' is a reserved keyword in: mysql"
