"""
Unit tests for the MySQL platform.
"""

import pytest

from schemaport.exceptions import ColumnLengthRequired, UnsupportedFeature
from schemaport.schema.core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    ForeignKeyOptions,
    Index,
    Sequence,
    TableOptions,
)
from schemaport.schema.diff import ColumnDiff, TableDiff
from schemaport.schema.table import Table
from schemaport.sql.capabilities import TransactionIsolationLevel


def _posts_table() -> Table:
    table = Table(
        "posts",
        options=TableOptions(engine="InnoDB", charset="utf8mb4", collation="utf8mb4_unicode_ci"),
    )
    table.add_column("id", "integer", autoincrement=True)
    table.add_column("title", "string", length=100, comment="Title")
    table.set_primary_key(["id"])
    table.add_index(["title"], name="idx_title")
    return table


class TestCreateTable:
    """Tests for create_table_sql."""

    def test_inline_indexes_comments_and_options(self, mysql):
        """Indexes and comments are inline; table options trail the definition."""
        assert mysql.create_table_sql(_posts_table()) == [
            "CREATE TABLE posts (id INT AUTO_INCREMENT NOT NULL, title VARCHAR(100) NOT NULL COMMENT 'Title', "
            "PRIMARY KEY(id), INDEX idx_title (title)) "
            "DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci ENGINE = InnoDB"
        ]

    def test_table_comment_option(self, mysql):
        """The table comment is a table option."""
        table = Table("logs", options=TableOptions(comment="Audit log"))
        table.add_column("id", "bigint")
        assert mysql.create_table_sql(table) == ["CREATE TABLE logs (id BIGINT NOT NULL) COMMENT = 'Audit log'"]

    def test_foreign_key_follows_table(self, mysql):
        """Foreign keys are added after the table; ON UPDATE is supported."""
        table = Table("posts")
        table.add_column("author_id", "integer")
        table.add_foreign_key(
            ["author_id"], "users", ["id"], name="fk_author", options=ForeignKeyOptions(on_update="CASCADE")
        )

        statements = mysql.create_table_sql(table)

        assert statements[0].startswith("CREATE TABLE posts (author_id INT NOT NULL, INDEX IDX_")
        assert statements[1] == (
            "ALTER TABLE posts ADD CONSTRAINT fk_author FOREIGN KEY (author_id) REFERENCES users (id) ON UPDATE CASCADE"
        )

    def test_reserved_names_use_backticks(self, mysql):
        """MySQL-only keywords are quoted with backticks."""
        table = Table("groups")
        table.add_column("key", "string", length=32)
        assert mysql.create_table_sql(table) == ["CREATE TABLE `groups` (`key` VARCHAR(32) NOT NULL)"]

    def test_boolean_default(self, mysql):
        """Booleans are TINYINT(1) with numeric defaults."""
        column = Column("active", "boolean", default=True)
        assert mysql.column_declaration_sql(column) == "active TINYINT(1) DEFAULT 1 NOT NULL"

    def test_binary_length_required(self, mysql):
        """Binary columns need a length."""
        with pytest.raises(ColumnLengthRequired):
            mysql.type_declaration_sql(Column("data", "binary"))

    def test_partial_index_unsupported(self, mysql):
        """Partial indexes cannot be declared."""
        table = Table("posts")
        table.add_column("title", "string", length=100)
        table.add_index(["title"], name="idx_title", where="title IS NOT NULL")
        with pytest.raises(UnsupportedFeature):
            mysql.create_table_sql(table)

    def test_deferrable_unsupported(self, mysql):
        """Deferrable constraints are rejected."""
        fk = ForeignKeyConstraint(
            ["author_id"], "users", ["id"], name="fk_author", options=ForeignKeyOptions(deferrable=True)
        )
        with pytest.raises(UnsupportedFeature):
            mysql.create_foreign_key_sql(fk, "posts")


class TestAlterTable:
    """Tests for alter_table_sql."""

    def test_add_change_drop(self, mysql):
        """Column clauses are grouped per statement kind."""
        table = _posts_table()
        legacy = table.add_column("legacy", "integer", nullable=True)
        diff = TableDiff(
            old_table=table,
            added_columns=[Column("body", ColumnType.TEXT)],
            changed_columns=[
                ColumnDiff(table.get_column("title"), Column("title", ColumnType.STRING, length=200), {"type", "comment"})
            ],
            removed_columns=[legacy],
        )

        assert mysql.alter_table_sql(diff) == [
            "ALTER TABLE posts ADD body LONGTEXT NOT NULL",
            "ALTER TABLE posts CHANGE title title VARCHAR(200) NOT NULL",
            "ALTER TABLE posts DROP legacy",
        ]

    def test_rename_column(self, mysql):
        """Renames restate the full declaration."""
        table = _posts_table()
        diff = TableDiff(
            old_table=table,
            renamed_columns=[(table.get_column("title"), Column("headline", ColumnType.STRING, length=100))],
        )
        assert mysql.alter_table_sql(diff) == ["ALTER TABLE posts CHANGE title headline VARCHAR(100) NOT NULL"]

    def test_foreign_key_rename_is_drop_and_add(self, mysql):
        """MySQL cannot rename a foreign key in place."""
        table = Table("posts")
        table.add_column("author_id", "integer")
        old = table.add_foreign_key(["author_id"], "users", ["id"], name="fk_a")
        new = ForeignKeyConstraint(["author_id"], "users", ["id"], name="fk_b")
        diff = TableDiff(old_table=table, renamed_foreign_keys=[(old, new)])

        assert mysql.alter_table_sql(diff) == [
            "ALTER TABLE posts DROP FOREIGN KEY fk_a",
            "ALTER TABLE posts ADD CONSTRAINT fk_b FOREIGN KEY (author_id) REFERENCES users (id)",
        ]

    def test_index_statements(self, mysql):
        """Index drops and renames name the table."""
        table = _posts_table()
        assert mysql.drop_index_sql(table.get_index("idx_title"), table) == "DROP INDEX idx_title ON posts"
        assert mysql.drop_index_sql(table.primary_key, table) == "ALTER TABLE posts DROP PRIMARY KEY"
        assert mysql.rename_index_sql(Index("idx_a", ["title"]), Index("idx_b", ["title"]), table) == (
            "ALTER TABLE posts RENAME INDEX idx_a TO idx_b"
        )


class TestUnsupported:
    """Operations MySQL does not offer."""

    def test_sequences(self, mysql):
        """Sequences are unavailable."""
        with pytest.raises(UnsupportedFeature):
            mysql.create_sequence_sql(Sequence("seq"))
        with pytest.raises(UnsupportedFeature):
            mysql.drop_sequence_sql("seq")

    def test_comment_on(self, mysql):
        """COMMENT ON statements are unavailable."""
        with pytest.raises(UnsupportedFeature):
            mysql.comment_on_column_sql("posts", "title", "Title")
        with pytest.raises(UnsupportedFeature):
            mysql.comment_on_table_sql("posts", "Posts")


class TestExpressions:
    """Tests for expressions and session statements."""

    def test_expressions(self, mysql):
        """Regexp, concatenation and bit operations."""
        assert mysql.regexp_expression_sql() == "RLIKE"
        assert mysql.concat_expression_sql("a", "b", "c") == "CONCAT(a, b, c)"
        assert mysql.bit_and_comparison_expression_sql("a", "b") == "(a & b)"

    def test_isolation(self, mysql):
        """Session isolation statement."""
        assert mysql.set_transaction_isolation_sql(TransactionIsolationLevel.READ_COMMITTED) == (
            "SET SESSION TRANSACTION ISOLATION LEVEL READ COMMITTED"
        )

    def test_backtick_escaping(self, mysql):
        """Embedded backticks are doubled."""
        assert mysql.quote_single_identifier("a`b") == "`a``b`"
