"""
Unit tests for the Oracle platform: DDL, autoincrement emulation and alters.
"""

from decimal import Decimal

import pytest

from schemaport.exceptions import SchemaError, UnsupportedFeature
from schemaport.schema.comparator import Comparator, ComparatorConfig
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
from schemaport.schema.schema import Schema
from schemaport.schema.table import Table
from schemaport.sql.capabilities import TransactionIsolationLevel


class TestCreateTable:
    """Tests for create_table_sql."""

    def test_simple_table(self, oracle):
        """Integer primary key plus nullable string column."""
        table = Table("test")
        table.add_column("id", "integer")
        table.add_column("test", "string", length=255, nullable=True)
        table.set_primary_key(["id"])

        assert oracle.create_table_sql(table) == [
            "CREATE TABLE test (id NUMBER(10) NOT NULL, test VARCHAR2(255) DEFAULT NULL NULL, PRIMARY KEY(id))"
        ]

    def test_unique_index_gets_generated_name(self, oracle):
        """Unnamed unique indexes are named from a hash of table and columns."""
        table = Table("test")
        table.add_column("foo", "string", length=255)
        table.add_column("bar", "string", length=255)
        index = table.add_unique_index(["foo", "bar"])

        assert oracle.create_index_sql(index, table) == (
            "CREATE UNIQUE INDEX UNIQ_D87F7E0C8C73652176FF8CAA ON test (foo, bar)"
        )

    def test_quoted_primary_key(self, oracle):
        """Quoted table and column names stay quoted in every clause."""
        table = Table('"quoted"')
        table.add_column('"create"', "string", length=255)
        table.set_primary_key(['"create"'])

        assert oracle.create_table_sql(table) == [
            'CREATE TABLE "quoted" ("create" VARCHAR2(255) NOT NULL, PRIMARY KEY("create"))'
        ]

    def test_quoted_column_in_index(self, oracle):
        """An index column keeps the quoting of the table column it names."""
        table = Table('"quoted"')
        table.add_column('"create"', "string", length=255)
        index = table.add_index(["create"])

        assert oracle.create_index_sql(index, table) == 'CREATE INDEX IDX_22660D028FD6E0FB ON "quoted" ("create")'

    def test_quoted_columns_in_foreign_key(self, oracle):
        """Foreign keys and their implicit index keep user quoting."""
        table = Table('"quoted"')
        table.add_column('"create"', "string", length=255)
        table.add_column('"foo"', "string", length=255)
        table.add_column("`bar`", "string", length=255)
        fk = table.add_foreign_key(
            ["create", "foo", "`bar`"],
            "foreign",
            ["create", "bar", "`foo-bar`"],
            name="FK_WITH_INTENDED_QUOTATION",
        )

        statements = oracle.create_table_sql(table)

        assert statements[0] == (
            'CREATE TABLE "quoted" ("create" VARCHAR2(255) NOT NULL, '
            '"foo" VARCHAR2(255) NOT NULL, "bar" VARCHAR2(255) NOT NULL)'
        )
        assert statements[1] == oracle.create_foreign_key_sql(fk, table)
        assert statements[1] == (
            'ALTER TABLE "quoted" ADD CONSTRAINT FK_WITH_INTENDED_QUOTATION '
            'FOREIGN KEY ("create", "foo", "bar") REFERENCES foreign ("create", bar, "foo-bar")'
        )
        assert statements[2] == (
            'CREATE INDEX IDX_22660D028FD6E0FB8C736521D79164E3 ON "quoted" ("create", "foo", "bar")'
        )

    def test_quoted_index_name(self, oracle):
        """A quoted index name is rendered quoted."""
        table = Table("test")
        table.add_column("column1", "string", length=255)
        index = table.add_index_definition(Index('"key"', ["column1"]))

        assert oracle.create_index_sql(index, table) == 'CREATE INDEX "key" ON test (column1)'

    def test_quoted_schema_qualified_table(self, oracle):
        """Each quoted part of a dotted name is quoted on its own."""
        assert oracle.quote_identifier('"schema"."create"') == '"schema"."create"'
        assert oracle.quote_identifier('myschema."Foo"') == 'myschema."Foo"'

        table = Table('"myschema"."foo"')
        table.add_column("id", "integer")
        assert oracle.create_table_sql(table) == ['CREATE TABLE "myschema"."foo" (id NUMBER(10) NOT NULL)']

    def test_table_and_column_comments(self, oracle):
        """Comments are emitted as COMMENT ON statements after the table."""
        table = Table("test", options=TableOptions(comment="Test table"))
        table.add_column("id", "integer", comment="This is a comment")

        assert oracle.create_table_sql(table) == [
            "CREATE TABLE test (id NUMBER(10) NOT NULL)",
            "COMMENT ON TABLE test IS 'Test table'",
            "COMMENT ON COLUMN test.id IS 'This is a comment'",
        ]

    def test_guid_column(self, oracle):
        """GUIDs are stored as CHAR(36)."""
        table = Table("test")
        table.add_column("uuid", "guid")
        assert oracle.create_table_sql(table) == ["CREATE TABLE test (uuid CHAR(36) NOT NULL)"]

    def test_one_emulated_autoincrement_per_table(self, oracle):
        """Two autoincrement columns cannot be emulated on one table."""
        table = Table("test")
        table.add_column("id", "integer", autoincrement=True)
        table.add_column("other_id", "integer", autoincrement=True)
        with pytest.raises(SchemaError, match="at most one autoincrement"):
            oracle.create_table_sql(table)


class TestAutoincrementEmulation:
    """Tests for the sequence and trigger emulation."""

    def test_create_table_with_autoincrement(self, oracle):
        """The table is followed by the PK guard, sequence and trigger."""
        table = Table("myTable")
        table.add_column("id", "integer", autoincrement=True)
        table.set_primary_key(["id"])

        statements = oracle.create_table_sql(table)

        assert len(statements) == 4
        assert statements[0] == "CREATE TABLE myTable (id NUMBER(10) NOT NULL, PRIMARY KEY(id))"
        assert "WHERE TABLE_NAME = 'MYTABLE'" in statements[1]
        assert "ALTER TABLE MYTABLE ADD CONSTRAINT MYTABLE_AI_PK PRIMARY KEY (ID)" in statements[1]
        assert statements[2] == "CREATE SEQUENCE MYTABLE_SEQ START WITH 1 MINVALUE 1 INCREMENT BY 1"
        assert statements[3].startswith("CREATE TRIGGER MYTABLE_AI_PK\n   BEFORE INSERT\n   ON MYTABLE")
        assert "SELECT MYTABLE_SEQ.NEXTVAL INTO :NEW.ID FROM DUAL;" in statements[3]
        assert "WHERE Sequence_Name = 'MYTABLE_SEQ';" in statements[3]

    def test_quoted_table_keeps_case(self, oracle):
        """Derived names of a quoted table keep its case and stay quoted."""
        statements = oracle.create_autoincrement_sql("id", '"myTable"')

        assert statements[0] == "\n".join(
            [
                "DECLARE",
                "  constraints_Count NUMBER;",
                "BEGIN",
                "  SELECT COUNT(CONSTRAINT_NAME) INTO constraints_Count",
                "    FROM USER_CONSTRAINTS",
                "   WHERE TABLE_NAME = 'myTable'",
                "     AND CONSTRAINT_TYPE = 'P';",
                "  IF constraints_Count = 0 OR constraints_Count = '' THEN",
                "    EXECUTE IMMEDIATE 'ALTER TABLE \"myTable\" ADD CONSTRAINT \"myTable_AI_PK\" PRIMARY KEY (ID)';",
                "  END IF;",
                "END;",
            ]
        )
        assert statements[1] == 'CREATE SEQUENCE "myTable_SEQ" START WITH 1 MINVALUE 1 INCREMENT BY 1'
        assert statements[2] == "\n".join(
            [
                'CREATE TRIGGER "myTable_AI_PK"',
                "   BEFORE INSERT",
                '   ON "myTable"',
                "   FOR EACH ROW",
                "DECLARE",
                "   last_Sequence NUMBER;",
                "   last_InsertID NUMBER;",
                "BEGIN",
                "   IF (:NEW.ID IS NULL OR :NEW.ID = 0) THEN",
                '      SELECT "myTable_SEQ".NEXTVAL INTO :NEW.ID FROM DUAL;',
                "   ELSE",
                "      SELECT NVL(Last_Number, 0) INTO last_Sequence",
                "        FROM User_Sequences",
                "       WHERE Sequence_Name = 'myTable_SEQ';",
                "      SELECT :NEW.ID INTO last_InsertID FROM DUAL;",
                "      WHILE (last_InsertID > last_Sequence) LOOP",
                '         SELECT "myTable_SEQ".NEXTVAL INTO last_Sequence FROM DUAL;',
                "      END LOOP;",
                '      SELECT "myTable_SEQ".NEXTVAL INTO last_Sequence FROM DUAL;',
                "   END IF;",
                "END;",
            ]
        )

    def test_reserved_table_name(self, oracle):
        """A reserved table name is quoted; derived names are not reserved."""
        statements = oracle.create_autoincrement_sql("id", "table")

        assert "ALTER TABLE \"TABLE\" ADD CONSTRAINT TABLE_AI_PK PRIMARY KEY (ID)" in statements[0]
        assert statements[1] == "CREATE SEQUENCE TABLE_SEQ START WITH 1 MINVALUE 1 INCREMENT BY 1"
        assert 'ON "TABLE"' in statements[2]

    def test_custom_start(self, oracle):
        """The sequence starts at the requested value."""
        statements = oracle.create_autoincrement_sql("id", "test", start=100)
        assert statements[1] == "CREATE SEQUENCE TEST_SEQ START WITH 100 MINVALUE 100 INCREMENT BY 1"

    def test_drop_autoincrement(self, oracle):
        """Dropping reverses trigger, sequence and constraint."""
        assert oracle.drop_autoincrement_sql("myTable") == [
            "DROP TRIGGER MYTABLE_AI_PK",
            "DROP SEQUENCE MYTABLE_SEQ",
            "ALTER TABLE MYTABLE DROP CONSTRAINT MYTABLE_AI_PK",
        ]

    def test_drop_autoincrement_quoted(self, oracle):
        """Quoted tables drop their quoted derived objects."""
        assert oracle.drop_autoincrement_sql('"myTable"') == [
            'DROP TRIGGER "myTable_AI_PK"',
            'DROP SEQUENCE "myTable_SEQ"',
            'ALTER TABLE "myTable" DROP CONSTRAINT "myTable_AI_PK"',
        ]

    def test_alter_adds_autoincrement_column(self, oracle):
        """An added autoincrement column gets its emulation after the ADD."""
        table = Table("mytable")
        table.add_column("name", "string", length=50)
        diff = TableDiff(old_table=table, added_columns=[Column("id", ColumnType.INTEGER, autoincrement=True)])

        statements = oracle.alter_table_sql(diff)

        assert statements[0] == "ALTER TABLE mytable ADD (id NUMBER(10) NOT NULL)"
        assert len(statements) == 4
        assert statements[2] == "CREATE SEQUENCE MYTABLE_SEQ START WITH 1 MINVALUE 1 INCREMENT BY 1"

    def test_alter_removes_autoincrement_column(self, oracle):
        """Without a declared key the emulation's own constraint is dropped too."""
        table = Table("mytable")
        table.add_column("id", "integer", autoincrement=True)
        table.add_column("name", "string", length=50)
        diff = TableDiff(old_table=table, removed_columns=[table.get_column("id")])

        assert oracle.alter_table_sql(diff) == [
            "DROP TRIGGER MYTABLE_AI_PK",
            "DROP SEQUENCE MYTABLE_SEQ",
            "ALTER TABLE MYTABLE DROP CONSTRAINT MYTABLE_AI_PK",
            "ALTER TABLE mytable DROP (id)",
        ]

    def test_alter_removes_autoincrement_column_with_declared_key(self, oracle):
        """A declared primary key is dropped once; the emulation keeps its hands off it."""
        table = Table('"Quoted"')
        table.add_column('"id"', "integer", autoincrement=True)
        table.add_column("name", "string", length=50)
        table.set_primary_key(['"id"'])
        diff = TableDiff(
            old_table=table,
            removed_columns=[table.get_column("id")],
            removed_indexes=[table.primary_key],
        )

        assert oracle.alter_table_sql(diff) == [
            'ALTER TABLE "Quoted" DROP PRIMARY KEY',
            'DROP TRIGGER "Quoted_AI_PK"',
            'DROP SEQUENCE "Quoted_SEQ"',
            'ALTER TABLE "Quoted" DROP ("id")',
        ]

    def test_drop_schema_drops_emulation_sequence(self, oracle):
        """Dropping a table with an emulated identity drops its sequence."""
        table = Table("mytable")
        table.add_column("id", "integer", autoincrement=True)

        assert oracle.drop_schema_sql(Schema([table])) == ["DROP TABLE mytable", "DROP SEQUENCE MYTABLE_SEQ"]


class TestAlterTable:
    """Tests for alter_table_sql."""

    def _table(self):
        table = Table("mytable")
        table.add_column("foo", "integer")
        table.add_column("baz", "string", length=255)
        table.add_column("bloo", "boolean")
        return table

    def test_add_modify_drop_rename(self, oracle):
        """Additions, modifications, drops and the table rename in order."""
        table = self._table()
        diff = TableDiff(
            old_table=table,
            added_columns=[Column("quota", ColumnType.INTEGER, nullable=True)],
            removed_columns=[table.get_column("foo")],
            changed_columns=[
                ColumnDiff(
                    table.get_column("baz"),
                    Column("baz", ColumnType.STRING, length=255, default="def"),
                    {"type", "nullable", "default"},
                ),
                ColumnDiff(
                    table.get_column("bloo"),
                    Column("bloo", ColumnType.BOOLEAN, default=False),
                    {"type", "nullable", "default"},
                ),
            ],
            new_name="userlist",
        )

        assert oracle.alter_table_sql(diff) == [
            "ALTER TABLE mytable ADD (quota NUMBER(10) DEFAULT NULL NULL)",
            "ALTER TABLE mytable MODIFY (baz VARCHAR2(255) DEFAULT 'def' NOT NULL, "
            "bloo NUMBER(1) DEFAULT 0 NOT NULL)",
            "ALTER TABLE mytable DROP (foo)",
            "ALTER TABLE mytable RENAME TO userlist",
        ]

    def test_nullability_not_restated(self, oracle):
        """Unchanged nullability is left out of MODIFY."""
        table = Table("mytable")
        old = table.add_column("name", "string", length=2, nullable=True)
        new = Column("name", ColumnType.STRING, length=2, fixed=True, nullable=True)
        diff = TableDiff(old_table=table, changed_columns=[ColumnDiff(old, new, {"type"})])

        assert oracle.alter_table_sql(diff) == ["ALTER TABLE mytable MODIFY (name CHAR(2) DEFAULT NULL)"]

    def test_comment_only_change(self, oracle):
        """A comment change produces only a COMMENT ON statement."""
        table = Table('"foo"')
        old = table.add_column('"bar"', "integer")
        new = Column('"bar"', ColumnType.INTEGER, comment="baz")
        diff = TableDiff(old_table=table, changed_columns=[ColumnDiff(old, new, {"comment"})])

        assert oracle.alter_table_sql(diff) == ["COMMENT ON COLUMN \"foo\".\"bar\" IS 'baz'"]

    def test_rename_columns(self, oracle):
        """Renames quote reserved and user-quoted names."""
        table = Table("mytable")
        unquoted = table.add_column("unquoted2", "integer")
        quoted = table.add_column('"create"', "integer")
        diff = TableDiff(
            old_table=table,
            renamed_columns=[
                (unquoted, Column("where", ColumnType.INTEGER)),
                (quoted, Column("reserved_keyword", ColumnType.INTEGER)),
            ],
        )

        assert oracle.alter_table_sql(diff) == [
            'ALTER TABLE mytable RENAME COLUMN unquoted2 TO "where"',
            'ALTER TABLE mytable RENAME COLUMN "create" TO reserved_keyword',
        ]

    def test_dependent_foreign_key_dropped_with_column(self, oracle):
        """A foreign key over a removed column is dropped first and not recreated."""
        table = Table("posts")
        table.add_column("id", "integer")
        author = table.add_column("author_id", "integer")
        table.add_foreign_key(["author_id"], "users", ["id"], name="fk_author")
        diff = TableDiff(old_table=table, removed_columns=[author])

        assert oracle.alter_table_sql(diff) == [
            "ALTER TABLE posts DROP CONSTRAINT fk_author",
            "ALTER TABLE posts DROP (author_id)",
        ]

    def test_binary_fixed_flag_swap_is_not_a_change(self, oracle):
        """Fixed and variable binary are both RAW, so nothing differs."""
        old = Table("test")
        old.add_column("column_varbinary", "binary", length=32)
        old.add_column("column_binary", "binary", length=32, fixed=True)
        new = Table("test")
        new.add_column("column_varbinary", "binary", length=32, fixed=True)
        new.add_column("column_binary", "binary", length=32)

        assert Comparator(oracle, ComparatorConfig()).diff_table(old, new) is None

    def test_renamed_index(self, oracle):
        """Indexes are renamed in place."""
        old = Index("idx_foo", ["foo"])
        new = Index("idx_bar", ["foo"])
        assert oracle.rename_index_sql(old, new, "test") == "ALTER INDEX idx_foo RENAME TO idx_bar"


class TestIndexesAndConstraints:
    """Tests for index and foreign key statements."""

    def test_drop_index(self, oracle):
        """Oracle indexes are dropped by name only."""
        assert oracle.drop_index_sql(Index("idx_foo", ["foo"]), "test") == "DROP INDEX idx_foo"

    def test_drop_primary_key(self, oracle):
        """The primary key is dropped through the table."""
        table = Table("test")
        table.add_column("id", "integer")
        primary = table.set_primary_key(["id"])
        assert oracle.drop_index_sql(primary, table) == "ALTER TABLE test DROP PRIMARY KEY"

    def test_unnamed_foreign_key(self, oracle):
        """Unnamed foreign keys render without a CONSTRAINT clause."""
        fk = ForeignKeyConstraint(["fk_name_id"], "other_table", ["id"])
        assert oracle.create_foreign_key_sql(fk, "test") == (
            "ALTER TABLE test ADD FOREIGN KEY (fk_name_id) REFERENCES other_table (id)"
        )

    @pytest.mark.parametrize(
        "options, expected",
        [
            (ForeignKeyOptions(), ""),
            (ForeignKeyOptions(on_update="CASCADE"), ""),
            (ForeignKeyOptions(on_delete="CASCADE"), " ON DELETE CASCADE"),
            (ForeignKeyOptions(on_delete="SET NULL"), " ON DELETE SET NULL"),
            (ForeignKeyOptions(on_delete="NO ACTION"), ""),
            (ForeignKeyOptions(on_delete="RESTRICT"), ""),
            (ForeignKeyOptions(on_update="SET NULL", on_delete="CASCADE"), " ON DELETE CASCADE"),
            (ForeignKeyOptions(deferrable=True, deferred=True), " DEFERRABLE INITIALLY DEFERRED"),
            (ForeignKeyOptions(deferrable=True), " DEFERRABLE INITIALLY IMMEDIATE"),
        ],
    )
    def test_foreign_key_options(self, oracle, options, expected):
        """ON UPDATE is not available and NO ACTION/RESTRICT are implicit."""
        fk = ForeignKeyConstraint(["foo"], "foreign_table", ["id"], name="fk_foo", options=options)
        assert oracle.advanced_foreign_key_options_sql(fk) == expected

    def test_referential_action_passthrough(self, oracle):
        """Unknown actions are upper-cased unchanged."""
        assert oracle.foreign_key_referential_action_sql("cascade") == "CASCADE"
        assert oracle.foreign_key_referential_action_sql("something") == "SOMETHING"

    def test_drop_foreign_key(self, oracle):
        """Foreign keys are dropped as constraints."""
        fk = ForeignKeyConstraint(["foo"], "bar", ["id"], name="fk_foo")
        assert oracle.drop_foreign_key_sql(fk, "test") == "ALTER TABLE test DROP CONSTRAINT fk_foo"

    def test_drop_unnamed_foreign_key(self, oracle):
        """An unnamed foreign key cannot be dropped."""
        with pytest.raises(SchemaError):
            oracle.drop_foreign_key_sql(ForeignKeyConstraint(["foo"], "bar", ["id"]), "test")

    def test_rename_foreign_key_unsupported(self, oracle):
        """Oracle does not rename foreign keys."""
        old = ForeignKeyConstraint(["foo"], "bar", ["id"], name="fk_a")
        new = ForeignKeyConstraint(["foo"], "bar", ["id"], name="fk_b")
        with pytest.raises(UnsupportedFeature):
            oracle.rename_foreign_key_sql(old, new, "test")

    def test_reserved_names(self, oracle):
        """Reserved names are quoted in every statement."""
        assert oracle.truncate_table_sql("select") == 'TRUNCATE TABLE "select"'
        assert oracle.unique_constraint_declaration_sql("select", ["foo"]) == 'CONSTRAINT "select" UNIQUE (foo)'
        assert oracle.index_declaration_sql(Index("select", ["foo"])) == 'INDEX "select" (foo)'

    def test_comment_on_column(self, oracle):
        """Column comments; None clears the comment."""
        assert oracle.comment_on_column_sql("test", "id", "This is a comment") == (
            "COMMENT ON COLUMN test.id IS 'This is a comment'"
        )
        assert oracle.comment_on_column_sql("test", "id", None) == "COMMENT ON COLUMN test.id IS ''"


class TestDefaults:
    """Tests for default value rendering."""

    def test_numeric_default_unquoted(self, oracle):
        """Numeric defaults are emitted bare."""
        assert oracle.default_value_sql(Column("price", "decimal", default=Decimal("1.5"))) == " DEFAULT 1.5"

    def test_string_default_escaped(self, oracle):
        """String defaults are quoted and escaped."""
        column = Column("status", "string", length=10, default="it's")
        assert oracle.default_value_sql(column) == " DEFAULT 'it''s'"

    def test_current_timestamp_keyword(self, oracle):
        """Temporal keywords are not quoted."""
        column = Column("created_at", "datetime", default="CURRENT_TIMESTAMP")
        assert oracle.default_value_sql(column) == " DEFAULT CURRENT_TIMESTAMP"

    def test_boolean_default(self, oracle):
        """Booleans render as 1/0."""
        assert oracle.default_value_sql(Column("active", "boolean", default=True)) == " DEFAULT 1"


class TestSequencesAndExpressions:
    """Tests for sequences, expressions and database statements."""

    @pytest.mark.parametrize(
        "cache_size, suffix",
        [(None, ""), (0, " NOCACHE"), (1, " NOCACHE"), (3, " CACHE 3")],
    )
    def test_create_sequence_cache(self, oracle, cache_size, suffix):
        """Cache sizes of 0 and 1 render NOCACHE."""
        sequence = Sequence("myseq", start=1, increment=1, cache_size=cache_size)
        assert oracle.create_sequence_sql(sequence) == (
            f"CREATE SEQUENCE myseq START WITH 1 MINVALUE 1 INCREMENT BY 1{suffix}"
        )

    def test_alter_and_drop_sequence(self, oracle):
        """Only increment and cache can be altered."""
        sequence = Sequence("myseq", increment=2, cache_size=3)
        assert oracle.alter_sequence_sql(sequence) == "ALTER SEQUENCE myseq INCREMENT BY 2 CACHE 3"
        assert oracle.drop_sequence_sql(sequence) == "DROP SEQUENCE myseq"

    def test_expressions(self, oracle):
        """Concatenation and bit operations."""
        assert oracle.concat_expression_sql("column1", "column2", "column3") == "column1 || column2 || column3"
        assert oracle.bit_and_comparison_expression_sql("2", "4") == "BITAND(2, 4)"
        assert oracle.bit_or_comparison_expression_sql("2", "4") == "(2-BITAND(2, 4)+4)"

    def test_regexp_unsupported(self, oracle):
        """Oracle has no regular expression operator."""
        with pytest.raises(UnsupportedFeature):
            oracle.regexp_expression_sql()

    def test_databases_are_users(self, oracle):
        """Databases map to users."""
        assert oracle.create_database_sql("foobar") == "CREATE USER foobar"
        assert oracle.drop_database_sql("foobar") == "DROP USER foobar CASCADE"

    @pytest.mark.parametrize(
        "level, expected",
        [
            (TransactionIsolationLevel.READ_UNCOMMITTED, "READ UNCOMMITTED"),
            (TransactionIsolationLevel.READ_COMMITTED, "READ COMMITTED"),
            (TransactionIsolationLevel.REPEATABLE_READ, "SERIALIZABLE"),
            (TransactionIsolationLevel.SERIALIZABLE, "SERIALIZABLE"),
        ],
    )
    def test_transaction_isolation(self, oracle, level, expected):
        """Repeatable read is promoted to serializable."""
        assert oracle.set_transaction_isolation_sql(level) == f"SET TRANSACTION ISOLATION LEVEL {expected}"

    def test_isolation_from_int(self, oracle):
        """Plain integers are accepted as isolation levels."""
        assert oracle.set_transaction_isolation_sql(2) == "SET TRANSACTION ISOLATION LEVEL READ COMMITTED"
