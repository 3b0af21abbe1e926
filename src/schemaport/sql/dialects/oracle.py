"""
Oracle dialect.

Oracle has no identity columns in the supported feature set, so an
autoincrement column is emulated with four artifacts created together: the
table itself, a guarded primary key block, a ``<TABLE>_SEQ`` sequence and a
``<TABLE>_AI_PK`` insert trigger that keeps the sequence ahead of any value
inserted explicitly.
"""

import re
from typing import List, Tuple

from schemaport.exceptions import UnsupportedFeature
from schemaport.schema.core import Column, ColumnType, Sequence
from schemaport.schema.diff import ColumnDiff
from schemaport.schema.table import Table
from schemaport.sql.capabilities import PlatformCapabilities, TransactionIsolationLevel
from schemaport.sql.core.identifier import IdentifierRules
from schemaport.sql.core.literals import quote_string_literal
from schemaport.sql.keywords import KeywordList
from schemaport.sql.keywords.oracle import KEYWORDS
from schemaport.sql.platform import Platform
from schemaport.sql.registry import register_platform
from schemaport.sql.types import build_type_mapping, constant, numeric, sized

CAPABILITIES = PlatformCapabilities(
    supports_savepoints=True,
    supports_identity_columns=False,
    supports_comment_on_statement=True,
    supports_sequences=True,
    supports_foreign_key_on_update=False,
    supports_deferrable_constraints=True,
    implicit_restrict_action=True,
    renames_indexes=True,
)

IDENTIFIERS = IdentifierRules(
    quote_start='"',
    quote_end='"',
    bare_pattern=re.compile(r"[A-Za-z][A-Za-z0-9_$#]*"),
    keywords=KeywordList("oracle", KEYWORDS),
    fold="upper",
)

TYPE_RENDERERS = {
    ColumnType.INTEGER: constant("NUMBER(10)"),
    ColumnType.BIGINT: constant("NUMBER(20)"),
    ColumnType.SMALLINT: constant("NUMBER(5)"),
    ColumnType.BOOLEAN: constant("NUMBER(1)"),
    ColumnType.STRING: sized("VARCHAR2", "CHAR"),
    ColumnType.TEXT: constant("CLOB"),
    ColumnType.JSON: constant("CLOB"),
    ColumnType.BLOB: constant("BLOB"),
    # RAW is the only binary storage type, fixed or not
    ColumnType.BINARY: sized("RAW", "RAW"),
    ColumnType.GUID: constant("CHAR(36)"),
    ColumnType.DECIMAL: numeric("NUMBER"),
    ColumnType.FLOAT: constant("DOUBLE PRECISION"),
    ColumnType.DATE: constant("DATE"),
    ColumnType.DATETIME: constant("TIMESTAMP(0)"),
    ColumnType.DATETIMETZ: constant("TIMESTAMP(0) WITH TIME ZONE"),
    ColumnType.TIME: constant("DATE"),
}

NATIVE_TYPES = {
    "binary_double": ColumnType.FLOAT,
    "binary_float": ColumnType.FLOAT,
    "binary_integer": ColumnType.BOOLEAN,
    "blob": ColumnType.BLOB,
    "char": ColumnType.STRING,
    "clob": ColumnType.TEXT,
    "date": ColumnType.DATE,
    "float": ColumnType.FLOAT,
    "integer": ColumnType.INTEGER,
    "long": ColumnType.STRING,
    "long raw": ColumnType.BLOB,
    "nchar": ColumnType.STRING,
    "nclob": ColumnType.TEXT,
    "number": ColumnType.INTEGER,
    "nvarchar2": ColumnType.STRING,
    "pls_integer": ColumnType.BOOLEAN,
    "raw": ColumnType.BINARY,
    "rowid": ColumnType.STRING,
    "timestamp": ColumnType.DATETIME,
    "timestamptz": ColumnType.DATETIMETZ,
    "urowid": ColumnType.STRING,
    "varchar": ColumnType.STRING,
    "varchar2": ColumnType.STRING,
}

ISOLATION_LEVELS = {
    TransactionIsolationLevel.READ_UNCOMMITTED: "READ UNCOMMITTED",
    TransactionIsolationLevel.READ_COMMITTED: "READ COMMITTED",
    TransactionIsolationLevel.REPEATABLE_READ: "SERIALIZABLE",
    TransactionIsolationLevel.SERIALIZABLE: "SERIALIZABLE",
}

# Only these attributes reach the MODIFY clause
MODIFY_PROPERTIES = frozenset({"type", "default", "nullable"})


def _cache_clause(sequence: Sequence) -> str:
    if sequence.cache_size is None:
        return ""
    if sequence.cache_size <= 1:
        return " NOCACHE"
    return f" CACHE {sequence.cache_size}"


class OracleDialect:
    """Oracle statement templates."""

    name = "oracle"
    comment_null_keyword = None

    def boolean_literal(self, value: bool) -> str:
        return "1" if value else "0"

    def nullability_sql(self, nullable: bool) -> str:
        return " NULL" if nullable else " NOT NULL"

    def table_options_sql(self, platform: Platform, table: Table) -> str:
        return ""

    def add_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        declarations = ", ".join(platform.column_declaration_sql(column) for column in columns)
        return [f"ALTER TABLE {table_sql} ADD ({declarations})"]

    def rename_column_sql(self, platform: Platform, table_sql: str, old: Column, new: Column) -> str:
        return f"ALTER TABLE {table_sql} RENAME COLUMN {platform.column_sql(old)} TO {platform.column_sql(new)}"

    def alter_columns_sql(self, platform: Platform, table_sql: str, diffs: List[ColumnDiff]) -> List[str]:
        # Nullability is restated only when it changed (ORA-01442 otherwise).
        declarations = [
            platform.column_declaration_sql(diff.new_column, include_nullability=diff.has_changed("nullable"))
            for diff in diffs
            if diff.changed_properties & MODIFY_PROPERTIES
        ]
        if not declarations:
            return []
        return [f"ALTER TABLE {table_sql} MODIFY ({', '.join(declarations)})"]

    def drop_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        names = ", ".join(platform.column_sql(column) for column in columns)
        return [f"ALTER TABLE {table_sql} DROP ({names})"]

    def drop_index_sql(self, index_sql: str, table_sql: str) -> str:
        return f"DROP INDEX {index_sql}"

    def drop_primary_key_sql(self, platform: Platform, table: Table) -> str:
        return f"ALTER TABLE {platform.table_sql(table)} DROP PRIMARY KEY"

    def rename_index_sql(self, old_sql: str, new_sql: str, table_sql: str) -> str:
        return f"ALTER INDEX {old_sql} RENAME TO {new_sql}"

    def drop_foreign_key_sql(self, constraint_sql: str, table_sql: str) -> str:
        return f"ALTER TABLE {table_sql} DROP CONSTRAINT {constraint_sql}"

    def create_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        return (
            f"CREATE SEQUENCE {sequence_sql} START WITH {sequence.start} MINVALUE {sequence.start}"
            f" INCREMENT BY {sequence.increment}{_cache_clause(sequence)}"
        )

    def alter_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        return f"ALTER SEQUENCE {sequence_sql} INCREMENT BY {sequence.increment}{_cache_clause(sequence)}"

    def regexp_expression_sql(self) -> str:
        raise UnsupportedFeature(self.name, "regular expression operator")

    def concat_expression_sql(self, parts: Tuple[str, ...]) -> str:
        return " || ".join(parts)

    def bit_and_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"BITAND({left}, {right})"

    def bit_or_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"({left}-{self.bit_and_comparison_expression_sql(left, right)}+{right})"

    def set_transaction_isolation_sql(self, level: TransactionIsolationLevel) -> str:
        return f"SET TRANSACTION ISOLATION LEVEL {ISOLATION_LEVELS[level]}"

    def create_database_sql(self, name_sql: str) -> str:
        return f"CREATE USER {name_sql}"

    def drop_database_sql(self, name_sql: str) -> str:
        return f"DROP USER {name_sql} CASCADE"


class OracleAutoincrementEmulation:
    """Sequence and trigger emulation of an identity column."""

    def _identifiers(self, platform: Platform, table: str, table_quoted: bool) -> Tuple[str, bool]:
        # Names derived from the table must match the stored (folded) name.
        return platform.normalize_identifier(table, table_quoted)

    def sequence_name_sql(self, platform: Platform, table: str, table_quoted: bool) -> str:
        name, quoted = self._identifiers(platform, table, table_quoted)
        return platform.quote_identifier(f"{name}_SEQ", quoted)

    def create_sql(
        self,
        platform: Platform,
        column: str,
        column_quoted: bool,
        table: str,
        table_quoted: bool,
        start: int = 1,
    ) -> List[str]:
        table_name, quoted = self._identifiers(platform, table, table_quoted)
        table_sql = platform.quote_identifier(table_name, quoted)
        trigger_sql = platform.quote_identifier(f"{table_name}_AI_PK", quoted)
        sequence_name = f"{table_name}_SEQ"
        sequence_sql = platform.quote_identifier(sequence_name, quoted)
        column_name, column_quoted = platform.normalize_identifier(column, column_quoted)
        column_sql = platform.quote_identifier(column_name, column_quoted)

        add_primary_key = f"ALTER TABLE {table_sql} ADD CONSTRAINT {trigger_sql} PRIMARY KEY ({column_sql})"
        lines = [
            "DECLARE",
            "  constraints_Count NUMBER;",
            "BEGIN",
            "  SELECT COUNT(CONSTRAINT_NAME) INTO constraints_Count",
            "    FROM USER_CONSTRAINTS",
            f"   WHERE TABLE_NAME = {quote_string_literal(table_name)}",
            "     AND CONSTRAINT_TYPE = 'P';",
            "  IF constraints_Count = 0 OR constraints_Count = '' THEN",
            f"    EXECUTE IMMEDIATE {quote_string_literal(add_primary_key)};",
            "  END IF;",
            "END;",
        ]
        primary_key_block = "\n".join(lines)

        sequence = Sequence(sequence_name, start=start, quoted=quoted)
        create_sequence = platform.create_sequence_sql(sequence)

        lines = [
            f"CREATE TRIGGER {trigger_sql}",
            "   BEFORE INSERT",
            f"   ON {table_sql}",
            "   FOR EACH ROW",
            "DECLARE",
            "   last_Sequence NUMBER;",
            "   last_InsertID NUMBER;",
            "BEGIN",
            f"   IF (:NEW.{column_sql} IS NULL OR :NEW.{column_sql} = 0) THEN",
            f"      SELECT {sequence_sql}.NEXTVAL INTO :NEW.{column_sql} FROM DUAL;",
            "   ELSE",
            "      SELECT NVL(Last_Number, 0) INTO last_Sequence",
            "        FROM User_Sequences",
            f"       WHERE Sequence_Name = {quote_string_literal(sequence_name)};",
            f"      SELECT :NEW.{column_sql} INTO last_InsertID FROM DUAL;",
            "      WHILE (last_InsertID > last_Sequence) LOOP",
            f"         SELECT {sequence_sql}.NEXTVAL INTO last_Sequence FROM DUAL;",
            "      END LOOP;",
            f"      SELECT {sequence_sql}.NEXTVAL INTO last_Sequence FROM DUAL;",
            "   END IF;",
            "END;",
        ]
        trigger = "\n".join(lines)

        return [primary_key_block, create_sequence, trigger]

    def drop_sql(
        self, platform: Platform, table: str, table_quoted: bool, drop_constraint: bool = True
    ) -> List[str]:
        table_name, quoted = self._identifiers(platform, table, table_quoted)
        table_sql = platform.quote_identifier(table_name, quoted)
        trigger_sql = platform.quote_identifier(f"{table_name}_AI_PK", quoted)
        sequence_sql = platform.quote_identifier(f"{table_name}_SEQ", quoted)
        statements = [f"DROP TRIGGER {trigger_sql}", f"DROP SEQUENCE {sequence_sql}"]
        if drop_constraint:
            statements.append(f"ALTER TABLE {table_sql} DROP CONSTRAINT {trigger_sql}")
        return statements


def create_platform() -> Platform:
    return Platform(
        name="oracle",
        capabilities=CAPABILITIES,
        identifiers=IDENTIFIERS,
        types=build_type_mapping("oracle", TYPE_RENDERERS, NATIVE_TYPES),
        dialect=OracleDialect(),
        autoincrement=OracleAutoincrementEmulation(),
    )


register_platform("oracle", create_platform)
