"""
PostgreSQL dialect.

Identity columns are native (``GENERATED BY DEFAULT AS IDENTITY``), column
alterations are issued one attribute at a time, and partial indexes,
deferrable constraints and constraint renames are supported.
"""

import re
from typing import List, Tuple

from schemaport.schema.core import Column, ColumnType, Sequence
from schemaport.schema.diff import ColumnDiff
from schemaport.schema.table import Table
from schemaport.sql.capabilities import PlatformCapabilities, TransactionIsolationLevel
from schemaport.sql.core.identifier import IdentifierRules
from schemaport.sql.keywords import KeywordList
from schemaport.sql.keywords.postgresql import KEYWORDS
from schemaport.sql.platform import Platform
from schemaport.sql.registry import register_platform
from schemaport.sql.types import build_type_mapping, constant, integer, numeric, sized_or_bare

IDENTITY = " GENERATED BY DEFAULT AS IDENTITY"

CAPABILITIES = PlatformCapabilities(
    supports_savepoints=True,
    supports_identity_columns=True,
    supports_comment_on_statement=True,
    supports_sequences=True,
    supports_foreign_key_on_update=True,
    supports_deferrable_constraints=True,
    supports_partial_indexes=True,
    renames_indexes=True,
    renames_foreign_keys=True,
)

IDENTIFIERS = IdentifierRules(
    quote_start='"',
    quote_end='"',
    bare_pattern=re.compile(r"[A-Za-z_][A-Za-z0-9_$]*"),
    keywords=KeywordList("postgresql", KEYWORDS),
    fold="lower",
)

TYPE_RENDERERS = {
    ColumnType.INTEGER: integer("INT", IDENTITY),
    ColumnType.BIGINT: integer("BIGINT", IDENTITY),
    ColumnType.SMALLINT: integer("SMALLINT", IDENTITY),
    ColumnType.BOOLEAN: constant("BOOLEAN"),
    ColumnType.STRING: sized_or_bare("VARCHAR", "CHAR"),
    ColumnType.TEXT: constant("TEXT"),
    ColumnType.JSON: constant("JSON"),
    ColumnType.BLOB: constant("BYTEA"),
    ColumnType.BINARY: constant("BYTEA"),
    ColumnType.GUID: constant("UUID"),
    ColumnType.DECIMAL: numeric("NUMERIC"),
    ColumnType.FLOAT: constant("DOUBLE PRECISION"),
    ColumnType.DATE: constant("DATE"),
    ColumnType.DATETIME: constant("TIMESTAMP(0) WITHOUT TIME ZONE"),
    ColumnType.DATETIMETZ: constant("TIMESTAMP(0) WITH TIME ZONE"),
    ColumnType.TIME: constant("TIME(0) WITHOUT TIME ZONE"),
}

NATIVE_TYPES = {
    "bigint": ColumnType.BIGINT,
    "bigserial": ColumnType.BIGINT,
    "bool": ColumnType.BOOLEAN,
    "boolean": ColumnType.BOOLEAN,
    "bpchar": ColumnType.STRING,
    "bytea": ColumnType.BLOB,
    "char": ColumnType.STRING,
    "character varying": ColumnType.STRING,
    "date": ColumnType.DATE,
    "decimal": ColumnType.DECIMAL,
    "double precision": ColumnType.FLOAT,
    "float4": ColumnType.FLOAT,
    "float8": ColumnType.FLOAT,
    "int": ColumnType.INTEGER,
    "int2": ColumnType.SMALLINT,
    "int4": ColumnType.INTEGER,
    "int8": ColumnType.BIGINT,
    "integer": ColumnType.INTEGER,
    "json": ColumnType.JSON,
    "jsonb": ColumnType.JSON,
    "numeric": ColumnType.DECIMAL,
    "real": ColumnType.FLOAT,
    "serial": ColumnType.INTEGER,
    "smallint": ColumnType.SMALLINT,
    "text": ColumnType.TEXT,
    "time": ColumnType.TIME,
    "timestamp": ColumnType.DATETIME,
    "timestamptz": ColumnType.DATETIMETZ,
    "uuid": ColumnType.GUID,
    "varchar": ColumnType.STRING,
}


def _cache_clause(sequence: Sequence) -> str:
    if sequence.cache_size is not None and sequence.cache_size > 1:
        return f" CACHE {sequence.cache_size}"
    return ""


class PostgreSQLDialect:
    """PostgreSQL statement templates."""

    name = "postgresql"
    comment_null_keyword = "NULL"

    def boolean_literal(self, value: bool) -> str:
        return "true" if value else "false"

    def nullability_sql(self, nullable: bool) -> str:
        return "" if nullable else " NOT NULL"

    def table_options_sql(self, platform: Platform, table: Table) -> str:
        return ""

    def add_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        return [f"ALTER TABLE {table_sql} ADD {platform.column_declaration_sql(column)}" for column in columns]

    def rename_column_sql(self, platform: Platform, table_sql: str, old: Column, new: Column) -> str:
        return f"ALTER TABLE {table_sql} RENAME COLUMN {platform.column_sql(old)} TO {platform.column_sql(new)}"

    def alter_columns_sql(self, platform: Platform, table_sql: str, diffs: List[ColumnDiff]) -> List[str]:
        statements = []
        for diff in diffs:
            column = diff.new_column
            prefix = f"ALTER TABLE {table_sql} ALTER {platform.column_sql(column)}"
            if diff.has_changed("type"):
                statements.append(f"{prefix} TYPE {platform.type_declaration_sql(column, autoincrement=False)}")
            if diff.has_changed("default"):
                literal = platform.default_literal_sql(column)
                statements.append(f"{prefix} DROP DEFAULT" if literal is None else f"{prefix} SET DEFAULT {literal}")
            if diff.has_changed("nullable"):
                statements.append(f"{prefix} DROP NOT NULL" if column.nullable else f"{prefix} SET NOT NULL")
            if diff.has_changed("autoincrement"):
                statements.append(f"{prefix} ADD{IDENTITY}" if column.autoincrement else f"{prefix} DROP IDENTITY")
        return statements

    def drop_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        return [f"ALTER TABLE {table_sql} DROP {platform.column_sql(column)}" for column in columns]

    def drop_index_sql(self, index_sql: str, table_sql: str) -> str:
        return f"DROP INDEX {index_sql}"

    def drop_primary_key_sql(self, platform: Platform, table: Table) -> str:
        name, quoted = platform.normalize_identifier(table.name, table.quoted)
        constraint_sql = platform.quote_identifier(f"{name}_pkey", quoted)
        return f"ALTER TABLE {platform.table_sql(table)} DROP CONSTRAINT {constraint_sql}"

    def rename_index_sql(self, old_sql: str, new_sql: str, table_sql: str) -> str:
        return f"ALTER INDEX {old_sql} RENAME TO {new_sql}"

    def drop_foreign_key_sql(self, constraint_sql: str, table_sql: str) -> str:
        return f"ALTER TABLE {table_sql} DROP CONSTRAINT {constraint_sql}"

    def create_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        return (
            f"CREATE SEQUENCE {sequence_sql} INCREMENT BY {sequence.increment}"
            f" MINVALUE {sequence.start} START {sequence.start}{_cache_clause(sequence)}"
        )

    def alter_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        return f"ALTER SEQUENCE {sequence_sql} INCREMENT BY {sequence.increment}{_cache_clause(sequence)}"

    def regexp_expression_sql(self) -> str:
        return "SIMILAR TO"

    def concat_expression_sql(self, parts: Tuple[str, ...]) -> str:
        return " || ".join(parts)

    def bit_and_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"({left} & {right})"

    def bit_or_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"({left} | {right})"

    def set_transaction_isolation_sql(self, level: TransactionIsolationLevel) -> str:
        return f"SET SESSION CHARACTERISTICS AS TRANSACTION ISOLATION LEVEL {level.sql}"

    def create_database_sql(self, name_sql: str) -> str:
        return f"CREATE DATABASE {name_sql}"

    def drop_database_sql(self, name_sql: str) -> str:
        return f"DROP DATABASE {name_sql}"


def create_platform() -> Platform:
    return Platform(
        name="postgresql",
        capabilities=CAPABILITIES,
        identifiers=IDENTIFIERS,
        types=build_type_mapping("postgresql", TYPE_RENDERERS, NATIVE_TYPES),
        dialect=PostgreSQLDialect(),
    )


register_platform("postgresql", create_platform, aliases=("postgres", "pg"))
