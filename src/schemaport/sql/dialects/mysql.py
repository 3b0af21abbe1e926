"""
MySQL dialect.

Column comments and secondary indexes are declared inline, identity is the
``AUTO_INCREMENT`` attribute and identifiers are quoted with backticks.
Sequences are not available.
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
from schemaport.sql.keywords.mysql import KEYWORDS
from schemaport.sql.platform import Platform
from schemaport.sql.registry import register_platform
from schemaport.sql.types import build_type_mapping, constant, integer, numeric, sized

AUTO_INCREMENT = " AUTO_INCREMENT"

CAPABILITIES = PlatformCapabilities(
    supports_savepoints=True,
    supports_identity_columns=True,
    supports_inline_column_comments=True,
    supports_foreign_key_on_update=True,
    renames_indexes=True,
    inline_indexes=True,
)

IDENTIFIERS = IdentifierRules(
    quote_start="`",
    quote_end="`",
    bare_pattern=re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*"),
    keywords=KeywordList("mysql", KEYWORDS),
    fold=None,
)

TYPE_RENDERERS = {
    ColumnType.INTEGER: integer("INT", AUTO_INCREMENT),
    ColumnType.BIGINT: integer("BIGINT", AUTO_INCREMENT),
    ColumnType.SMALLINT: integer("SMALLINT", AUTO_INCREMENT),
    ColumnType.BOOLEAN: constant("TINYINT(1)"),
    ColumnType.STRING: sized("VARCHAR", "CHAR"),
    ColumnType.TEXT: constant("LONGTEXT"),
    ColumnType.JSON: constant("JSON"),
    ColumnType.BLOB: constant("LONGBLOB"),
    ColumnType.BINARY: sized("VARBINARY", "BINARY"),
    ColumnType.GUID: constant("CHAR(36)"),
    ColumnType.DECIMAL: numeric("NUMERIC"),
    ColumnType.FLOAT: constant("DOUBLE PRECISION"),
    ColumnType.DATE: constant("DATE"),
    ColumnType.DATETIME: constant("DATETIME"),
    ColumnType.DATETIMETZ: constant("DATETIME"),
    ColumnType.TIME: constant("TIME"),
}

NATIVE_TYPES = {
    "bigint": ColumnType.BIGINT,
    "binary": ColumnType.BINARY,
    "blob": ColumnType.BLOB,
    "char": ColumnType.STRING,
    "date": ColumnType.DATE,
    "datetime": ColumnType.DATETIME,
    "decimal": ColumnType.DECIMAL,
    "double": ColumnType.FLOAT,
    "float": ColumnType.FLOAT,
    "int": ColumnType.INTEGER,
    "integer": ColumnType.INTEGER,
    "json": ColumnType.JSON,
    "longblob": ColumnType.BLOB,
    "longtext": ColumnType.TEXT,
    "mediumint": ColumnType.INTEGER,
    "mediumtext": ColumnType.TEXT,
    "numeric": ColumnType.DECIMAL,
    "smallint": ColumnType.SMALLINT,
    "text": ColumnType.TEXT,
    "time": ColumnType.TIME,
    "timestamp": ColumnType.DATETIME,
    "tinyint": ColumnType.BOOLEAN,
    "varbinary": ColumnType.BINARY,
    "varchar": ColumnType.STRING,
}


class MySQLDialect:
    """MySQL statement templates."""

    name = "mysql"
    comment_null_keyword = None

    def boolean_literal(self, value: bool) -> str:
        return "1" if value else "0"

    def nullability_sql(self, nullable: bool) -> str:
        return "" if nullable else " NOT NULL"

    def table_options_sql(self, platform: Platform, table: Table) -> str:
        options = table.options
        sql = ""
        if options.charset:
            sql += f" DEFAULT CHARACTER SET {options.charset}"
        if options.collation:
            sql += f" COLLATE {options.collation}"
        if options.engine:
            sql += f" ENGINE = {options.engine}"
        if options.comment:
            sql += f" COMMENT = {quote_string_literal(options.comment)}"
        return sql

    def add_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        clauses = ", ".join(f"ADD {platform.column_declaration_sql(column)}" for column in columns)
        return [f"ALTER TABLE {table_sql} {clauses}"]

    def rename_column_sql(self, platform: Platform, table_sql: str, old: Column, new: Column) -> str:
        return f"ALTER TABLE {table_sql} CHANGE {platform.column_sql(old)} {platform.column_declaration_sql(new)}"

    def alter_columns_sql(self, platform: Platform, table_sql: str, diffs: List[ColumnDiff]) -> List[str]:
        clauses = ", ".join(
            f"CHANGE {platform.column_sql(diff.new_column)} {platform.column_declaration_sql(diff.new_column)}"
            for diff in diffs
        )
        return [f"ALTER TABLE {table_sql} {clauses}"]

    def drop_columns_sql(self, platform: Platform, table_sql: str, columns: List[Column]) -> List[str]:
        clauses = ", ".join(f"DROP {platform.column_sql(column)}" for column in columns)
        return [f"ALTER TABLE {table_sql} {clauses}"]

    def drop_index_sql(self, index_sql: str, table_sql: str) -> str:
        return f"DROP INDEX {index_sql} ON {table_sql}"

    def drop_primary_key_sql(self, platform: Platform, table: Table) -> str:
        return f"ALTER TABLE {platform.table_sql(table)} DROP PRIMARY KEY"

    def rename_index_sql(self, old_sql: str, new_sql: str, table_sql: str) -> str:
        return f"ALTER TABLE {table_sql} RENAME INDEX {old_sql} TO {new_sql}"

    def drop_foreign_key_sql(self, constraint_sql: str, table_sql: str) -> str:
        return f"ALTER TABLE {table_sql} DROP FOREIGN KEY {constraint_sql}"

    def create_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        raise UnsupportedFeature(self.name, "sequences")

    def alter_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str:
        raise UnsupportedFeature(self.name, "sequences")

    def regexp_expression_sql(self) -> str:
        return "RLIKE"

    def concat_expression_sql(self, parts: Tuple[str, ...]) -> str:
        return f"CONCAT({', '.join(parts)})"

    def bit_and_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"({left} & {right})"

    def bit_or_comparison_expression_sql(self, left: str, right: str) -> str:
        return f"({left} | {right})"

    def set_transaction_isolation_sql(self, level: TransactionIsolationLevel) -> str:
        return f"SET SESSION TRANSACTION ISOLATION LEVEL {level.sql}"

    def create_database_sql(self, name_sql: str) -> str:
        return f"CREATE DATABASE {name_sql}"

    def drop_database_sql(self, name_sql: str) -> str:
        return f"DROP DATABASE {name_sql}"


def create_platform() -> Platform:
    return Platform(
        name="mysql",
        capabilities=CAPABILITIES,
        identifiers=IDENTIFIERS,
        types=build_type_mapping("mysql", TYPE_RENDERERS, NATIVE_TYPES),
        dialect=MySQLDialect(),
    )


register_platform("mysql", create_platform, aliases=("mariadb",))
