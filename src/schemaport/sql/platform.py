"""
Platform: the per-dialect DDL generation strategy.

A ``Platform`` is composed from small rule tables rather than a class
hierarchy: capability flags, identifier rules (quote characters, keywords,
case folding), a type mapping, and a dialect object that supplies the
statement templates which differ between engines. Platforms lacking native
identity columns also carry an autoincrement emulation.

All operations are deterministic functions of the model objects passed in;
the platform never mutates them and its own rule tables are frozen after
construction, so one instance can be shared between threads.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol, Tuple, Union

from schemaport.exceptions import SchemaError, UnsupportedFeature
from schemaport.schema.core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    Index,
    NUMERIC_TYPES,
    Sequence,
    normalize_referential_action,
)
from schemaport.schema.diff import ColumnDiff, SchemaDiff, TableDiff
from schemaport.schema.table import Table
from schemaport.sql.capabilities import PlatformCapabilities, TransactionIsolationLevel
from schemaport.sql.core.identifier import (
    IdentifierRules,
    identifier_key,
    normalize_identifier,
    parse_identifier,
    quote_identifier,
    quote_single_identifier,
)
from schemaport.sql.core.literals import comment_literal, quote_string_literal
from schemaport.sql.keywords import KeywordList
from schemaport.sql.types import TypeMapping, TypeOptions
from schemaport.utils.logging import get_logger

if TYPE_CHECKING:
    from schemaport.schema.schema import Schema

logger = get_logger(__name__)

TableRef = Union[Table, str]

# Temporal defaults rendered as keywords instead of string literals
CURRENT_KEYWORDS = {
    ColumnType.DATETIME: "CURRENT_TIMESTAMP",
    ColumnType.DATETIMETZ: "CURRENT_TIMESTAMP",
    ColumnType.DATE: "CURRENT_DATE",
    ColumnType.TIME: "CURRENT_TIME",
}


class SqlDialect(Protocol):
    """Statement templates that differ between database engines."""

    name: str
    # Token for a cleared comment in COMMENT ON; None renders ''
    comment_null_keyword: Optional[str]

    def boolean_literal(self, value: bool) -> str: ...

    def nullability_sql(self, nullable: bool) -> str: ...

    def table_options_sql(self, platform: "Platform", table: Table) -> str: ...

    def add_columns_sql(self, platform: "Platform", table_sql: str, columns: List[Column]) -> List[str]: ...

    def rename_column_sql(self, platform: "Platform", table_sql: str, old: Column, new: Column) -> str: ...

    def alter_columns_sql(self, platform: "Platform", table_sql: str, diffs: List[ColumnDiff]) -> List[str]: ...

    def drop_columns_sql(self, platform: "Platform", table_sql: str, columns: List[Column]) -> List[str]: ...

    def drop_index_sql(self, index_sql: str, table_sql: str) -> str: ...

    def drop_primary_key_sql(self, platform: "Platform", table: Table) -> str: ...

    def rename_index_sql(self, old_sql: str, new_sql: str, table_sql: str) -> str: ...

    def drop_foreign_key_sql(self, constraint_sql: str, table_sql: str) -> str: ...

    def create_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str: ...

    def alter_sequence_sql(self, sequence_sql: str, sequence: Sequence) -> str: ...

    def regexp_expression_sql(self) -> str: ...

    def concat_expression_sql(self, parts: Tuple[str, ...]) -> str: ...

    def bit_and_comparison_expression_sql(self, left: str, right: str) -> str: ...

    def bit_or_comparison_expression_sql(self, left: str, right: str) -> str: ...

    def set_transaction_isolation_sql(self, level: TransactionIsolationLevel) -> str: ...

    def create_database_sql(self, name_sql: str) -> str: ...

    def drop_database_sql(self, name_sql: str) -> str: ...


class AutoincrementEmulation(Protocol):
    """Sequence and trigger based stand-in for identity columns."""

    def create_sql(
        self,
        platform: "Platform",
        column: str,
        column_quoted: bool,
        table: str,
        table_quoted: bool,
        start: int = 1,
    ) -> List[str]: ...

    def drop_sql(
        self, platform: "Platform", table: str, table_quoted: bool, drop_constraint: bool = True
    ) -> List[str]: ...

    def sequence_name_sql(self, platform: "Platform", table: str, table_quoted: bool) -> str: ...


class Platform:
    """
    One supported database engine.

    Args:
        name: Registry name of the platform (e.g. ``"oracle"``)
        capabilities: Feature flags callers branch on
        identifiers: Quote characters, reserved words and case folding
        types: Abstract type to declaration mapping
        dialect: Engine-specific statement templates
        autoincrement: Emulation used when identity columns are unsupported
    """

    def __init__(
        self,
        name: str,
        capabilities: PlatformCapabilities,
        identifiers: IdentifierRules,
        types: TypeMapping,
        dialect: SqlDialect,
        autoincrement: Optional[AutoincrementEmulation] = None,
    ):
        if not capabilities.supports_identity_columns and autoincrement is None:
            raise ValueError(f"Platform {name} needs an autoincrement emulation")
        self.name = name
        self.capabilities = capabilities
        self.identifiers = identifiers
        self.types = types
        self.dialect = dialect
        self.autoincrement = autoincrement
        logger.debug(
            "platform.created",
            platform=name,
            keywords=len(identifiers.keywords),
            emulates_autoincrement=autoincrement is not None,
        )

    def __repr__(self) -> str:
        return f"Platform({self.name!r})"

    # Identifiers

    @property
    def keywords(self) -> KeywordList:
        return self.identifiers.keywords

    def is_reserved_word(self, word: str) -> bool:
        return self.identifiers.keywords.is_keyword(word)

    def quote_identifier(self, name: str, quoted: bool = False) -> str:
        """Render a name, quoting it when flagged, reserved or outside the bare charset."""
        name, user_quoted = parse_identifier(name)
        return quote_identifier(name, self.identifiers, quoted or user_quoted)

    def quote_single_identifier(self, name: str) -> str:
        return quote_single_identifier(name, self.identifiers)

    def normalize_identifier(self, name: str, quoted: bool = False) -> Tuple[str, bool]:
        name, user_quoted = parse_identifier(name)
        return normalize_identifier(name, self.identifiers, quoted or user_quoted)

    def table_sql(self, table: TableRef) -> str:
        if isinstance(table, Table):
            return quote_identifier(table.name, self.identifiers, table.quoted)
        return self.quote_identifier(table)

    def _table_ref(self, table: TableRef) -> Tuple[str, bool]:
        if isinstance(table, Table):
            return table.name, table.quoted
        return parse_identifier(table)

    def column_sql(self, column: Column) -> str:
        return quote_identifier(column.name, self.identifiers, column.quoted)

    def column_list_sql(
        self,
        names: Iterable[str],
        quoted_keys: Iterable[str] = (),
        table: Optional[Table] = None,
    ) -> str:
        """Comma-separated column names; a column quoted anywhere stays quoted."""
        quoted_keys = frozenset(quoted_keys)
        rendered = []
        for name in names:
            quoted = identifier_key(name) in quoted_keys
            if table is not None and table.has_column(name):
                quoted = quoted or table.get_column(name).quoted
            rendered.append(quote_identifier(name, self.identifiers, quoted))
        return ", ".join(rendered)

    # Columns

    def type_declaration_sql(self, column: Column, autoincrement: Optional[bool] = None) -> str:
        """Type declaration for a column; ``autoincrement=False`` strips identity clauses."""
        options = TypeOptions.from_column(column, autoincrement)
        return self.types.declaration_sql(column.column_type, options, column_name=column.name)

    def default_literal_sql(self, column: Column) -> Optional[str]:
        """SQL literal for the column default, or None when there is none."""
        default = column.default
        if default is None:
            return None
        if isinstance(default, bool) or (column.column_type == ColumnType.BOOLEAN and isinstance(default, int)):
            return self.dialect.boolean_literal(bool(default))
        if column.column_type in NUMERIC_TYPES and isinstance(default, (int, float, Decimal)):
            return str(default)
        keyword = CURRENT_KEYWORDS.get(column.column_type)
        if keyword is not None and str(default).upper() == keyword:
            return keyword
        return quote_string_literal(str(default))

    def default_value_sql(self, column: Column) -> str:
        if column.autoincrement and self.capabilities.supports_identity_columns:
            return ""
        literal = self.default_literal_sql(column)
        if literal is None:
            return " DEFAULT NULL" if column.nullable else ""
        return f" DEFAULT {literal}"

    def column_declaration_sql(self, column: Column, include_nullability: bool = True) -> str:
        """
        Full column declaration as used in CREATE TABLE and ALTER TABLE.

        Examples (oracle):
            ``test VARCHAR2(255) DEFAULT NULL NULL``
            ``id NUMBER(10) NOT NULL``
        """
        declaration = f"{self.column_sql(column)} {self.type_declaration_sql(column)}{self.default_value_sql(column)}"
        if include_nullability:
            declaration += self.dialect.nullability_sql(column.nullable)
        if self.capabilities.supports_inline_column_comments and column.comment:
            declaration += f" COMMENT {quote_string_literal(column.comment)}"
        return declaration

    # Tables

    def validate_table(self, table: Table) -> None:
        """Check a table is renderable; raises before any statement is built."""
        if not table.columns:
            raise SchemaError("No columns specified for table", table=table.name)
        for index in table.indexes:
            for name in index.columns:
                if not table.has_column(name):
                    raise SchemaError(
                        "Index references an unknown column", table=table.name, column=name, constraint=index.name
                    )
        for constraint in table.foreign_keys:
            constraint.validate()
            for name in constraint.local_columns:
                if not table.has_column(name):
                    raise SchemaError(
                        "Foreign key references an unknown column",
                        table=table.name,
                        column=name,
                        constraint=constraint.name,
                    )
        autoincrement = table.autoincrement_columns()
        if self.autoincrement is not None and len(autoincrement) > 1:
            raise SchemaError(
                f"Platform '{self.name}' emulates at most one autoincrement column per table",
                table=table.name,
                column=autoincrement[1].name,
            )

    def create_table_sql(self, table: Table, include_foreign_keys: bool = True) -> List[str]:
        """
        Statements creating a table with its indexes, foreign keys and comments.

        Order: CREATE TABLE, autoincrement emulation, foreign keys, indexes,
        comments. Indexes are declared inline on platforms that require it.
        """
        self.validate_table(table)
        table_sql = self.table_sql(table)

        parts = [self.column_declaration_sql(column) for column in table.columns]
        primary = table.primary_key
        if primary is not None:
            parts.append(f"PRIMARY KEY({self.column_list_sql(primary.columns, primary.quoted_columns, table)})")
        secondary = [index for index in table.indexes if not index.primary]
        if self.capabilities.inline_indexes:
            parts.extend(self.index_declaration_sql(index, table) for index in secondary)

        statements = [f"CREATE TABLE {table_sql} ({', '.join(parts)}){self.dialect.table_options_sql(self, table)}"]

        if self.autoincrement is not None:
            for column in table.autoincrement_columns():
                statements.extend(self.create_autoincrement_sql(column.name, table, column_quoted=column.quoted))

        if include_foreign_keys:
            statements.extend(self.create_foreign_key_sql(constraint, table) for constraint in table.foreign_keys)

        if not self.capabilities.inline_indexes:
            statements.extend(self.create_index_sql(index, table) for index in secondary)

        if self.capabilities.supports_comment_on_statement:
            if table.options.comment:
                statements.append(self.comment_on_table_sql(table, table.options.comment))
            statements.extend(
                self.comment_on_column_sql(table, column, column.comment)
                for column in table.columns
                if column.comment
            )

        logger.debug("ddl.create_table", platform=self.name, table=table.name, statements=len(statements))
        return statements

    def drop_table_sql(self, table: TableRef) -> str:
        return f"DROP TABLE {self.table_sql(table)}"

    def truncate_table_sql(self, table: TableRef) -> str:
        return f"TRUNCATE TABLE {self.table_sql(table)}"

    def rename_table_sql(self, table: TableRef, new_name: str, quoted: bool = False) -> str:
        return f"ALTER TABLE {self.table_sql(table)} RENAME TO {self.quote_identifier(new_name, quoted)}"

    def comment_on_table_sql(self, table: TableRef, comment: Optional[str]) -> str:
        if not self.capabilities.supports_comment_on_statement:
            raise UnsupportedFeature(self.name, "COMMENT ON TABLE")
        literal = comment_literal(comment, self.dialect.comment_null_keyword)
        return f"COMMENT ON TABLE {self.table_sql(table)} IS {literal}"

    def comment_on_column_sql(self, table: TableRef, column: Union[Column, str], comment: Optional[str]) -> str:
        """``COMMENT ON COLUMN t.c IS '...'``; a None comment clears it."""
        if not self.capabilities.supports_comment_on_statement:
            raise UnsupportedFeature(self.name, "COMMENT ON COLUMN")
        column_sql = self.column_sql(column) if isinstance(column, Column) else self.quote_identifier(column)
        literal = comment_literal(comment, self.dialect.comment_null_keyword)
        return f"COMMENT ON COLUMN {self.table_sql(table)}.{column_sql} IS {literal}"

    # Indexes

    def _index_name_sql(self, index: Index) -> str:
        return quote_identifier(index.name, self.identifiers, index.quoted)

    def _where_sql(self, index: Index) -> str:
        if not index.where:
            return ""
        if not self.capabilities.supports_partial_indexes:
            raise UnsupportedFeature(self.name, "partial indexes")
        return f" WHERE {index.where}"

    def create_index_sql(self, index: Index, table: TableRef) -> str:
        table_obj = table if isinstance(table, Table) else None
        columns_sql = self.column_list_sql(index.columns, index.quoted_columns, table_obj)
        if index.primary:
            return f"ALTER TABLE {self.table_sql(table)} ADD PRIMARY KEY ({columns_sql})"
        unique = "UNIQUE " if index.unique else ""
        return (
            f"CREATE {unique}INDEX {self._index_name_sql(index)} "
            f"ON {self.table_sql(table)} ({columns_sql}){self._where_sql(index)}"
        )

    def index_declaration_sql(self, index: Index, table: Optional[Table] = None) -> str:
        """Inline declaration, e.g. ``INDEX name (cols)``."""
        columns_sql = self.column_list_sql(index.columns, index.quoted_columns, table)
        unique = "UNIQUE " if index.unique else ""
        return f"{unique}INDEX {self._index_name_sql(index)} ({columns_sql}){self._where_sql(index)}"

    def unique_constraint_declaration_sql(self, name: str, columns: List[str], table: Optional[Table] = None) -> str:
        constraint = Index(name, list(columns), unique=True)
        columns_sql = self.column_list_sql(constraint.columns, constraint.quoted_columns, table)
        return f"CONSTRAINT {self._index_name_sql(constraint)} UNIQUE ({columns_sql})"

    def drop_index_sql(self, index: Index, table: TableRef) -> str:
        if index.primary:
            table_obj = table if isinstance(table, Table) else Table(table)
            return self.dialect.drop_primary_key_sql(self, table_obj)
        return self.dialect.drop_index_sql(self._index_name_sql(index), self.table_sql(table))

    def rename_index_sql(self, old_index: Index, new_index: Index, table: TableRef) -> str:
        if not self.capabilities.renames_indexes:
            raise UnsupportedFeature(self.name, "rename index")
        return self.dialect.rename_index_sql(
            self._index_name_sql(old_index), self._index_name_sql(new_index), self.table_sql(table)
        )

    # Foreign keys

    def foreign_key_referential_action_sql(self, action: str) -> str:
        """
        Render an ON UPDATE / ON DELETE action.

        NO ACTION and RESTRICT render empty on platforms where they are the
        implicit default; anything unrecognized is upper-cased unchanged.
        """
        normalized = normalize_referential_action(action) or ""
        if self.capabilities.implicit_restrict_action and normalized in ("NO ACTION", "RESTRICT"):
            return ""
        return normalized

    def advanced_foreign_key_options_sql(self, constraint: ForeignKeyConstraint) -> str:
        options = constraint.options
        sql = ""
        if options.on_update and self.capabilities.supports_foreign_key_on_update:
            action = self.foreign_key_referential_action_sql(options.on_update)
            if action:
                sql += f" ON UPDATE {action}"
        if options.on_delete:
            action = self.foreign_key_referential_action_sql(options.on_delete)
            if action:
                sql += f" ON DELETE {action}"
        if options.deferrable:
            if not self.capabilities.supports_deferrable_constraints:
                raise UnsupportedFeature(self.name, "deferrable constraints")
            sql += " DEFERRABLE INITIALLY DEFERRED" if options.deferred else " DEFERRABLE INITIALLY IMMEDIATE"
        return sql

    def foreign_key_declaration_sql(self, constraint: ForeignKeyConstraint, table: Optional[Table] = None) -> str:
        constraint.validate()
        prefix = ""
        if constraint.name:
            prefix = f"CONSTRAINT {quote_identifier(constraint.name, self.identifiers, constraint.quoted)} "
        local_sql = self.column_list_sql(constraint.local_columns, constraint.quoted_local_columns, table)
        foreign_table_sql = quote_identifier(constraint.foreign_table, self.identifiers, constraint.foreign_table_quoted)
        foreign_sql = self.column_list_sql(constraint.foreign_columns, constraint.quoted_foreign_columns)
        return (
            f"{prefix}FOREIGN KEY ({local_sql}) REFERENCES {foreign_table_sql} ({foreign_sql})"
            f"{self.advanced_foreign_key_options_sql(constraint)}"
        )

    def create_foreign_key_sql(self, constraint: ForeignKeyConstraint, table: TableRef) -> str:
        table_obj = table if isinstance(table, Table) else None
        return f"ALTER TABLE {self.table_sql(table)} ADD {self.foreign_key_declaration_sql(constraint, table_obj)}"

    def drop_foreign_key_sql(self, constraint: ForeignKeyConstraint, table: TableRef) -> str:
        if not constraint.name:
            raise SchemaError("Cannot drop an unnamed foreign key", table=self._table_ref(table)[0])
        name_sql = quote_identifier(constraint.name, self.identifiers, constraint.quoted)
        return self.dialect.drop_foreign_key_sql(name_sql, self.table_sql(table))

    def rename_foreign_key_sql(self, old: ForeignKeyConstraint, new: ForeignKeyConstraint, table: TableRef) -> str:
        if not self.capabilities.renames_foreign_keys:
            raise UnsupportedFeature(self.name, "rename foreign key")
        old_sql = quote_identifier(old.name, self.identifiers, old.quoted)
        new_sql = quote_identifier(new.name, self.identifiers, new.quoted)
        return f"ALTER TABLE {self.table_sql(table)} RENAME CONSTRAINT {old_sql} TO {new_sql}"

    # Sequences

    def _sequence_sql(self, sequence: Sequence) -> str:
        return quote_identifier(sequence.name, self.identifiers, sequence.quoted)

    def _require_sequences(self) -> None:
        if not self.capabilities.supports_sequences:
            raise UnsupportedFeature(self.name, "sequences")

    def create_sequence_sql(self, sequence: Sequence) -> str:
        self._require_sequences()
        return self.dialect.create_sequence_sql(self._sequence_sql(sequence), sequence)

    def alter_sequence_sql(self, sequence: Sequence) -> str:
        self._require_sequences()
        return self.dialect.alter_sequence_sql(self._sequence_sql(sequence), sequence)

    def drop_sequence_sql(self, sequence: Union[Sequence, str]) -> str:
        self._require_sequences()
        name_sql = self._sequence_sql(sequence) if isinstance(sequence, Sequence) else self.quote_identifier(sequence)
        return f"DROP SEQUENCE {name_sql}"

    # Autoincrement emulation

    def _require_emulation(self, feature: str) -> AutoincrementEmulation:
        if self.autoincrement is None:
            raise UnsupportedFeature(self.name, feature)
        return self.autoincrement

    def create_autoincrement_sql(
        self, column: str, table: TableRef, start: int = 1, column_quoted: bool = False
    ) -> List[str]:
        """
        Emulate an identity column: primary key guard, sequence, insert trigger.

        Only available on platforms without native identity columns.
        """
        emulation = self._require_emulation("autoincrement emulation")
        column_name, user_quoted = parse_identifier(column)
        table_name, table_quoted = self._table_ref(table)
        return emulation.create_sql(
            self, column_name, column_quoted or user_quoted, table_name, table_quoted, start
        )

    def drop_autoincrement_sql(self, table: TableRef, drop_constraint: bool = True) -> List[str]:
        """
        Reverse the emulation: drop trigger, drop sequence, drop the constraint.

        With ``drop_constraint=False`` the primary key is left alone, for
        tables whose key was declared rather than added by the emulation.
        """
        emulation = self._require_emulation("autoincrement emulation")
        table_name, table_quoted = self._table_ref(table)
        return emulation.drop_sql(self, table_name, table_quoted, drop_constraint)

    # Alter

    def alter_table_sql(self, diff: TableDiff) -> List[str]:
        """
        Realize a table diff as ordered statements.

        Dependent foreign keys and indexes are dropped before the columns they
        use change, columns are added before constraints reference them,
        renames precede alterations and the table rename comes last.
        """
        table = diff.old_table
        table_sql = self.table_sql(table)
        statements: List[str] = []

        removed_keys = diff.removed_column_keys()
        retyped_keys = {d.old_column.key for d in diff.changed_columns if d.has_type_change}
        touched_fks = {fk.key for fk in diff.removed_foreign_keys} | {old.key for old, _ in diff.changed_foreign_keys}
        dependent_fks = [
            fk
            for fk in table.foreign_keys
            if fk.key not in touched_fks
            and any(identifier_key(c) in removed_keys | retyped_keys for c in fk.local_columns)
        ]

        fks_to_drop = list(diff.removed_foreign_keys) + [old for old, _ in diff.changed_foreign_keys] + dependent_fks
        fks_to_add = list(diff.added_foreign_keys) + [new for _, new in diff.changed_foreign_keys]
        fks_to_add += [fk for fk in dependent_fks if not any(identifier_key(c) in removed_keys for c in fk.local_columns)]
        fk_renames = []
        for old, new in diff.renamed_foreign_keys:
            if self.capabilities.renames_foreign_keys:
                fk_renames.append((old, new))
            else:
                fks_to_drop.append(old)
                fks_to_add.append(new)

        indexes_to_drop = list(diff.removed_indexes) + [old for old, _ in diff.changed_indexes]
        indexes_to_add = list(diff.added_indexes) + [new for _, new in diff.changed_indexes]
        index_renames = []
        for old, new in diff.renamed_indexes:
            if self.capabilities.renames_indexes and not old.primary:
                index_renames.append((old, new))
            else:
                indexes_to_drop.append(old)
                indexes_to_add.append(new)

        statements.extend(self.drop_foreign_key_sql(fk, table) for fk in fks_to_drop)
        statements.extend(self.drop_index_sql(index, table) for index in indexes_to_drop)

        dropped_autoincrement = any(c.autoincrement for c in diff.removed_columns) or any(
            d.has_changed("autoincrement") and d.old_column.autoincrement for d in diff.changed_columns
        )
        if self.autoincrement is not None and dropped_autoincrement:
            # A declared key kept the emulation from adding its own constraint.
            statements.extend(self.drop_autoincrement_sql(table, drop_constraint=table.primary_key is None))

        if diff.added_columns:
            statements.extend(self.dialect.add_columns_sql(self, table_sql, diff.added_columns))

        renames = list(diff.renamed_columns) + [(d.old_column, d.new_column) for d in diff.changed_columns if d.is_rename]
        statements.extend(self.dialect.rename_column_sql(self, table_sql, old, new) for old, new in renames)

        if diff.changed_columns:
            statements.extend(self.dialect.alter_columns_sql(self, table_sql, diff.changed_columns))

        if diff.removed_columns:
            statements.extend(self.dialect.drop_columns_sql(self, table_sql, diff.removed_columns))

        if self.autoincrement is not None:
            started = [c for c in diff.added_columns if c.autoincrement] + [
                d.new_column
                for d in diff.changed_columns
                if d.has_changed("autoincrement") and d.new_column.autoincrement
            ]
            for column in started:
                statements.extend(self.create_autoincrement_sql(column.name, table, column_quoted=column.quoted))

        if self.capabilities.supports_comment_on_statement:
            statements.extend(
                self.comment_on_column_sql(table, column, column.comment)
                for column in diff.added_columns
                if column.comment
            )
            statements.extend(
                self.comment_on_column_sql(table, d.new_column, d.new_column.comment)
                for d in diff.changed_columns
                if d.has_changed("comment")
            )

        statements.extend(self.create_index_sql(index, table) for index in indexes_to_add)
        statements.extend(self.rename_index_sql(old, new, table) for old, new in index_renames)

        statements.extend(self.create_foreign_key_sql(fk, table) for fk in fks_to_add)
        statements.extend(self.rename_foreign_key_sql(old, new, table) for old, new in fk_renames)

        renamed_to = diff.renamed_to
        if renamed_to is not None:
            statements.append(self.rename_table_sql(table, renamed_to[0], renamed_to[1]))

        logger.debug("ddl.alter_table", platform=self.name, table=table.name, statements=len(statements))
        return statements

    # Schema level

    def create_schema_sql(self, schema: "Schema") -> List[str]:
        """Sequences, then tables without foreign keys, then every foreign key."""
        statements = [self.create_sequence_sql(sequence) for sequence in schema.sequences]
        for table in schema.tables:
            statements.extend(self.create_table_sql(table, include_foreign_keys=False))
        for table in schema.tables:
            statements.extend(self.create_foreign_key_sql(fk, table) for fk in table.foreign_keys)
        logger.debug("ddl.create_schema", platform=self.name, tables=len(schema.tables), statements=len(statements))
        return statements

    def _drop_tables_sql(self, tables: List[Table]) -> List[str]:
        statements = []
        for table in tables:
            statements.extend(self.drop_foreign_key_sql(fk, table) for fk in table.foreign_keys)
        for table in tables:
            statements.append(self.drop_table_sql(table))
            if self.autoincrement is not None and table.autoincrement_columns():
                sequence_sql = self.autoincrement.sequence_name_sql(self, table.name, table.quoted)
                statements.append(f"DROP SEQUENCE {sequence_sql}")
        return statements

    def drop_schema_sql(self, schema: "Schema") -> List[str]:
        """Foreign keys, then tables (and emulation sequences), then sequences."""
        statements = self._drop_tables_sql(schema.tables)
        statements.extend(self.drop_sequence_sql(sequence) for sequence in schema.sequences)
        return statements

    def schema_diff_sql(self, diff: SchemaDiff) -> List[str]:
        """Realize a schema diff; new tables get their foreign keys after all tables exist."""
        statements = [self.create_sequence_sql(sequence) for sequence in diff.created_sequences]
        statements.extend(self.alter_sequence_sql(sequence) for sequence in diff.altered_sequences)
        for table in diff.created_tables:
            statements.extend(self.create_table_sql(table, include_foreign_keys=False))
        for table_diff in diff.altered_tables:
            statements.extend(self.alter_table_sql(table_diff))
        statements.extend(self._drop_tables_sql(diff.dropped_tables))
        for table in diff.created_tables:
            statements.extend(self.create_foreign_key_sql(fk, table) for fk in table.foreign_keys)
        statements.extend(self.drop_sequence_sql(sequence) for sequence in diff.dropped_sequences)
        logger.debug("ddl.schema_diff", platform=self.name, statements=len(statements))
        return statements

    # Expressions and database statements

    def regexp_expression_sql(self) -> str:
        return self.dialect.regexp_expression_sql()

    def concat_expression_sql(self, *parts: str) -> str:
        return self.dialect.concat_expression_sql(parts)

    def bit_and_comparison_expression_sql(self, left: str, right: str) -> str:
        return self.dialect.bit_and_comparison_expression_sql(left, right)

    def bit_or_comparison_expression_sql(self, left: str, right: str) -> str:
        return self.dialect.bit_or_comparison_expression_sql(left, right)

    def set_transaction_isolation_sql(self, level: Union[TransactionIsolationLevel, int]) -> str:
        return self.dialect.set_transaction_isolation_sql(TransactionIsolationLevel(level))

    def create_database_sql(self, name: str) -> str:
        if not self.capabilities.supports_create_drop_database:
            raise UnsupportedFeature(self.name, "CREATE DATABASE")
        return self.dialect.create_database_sql(self.quote_identifier(name))

    def drop_database_sql(self, name: str) -> str:
        if not self.capabilities.supports_create_drop_database:
            raise UnsupportedFeature(self.name, "DROP DATABASE")
        return self.dialect.drop_database_sql(self.quote_identifier(name))


__all__ = ["Platform", "SqlDialect", "AutoincrementEmulation", "TableRef", "CURRENT_KEYWORDS"]
