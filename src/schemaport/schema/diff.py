"""
Diff structures produced by the comparator and consumed by platforms.

Diffs are transient: they hold references to the caller's model objects and
are rendered into statements within one generation request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from schemaport.schema.core import Column, ForeignKeyConstraint, Index, Sequence
from schemaport.schema.table import Table
from schemaport.sql.core.identifier import parse_identifier

COLUMN_PROPERTIES = frozenset({"type", "default", "nullable", "autoincrement", "comment"})


@dataclass
class ColumnDiff:
    """
    A column present in both snapshots with differing attributes.

    When the two columns carry different names the diff also renames the
    column; the rename is rendered before the alteration.
    """

    old_column: Column
    new_column: Column
    changed_properties: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        self.changed_properties = frozenset(self.changed_properties)
        unknown = self.changed_properties - COLUMN_PROPERTIES
        if unknown:
            raise ValueError(f"Unknown column properties: {sorted(unknown)}")

    def has_changed(self, prop: str) -> bool:
        return prop in self.changed_properties

    @property
    def is_rename(self) -> bool:
        # Unquoted names differing only by case resolve to the same column.
        old, new = self.old_column, self.new_column
        if old.key != new.key or old.quoted != new.quoted:
            return True
        return old.quoted and old.name != new.name

    @property
    def has_type_change(self) -> bool:
        return "type" in self.changed_properties


@dataclass
class TableDiff:
    """Structured delta between two snapshots of the same logical table."""

    old_table: Table
    new_table: Optional[Table] = None
    added_columns: List[Column] = field(default_factory=list)
    changed_columns: List[ColumnDiff] = field(default_factory=list)
    removed_columns: List[Column] = field(default_factory=list)
    renamed_columns: List[Tuple[Column, Column]] = field(default_factory=list)
    added_indexes: List[Index] = field(default_factory=list)
    changed_indexes: List[Tuple[Index, Index]] = field(default_factory=list)
    removed_indexes: List[Index] = field(default_factory=list)
    renamed_indexes: List[Tuple[Index, Index]] = field(default_factory=list)
    added_foreign_keys: List[ForeignKeyConstraint] = field(default_factory=list)
    changed_foreign_keys: List[Tuple[ForeignKeyConstraint, ForeignKeyConstraint]] = field(
        default_factory=list
    )
    removed_foreign_keys: List[ForeignKeyConstraint] = field(default_factory=list)
    renamed_foreign_keys: List[Tuple[ForeignKeyConstraint, ForeignKeyConstraint]] = field(
        default_factory=list
    )
    new_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.old_table.name

    @property
    def renamed_to(self) -> Optional[Tuple[str, bool]]:
        """(name, quoted) of the rename target, or None when the name is unchanged."""
        if self.new_name is None:
            return None
        name, quoted = parse_identifier(self.new_name)
        if name == self.old_table.name and quoted == self.old_table.quoted:
            return None
        return name, quoted

    def removed_column_keys(self) -> FrozenSet[str]:
        return frozenset(c.key for c in self.removed_columns)

    def is_empty(self) -> bool:
        return not (
            self.added_columns
            or self.changed_columns
            or self.removed_columns
            or self.renamed_columns
            or self.added_indexes
            or self.changed_indexes
            or self.removed_indexes
            or self.renamed_indexes
            or self.added_foreign_keys
            or self.changed_foreign_keys
            or self.removed_foreign_keys
            or self.renamed_foreign_keys
            or self.renamed_to is not None
        )


@dataclass
class SchemaDiff:
    """Tables and sequences created, altered or dropped between two schemas."""

    created_tables: List[Table] = field(default_factory=list)
    altered_tables: List[TableDiff] = field(default_factory=list)
    dropped_tables: List[Table] = field(default_factory=list)
    created_sequences: List[Sequence] = field(default_factory=list)
    altered_sequences: List[Sequence] = field(default_factory=list)
    dropped_sequences: List[Sequence] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.created_tables
            or self.altered_tables
            or self.dropped_tables
            or self.created_sequences
            or self.altered_sequences
            or self.dropped_sequences
        )


__all__ = ["COLUMN_PROPERTIES", "ColumnDiff", "TableDiff", "SchemaDiff"]
