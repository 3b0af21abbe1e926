"""
Schema differencing engine.

Compares two snapshots of a table (or a whole schema) and produces a
``TableDiff`` / ``SchemaDiff``, or ``None`` when nothing material changed.
Column attributes are compared through the target platform's rendering, so
two definitions that yield the same storage type (e.g. fixed and variable
binary on Oracle) are equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple, TypeVar

from schemaport.config.settings import Settings, get_settings
from schemaport.schema.core import Column
from schemaport.schema.diff import ColumnDiff, SchemaDiff, TableDiff
from schemaport.schema.schema import Schema
from schemaport.schema.table import Table
from schemaport.sql.core.identifier import format_identifier
from schemaport.utils.logging import get_logger

if TYPE_CHECKING:
    from schemaport.sql.platform import Platform

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ComparatorConfig:
    """Rename detection switches."""

    detect_renamed_columns: bool = True
    # Governs indexes and foreign keys renamed without structural change
    detect_renamed_indexes: bool = True

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ComparatorConfig":
        settings = settings or get_settings()
        return cls(
            detect_renamed_columns=settings.detect_renamed_columns,
            detect_renamed_indexes=settings.detect_renamed_indexes,
        )


def _pair_unique(
    removed: List[T], added: List[T], same: Callable[[T, T], bool]
) -> List[Tuple[T, T]]:
    """Pair removed and added items whose definitions match exactly one counterpart."""
    candidates = {id(new): [old for old in removed if same(old, new)] for new in added}
    pairs = []
    for new in added:
        matches = candidates[id(new)]
        if len(matches) != 1:
            continue
        old = matches[0]
        if sum(1 for other in added if any(m is old for m in candidates[id(other)])) == 1:
            pairs.append((old, new))
    return pairs


class Comparator:
    """
    Computes table and schema diffs for one platform.

    Args:
        platform: Platform whose type and default rendering decide equality
        config: Rename detection switches; defaults to the configured settings
    """

    def __init__(self, platform: "Platform", config: Optional[ComparatorConfig] = None):
        self.platform = platform
        self.config = config or ComparatorConfig.from_settings()

    # Columns

    def column_changes(self, old: Column, new: Column) -> frozenset:
        """Names of the attributes that differ between two column definitions."""
        changed = set()
        if self.platform.type_declaration_sql(old, autoincrement=False) != self.platform.type_declaration_sql(
            new, autoincrement=False
        ):
            changed.add("type")
        if self.platform.default_literal_sql(old) != self.platform.default_literal_sql(new):
            changed.add("default")
        if old.nullable != new.nullable:
            changed.add("nullable")
        if old.autoincrement != new.autoincrement:
            changed.add("autoincrement")
        if (old.comment or "") != (new.comment or ""):
            changed.add("comment")
        return frozenset(changed)

    def _same_column(self, old: Column, new: Column) -> bool:
        return not self.column_changes(old, new)

    # Tables

    def diff_table(self, old: Table, new: Table) -> Optional[TableDiff]:
        """
        Compare two snapshots of one table.

        Returns:
            TableDiff, or None when the tables are materially identical
        """
        diff = TableDiff(old_table=old, new_table=new)

        old_columns: Dict[str, Column] = {c.key: c for c in old.columns}
        new_columns: Dict[str, Column] = {c.key: c for c in new.columns}
        added = [c for key, c in new_columns.items() if key not in old_columns]
        removed = [c for key, c in old_columns.items() if key not in new_columns]
        for key, old_column in old_columns.items():
            if key not in new_columns:
                continue
            changes = self.column_changes(old_column, new_columns[key])
            if changes:
                diff.changed_columns.append(ColumnDiff(old_column, new_columns[key], changes))

        if self.config.detect_renamed_columns:
            diff.renamed_columns = _pair_unique(removed, added, self._same_column)
            paired = {id(c) for pair in diff.renamed_columns for c in pair}
            removed = [c for c in removed if id(c) not in paired]
            added = [c for c in added if id(c) not in paired]
        diff.added_columns = added
        diff.removed_columns = removed

        (
            diff.added_indexes,
            diff.changed_indexes,
            diff.removed_indexes,
            diff.renamed_indexes,
        ) = self._diff_named(
            {i.key: i for i in old.indexes},
            {i.key: i for i in new.indexes},
            lambda a, b: a.same_definition(b),
            self.platform.capabilities.renames_indexes,
        )
        (
            diff.added_foreign_keys,
            diff.changed_foreign_keys,
            diff.removed_foreign_keys,
            diff.renamed_foreign_keys,
        ) = self._diff_named(
            {fk.key: fk for fk in old.foreign_keys},
            {fk.key: fk for fk in new.foreign_keys},
            lambda a, b: a.same_definition(b),
            self.platform.capabilities.renames_foreign_keys,
        )

        if old.key != new.key or old.quoted != new.quoted:
            diff.new_name = format_identifier(new.name, new.quoted)

        if diff.is_empty():
            return None
        logger.debug(
            "comparator.table_diff",
            table=old.name,
            added_columns=len(diff.added_columns),
            changed_columns=len(diff.changed_columns),
            removed_columns=len(diff.removed_columns),
            renamed_columns=len(diff.renamed_columns),
        )
        return diff

    def _diff_named(self, old: Dict[str, T], new: Dict[str, T], same, platform_renames: bool):
        """Split named objects into added, changed, removed and renamed."""
        changed = []
        for key, old_item in old.items():
            if key in new and not same(old_item, new[key]):
                changed.append((old_item, new[key]))
        removed = [item for key, item in old.items() if key not in new]
        added = [item for key, item in new.items() if key not in old]

        renamed: List[Tuple[T, T]] = []
        pairs = _pair_unique(removed, added, same)
        if pairs and (not platform_renames or self.config.detect_renamed_indexes):
            paired = {id(item) for pair in pairs for item in pair}
            removed = [item for item in removed if id(item) not in paired]
            added = [item for item in added if id(item) not in paired]
            # A rename without structural change is a no-op where the
            # platform does not rename in place.
            if platform_renames:
                renamed = [(a, b) for a, b in pairs if not getattr(a, "primary", False)]
        return added, changed, removed, renamed

    # Schemas

    def compare_schemas(self, old: Schema, new: Schema) -> Optional[SchemaDiff]:
        """Compare two schemas table by table; None when they are equivalent."""
        diff = SchemaDiff()
        for table in new.tables:
            if not old.has_table(table.name):
                diff.created_tables.append(table)
                continue
            table_diff = self.diff_table(old.get_table(table.name), table)
            if table_diff is not None:
                diff.altered_tables.append(table_diff)
        diff.dropped_tables = [t for t in old.tables if not new.has_table(t.name)]

        for sequence in new.sequences:
            if not old.has_sequence(sequence.name):
                diff.created_sequences.append(sequence)
                continue
            previous = old.get_sequence(sequence.name)
            if (previous.increment, previous.cache_size) != (sequence.increment, sequence.cache_size):
                diff.altered_sequences.append(sequence)
        diff.dropped_sequences = [s for s in old.sequences if not new.has_sequence(s.name)]

        if diff.is_empty():
            return None
        logger.debug(
            "comparator.schema_diff",
            created_tables=len(diff.created_tables),
            altered_tables=len(diff.altered_tables),
            dropped_tables=len(diff.dropped_tables),
        )
        return diff


__all__ = ["Comparator", "ComparatorConfig"]
