"""
Schema model for schemaport.

Dialect-independent tables, columns, indexes, foreign keys and sequences,
plus the comparator that diffs two snapshots.
"""

from .comparator import Comparator, ComparatorConfig
from .core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    ForeignKeyOptions,
    Index,
    Sequence,
    TableOptions,
)
from .diff import ColumnDiff, SchemaDiff, TableDiff
from .loader import build_schema, load_schema
from .schema import Schema
from .table import Table
from .validation import ReservedWordViolation, find_reserved_word_violations

__all__ = [
    "Column",
    "ColumnType",
    "ForeignKeyConstraint",
    "ForeignKeyOptions",
    "Index",
    "Sequence",
    "TableOptions",
    "Table",
    "Schema",
    "ColumnDiff",
    "TableDiff",
    "SchemaDiff",
    "Comparator",
    "ComparatorConfig",
    "build_schema",
    "load_schema",
    "ReservedWordViolation",
    "find_reserved_word_violations",
]
