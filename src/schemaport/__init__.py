"""
schemaport: portable database schema definitions rendered as dialect DDL.

Usage:
    >>> from schemaport import Table, get_platform
    >>> table = Table("test")
    >>> _ = table.add_column("id", "integer")
    >>> _ = table.set_primary_key(["id"])
    >>> get_platform("oracle").create_table_sql(table)
    ['CREATE TABLE test (id NUMBER(10) NOT NULL, PRIMARY KEY(id))']
"""

from schemaport.exceptions import (
    ColumnLengthRequired,
    PlatformError,
    SchemaError,
    SchemaportError,
    UnsupportedFeature,
)
from schemaport.schema import (
    Column,
    ColumnType,
    Comparator,
    ComparatorConfig,
    ForeignKeyConstraint,
    ForeignKeyOptions,
    Index,
    Schema,
    SchemaDiff,
    Sequence,
    Table,
    TableDiff,
    TableOptions,
)
from schemaport.sql.platform import Platform
from schemaport.sql.registry import get_platform, list_platforms

__version__ = "0.1.0"

__all__ = [
    "Column",
    "ColumnType",
    "Comparator",
    "ComparatorConfig",
    "ForeignKeyConstraint",
    "ForeignKeyOptions",
    "Index",
    "Schema",
    "SchemaDiff",
    "Sequence",
    "Table",
    "TableDiff",
    "TableOptions",
    "Platform",
    "get_platform",
    "list_platforms",
    "SchemaportError",
    "SchemaError",
    "PlatformError",
    "ColumnLengthRequired",
    "UnsupportedFeature",
]
