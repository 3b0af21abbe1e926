"""
Table model: ordered columns plus indexes, foreign keys and a primary key.

Columns, indexes and foreign keys are keyed case-insensitively. Names that
are omitted are generated deterministically (see ``naming``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Union

from schemaport.exceptions import (
    ColumnAlreadyExists,
    ColumnDoesNotExist,
    ForeignKeyDoesNotExist,
    IndexAlreadyExists,
    IndexDoesNotExist,
    SchemaError,
)
from schemaport.schema.core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    ForeignKeyOptions,
    Index,
    TableOptions,
)
from schemaport.schema.naming import generate_identifier_name
from schemaport.sql.core.identifier import format_identifier, identifier_key, parse_identifier

PRIMARY_KEY_NAME = "primary"


class Table:
    """A table definition owned by the caller until handed to a platform."""

    def __init__(
        self,
        name: str,
        columns: Optional[List[Column]] = None,
        options: Optional[TableOptions] = None,
    ):
        if not isinstance(name, str):
            raise TypeError(f"Table name must be a str, got {type(name).__name__}")
        self.name, self.quoted = parse_identifier(name)
        if not self.name:
            raise SchemaError("Table name must not be empty")
        if options is not None and not isinstance(options, TableOptions):
            raise TypeError(f"Table options must be TableOptions, got {type(options).__name__}")
        self.options = options or TableOptions()

        self._columns: Dict[str, Column] = {}
        self._indexes: Dict[str, Index] = {}
        self._foreign_keys: Dict[str, ForeignKeyConstraint] = {}
        self._implicit_indexes: Set[str] = set()
        self._primary_key: Optional[str] = None

        for column in columns or []:
            self.add_column_definition(column)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={[c.name for c in self.columns]!r})"

    @property
    def key(self) -> str:
        return identifier_key(self.name)

    # Columns

    @property
    def columns(self) -> List[Column]:
        return list(self._columns.values())

    def add_column(self, name: str, column_type: Union[ColumnType, str], **attributes: Any) -> Column:
        """Create a column from keyword attributes and append it to the table."""
        column = Column(name, column_type, **attributes)
        self.add_column_definition(column)
        return column

    def add_column_definition(self, column: Column) -> Column:
        if not isinstance(column, Column):
            raise TypeError(f"Expected Column, got {type(column).__name__}")
        if column.key in self._columns:
            raise ColumnAlreadyExists("Column already exists", table=self.name, column=column.name)
        self._columns[column.key] = column
        return column

    def has_column(self, name: str) -> bool:
        return identifier_key(parse_identifier(name)[0]) in self._columns

    def get_column(self, name: str) -> Column:
        key = identifier_key(parse_identifier(name)[0])
        try:
            return self._columns[key]
        except KeyError:
            raise ColumnDoesNotExist("Column does not exist", table=self.name, column=name) from None

    def drop_column(self, name: str) -> None:
        column = self.get_column(name)
        del self._columns[column.key]

    def autoincrement_columns(self) -> List[Column]:
        return [c for c in self._columns.values() if c.autoincrement]

    def _check_columns(self, names: List[str]) -> None:
        for name in names:
            if not self.has_column(name):
                raise ColumnDoesNotExist(
                    "Index or constraint references an unknown column", table=self.name, column=name
                )

    # Indexes

    @property
    def indexes(self) -> List[Index]:
        return list(self._indexes.values())

    @property
    def primary_key(self) -> Optional[Index]:
        return self._indexes.get(self._primary_key) if self._primary_key else None

    def set_primary_key(self, columns: List[str], name: Optional[str] = None) -> Index:
        """Declare the primary key; its columns become NOT NULL."""
        index = Index(name or PRIMARY_KEY_NAME, list(columns), primary=True)
        self._add_index(index)
        for column_name in index.columns:
            self.get_column(column_name).nullable = False
        return index

    def add_index(self, columns: List[str], name: Optional[str] = None, where: Optional[str] = None) -> Index:
        name = name or self._generated_name(columns, "idx")
        return self._add_index(Index(name, list(columns), where=where))

    def add_unique_index(self, columns: List[str], name: Optional[str] = None, where: Optional[str] = None) -> Index:
        name = name or self._generated_name(columns, "uniq")
        return self._add_index(Index(name, list(columns), unique=True, where=where))

    def add_index_definition(self, index: Index) -> Index:
        if not isinstance(index, Index):
            raise TypeError(f"Expected Index, got {type(index).__name__}")
        return self._add_index(index)

    def _add_index(self, index: Index) -> Index:
        self._check_columns(index.columns)
        if index.primary and self._primary_key is not None:
            raise IndexAlreadyExists("Table already has a primary key", table=self.name, constraint=index.name)

        # An explicit index replaces implicit foreign key indexes it covers.
        for key in list(self._implicit_indexes):
            if index.spans(self._indexes[key].columns) and not self._indexes[key].where:
                del self._indexes[key]
                self._implicit_indexes.discard(key)

        if index.key in self._indexes:
            raise IndexAlreadyExists("Index already exists", table=self.name, constraint=index.name)
        self._indexes[index.key] = index
        if index.primary:
            self._primary_key = index.key
        return index

    def has_index(self, name: str) -> bool:
        return identifier_key(parse_identifier(name)[0]) in self._indexes

    def get_index(self, name: str) -> Index:
        key = identifier_key(parse_identifier(name)[0])
        try:
            return self._indexes[key]
        except KeyError:
            raise IndexDoesNotExist("Index does not exist", table=self.name, constraint=name) from None

    def drop_index(self, name: str) -> None:
        index = self.get_index(name)
        del self._indexes[index.key]
        self._implicit_indexes.discard(index.key)
        if self._primary_key == index.key:
            self._primary_key = None

    def drop_primary_key(self) -> None:
        if self._primary_key is not None:
            self.drop_index(self._primary_key)

    def rename_index(self, old_name: str, new_name: str) -> Index:
        """Rename an index in place, keeping its definition and position."""
        index = self.get_index(old_name)
        renamed = Index(
            new_name,
            list(index.columns),
            unique=index.unique,
            primary=index.primary,
            where=index.where,
            quoted_columns=index.quoted_columns,
        )
        if renamed.key != index.key and renamed.key in self._indexes:
            raise IndexAlreadyExists("Index already exists", table=self.name, constraint=new_name)
        self._indexes = {
            (renamed.key if key == index.key else key): (renamed if key == index.key else value)
            for key, value in self._indexes.items()
        }
        if index.key in self._implicit_indexes:
            self._implicit_indexes.discard(index.key)
        if self._primary_key == index.key:
            self._primary_key = renamed.key
        return renamed

    def is_implicit_index(self, name: str) -> bool:
        return identifier_key(parse_identifier(name)[0]) in self._implicit_indexes

    # Foreign keys

    @property
    def foreign_keys(self) -> List[ForeignKeyConstraint]:
        return list(self._foreign_keys.values())

    def add_foreign_key(
        self,
        local_columns: List[str],
        foreign_table: Union["Table", str],
        foreign_columns: List[str],
        name: Optional[str] = None,
        options: Optional[ForeignKeyOptions] = None,
    ) -> ForeignKeyConstraint:
        """
        Add a foreign key to another table.

        When ``foreign_table`` is a Table the referenced columns are checked to
        exist. Without a name one is generated (``FK_...``), and an index over
        the local columns is added unless an existing index starts with them.
        """
        if isinstance(foreign_table, Table):
            foreign_table._check_columns(list(foreign_columns))
            table_name = format_identifier(foreign_table.name, foreign_table.quoted)
        else:
            table_name = foreign_table
        constraint = ForeignKeyConstraint(
            list(local_columns),
            table_name,
            list(foreign_columns),
            name=name or self._generated_name(local_columns, "fk"),
            options=options or ForeignKeyOptions(),
        )
        return self.add_foreign_key_constraint(constraint, raw_columns=list(local_columns))

    def add_foreign_key_constraint(
        self, constraint: ForeignKeyConstraint, raw_columns: Optional[List[str]] = None
    ) -> ForeignKeyConstraint:
        if not isinstance(constraint, ForeignKeyConstraint):
            raise TypeError(f"Expected ForeignKeyConstraint, got {type(constraint).__name__}")
        self._check_columns(constraint.local_columns)
        if not constraint.name:
            constraint.name = self._generated_name(raw_columns or constraint.local_columns, "fk")
        self._foreign_keys[constraint.key] = constraint

        if not any(index.spans(constraint.local_columns) for index in self._indexes.values()):
            index = Index(
                self._generated_name(raw_columns or constraint.local_columns, "idx"),
                list(constraint.local_columns),
                quoted_columns=constraint.quoted_local_columns,
            )
            self._indexes[index.key] = index
            self._implicit_indexes.add(index.key)
        return constraint

    def has_foreign_key(self, name: str) -> bool:
        return identifier_key(parse_identifier(name)[0]) in self._foreign_keys

    def get_foreign_key(self, name: str) -> ForeignKeyConstraint:
        key = identifier_key(parse_identifier(name)[0])
        try:
            return self._foreign_keys[key]
        except KeyError:
            raise ForeignKeyDoesNotExist(
                "Foreign key does not exist", table=self.name, constraint=name
            ) from None

    def drop_foreign_key(self, name: str) -> None:
        constraint = self.get_foreign_key(name)
        del self._foreign_keys[constraint.key]

    def _generated_name(self, columns: List[str], prefix: str) -> str:
        return generate_identifier_name([self.name, *columns], prefix)


__all__ = ["Table", "PRIMARY_KEY_NAME"]
