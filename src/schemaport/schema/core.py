"""Core schema model types for schemaport.

Dialect-independent, mutable value objects built by callers: columns,
indexes, foreign keys, sequences and the typed option structs that replace
free-form option dictionaries.

Names may be passed wrapped in double quotes or backticks (``'"create"'``);
such names are stored unwrapped and flagged as quoted-by-user.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Union

from schemaport.exceptions import (
    InvalidColumnDefinition,
    InvalidForeignKey,
    SchemaError,
    UnknownColumnType,
)
from schemaport.sql.core.identifier import identifier_key, parse_identifier


class ColumnType(Enum):
    """Abstract column types understood by every platform."""

    INTEGER = "integer"
    SMALLINT = "smallint"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    FLOAT = "float"
    STRING = "string"
    TEXT = "text"
    GUID = "guid"
    BINARY = "binary"
    BLOB = "blob"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    DATETIMETZ = "datetimetz"
    TIME = "time"
    JSON = "json"


INTEGER_TYPES = frozenset({ColumnType.INTEGER, ColumnType.SMALLINT, ColumnType.BIGINT})
NUMERIC_TYPES = INTEGER_TYPES | {ColumnType.DECIMAL, ColumnType.FLOAT}
VARIABLE_LENGTH_TYPES = frozenset({ColumnType.STRING, ColumnType.BINARY})

REFERENTIAL_ACTIONS = ("CASCADE", "SET NULL", "NO ACTION", "RESTRICT", "SET DEFAULT")


def coerce_column_type(value: Union[ColumnType, str], column: Optional[str] = None) -> ColumnType:
    """Resolve a type tag given as enum member or string (``"integer"``)."""
    if isinstance(value, ColumnType):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Column type must be a ColumnType or str, got {type(value).__name__}")
    try:
        return ColumnType(value.strip().lower())
    except ValueError:
        raise UnknownColumnType(f"Unknown column type '{value}'", column=column) from None


def normalize_referential_action(action: Optional[str]) -> Optional[str]:
    """
    Normalize a foreign key action to its canonical upper-case spelling.

    Examples:
        >>> normalize_referential_action("CaScAdE")
        'CASCADE'
        >>> normalize_referential_action("set_null")
        'SET NULL'
        >>> normalize_referential_action("no  action")
        'NO ACTION'
    """
    if action is None:
        return None
    if not isinstance(action, str):
        raise TypeError(f"Referential action must be a str, got {type(action).__name__}")
    normalized = " ".join(action.split()).upper()
    candidate = normalized.replace("_", " ")
    return candidate if candidate in REFERENTIAL_ACTIONS else normalized


def _check_int(value: Any, attribute: str) -> None:
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise TypeError(f"Column {attribute} must be an int, got {type(value).__name__}")


def _split_names(names: List[str]) -> tuple:
    """Unwrap user-quoted names; returns (names, keys of quoted names)."""
    if isinstance(names, str) or not names:
        raise TypeError("Column lists must be non-empty sequences of names")
    bare: List[str] = []
    quoted = set()
    for raw in names:
        if not isinstance(raw, str):
            raise TypeError(f"Column names must be str, got {type(raw).__name__}")
        name, is_quoted = parse_identifier(raw)
        bare.append(name)
        if is_quoted:
            quoted.add(identifier_key(name))
    return bare, frozenset(quoted)


@dataclass
class Column:
    """Definition of a single table column."""

    name: str
    column_type: ColumnType
    length: Optional[int] = None
    precision: int = 10
    scale: int = 0
    fixed: bool = False
    nullable: bool = False
    default: Any = None
    autoincrement: bool = False
    comment: Optional[str] = None
    quoted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Column name must be a str, got {type(self.name).__name__}")
        self.name, user_quoted = parse_identifier(self.name)
        self.quoted = self.quoted or user_quoted
        if not self.name:
            raise InvalidColumnDefinition("Column name must not be empty")
        self.column_type = coerce_column_type(self.column_type, column=self.name)

        for attribute in ("length", "precision", "scale"):
            _check_int(getattr(self, attribute), attribute)
        if self.length is not None and self.length < 0:
            raise InvalidColumnDefinition("Column length must not be negative", column=self.name)
        if self.scale < 0 or self.precision < self.scale:
            raise InvalidColumnDefinition(
                f"Column precision ({self.precision}) must be >= scale ({self.scale}) >= 0",
                column=self.name,
            )
        if self.fixed and self.length is None and self.column_type in VARIABLE_LENGTH_TYPES:
            raise InvalidColumnDefinition(
                "Fixed-length columns require an explicit length", column=self.name
            )

    @property
    def key(self) -> str:
        return identifier_key(self.name)


@dataclass
class Index:
    """Definition of a table index; ``primary`` implies ``unique``."""

    name: str
    columns: List[str]
    unique: bool = False
    primary: bool = False
    where: Optional[str] = None
    quoted: bool = False
    quoted_columns: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Index name must be a str, got {type(self.name).__name__}")
        self.name, user_quoted = parse_identifier(self.name)
        self.quoted = self.quoted or user_quoted
        if not self.name:
            raise SchemaError("Index name must not be empty")
        self.columns, quoted_columns = _split_names(self.columns)
        self.quoted_columns = frozenset(self.quoted_columns) | quoted_columns
        if self.primary:
            self.unique = True

    @property
    def key(self) -> str:
        return identifier_key(self.name)

    def is_column_quoted(self, name: str) -> bool:
        return identifier_key(name) in self.quoted_columns

    def column_keys(self) -> List[str]:
        return [identifier_key(c) for c in self.columns]

    def spans(self, columns: List[str]) -> bool:
        """Whether this index starts with the given columns, in order."""
        keys = [identifier_key(c) for c in columns]
        return self.column_keys()[: len(keys)] == keys

    def same_definition(self, other: "Index") -> bool:
        """Structural equality: column list and semantics, ignoring the name."""
        return (
            self.column_keys() == other.column_keys()
            and self.unique == other.unique
            and self.primary == other.primary
            and self.where == other.where
        )


@dataclass
class ForeignKeyOptions:
    """Options of a foreign key constraint; actions are stored normalized."""

    on_update: Optional[str] = None
    on_delete: Optional[str] = None
    deferrable: bool = False
    deferred: bool = False

    def __post_init__(self) -> None:
        self.on_update = normalize_referential_action(self.on_update)
        self.on_delete = normalize_referential_action(self.on_delete)


@dataclass
class ForeignKeyConstraint:
    """
    Foreign key from local columns to columns of a referenced table.

    An empty name renders an anonymous constraint; ``Table.add_foreign_key``
    generates a name when none is given.
    """

    local_columns: List[str]
    foreign_table: str
    foreign_columns: List[str]
    name: str = ""
    options: ForeignKeyOptions = field(default_factory=ForeignKeyOptions)
    quoted: bool = False
    foreign_table_quoted: bool = False
    quoted_local_columns: FrozenSet[str] = field(default_factory=frozenset)
    quoted_foreign_columns: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not isinstance(self.foreign_table, str):
            raise TypeError("Foreign key name and referenced table must be str")
        if not isinstance(self.options, ForeignKeyOptions):
            raise TypeError(
                f"Foreign key options must be ForeignKeyOptions, got {type(self.options).__name__}"
            )
        self.name, user_quoted = parse_identifier(self.name)
        self.quoted = self.quoted or user_quoted
        self.foreign_table, table_quoted = parse_identifier(self.foreign_table)
        self.foreign_table_quoted = self.foreign_table_quoted or table_quoted
        if not self.foreign_table:
            raise InvalidForeignKey("Referenced table name must not be empty", constraint=self.name)

        self.local_columns, local_quoted = _split_names(self.local_columns)
        self.foreign_columns, foreign_quoted = _split_names(self.foreign_columns)
        self.quoted_local_columns = frozenset(self.quoted_local_columns) | local_quoted
        self.quoted_foreign_columns = frozenset(self.quoted_foreign_columns) | foreign_quoted
        self.validate()

    def validate(self) -> None:
        """Check the local/referenced column cardinality."""
        if len(self.local_columns) != len(self.foreign_columns):
            raise InvalidForeignKey(
                f"Foreign key has {len(self.local_columns)} local columns but "
                f"{len(self.foreign_columns)} referenced columns",
                constraint=self.name or None,
            )

    @property
    def key(self) -> str:
        return identifier_key(self.name)

    def same_definition(self, other: "ForeignKeyConstraint") -> bool:
        """Structural equality: columns, referenced table and actions, ignoring the name."""
        return (
            [identifier_key(c) for c in self.local_columns]
            == [identifier_key(c) for c in other.local_columns]
            and identifier_key(self.foreign_table) == identifier_key(other.foreign_table)
            and [identifier_key(c) for c in self.foreign_columns]
            == [identifier_key(c) for c in other.foreign_columns]
            and self.options == other.options
        )


@dataclass
class Sequence:
    """Database sequence; a cache size of 0 or 1 means no cache."""

    name: str
    start: int = 1
    increment: int = 1
    cache_size: Optional[int] = None
    quoted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Sequence name must be a str, got {type(self.name).__name__}")
        self.name, user_quoted = parse_identifier(self.name)
        self.quoted = self.quoted or user_quoted
        if not self.name:
            raise SchemaError("Sequence name must not be empty")
        for attribute in ("start", "increment", "cache_size"):
            _check_int(getattr(self, attribute), attribute)
        if self.increment <= 0:
            raise SchemaError("Sequence increment must be positive", constraint=self.name)
        if self.cache_size is not None and self.cache_size < 0:
            raise SchemaError("Sequence cache size must not be negative", constraint=self.name)

    @property
    def key(self) -> str:
        return identifier_key(self.name)


@dataclass
class TableOptions:
    """Engine options of a table. Engine, charset and collation are MySQL-only."""

    comment: Optional[str] = None
    engine: Optional[str] = None
    charset: Optional[str] = None
    collation: Optional[str] = None


__all__ = [
    "ColumnType",
    "INTEGER_TYPES",
    "NUMERIC_TYPES",
    "VARIABLE_LENGTH_TYPES",
    "REFERENTIAL_ACTIONS",
    "coerce_column_type",
    "normalize_referential_action",
    "Column",
    "Index",
    "ForeignKeyOptions",
    "ForeignKeyConstraint",
    "Sequence",
    "TableOptions",
]
