"""
Exception hierarchy for schemaport.

Model validation errors carry the offending table, column and constraint
names so callers see one explicit error identifying the entity and the
violated rule. Platform errors signal dialect limitations.
"""

from typing import Optional


class SchemaportError(Exception):
    """Base exception for all schemaport errors."""

    pass


class SchemaError(SchemaportError):
    """
    Raised when a schema model entity violates a structural rule.

    Args:
        message: Error description
        table: Name of the table involved (optional)
        column: Name of the column involved (optional)
        constraint: Name of the index, foreign key or sequence involved (optional)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        column: Optional[str] = None,
        constraint: Optional[str] = None,
    ):
        self.table = table
        self.column = column
        self.constraint = constraint

        # Build contextual error message
        context_parts = []
        if table:
            context_parts.append(f"table='{table}'")
        if column:
            context_parts.append(f"column='{column}'")
        if constraint:
            context_parts.append(f"constraint='{constraint}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class InvalidColumnDefinition(SchemaError):
    """Raised when column attributes are inconsistent (e.g. scale > precision)."""

    pass


class UnknownColumnType(SchemaError):
    """Raised when a column type tag is not one of the abstract column types."""

    pass


class ColumnDoesNotExist(SchemaError):
    pass


class ColumnAlreadyExists(SchemaError):
    pass


class IndexDoesNotExist(SchemaError):
    pass


class IndexAlreadyExists(SchemaError):
    pass


class ForeignKeyDoesNotExist(SchemaError):
    pass


class InvalidForeignKey(SchemaError):
    """Raised for malformed foreign keys, e.g. mismatched column counts."""

    pass


class TableDoesNotExist(SchemaError):
    pass


class TableAlreadyExists(SchemaError):
    pass


class SequenceDoesNotExist(SchemaError):
    pass


class SequenceAlreadyExists(SchemaError):
    pass


class PlatformError(SchemaportError):
    """Base exception for dialect-level failures."""

    pass


class ColumnLengthRequired(PlatformError):
    """
    Raised when a dialect requires an explicit length for a column type.

    Args:
        platform: Name of the platform that requires the length
        type_name: Abstract type tag of the column
        column: Name of the column (optional)
    """

    def __init__(self, platform: str, type_name: str, column: Optional[str] = None):
        self.platform = platform
        self.type_name = type_name
        self.column = column
        message = f"The {platform} platform requires the length of a {type_name} column to be specified"
        if column:
            message = f"{message} (column='{column}')"
        super().__init__(message)


class UnsupportedFeature(PlatformError):
    """Raised when a dialect cannot express the requested operation."""

    def __init__(self, platform: str, feature: str):
        self.platform = platform
        self.feature = feature
        super().__init__(f"Operation '{feature}' is not supported by platform '{platform}'")


class UnknownPlatform(PlatformError):
    pass


class SchemaDefinitionError(SchemaportError):
    """Raised when a YAML schema document cannot be loaded or validated."""

    pass


__all__ = [
    "SchemaportError",
    "SchemaError",
    "InvalidColumnDefinition",
    "UnknownColumnType",
    "ColumnDoesNotExist",
    "ColumnAlreadyExists",
    "IndexDoesNotExist",
    "IndexAlreadyExists",
    "ForeignKeyDoesNotExist",
    "InvalidForeignKey",
    "TableDoesNotExist",
    "TableAlreadyExists",
    "SequenceDoesNotExist",
    "SequenceAlreadyExists",
    "PlatformError",
    "ColumnLengthRequired",
    "UnsupportedFeature",
    "UnknownPlatform",
    "SchemaDefinitionError",
]
