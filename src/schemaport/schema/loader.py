"""
YAML schema documents.

A schema document lists tables and sequences::

    tables:
      - name: users
        columns:
          - {name: id, type: integer, autoincrement: true}
          - {name: email, type: string, length: 255}
        primary_key: [id]
        indexes:
          - {columns: [email], unique: true}
        foreign_keys:
          - {columns: [group_id], references: groups, referenced_columns: [id], on_delete: cascade}
    sequences:
      - {name: invoice_numbers, start: 1000, cache: 20}

Documents are validated with pydantic before the model is built.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from schemaport.exceptions import SchemaDefinitionError
from schemaport.schema.core import Column, ForeignKeyOptions, Sequence, TableOptions
from schemaport.schema.schema import Schema
from schemaport.schema.table import Table
from schemaport.utils.logging import get_logger

logger = get_logger(__name__)


class ColumnDefinition(BaseModel):
    """Schema for a column entry."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Column name; wrap in quotes to force quoting")
    column_type: str = Field(..., alias="type", description="Abstract column type, e.g. integer")
    length: Optional[int] = Field(None, ge=0)
    precision: int = Field(10, ge=0)
    scale: int = Field(0, ge=0)
    fixed: bool = False
    nullable: bool = False
    default: Any = None
    autoincrement: bool = False
    comment: Optional[str] = None


class IndexDefinition(BaseModel):
    """Schema for an index entry; the name is generated when omitted."""

    model_config = ConfigDict(extra="forbid")

    columns: List[str] = Field(..., min_length=1)
    name: Optional[str] = None
    unique: bool = False
    where: Optional[str] = None


class ForeignKeyDefinition(BaseModel):
    """Schema for a foreign key entry."""

    model_config = ConfigDict(extra="forbid")

    columns: List[str] = Field(..., min_length=1, description="Local columns")
    references: str = Field(..., description="Referenced table")
    referenced_columns: List[str] = Field(..., min_length=1)
    name: Optional[str] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    deferrable: bool = False
    deferred: bool = False


class TableOptionsDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    comment: Optional[str] = None
    engine: Optional[str] = None
    charset: Optional[str] = None
    collation: Optional[str] = None


class TableDefinition(BaseModel):
    """Schema for a table entry."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    columns: List[ColumnDefinition] = Field(..., min_length=1)
    primary_key: Optional[List[str]] = None
    indexes: List[IndexDefinition] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyDefinition] = Field(default_factory=list)
    options: TableOptionsDefinition = Field(default_factory=TableOptionsDefinition)


class SequenceDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    start: int = 1
    increment: int = Field(1, gt=0)
    cache: Optional[int] = Field(None, ge=0)


class SchemaDefinition(BaseModel):
    """Top-level schema document."""

    model_config = ConfigDict(extra="forbid")

    tables: List[TableDefinition] = Field(default_factory=list)
    sequences: List[SequenceDefinition] = Field(default_factory=list)


def _build_table(definition: TableDefinition) -> Table:
    table = Table(definition.name, options=TableOptions(**definition.options.model_dump()))
    for column in definition.columns:
        table.add_column_definition(Column(**column.model_dump()))
    if definition.primary_key:
        table.set_primary_key(definition.primary_key)
    for index in definition.indexes:
        if index.unique:
            table.add_unique_index(index.columns, name=index.name, where=index.where)
        else:
            table.add_index(index.columns, name=index.name, where=index.where)
    for fk in definition.foreign_keys:
        table.add_foreign_key(
            fk.columns,
            fk.references,
            fk.referenced_columns,
            name=fk.name,
            options=ForeignKeyOptions(
                on_update=fk.on_update,
                on_delete=fk.on_delete,
                deferrable=fk.deferrable,
                deferred=fk.deferred,
            ),
        )
    return table


def build_schema(data: Optional[Dict[str, Any]]) -> Schema:
    """
    Validate a parsed schema document and build the model.

    Raises:
        SchemaDefinitionError: The document does not match the expected shape
        SchemaError: The described model is inconsistent (e.g. unknown column)
    """
    try:
        definition = SchemaDefinition.model_validate(data or {})
    except ValidationError as e:
        raise SchemaDefinitionError(f"Schema document validation failed: {e}") from e

    schema = Schema()
    for table in definition.tables:
        schema.add_table(_build_table(table))
    for sequence in definition.sequences:
        schema.add_sequence(
            Sequence(sequence.name, start=sequence.start, increment=sequence.increment, cache_size=sequence.cache)
        )
    return schema


def load_schema(path: Union[str, Path]) -> Schema:
    """Load and build a schema from a YAML file."""
    schema_file = Path(path)
    if not schema_file.exists():
        raise SchemaDefinitionError(f"Schema file not found: {path}")

    try:
        with open(schema_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaDefinitionError(f"Invalid YAML in schema file: {e}") from e

    schema = build_schema(data)
    logger.info(
        "schema.loaded",
        path=str(schema_file),
        tables=len(schema.tables),
        sequences=len(schema.sequences),
    )
    return schema


__all__ = [
    "ColumnDefinition",
    "IndexDefinition",
    "ForeignKeyDefinition",
    "TableDefinition",
    "SequenceDefinition",
    "SchemaDefinition",
    "build_schema",
    "load_schema",
]
