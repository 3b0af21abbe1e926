"""Schema: the collection of tables and sequences that make up one database."""

from __future__ import annotations

from typing import Dict, List, Optional

from schemaport.exceptions import (
    SequenceAlreadyExists,
    SequenceDoesNotExist,
    TableAlreadyExists,
    TableDoesNotExist,
)
from schemaport.schema.core import Sequence, TableOptions
from schemaport.schema.table import Table
from schemaport.sql.core.identifier import identifier_key, parse_identifier


def _key(name: str) -> str:
    return identifier_key(parse_identifier(name)[0])


class Schema:
    """Tables and sequences keyed case-insensitively by name."""

    def __init__(
        self,
        tables: Optional[List[Table]] = None,
        sequences: Optional[List[Sequence]] = None,
    ):
        self._tables: Dict[str, Table] = {}
        self._sequences: Dict[str, Sequence] = {}
        for table in tables or []:
            self.add_table(table)
        for sequence in sequences or []:
            self.add_sequence(sequence)

    def __repr__(self) -> str:
        return f"Schema(tables={list(self._tables)!r}, sequences={list(self._sequences)!r})"

    @property
    def tables(self) -> List[Table]:
        return list(self._tables.values())

    @property
    def sequences(self) -> List[Sequence]:
        return list(self._sequences.values())

    def create_table(self, name: str, options: Optional[TableOptions] = None) -> Table:
        return self.add_table(Table(name, options=options))

    def add_table(self, table: Table) -> Table:
        if not isinstance(table, Table):
            raise TypeError(f"Expected Table, got {type(table).__name__}")
        if table.key in self._tables:
            raise TableAlreadyExists("Table already exists", table=table.name)
        self._tables[table.key] = table
        return table

    def has_table(self, name: str) -> bool:
        return _key(name) in self._tables

    def get_table(self, name: str) -> Table:
        try:
            return self._tables[_key(name)]
        except KeyError:
            raise TableDoesNotExist("Table does not exist", table=name) from None

    def drop_table(self, name: str) -> None:
        table = self.get_table(name)
        del self._tables[table.key]

    def rename_table(self, old_name: str, new_name: str) -> Table:
        table = self.get_table(old_name)
        if _key(new_name) != table.key and self.has_table(new_name):
            raise TableAlreadyExists("Table already exists", table=new_name)
        del self._tables[table.key]
        table.name, table.quoted = parse_identifier(new_name)
        self._tables[table.key] = table
        return table

    def create_sequence(
        self,
        name: str,
        start: int = 1,
        increment: int = 1,
        cache_size: Optional[int] = None,
    ) -> Sequence:
        return self.add_sequence(Sequence(name, start=start, increment=increment, cache_size=cache_size))

    def add_sequence(self, sequence: Sequence) -> Sequence:
        if not isinstance(sequence, Sequence):
            raise TypeError(f"Expected Sequence, got {type(sequence).__name__}")
        if sequence.key in self._sequences:
            raise SequenceAlreadyExists("Sequence already exists", constraint=sequence.name)
        self._sequences[sequence.key] = sequence
        return sequence

    def has_sequence(self, name: str) -> bool:
        return _key(name) in self._sequences

    def get_sequence(self, name: str) -> Sequence:
        try:
            return self._sequences[_key(name)]
        except KeyError:
            raise SequenceDoesNotExist("Sequence does not exist", constraint=name) from None

    def drop_sequence(self, name: str) -> None:
        sequence = self.get_sequence(name)
        del self._sequences[sequence.key]


__all__ = ["Schema"]
