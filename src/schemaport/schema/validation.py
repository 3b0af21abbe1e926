"""Reserved-word checks for names that would need quoting on some platform."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from schemaport.schema.schema import Schema
from schemaport.sql.keywords import KeywordList


@dataclass(frozen=True)
class ReservedWordViolation:
    """A bare name that is a keyword in at least one of the checked lists."""

    object_type: str
    name: str
    keyword_lists: Tuple[str, ...]
    table: Optional[str] = None

    @property
    def message(self) -> str:
        where = f" in table '{self.table}'" if self.table else ""
        lists = ", ".join(self.keyword_lists)
        return f"{self.object_type.capitalize()} '{self.name}'{where} is a reserved keyword in: {lists}"


def _reserved_in(name: str, keyword_lists: List[KeywordList]) -> Tuple[str, ...]:
    return tuple(keywords.name for keywords in keyword_lists if keywords.is_keyword(name))


def find_reserved_word_violations(
    schema: Schema, keyword_lists: Iterable[KeywordList]
) -> List[ReservedWordViolation]:
    """
    Report every unquoted table, column, index, foreign key and sequence name
    that collides with a keyword of any given list.

    Names the user explicitly quoted are skipped.
    """
    keyword_lists = list(keyword_lists)
    violations: List[ReservedWordViolation] = []

    def check(object_type: str, name: str, quoted: bool, table: Optional[str] = None) -> None:
        if quoted or not name:
            return
        reserved = _reserved_in(name, keyword_lists)
        if reserved:
            violations.append(ReservedWordViolation(object_type, name, reserved, table))

    for table in schema.tables:
        check("table", table.name, table.quoted)
        for column in table.columns:
            check("column", column.name, column.quoted, table.name)
        for index in table.indexes:
            check("index", index.name, index.quoted, table.name)
        for fk in table.foreign_keys:
            check("foreign key", fk.name, fk.quoted, table.name)
    for sequence in schema.sequences:
        check("sequence", sequence.name, sequence.quoted)
    return violations


__all__ = ["ReservedWordViolation", "find_reserved_word_violations"]
