"""Capability flags that callers branch on instead of testing dialect identity."""

from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class PlatformCapabilities:
    """Feature set of one platform."""

    supports_savepoints: bool = True
    supports_identity_columns: bool = False
    supports_comment_on_statement: bool = False
    supports_inline_column_comments: bool = False
    supports_sequences: bool = False
    supports_foreign_key_on_update: bool = True
    supports_deferrable_constraints: bool = False
    supports_partial_indexes: bool = False
    supports_create_drop_database: bool = True
    # NO ACTION / RESTRICT are the engine default and are left out of FK clauses
    implicit_restrict_action: bool = False
    # Whether an index or FK renamed without structural change is rendered as a rename
    renames_indexes: bool = False
    renames_foreign_keys: bool = False
    # Secondary indexes are declared inside CREATE TABLE
    inline_indexes: bool = False


class TransactionIsolationLevel(IntEnum):
    READ_UNCOMMITTED = 1
    READ_COMMITTED = 2
    REPEATABLE_READ = 3
    SERIALIZABLE = 4

    @property
    def sql(self) -> str:
        return self.name.replace("_", " ")


__all__ = ["PlatformCapabilities", "TransactionIsolationLevel"]
