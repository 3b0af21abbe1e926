"""Core SQL utilities package."""

from .identifier import (
    IdentifierRules,
    fold_identifier,
    identifier_key,
    needs_quoting,
    normalize_identifier,
    parse_identifier,
    quote_identifier,
    quote_single_identifier,
)
from .literals import comment_literal, quote_string_literal

__all__ = [
    "IdentifierRules",
    "fold_identifier",
    "identifier_key",
    "needs_quoting",
    "normalize_identifier",
    "parse_identifier",
    "quote_identifier",
    "quote_single_identifier",
    "comment_literal",
    "quote_string_literal",
]
