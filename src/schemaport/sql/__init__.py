"""
SQL generation for schemaport.

``core`` holds the identifier and literal helpers, ``keywords`` the reserved
word lists, ``types`` the type mappings and ``platform`` the composed
per-dialect strategy. Platforms are obtained through ``registry``.
"""

from .core.identifier import IdentifierRules, parse_identifier, quote_identifier
from .keywords import KeywordList

__all__ = ["IdentifierRules", "KeywordList", "parse_identifier", "quote_identifier"]
