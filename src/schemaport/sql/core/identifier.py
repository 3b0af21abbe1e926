"""
SQL identifier handling utilities.

Decides whether a table, column or constraint name must be quoted for a
dialect and renders it accordingly. Everything here is a pure function of
the name, the "quoted-by-user" flag and the dialect's ``IdentifierRules``.

Examples:
    >>> rules = IdentifierRules('"', '"', re.compile(r"[A-Za-z][A-Za-z0-9_$#]*"),
    ...                         KeywordList("oracle", ["TABLE"]), fold="upper")
    >>> quote_identifier("test", rules)
    'test'
    >>> quote_identifier("table", rules)
    '"table"'
    >>> quote_identifier("test", rules, quoted=True)
    '"test"'
    >>> quote_identifier("foo-bar", rules)
    '"foo-bar"'
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple

from ..keywords import KeywordList

# Opening quote -> closing quote accepted on user input.
_QUOTE_PAIRS = {'"': '"', "`": "`", "[": "]"}

# One dot-separated part: a quoted run (closing quote escaped by doubling) or bare text.
_PART = r'"(?:[^"]|"")*"|`(?:[^`]|``)*`|\[[^\]]*\]|[^."`\[\]]+'
_PART_RE = re.compile(_PART)
_DOTTED_RE = re.compile(rf"(?:{_PART})(?:\.(?:{_PART}))*")


@dataclass(frozen=True)
class IdentifierRules:
    """Per-dialect identifier rule set."""

    quote_start: str
    quote_end: str
    bare_pattern: Pattern[str]
    keywords: KeywordList
    # "upper", "lower" or None when unquoted names keep their case
    fold: Optional[str] = None


def _unquote_part(token: str) -> Tuple[str, bool]:
    if token[0] in _QUOTE_PAIRS:
        close = _QUOTE_PAIRS[token[0]]
        text = token[1:-1]
        if close != "]":
            text = text.replace(close * 2, close)
        return text, True
    return token, False


def split_identifier(value: str) -> List[Tuple[str, bool]]:
    """
    Split a (possibly dotted) name into its parts, each with its own quoted flag.

    Dots inside quotes do not separate parts. A value that is not a well
    formed dotted name is returned whole as one bare part.

    Examples:
        >>> split_identifier('myschema."Foo"')
        [('myschema', False), ('Foo', True)]
        >>> split_identifier('"a.b".c')
        [('a.b', True), ('c', False)]
    """
    if not _DOTTED_RE.fullmatch(value):
        return [(value, False)]
    return [_unquote_part(match.group(0)) for match in _PART_RE.finditer(value)]


def format_identifier(name: str, quoted: bool) -> str:
    """Inverse of ``parse_identifier``: re-wrap a quoted name in double quotes."""
    if not quoted:
        return name
    return '"' + name.replace('"', '""') + '"'


def parse_identifier(value: str) -> Tuple[str, bool]:
    """
    Split a user-supplied name into its bare form and "quoted-by-user" flag.

    A dotted name whose parts are all quoted collapses to the bare dotted name
    with the flag set. When only some parts are quoted the value is kept with
    its quote marks and the flag unset; rendering then quotes part by part.

    Args:
        value: Name as typed by the caller, e.g. ``'"myTable"'`` or ``'users'``

    Returns:
        Tuple of (name without surrounding quotes, quoted flag)

    Examples:
        >>> parse_identifier('"myTable"')
        ('myTable', True)
        >>> parse_identifier("`create`")
        ('create', True)
        >>> parse_identifier('"schema"."create"')
        ('schema.create', True)
        >>> parse_identifier("users")
        ('users', False)
    """
    parts = split_identifier(value)
    if len(parts) == 1:
        return parts[0]
    if not any(quoted for _, quoted in parts):
        return value, False
    if all(quoted and "." not in text for text, quoted in parts):
        return ".".join(text for text, _ in parts), True
    return value, False


def needs_quoting(name: str, rules: IdentifierRules) -> bool:
    """Check whether a bare name collides with a keyword or leaves the bare charset."""
    return rules.keywords.is_keyword(name) or rules.bare_pattern.fullmatch(name) is None


def quote_single_identifier(name: str, rules: IdentifierRules) -> str:
    """
    Unconditionally wrap one identifier in the dialect's quote characters.

    Embedded closing-quote characters are escaped by doubling them.
    """
    escaped = name.replace(rules.quote_end, rules.quote_end * 2)
    return f"{rules.quote_start}{escaped}{rules.quote_end}"


def quote_identifier(name: str, rules: IdentifierRules, quoted: bool = False) -> str:
    """
    Render a (possibly dotted) identifier for embedding in SQL.

    Each dot-separated part is quoted when the user asked for it (for the
    whole name or for that part), when it is a reserved word, or when it
    contains characters outside the bare charset. Parts that need no quoting
    are passed through with their case intact.

    Args:
        name: The identifier to render
        rules: Dialect identifier rules
        quoted: Whether the caller marked the name as quoted

    Returns:
        SQL-ready identifier
    """
    rendered = []
    for text, part_quoted in split_identifier(name):
        if quoted or part_quoted or needs_quoting(text, rules):
            text = quote_single_identifier(text, rules)
        rendered.append(text)
    return ".".join(rendered)


def fold_identifier(name: str, rules: IdentifierRules) -> str:
    """Apply the dialect's case folding to the unquoted parts of a name."""
    if rules.fold is None:
        return name
    fold = str.upper if rules.fold == "upper" else str.lower
    parts = split_identifier(name)
    if not any(quoted for _, quoted in parts):
        return fold(name)
    return ".".join(format_identifier(text, True) if quoted else fold(text) for text, quoted in parts)


def normalize_identifier(name: str, rules: IdentifierRules, quoted: bool = False) -> Tuple[str, bool]:
    """
    Resolve a name to the form the database stores in its data dictionary.

    Quoted names are kept verbatim; bare names are folded to the dialect's
    canonical case. Used wherever a name is derived from another one or
    compared as a string literal (e.g. sequence and trigger names).

    With upper-case folding, ``myTable`` resolves to ``('MYTABLE', False)``
    while a quoted ``myTable`` stays ``('myTable', True)``.
    """
    if quoted:
        return name, True
    return fold_identifier(name, rules), False


def identifier_key(name: str) -> str:
    """Case-insensitive lookup key used for column, index and table maps."""
    return name.lower()


__all__ = [
    "IdentifierRules",
    "split_identifier",
    "format_identifier",
    "parse_identifier",
    "needs_quoting",
    "quote_single_identifier",
    "quote_identifier",
    "fold_identifier",
    "normalize_identifier",
    "identifier_key",
]
