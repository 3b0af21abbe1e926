"""
SQL string literal helpers.

Examples:
    >>> quote_string_literal("it's")
    "'it''s'"
"""

from typing import Optional


def quote_string_literal(value: str) -> str:
    """Wrap a value in single quotes, doubling embedded single quotes."""
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def comment_literal(comment: Optional[str], null_keyword: Optional[str] = None) -> str:
    """
    Render a comment value for ``COMMENT ON`` statements.

    Args:
        comment: Comment text; ``None`` clears the comment
        null_keyword: Token used for a cleared comment. When omitted, an empty
            string literal is rendered instead.
    """
    if comment is None:
        return null_keyword if null_keyword is not None else "''"
    return quote_string_literal(comment)
