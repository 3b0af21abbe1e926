"""
Reserved word registries.

Each dialect module exposes a ``KEYWORDS`` tuple; ``KeywordList`` freezes one
of them into an immutable, case-insensitive lookup built once per platform.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable


class KeywordList:
    """Immutable set of reserved words for one dialect."""

    __slots__ = ("_name", "_words")

    def __init__(self, name: str, words: Iterable[str]):
        self._name = name
        self._words: FrozenSet[str] = frozenset(word.upper() for word in words)

    @property
    def name(self) -> str:
        return self._name

    @property
    def words(self) -> FrozenSet[str]:
        return self._words

    def is_keyword(self, word: str) -> bool:
        """Check whether ``word`` is reserved, ignoring case."""
        return word.upper() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_keyword(word)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"KeywordList({self._name!r}, {len(self._words)} words)"


__all__ = ["KeywordList"]
