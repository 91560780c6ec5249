"""
Book Name Normalizer.

Maps arbitrary user-typed book names and abbreviations to one canonical name
from the 66-book canon.

Lookup order:
1. Exact match in the abbreviation table ("rom" -> "Romans", "1cor" -> "1 Corinthians")
2. Case-insensitive exact match against the canonical full names

There is no fuzzy matching: "Romasn" is not a book.
"""

from __future__ import annotations

import re
from typing import Final, Mapping

from sermon_search.scripture.books import BOOK_ABBREVIATIONS, BOOK_FULL_NAMES

_WHITESPACE_RUN: Final[re.Pattern[str]] = re.compile(r"\s+")


class BookNameNormalizer:
    """
    O(1) lookup of canonical Bible book names.

    Example:
        >>> normalizer = BookNameNormalizer()
        >>> normalizer.get("1 cor")
        '1 Corinthians'
        >>> normalizer.get("Romasn") is None
        True

    Attributes:
        _abbreviations: lower-case short form -> canonical name
        _full_names: lower-case canonical name -> canonical name
    """

    __slots__ = ("_abbreviations", "_full_names")

    def __init__(
        self,
        abbreviations: Mapping[str, str] = BOOK_ABBREVIATIONS,
        full_names: Mapping[str, str] = BOOK_FULL_NAMES,
    ) -> None:
        self._abbreviations = abbreviations
        self._full_names = full_names

    def get(self, name: str) -> str | None:
        """
        Resolve a book name or abbreviation.

        Input is lower-cased and trimmed, and inner whitespace runs collapse
        to a single space, so "1  Cor" and "1 cor" are the same key.

        Args:
            name: The user-typed book name.

        Returns:
            The canonical book name, or None when nothing matches.
        """
        key = _WHITESPACE_RUN.sub(" ", name.strip().lower())
        if not key:
            return None

        book = self._abbreviations.get(key)
        if book is not None:
            return book

        return self._full_names.get(key)

    def __len__(self) -> int:
        """Return the number of distinct keys the normalizer recognises."""
        return len(self._abbreviations.keys() | self._full_names.keys())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None


_default_normalizer: Final[BookNameNormalizer] = BookNameNormalizer()


def normalize_book_name(name: str) -> str | None:
    """Resolve a book name with the process-wide normalizer."""
    return _default_normalizer.get(name)
