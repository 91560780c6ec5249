"""
Bible book tables.

CANONICAL_BOOKS holds the 66 canonical names in canon order; every scripture
match in the service compares against one of these strings.
BOOK_ABBREVIATIONS maps lower-case short forms to a canonical name.

Both tables are immutable and built once at import.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

CANONICAL_BOOKS: Final[tuple[str, ...]] = (
    # Old Testament
    "Genesis", "Exodus", "Leviticus", "Numbers", "Deuteronomy",
    "Joshua", "Judges", "Ruth", "1 Samuel", "2 Samuel",
    "1 Kings", "2 Kings", "1 Chronicles", "2 Chronicles", "Ezra",
    "Nehemiah", "Esther", "Job", "Psalms", "Proverbs",
    "Ecclesiastes", "Song of Solomon", "Isaiah", "Jeremiah", "Lamentations",
    "Ezekiel", "Daniel", "Hosea", "Joel", "Amos",
    "Obadiah", "Jonah", "Micah", "Nahum", "Habakkuk",
    "Zephaniah", "Haggai", "Zechariah", "Malachi",
    # New Testament
    "Matthew", "Mark", "Luke", "John", "Acts",
    "Romans", "1 Corinthians", "2 Corinthians", "Galatians", "Ephesians",
    "Philippians", "Colossians", "1 Thessalonians", "2 Thessalonians", "1 Timothy",
    "2 Timothy", "Titus", "Philemon", "Hebrews", "James",
    "1 Peter", "2 Peter", "1 John", "2 John", "3 John",
    "Jude", "Revelation",
)

OLD_TESTAMENT_BOOK_COUNT: Final[int] = 39

_ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "Genesis": ("gen", "ge", "gn"),
    "Exodus": ("ex", "exod", "exo"),
    "Leviticus": ("lev", "le", "lv"),
    "Numbers": ("num", "nu", "nm", "nb"),
    "Deuteronomy": ("deut", "de", "dt"),
    "Joshua": ("josh", "jos", "jsh"),
    "Judges": ("judg", "jdg", "jg", "jdgs"),
    "Ruth": ("ru", "rth"),
    "1 Samuel": ("1sam", "1 sam", "1sa", "1 sa", "1s"),
    "2 Samuel": ("2sam", "2 sam", "2sa", "2 sa", "2s"),
    "1 Kings": ("1kgs", "1 kgs", "1ki", "1 ki", "1k"),
    "2 Kings": ("2kgs", "2 kgs", "2ki", "2 ki", "2k"),
    "1 Chronicles": ("1chr", "1 chr", "1ch", "1 ch"),
    "2 Chronicles": ("2chr", "2 chr", "2ch", "2 ch"),
    "Ezra": ("ezr",),
    "Nehemiah": ("neh", "ne"),
    "Esther": ("est", "esth", "es"),
    "Job": ("jb",),
    "Psalms": ("ps", "psa", "psm", "pss", "psalm"),
    "Proverbs": ("prov", "pro", "prv", "pr"),
    "Ecclesiastes": ("eccl", "ecc", "ec", "qoh"),
    "Song of Solomon": ("song", "sos", "ss", "canticles", "song of songs"),
    "Isaiah": ("isa", "is"),
    "Jeremiah": ("jer", "jr"),
    "Lamentations": ("lam", "la"),
    "Ezekiel": ("ezek", "eze", "ezk"),
    "Daniel": ("dan", "da", "dn"),
    "Hosea": ("hos", "ho"),
    "Joel": ("joe", "jl"),
    "Amos": ("am",),
    "Obadiah": ("ob", "obad"),
    "Jonah": ("jon", "jnh"),
    "Micah": ("mic", "mi"),
    "Nahum": ("nah", "na"),
    "Habakkuk": ("hab", "hb"),
    "Zephaniah": ("zeph", "zep", "zp"),
    "Haggai": ("hag", "hg"),
    "Zechariah": ("zech", "zec", "zc"),
    "Malachi": ("mal", "ml"),
    "Matthew": ("matt", "mat", "mt"),
    "Mark": ("mk", "mr", "mrk"),
    "Luke": ("lk", "lu", "luk"),
    "John": ("jn", "jhn", "joh"),
    "Acts": ("ac", "act"),
    "Romans": ("rom", "ro", "rm"),
    "1 Corinthians": ("1cor", "1 cor", "1co", "1 co"),
    "2 Corinthians": ("2cor", "2 cor", "2co", "2 co"),
    "Galatians": ("gal", "ga"),
    "Ephesians": ("eph", "ep"),
    "Philippians": ("phil", "php", "pp"),
    "Colossians": ("col",),
    "1 Thessalonians": ("1thess", "1 thess", "1th", "1 th"),
    "2 Thessalonians": ("2thess", "2 thess", "2th", "2 th"),
    "1 Timothy": ("1tim", "1 tim", "1ti", "1 ti"),
    "2 Timothy": ("2tim", "2 tim", "2ti", "2 ti"),
    "Titus": ("tit",),
    "Philemon": ("phm", "phlm", "philem", "pm"),
    "Hebrews": ("heb", "he"),
    "James": ("jas", "jm", "jam"),
    "1 Peter": ("1pet", "1 pet", "1pe", "1 pe", "1pt", "1 pt", "1p"),
    "2 Peter": ("2pet", "2 pet", "2pe", "2 pe", "2pt", "2 pt", "2p"),
    "1 John": ("1jn", "1 jn", "1jo", "1 jo", "1john", "1j"),
    "2 John": ("2jn", "2 jn", "2jo", "2 jo", "2john", "2j"),
    "3 John": ("3jn", "3 jn", "3jo", "3 jo", "3john", "3j"),
    "Jude": ("jud", "jd"),
    "Revelation": ("rev", "re", "rv", "apoc", "revelations"),
}


def _build_abbreviation_table() -> Mapping[str, str]:
    table: dict[str, str] = {}
    for book, aliases in _ABBREVIATIONS.items():
        for alias in aliases:
            if alias in table:
                raise ValueError(f"Duplicate book abbreviation: {alias!r}")
            table[alias] = book
    return MappingProxyType(table)


BOOK_ABBREVIATIONS: Final[Mapping[str, str]] = _build_abbreviation_table()

BOOK_FULL_NAMES: Final[Mapping[str, str]] = MappingProxyType(
    {book.lower(): book for book in CANONICAL_BOOKS}
)


def abbreviations_for(book: str) -> tuple[str, ...]:
    """Return every registered short form of a canonical book name."""
    return _ABBREVIATIONS.get(book, ())


def book_position(book: str) -> int:
    """Return the canon position (0-65) of a canonical book name.

    Raises:
        ValueError: If book is not a canonical name.
    """
    return CANONICAL_BOOKS.index(book)


def is_old_testament(book: str) -> bool:
    """True for the 39 books from Genesis to Malachi."""
    return book_position(book) < OLD_TESTAMENT_BOOK_COUNT
