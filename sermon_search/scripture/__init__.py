"""Scripture reference recognition: book names and chapter/verse parsing."""
from sermon_search.scripture.books import BOOK_ABBREVIATIONS, CANONICAL_BOOKS
from sermon_search.scripture.normalizer import BookNameNormalizer, normalize_book_name
from sermon_search.scripture.parser import ScriptureReference, parse_scripture_query

__all__ = [
    "BOOK_ABBREVIATIONS",
    "CANONICAL_BOOKS",
    "BookNameNormalizer",
    "ScriptureReference",
    "normalize_book_name",
    "parse_scripture_query",
]
