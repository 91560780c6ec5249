"""
Scripture Boost

Additive bonus for sermons whose tagged references match a parsed scripture
query. Tiers are layered; the most specific matching tier wins.

Reference with verse (e.g. "Romans 8:1"):
    any tag contains book+chapter+verse     700
    primary tag is book+chapter             500
    primary tag is book                     200
    any tag is book+chapter                  50

Reference with chapter only ("Romans 8"):
    primary tag is book+chapter             500
    primary tag is book                     200
    any tag is book+chapter                  50

Book only ("Romans"):
    primary tag is book                     500
    any tag is book                          50
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from sermon_search.ranking.models import ScriptureTag
from sermon_search.scripture.parser import ScriptureReference

BOOST_EXACT_VERSE: Final[int] = 700
BOOST_PRIMARY_CHAPTER: Final[int] = 500
BOOST_PRIMARY_BOOK: Final[int] = 200
BOOST_PRIMARY_BOOK_ONLY_QUERY: Final[int] = 500
BOOST_ANY_TAG: Final[int] = 50
NO_BOOST: Final[int] = 0


def scripture_boost(
    reference: ScriptureReference | None,
    tags: Sequence[ScriptureTag],
) -> int:
    """Return the boost tier for a sermon's tags against a parsed reference.

    Args:
        reference: Parsed query reference; None means a keyword-only query
        tags: The sermon's tags in stored order (first is primary)

    Returns:
        One of 700, 500, 200, 50 or 0.
    """
    if reference is None or not tags:
        return NO_BOOST

    book, chapter, verse = reference.book, reference.chapter, reference.verse
    primary = tags[0]

    if chapter is None:
        if primary.matches(book):
            return BOOST_PRIMARY_BOOK_ONLY_QUERY
        if any(tag.matches(book) for tag in tags):
            return BOOST_ANY_TAG
        return NO_BOOST

    if verse is not None and any(
        tag.matches(book, chapter) and tag.contains_verse(verse) for tag in tags
    ):
        return BOOST_EXACT_VERSE
    if primary.matches(book, chapter):
        return BOOST_PRIMARY_CHAPTER
    if primary.matches(book):
        return BOOST_PRIMARY_BOOK
    if any(tag.matches(book, chapter) for tag in tags):
        return BOOST_ANY_TAG
    return NO_BOOST
