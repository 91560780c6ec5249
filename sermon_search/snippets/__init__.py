"""Highlighted transcript excerpts and transcript cleaning."""
from sermon_search.snippets.extractor import (
    Snippet,
    SnippetExtractor,
    extract_snippets,
    highlight_terms,
)
from sermon_search.snippets.transcript import (
    TranscriptParagraphs,
    clean_transcript_text,
    query_terms,
    transcript_paragraphs,
)

__all__ = [
    "Snippet",
    "SnippetExtractor",
    "TranscriptParagraphs",
    "clean_transcript_text",
    "extract_snippets",
    "highlight_terms",
    "query_terms",
    "transcript_paragraphs",
]
