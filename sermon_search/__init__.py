"""Sermon-Search-Service: scripture-aware search over a sermon archive.

This package provides:
- Scripture reference parsing (book name normalization, chapter/verse forms)
- Weighted relevance ranking of sermons and series
- Highlighted transcript snippets for result previews and exports
- Browse-by-dimension and browse-by-passage flows
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
