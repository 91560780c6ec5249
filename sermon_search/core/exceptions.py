"""
Sermon-Search-Service - Custom Exceptions

Namespaced exceptions; none of them shadow builtins such as ConnectionError
or TimeoutError.

A scripture parse failure is not an exception: the parser returns None and
the caller falls back to a keyword-only search.
"""


class SermonSearchError(Exception):
    """Base exception for Sermon-Search-Service.

    All custom exceptions inherit from this base class.
    """
    pass


class DocumentStoreError(SermonSearchError):
    """Raised when the document store cannot serve a candidate request.

    Attributes:
        status_code: HTTP status returned by the store, if any
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentStoreUnavailableError(DocumentStoreError):
    """Raised when the store is down, times out, or keeps returning 5xx.

    Distinct from an empty result: the search could not run at all.
    """
    pass


class DocumentStoreRequestError(DocumentStoreError):
    """Raised when the store rejects a candidate request (4xx)."""
    pass


class UnknownDimensionError(SermonSearchError):
    """Raised when a browse request names an unregistered metadata dimension."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Unknown metadata dimension: {slug}")
        self.slug = slug


class ConfigurationError(SermonSearchError):
    """Raised when configuration is invalid or missing."""
    pass
