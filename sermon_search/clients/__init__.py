"""Clients for external collaborators (the sermon document store)."""
from sermon_search.clients.document_store import (
    DocumentStoreProtocol,
    HttpDocumentStore,
    InMemoryDocumentStore,
)

__all__ = [
    "DocumentStoreProtocol",
    "HttpDocumentStore",
    "InMemoryDocumentStore",
]
