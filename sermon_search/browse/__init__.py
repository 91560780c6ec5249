"""
Browse flows: metadata dimensions and scripture passages.

Only the registry is re-exported here; import browse.metadata and
browse.scripture directly.
"""

from sermon_search.browse.dimensions import (
    ALL_DIMENSIONS,
    METADATA_DIMENSIONS,
    MetadataDimension,
    get_dimension,
)

__all__ = [
    "ALL_DIMENSIONS",
    "METADATA_DIMENSIONS",
    "MetadataDimension",
    "get_dimension",
]
