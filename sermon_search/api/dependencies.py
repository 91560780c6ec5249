"""
Dependency providers for the API routers.

The SearchService is built once in the application lifespan and kept on
app.state; routers receive it through Depends(get_search_service) so tests
can swap it with app.dependency_overrides.
"""

from typing import Any

from fastapi import Request

from sermon_search.core.exceptions import ConfigurationError
from sermon_search.search.service import SearchService


def get_search_service(request: Request) -> SearchService:
    """Return the SearchService attached to the running application.

    Raises:
        ConfigurationError: If the lifespan has not attached a service.
    """
    service: SearchService | None = getattr(request.app.state, "search_service", None)
    if service is None:
        raise ConfigurationError("Search service is not initialised")
    return service


def lenient_int(value: Any) -> int | None:
    """Parse a query-string integer, returning None for anything unparseable."""
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
