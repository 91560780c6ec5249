"""
Exception handlers mapping domain errors to HTTP responses.

- DocumentStoreUnavailableError -> 503
- DocumentStoreRequestError -> 502
- UnknownDimensionError -> 404
- ConfigurationError -> 500
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sermon_search.core.exceptions import (
    ConfigurationError,
    DocumentStoreRequestError,
    DocumentStoreUnavailableError,
    UnknownDimensionError,
)
from sermon_search.core.logging import get_logger

logger = get_logger(__name__)


async def store_unavailable_handler(
    request: Request, exc: DocumentStoreUnavailableError
) -> JSONResponse:
    logger.error("store_unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Document store unavailable"},
    )


async def store_request_handler(
    request: Request, exc: DocumentStoreRequestError
) -> JSONResponse:
    logger.error(
        "store_request_rejected",
        path=request.url.path,
        store_status=exc.status_code,
        error=str(exc),
    )
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Document store rejected the request"},
    )


async def unknown_dimension_handler(
    request: Request, exc: UnknownDimensionError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"Unknown metadata dimension: {exc.slug}"},
    )


async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error("configuration_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain exception handlers to app."""
    app.add_exception_handler(DocumentStoreUnavailableError, store_unavailable_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DocumentStoreRequestError, store_request_handler)  # type: ignore[arg-type]
    app.add_exception_handler(UnknownDimensionError, unknown_dimension_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ConfigurationError, configuration_error_handler)  # type: ignore[arg-type]
