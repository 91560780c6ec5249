"""
Sermon-Search-Service - Health API Routes

GET /health - liveness; 200 whenever the process serves requests
GET /ready  - readiness; 200 only when the store is attached and answers a
              count query, 503 otherwise
"""

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sermon_search import __version__
from sermon_search.core.exceptions import DocumentStoreError
from sermon_search.core.logging import get_logger
from sermon_search.search.service import SearchService

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    status: str
    checks: dict[str, bool]
    sermon_count: int | None = None


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Liveness info plus the store_ready flag owned by the lifespan.

    store_ready says a store was built; check_readiness() additionally asks
    the store how many sermons it holds, so an unreachable catalogue service
    reports not ready even after startup.
    """

    def __init__(self, version: str = __version__, service_name: str = "sermon-search-service"):
        self._version = version
        self._service_name = service_name
        self._store_ready = False

    @property
    def store_ready(self) -> bool:
        return self._store_ready

    def set_store_ready(self, ready: bool) -> None:
        self._store_ready = ready

    def check_health(self) -> dict[str, Any]:
        return {"status": "healthy", "version": self._version, "service": self._service_name}

    async def check_readiness(
        self, search_service: SearchService | None
    ) -> tuple[dict[str, Any], bool]:
        """Return (readiness payload, is_ready)."""
        sermon_count: int | None = None
        store_reachable = False
        if self._store_ready and search_service is not None:
            try:
                sermon_count = await search_service.catalog_size()
                store_reachable = True
            except DocumentStoreError as e:
                logger.warning("readiness_store_unreachable", error=str(e))

        checks = {"store_ready": self._store_ready, "store_reachable": store_reachable}
        is_ready = all(checks.values())
        payload: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
            "sermon_count": sermon_count,
        }
        return payload, is_ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    return HealthResponse(**get_health_service().check_health())


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Store attached and answering"},
        503: {"description": "Store missing or unreachable"},
    },
    summary="Readiness probe",
)
async def readiness_check(request: Request) -> JSONResponse:
    search_service = getattr(request.app.state, "search_service", None)
    data, is_ready = await get_health_service().check_readiness(search_service)
    logger.debug("readiness_check", status=data["status"], sermon_count=data["sermon_count"])
    return JSONResponse(
        content=data,
        status_code=status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE,
    )
