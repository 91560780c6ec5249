"""
Metadata browse endpoints.

GET /v1/metadata/dimensions          - the dimension registry
GET /v1/metadata/{dimension}         - distinct values with sermon counts
GET /v1/metadata/{dimension}/{value} - sermons carrying a value

An unknown dimension slug yields 404 through the UnknownDimensionError handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sermon_search.api.dependencies import get_search_service, lenient_int
from sermon_search.api.schemas import SermonModel, sermon_model
from sermon_search.browse.dimensions import ALL_DIMENSIONS
from sermon_search.browse.metadata import BrowseSort
from sermon_search.ranking.filters import parse_flag
from sermon_search.search.service import SearchService


class DimensionModel(BaseModel):
    slug: str
    label: str
    label_plural: str
    description: str


class DimensionsResponse(BaseModel):
    dimensions: list[DimensionModel]


class MetadataValueModel(BaseModel):
    value: str
    sermon_count: int


class DimensionValuesResponse(BaseModel):
    dimension: str
    values: list[MetadataValueModel]
    total: int


class DimensionDocumentsResponse(BaseModel):
    dimension: str
    value: str
    sort: str
    sermons: list[SermonModel]
    total: int


metadata_router = APIRouter(prefix="/v1/metadata", tags=["metadata"])


@metadata_router.get("/dimensions", response_model=DimensionsResponse)
async def list_dimensions() -> DimensionsResponse:
    return DimensionsResponse(
        dimensions=[
            DimensionModel(
                slug=d.slug,
                label=d.label,
                label_plural=d.label_plural,
                description=d.description,
            )
            for d in ALL_DIMENSIONS
        ]
    )


@metadata_router.get("/{dimension}", response_model=DimensionValuesResponse)
async def dimension_values(
    dimension: str,
    service: Annotated[SearchService, Depends(get_search_service)],
    search: str | None = None,
    min_count: str | None = None,
    offset: str | None = None,
    limit: str | None = None,
) -> DimensionValuesResponse:
    page = await service.dimension_values(
        dimension,
        search=search,
        min_count=lenient_int(min_count),
        limit=lenient_int(limit),
        offset=lenient_int(offset),
    )
    return DimensionValuesResponse(
        dimension=dimension,
        values=[MetadataValueModel(value=v.value, sermon_count=v.sermon_count) for v in page.values],
        total=page.total,
    )


@metadata_router.get("/{dimension}/{value}", response_model=DimensionDocumentsResponse)
async def dimension_documents(
    dimension: str,
    value: str,
    service: Annotated[SearchService, Depends(get_search_service)],
    sort: str | None = None,
    transcript: str | None = None,
    offset: str | None = None,
    limit: str | None = None,
) -> DimensionDocumentsResponse:
    browse_sort = BrowseSort.parse(sort)
    page = await service.documents_for_value(
        dimension,
        value,
        sort=browse_sort,
        has_transcript=parse_flag(transcript),
        limit=lenient_int(limit),
        offset=lenient_int(offset),
    )
    return DimensionDocumentsResponse(
        dimension=dimension,
        value=value,
        sort=browse_sort.value,
        sermons=[sermon_model(d) for d in page.documents],
        total=page.total,
    )
