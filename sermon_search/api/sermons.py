"""
GET /v1/sermons/{sermon_id}/transcript?q= - cleaned transcript paragraphs.

With q, only paragraphs containing a query term as a whole word are returned.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from sermon_search.api.dependencies import get_search_service
from sermon_search.search.service import SearchService


class TranscriptResponse(BaseModel):
    sermon_id: int
    paragraphs: list[str]
    terms: list[str]
    is_highlighted: bool


sermons_router = APIRouter(prefix="/v1/sermons", tags=["sermons"])


@sermons_router.get("/{sermon_id}/transcript", response_model=TranscriptResponse)
async def sermon_transcript(
    sermon_id: int,
    service: Annotated[SearchService, Depends(get_search_service)],
    q: str | None = None,
) -> TranscriptResponse:
    result = await service.transcript(sermon_id, q)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No transcript for sermon {sermon_id}",
        )
    return TranscriptResponse(
        sermon_id=sermon_id,
        paragraphs=result.paragraphs,
        terms=result.terms,
        is_highlighted=result.is_highlighted,
    )
