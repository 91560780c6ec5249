"""
POST /v1/snippets - highlighted excerpts of arbitrary text around query matches.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from sermon_search.api.dependencies import get_search_service
from sermon_search.api.schemas import SnippetModel, snippet_model
from sermon_search.search.service import SearchService


class SnippetRequest(BaseModel):
    text: str = Field(..., description="Text to excerpt")
    query: str = Field(default="", description="Query whose terms are highlighted")
    max_snippets: int | None = Field(default=None, ge=1, le=20)
    snippet_length: int | None = Field(default=None, ge=20, le=2000)


class SnippetResponse(BaseModel):
    snippets: list[SnippetModel]


snippets_router = APIRouter(prefix="/v1", tags=["snippets"])


@snippets_router.post("/snippets", response_model=SnippetResponse)
async def create_snippets(
    request: SnippetRequest,
    service: Annotated[SearchService, Depends(get_search_service)],
) -> SnippetResponse:
    """Excerpts of request.text with query terms wrapped in <mark> tags.

    An empty query yields no snippets.
    """
    snippets = service.extract_snippets(
        request.text,
        request.query,
        max_snippets=request.max_snippets,
        snippet_length=request.snippet_length,
    )
    return SnippetResponse(snippets=[snippet_model(s) for s in snippets])
