"""Search REST endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_search_driver
from app.exceptions import ValidationError
from app.schemas.article import SearchResponse, SearchResultSchema
from app.schemas.common import ErrorResponse, error_response
from app.services.extractors.exceptions import SearchError
from app.services.extractors.search_driver import SearchDriver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(
    q: str | None = Query(default=None, description="Search query"),
    driver: SearchDriver = Depends(get_search_driver),
) -> SearchResponse | JSONResponse:
    """Search the site through a headless browser."""
    if q is None or not q.strip():
        raise ValidationError("Search query parameter 'q' is required")

    try:
        results = await driver.search(q)
    except SearchError as e:
        logger.warning("Search failed for %r: %s", q, e)
        return error_response(500, f"Search failed: {e}")

    return SearchResponse(
        query=q,
        count=len(results),
        results=[SearchResultSchema.from_result(r) for r in results],
    )
