"""Article REST endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.dependencies import get_article_service
from app.exceptions import ValidationError
from app.schemas.article import ArticleResponse
from app.schemas.common import ErrorResponse, error_response
from app.services.article_service import ArticleService
from app.services.extractors.exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["articles"])


@router.get(
    "/article/{path:path}",
    response_model=ArticleResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_article(
    path: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse | JSONResponse:
    """Fetch an article page and return its extracted content.

    ``path`` is appended to the configured base URL and may contain slashes,
    e.g. ``/api/article/page/Python``.
    """
    if not path.strip("/"):
        raise ValidationError("Article path is required")

    try:
        article = await service.get_article(path)
    except (FetchError, ParseError) as e:
        logger.warning("Article extraction failed for %s: %s", path, e)
        return error_response(500, f"Failed to fetch article: {e}")

    return ArticleResponse.from_article(article)
