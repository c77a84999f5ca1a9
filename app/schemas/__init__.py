"""Pydantic schemas package."""

from app.schemas.article import (  # noqa: F401
    ArticleResponse,
    SearchResponse,
    SearchResultSchema,
)
from app.schemas.common import ErrorResponse, HealthResponse  # noqa: F401
