"""Pydantic v2 schemas for the article and search endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.services.extractors.base import Article, SearchResult


class ArticleResponse(BaseModel):
    """Response for GET /api/article/{path}."""

    title: str = Field(..., description="Article title")
    url: str = Field(..., description="Absolute URL the article was fetched from")
    content: str = Field(..., description="Text blocks separated by blank lines")
    summary: str = Field(default="", description="Lead paragraph or page description")
    categories: list[str] = Field(
        default_factory=list, description="Category names in page order"
    )
    last_updated: str = Field(
        default="", description="ISO-8601 modification time, if published"
    )

    @classmethod
    def from_article(cls, article: Article) -> ArticleResponse:
        return cls(
            title=article.title,
            url=article.url,
            content=article.content,
            summary=article.summary,
            categories=list(article.categories),
            last_updated=article.last_updated,
        )


class SearchResultSchema(BaseModel):
    """Single search result."""

    title: str = Field(..., description="Result title")
    url: str = Field(..., description="Article URL derived from the title")
    snippet: str = Field(..., description="Short description or placeholder")

    @classmethod
    def from_result(cls, result: SearchResult) -> SearchResultSchema:
        return cls(title=result.title, url=result.url, snippet=result.snippet)


class SearchResponse(BaseModel):
    """Response for GET /api/search."""

    query: str = Field(..., description="Query as received")
    count: int = Field(..., ge=0, description="Number of results returned")
    results: list[SearchResultSchema] = Field(
        default_factory=list, description="Results in page order"
    )
