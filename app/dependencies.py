"""FastAPI dependencies resolving the per-process extraction components."""

from __future__ import annotations

from fastapi import Request

from app.services.article_service import ArticleService
from app.services.extractors.search_driver import SearchDriver


def get_article_service(request: Request) -> ArticleService:
    return request.app.state.article_service


def get_search_driver(request: Request) -> SearchDriver:
    return request.app.state.search_driver
