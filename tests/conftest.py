"""Shared pytest fixtures for API and service tests.

The ``client`` fixture replaces the article service and search driver with
mocks through ``app.dependency_overrides`` so no network or browser is used.

Usage in new test files:
    def test_something(client, article_service):
        article_service.get_article.return_value = make_article()
        resp = client.get("/api/article/page/Python")
        ...
"""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_article_service, get_search_driver
from app.main import app
from app.services.article_service import ArticleService
from app.services.extractors.base import Article
from app.services.extractors.search_driver import SearchDriver


# ------------------------------------------------------------------
# Mocked components
# ------------------------------------------------------------------


@pytest.fixture()
def article_service() -> MagicMock:
    """ArticleService mock whose get_article is awaitable."""
    service = MagicMock(spec=ArticleService)
    service.get_article = AsyncMock()
    return service


@pytest.fixture()
def search_driver() -> MagicMock:
    """SearchDriver mock whose search is awaitable."""
    driver = MagicMock(spec=SearchDriver)
    driver.search = AsyncMock(return_value=[])
    return driver


@pytest.fixture()
def client(article_service, search_driver):
    """TestClient with the extraction components overridden."""
    app.dependency_overrides[get_article_service] = lambda: article_service
    app.dependency_overrides[get_search_driver] = lambda: search_driver
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# Helper fixtures
# ------------------------------------------------------------------


@pytest.fixture()
def make_article() -> Callable[..., Article]:
    """Return a helper building an Article with overridable fields."""

    def _make(**overrides) -> Article:
        fields = {
            "title": "Python (programming language)",
            "url": "https://grokipedia.com/page/Python_(programming_language)",
            "content": "History\n\nPython was conceived in the late 1980s.",
            "summary": "",
            "categories": (),
            "last_updated": "",
        }
        fields.update(overrides)
        return Article(**fields)

    return _make
