"""Article retrieval: fetch a page by path and extract its content."""

from __future__ import annotations

import logging

from app.services.extractors.base import Article, ScraperConfig
from app.services.extractors.content_extractor import ContentExtractor
from app.services.fetcher import PageFetcher

logger = logging.getLogger(__name__)


class ArticleService:
    """Resolve article paths against the base URL and extract them."""

    def __init__(
        self,
        config: ScraperConfig | None = None,
        fetcher: PageFetcher | None = None,
        extractor: ContentExtractor | None = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or PageFetcher(self.config)
        self.extractor = extractor or ContentExtractor()

    def build_url(self, article_path: str) -> str:
        """Join an article path (e.g. ``page/Python``) onto the base URL."""
        if not article_path.startswith("/"):
            article_path = "/" + article_path
        return self.config.base_url.rstrip("/") + article_path

    async def get_article(self, article_path: str) -> Article:
        """Fetch and extract the article at ``article_path``.

        Raises:
            FetchError: If the page cannot be fetched
            ParseError: If the page cannot be parsed or traversed
        """
        url = self.build_url(article_path)
        logger.info("Fetching article from URL: %s", url)

        document = await self.fetcher.fetch(url)
        return self.extractor.extract(document, url)
