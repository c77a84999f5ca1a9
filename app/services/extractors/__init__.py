"""Article and search extraction for the scraped knowledge base.

This module provides:
1. ContentExtractor - heuristic DOM walk turning a parsed article page into
   an Article (title, ordered blocks, summary, categories, last update)
2. SearchDriver - Playwright-driven search that renders the search page,
   runs an in-page collection script and returns deduplicated SearchResults

Usage:
    from app.services.extractors import ContentExtractor, SearchDriver

    article = ContentExtractor().extract(soup, url)
    results = await SearchDriver(config).search("python")

Note: Playwright browsers must be installed separately:
    playwright install chromium
"""

from app.services.extractors.base import (
    Article,
    ContentBlock,
    ExtractionContext,
    ExtractionRules,
    ScraperConfig,
    SearchResult,
    SearchRules,
)
from app.services.extractors.block_policy import BlockAction, classify_node
from app.services.extractors.content_extractor import ContentExtractor
from app.services.extractors.exceptions import (
    FetchError,
    ParseError,
    ScraperError,
    SearchError,
)
from app.services.extractors.search_driver import SearchDriver
from app.services.extractors.search_script import (
    SEARCH_SCRIPT,
    SEARCH_SCRIPT_VERSION,
    build_page_url,
    parse_search_payload,
)

__all__ = [
    # Data types and configuration
    "Article",
    "ContentBlock",
    "ExtractionContext",
    "ExtractionRules",
    "ScraperConfig",
    "SearchResult",
    "SearchRules",
    # Extraction
    "BlockAction",
    "classify_node",
    "ContentExtractor",
    "SearchDriver",
    "SEARCH_SCRIPT",
    "SEARCH_SCRIPT_VERSION",
    "build_page_url",
    "parse_search_payload",
    # Exceptions
    "ScraperError",
    "FetchError",
    "ParseError",
    "SearchError",
]
