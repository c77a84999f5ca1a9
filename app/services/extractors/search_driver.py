"""Headless search driver using Playwright.

Every call launches its own Chromium instance with a fresh, non-persistent
browser context, renders the search page, runs ``SEARCH_SCRIPT`` inside it
and tears everything down before returning. Sessions are never reused.

Usage:
    driver = SearchDriver(config)
    results = await driver.search("machine learning")

Note: Playwright browsers must be installed separately:
    playwright install chromium
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from app.services.extractors.base import ScraperConfig, SearchResult, SearchRules
from app.services.extractors.exceptions import SearchError
from app.services.extractors.search_script import (
    SEARCH_SCRIPT,
    parse_search_payload,
    script_arguments,
)

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

# Chromium flags for unattended runs in containers
BROWSER_ARGS = (
    "--disable-gpu",
    "--no-sandbox",
    "--disable-dev-shm-usage",
)


class SearchDriver:
    """Run a search against the site through a headless browser.

    Attributes:
        config: Scraper configuration (base URL, deadline, settle time, limits)
        rules: Selectors used to locate result items in the rendered page
    """

    def __init__(
        self,
        config: ScraperConfig | None = None,
        rules: SearchRules | None = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self.rules = rules or SearchRules()
        self._sessions = asyncio.Semaphore(max(1, self.config.max_browser_sessions))

    def search_url(self, query: str) -> str:
        """Return the site's search page URL for ``query``."""
        return f"{self.config.base_url.rstrip('/')}/search?q={quote(query, safe='')}"

    async def search(self, query: str) -> list[SearchResult]:
        """Search for ``query`` and return deduplicated results.

        Args:
            query: Free-text search query

        Returns:
            At most ``search_max_results`` results, unique by title, in page order

        Raises:
            SearchError: On launch, navigation, render-wait, evaluation or
                deadline failure. No partial results are returned.
        """
        logger.info("Starting headless browser search for: %s", query)

        async with self._sessions:
            try:
                results = await asyncio.wait_for(
                    self._run_session(query),
                    timeout=self.config.search_timeout_seconds,
                )
            except SearchError:
                raise
            except asyncio.TimeoutError as e:
                logger.warning("Headless search timed out for %r", query)
                raise SearchError(
                    f"headless browser search timed out after "
                    f"{self.config.search_timeout_seconds:g}s",
                    cause=e,
                ) from e
            except Exception as e:
                logger.warning("Headless browser error: %s", e)
                raise SearchError(
                    f"headless browser search failed: {e}", cause=e
                ) from e

        logger.info("Found %d search results for query: %s", len(results), query)
        return results

    @staticmethod
    async def _start_playwright():
        """Start the Playwright driver, stopping it if cancelled mid-start."""
        # Import here to avoid loading Playwright until needed
        from playwright.async_api import async_playwright

        starting = asyncio.ensure_future(async_playwright().start())
        try:
            return await asyncio.shield(starting)
        except asyncio.CancelledError:
            # Let start-up finish so the driver process can be stopped
            try:
                playwright = await starting
                await playwright.stop()
                logger.debug("Playwright stopped after cancelled start")
            except Exception as e:
                logger.warning("Error stopping Playwright after cancelled start: %s", e)
            raise

    async def _run_session(self, query: str) -> list[SearchResult]:
        """Own one browser session from launch to teardown."""
        playwright = await self._start_playwright()
        browser = None
        context = None
        try:
            browser = await playwright.chromium.launch(
                headless=self.config.browser_headless,
                args=list(BROWSER_ARGS),
            )
            context = await browser.new_context()
            page = await context.new_page()
            return await self._extract(page, query)
        finally:
            await self._teardown(playwright, browser, context)

    async def _extract(self, page: Page, query: str) -> list[SearchResult]:
        timeout_ms = self.config.search_timeout_seconds * 1000
        url = self.search_url(query)

        logger.info("Navigating to: %s", url)
        await page.goto(url, timeout=timeout_ms)
        await page.wait_for_selector(
            self.rules.ready_selector, state="visible", timeout=timeout_ms
        )

        # No reliable render-complete signal; give client-side rendering time
        await asyncio.sleep(self.config.search_settle_ms / 1000)

        if logger.isEnabledFor(logging.DEBUG):
            html = await page.content()
            logger.debug("Rendered search page: %d chars", len(html))

        payload = await page.evaluate(
            SEARCH_SCRIPT,
            script_arguments(
                self.config.base_url, self.rules, self.config.search_max_results
            ),
        )
        if isinstance(payload, dict):
            logger.debug("Search page had %s result items", payload.get("itemCount"))

        return parse_search_payload(
            payload,
            self.config.base_url,
            self.rules,
            max_results=self.config.search_max_results,
        )

    @staticmethod
    async def _teardown(playwright, browser, context) -> None:
        """Close context, browser and Playwright; errors here are only logged."""
        if context is not None:
            try:
                await context.close()
            except Exception as e:
                logger.warning("Error closing browser context: %s", e)
        if browser is not None:
            try:
                await browser.close()
                logger.debug("Playwright browser closed")
            except Exception as e:
                logger.warning("Error closing browser: %s", e)
        try:
            await playwright.stop()
            logger.debug("Playwright stopped")
        except Exception as e:
            logger.warning("Error stopping Playwright: %s", e)
