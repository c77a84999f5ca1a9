"""Single-shot page fetcher returning a parsed document."""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup

from app.services.extractors.base import ScraperConfig
from app.services.extractors.exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetch a URL with one bounded GET and parse the body with lxml.

    There is no retry: every failure is surfaced to the caller immediately.
    """

    def __init__(self, config: ScraperConfig | None = None) -> None:
        self.config = config or ScraperConfig()

    async def fetch(self, url: str) -> BeautifulSoup:
        """Fetch ``url`` and return its parsed document.

        Raises:
            FetchError: On an invalid URL, transport failure or a non-2xx status
            ParseError: If the body cannot be parsed
        """
        html = await self._get(url)
        return self.parse(html)

    async def _get(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=self.config.fetch_timeout_seconds,
                follow_redirects=True,
            ) as client:
                response = await client.get(
                    url,
                    headers={"User-Agent": self.config.user_agent},
                )

                if not 200 <= response.status_code < 300:
                    raise FetchError(
                        f"failed to fetch page: status code {response.status_code}",
                        status_code=response.status_code,
                    )

                logger.debug(
                    "Fetched %s (%d bytes)", url, len(response.content)
                )
                return response.text

        except httpx.TimeoutException as e:
            raise FetchError(f"Timeout fetching {url}: {e}") from e
        except httpx.RequestError as e:
            raise FetchError(f"Network error fetching {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL {url}: {e}") from e

    @staticmethod
    def parse(html: str) -> BeautifulSoup:
        """Parse an HTML string into a navigable document."""
        try:
            return BeautifulSoup(html, "lxml")
        except Exception as e:
            raise ParseError(f"Failed to parse HTML: {e}") from e
