"""Base data types and configuration for article and search extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.core.config import Settings

NO_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class ScraperConfig:
    """Immutable per-process configuration handed to every component."""

    base_url: str = "https://grokipedia.com"
    user_agent: str = "Grokipedia-API-Client/1.0"
    fetch_timeout_seconds: float = 30.0
    search_timeout_seconds: float = 30.0
    search_settle_ms: int = 3000
    search_max_results: int = 20
    max_browser_sessions: int = 4
    browser_headless: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> ScraperConfig:
        """Build the config from the loaded service settings."""
        return cls(
            base_url=settings.base_url,
            user_agent=settings.user_agent,
            fetch_timeout_seconds=settings.fetch_timeout_seconds,
            search_timeout_seconds=settings.search_timeout_seconds,
            search_settle_ms=settings.search_settle_ms,
            search_max_results=settings.search_max_results,
            max_browser_sessions=settings.max_browser_sessions,
            browser_headless=settings.browser_headless,
        )


@dataclass(frozen=True)
class ExtractionRules:
    """Tag and class rules used by the content extractor.

    Class markers are matched as substrings of the element's class attribute.
    """

    root_tags: tuple[str, ...] = ("article", "main")
    block_tags: frozenset[str] = frozenset({"h2", "h3", "h4", "h5", "h6", "pre", "li"})
    summary_tags: frozenset[str] = frozenset({"p", "blockquote"})
    inline_tag: str = "span"
    body_text_markers: tuple[str, ...] = ("break-words", "leading-7")
    excluded_markers: tuple[str, ...] = ("katex", "sr-only")
    stripped_tags: tuple[str, ...] = ("button", "svg", "style", "script")
    min_block_length: int = 3
    min_summary_length: int = 50  # summary must be strictly longer
    block_separator: str = "\n\n"
    description_selector: str = 'meta[name="description"]'
    og_description_selector: str = 'meta[property="og:description"]'
    modified_time_selector: str = 'meta[property="article:modified_time"]'
    category_selector: str = ".categories a, .category a"


@dataclass(frozen=True)
class SearchRules:
    """CSS selectors and limits passed to the in-page search script."""

    ready_selector: str = "main"
    item_selector: str = "main div.cursor-pointer"
    title_selector: str = "span.line-clamp-1 span"
    snippet_selector: str = "p"
    page_path: str = "/page/"
    min_snippet_length: int = 20  # snippet text must be strictly longer
    max_snippet_length: int = 200
    no_description: str = NO_DESCRIPTION


@dataclass(frozen=True)
class Article:
    """Structured content extracted from one article page."""

    title: str
    url: str
    content: str
    summary: str = ""
    categories: tuple[str, ...] = ()
    last_updated: str = ""


@dataclass(frozen=True)
class SearchResult:
    """A single search hit with a URL synthesized from its title."""

    title: str
    url: str
    snippet: str = NO_DESCRIPTION


@dataclass(frozen=True)
class ContentBlock:
    """One normalized text fragment accepted during traversal."""

    text: str
    summary_candidate: bool = False


@dataclass
class ExtractionContext:
    """Running state of a single traversal pass."""

    blocks: list[ContentBlock] = field(default_factory=list)
    last_text: str = ""
    summary: str = ""

    @property
    def texts(self) -> list[str]:
        return [block.text for block in self.blocks]
