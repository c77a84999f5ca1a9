"""Heuristic content extractor for rendered article pages.

Walks a parsed document (BeautifulSoup) and builds an ``Article`` from the
headings, paragraphs, list items and body-text spans it finds. The document
is never modified; elements are copied before noisy children are removed.

Usage:
    extractor = ContentExtractor()
    article = extractor.extract(soup, "https://grokipedia.com/page/Python")
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup, Tag

from app.services.extractors.base import (
    Article,
    ContentBlock,
    ExtractionContext,
    ExtractionRules,
)
from app.services.extractors.block_policy import BlockAction, classify_node
from app.services.extractors.exceptions import ParseError

logger = logging.getLogger(__name__)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


class ContentExtractor:
    """Extract title, body, summary and metadata from an article document."""

    def __init__(self, rules: ExtractionRules | None = None) -> None:
        self.rules = rules or ExtractionRules()

    def extract(self, document: BeautifulSoup, url: str) -> Article:
        """Build an Article from a parsed document.

        Args:
            document: Parsed page (any bs4 Tag; usually the BeautifulSoup root)
            url: Absolute URL the page was fetched from

        Returns:
            Article with empty values for any optional field not found

        Raises:
            ParseError: If the document cannot be traversed
        """
        if not isinstance(document, Tag):
            raise ParseError(
                f"Cannot traverse document of type {type(document).__name__}"
            )

        try:
            title = self._extract_title(document)

            context = ExtractionContext()
            roots = self._select_roots(document)
            if roots:
                self._process(self._descendants(roots), context)

            if not context.blocks:
                logger.debug("No blocks under content root, walking whole document")
                self._process(document.find_all(True), context)

            summary = context.summary or self._meta_description(document)

            article = Article(
                title=title,
                url=url,
                content=self.rules.block_separator.join(context.texts),
                summary=summary,
                categories=self._extract_categories(document),
                last_updated=self._meta_content(
                    document, self.rules.modified_time_selector
                ),
            )
        except RecursionError as e:
            raise ParseError(f"Document too deeply nested to traverse: {e}") from e

        logger.debug(
            "Extracted %d blocks (%d chars) from %s",
            len(context.blocks),
            len(article.content),
            url,
        )
        return article

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _select_roots(self, document: Tag) -> list[Tag]:
        """Return the first non-empty set of root elements, outermost only."""
        for tag_name in self.rules.root_tags:
            found = document.find_all(tag_name)
            if found:
                ids = {id(tag) for tag in found}
                return [
                    tag
                    for tag in found
                    if not any(id(parent) in ids for parent in tag.parents)
                ]
        return []

    @staticmethod
    def _descendants(roots: Iterable[Tag]) -> Iterator[Tag]:
        for root in roots:
            yield from root.find_all(True)

    def _process(self, nodes: Iterable[Tag], context: ExtractionContext) -> None:
        for node in nodes:
            action = classify_node(node.name, node.get("class"), self.rules)
            if action is BlockAction.SKIP:
                continue
            self._add_block(
                node,
                context,
                summary_candidate=action is BlockAction.ACCEPT_AS_SUMMARY_CANDIDATE,
            )

    def _add_block(
        self, node: Tag, context: ExtractionContext, summary_candidate: bool
    ) -> None:
        """Apply the acceptance rules to one candidate element."""
        text = normalize_whitespace(self._clean_text(node))
        if len(text) < self.rules.min_block_length:
            return
        # Only the immediately preceding block counts as a duplicate
        if text == context.last_text:
            return

        context.blocks.append(ContentBlock(text=text, summary_candidate=summary_candidate))
        context.last_text = text

        if (
            summary_candidate
            and not context.summary
            and len(text) > self.rules.min_summary_length
        ):
            context.summary = text

    def _clean_text(self, node: Tag) -> str:
        """Text of a copy of ``node`` with buttons, svg, style and script removed."""
        clean = copy.copy(node)
        for unwanted in clean.find_all(list(self.rules.stripped_tags)):
            unwanted.extract()
        return clean.get_text()

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def _extract_title(self, document: Tag) -> str:
        heading = document.find("h1")
        if heading is not None:
            title = normalize_whitespace(heading.get_text())
            if title:
                return title

        title_tag = document.find("title")
        if title_tag is not None:
            return normalize_whitespace(title_tag.get_text())
        return ""

    def _meta_description(self, document: Tag) -> str:
        return self._meta_content(
            document, self.rules.description_selector
        ) or self._meta_content(document, self.rules.og_description_selector)

    @staticmethod
    def _meta_content(document: Tag, selector: str) -> str:
        meta = document.select_one(selector)
        if meta is None:
            return ""
        content = meta.get("content")
        if not content:
            return ""
        return str(content).strip()

    def _extract_categories(self, document: Tag) -> tuple[str, ...]:
        categories = []
        for link in document.select(self.rules.category_selector):
            name = link.get_text().strip()
            if name:
                categories.append(name)
        return tuple(categories)
