"""In-page search extraction script and validation of its output.

``SEARCH_SCRIPT`` runs inside the rendered search page (via Playwright's
``page.evaluate``) and is treated as an opaque payload. Its return value is
untrusted until it has passed ``parse_search_payload``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from app.services.extractors.base import SearchResult, SearchRules
from app.services.extractors.exceptions import SearchError

logger = logging.getLogger(__name__)

SEARCH_SCRIPT_VERSION = 1

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"

SEARCH_SCRIPT = """
(args) => {
    const results = [];
    const seen = new Set();
    const items = document.querySelectorAll(args.itemSelector);

    for (const item of items) {
        if (results.length >= args.maxResults) break;

        const titleNode = item.querySelector(args.titleSelector);
        if (!titleNode) continue;

        const title = titleNode.textContent.trim();
        if (!title || seen.has(title)) continue;
        seen.add(title);

        const slug = title.replace(/ /g, '_');
        const url = args.pageUrlPrefix + encodeURIComponent(slug);

        let snippet = '';
        for (const p of item.querySelectorAll(args.snippetSelector)) {
            const text = p.textContent.trim();
            if (text.length > args.minSnippetLength) {
                snippet = text.substring(0, args.maxSnippetLength);
                break;
            }
        }

        results.push({
            title: title,
            url: url,
            snippet: snippet || args.noDescription,
        });
    }

    return {version: args.version, itemCount: items.length, results: results};
}
"""


def build_page_url(base_url: str, title: str, page_path: str = "/page/") -> str:
    """Synthesize an article URL from a result title.

    Spaces become underscores, then the slug is percent-encoded the same way
    the in-page script does it.

    >>> build_page_url("https://grokipedia.com", "Machine Learning Control")
    'https://grokipedia.com/page/Machine_Learning_Control'
    """
    slug = title.replace(" ", "_")
    return base_url.rstrip("/") + page_path + quote(slug, safe=_URI_COMPONENT_SAFE)


def script_arguments(base_url: str, rules: SearchRules, max_results: int) -> dict[str, Any]:
    """Arguments object passed to SEARCH_SCRIPT."""
    return {
        "version": SEARCH_SCRIPT_VERSION,
        "itemSelector": rules.item_selector,
        "titleSelector": rules.title_selector,
        "snippetSelector": rules.snippet_selector,
        "pageUrlPrefix": base_url.rstrip("/") + rules.page_path,
        "minSnippetLength": rules.min_snippet_length,
        "maxSnippetLength": rules.max_snippet_length,
        "maxResults": max_results,
        "noDescription": rules.no_description,
    }


def parse_search_payload(
    payload: Any,
    base_url: str,
    rules: SearchRules | None = None,
    max_results: int = 20,
) -> list[SearchResult]:
    """Validate the script's return value and convert it to SearchResults.

    Entries without a usable title are dropped. Title dedup and the result
    cap are enforced again here so the guarantees hold whatever the page
    returned.

    Raises:
        SearchError: If the payload is not a result object of the expected
            script version
    """
    rules = rules or SearchRules()

    if not isinstance(payload, dict):
        raise SearchError(
            f"Search script returned {type(payload).__name__}, expected an object"
        )
    version = payload.get("version")
    if version != SEARCH_SCRIPT_VERSION:
        raise SearchError(
            f"Search script version mismatch: got {version!r}, "
            f"expected {SEARCH_SCRIPT_VERSION}"
        )
    raw_results = payload.get("results")
    if not isinstance(raw_results, list):
        raise SearchError("Search script payload has no results list")

    results: list[SearchResult] = []
    seen: set[str] = set()
    for entry in raw_results:
        if len(results) >= max_results:
            break
        if not isinstance(entry, dict):
            continue

        title = entry.get("title")
        if not isinstance(title, str):
            continue
        title = title.strip()
        if not title or title in seen:
            continue
        seen.add(title)

        url = entry.get("url")
        if not isinstance(url, str) or not url:
            url = build_page_url(base_url, title, rules.page_path)

        snippet = entry.get("snippet")
        if not isinstance(snippet, str) or not snippet.strip():
            snippet = rules.no_description
        elif snippet != rules.no_description:
            snippet = snippet[: rules.max_snippet_length]

        results.append(SearchResult(title=title, url=url, snippet=snippet))

    dropped = len(raw_results) - len(results)
    if dropped:
        logger.debug("Dropped %d search entries during validation", dropped)
    return results
