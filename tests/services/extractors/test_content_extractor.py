"""Tests for the heuristic article content extractor."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from app.services.extractors.base import Article, ExtractionRules
from app.services.extractors.content_extractor import (
    ContentExtractor,
    normalize_whitespace,
)
from app.services.extractors.exceptions import ParseError

URL = "https://grokipedia.com/page/Python"


ARTICLE_HTML = """
<!DOCTYPE html>
<html>
<head>
<title>Python - Grokipedia</title>
<meta name="description" content="Meta description of Python">
<meta property="og:description" content="Open graph description of Python">
<meta property="article:modified_time" content=" 2025-10-28T12:00:00Z ">
</head>
<body>
<nav><p>Navigation paragraph that lives outside the article and must be ignored.</p></nav>
<article>
<h1>
    Python
</h1>
<h2>Overview</h2>
<p>Python is a high-level, general-purpose programming language
   emphasizing code readability.</p>
<p>ok</p>
<ul>
<li>Dynamic typing</li>
<li>Garbage collection</li>
</ul>
<h2>History</h2>
<blockquote>Beautiful is better than ugly.</blockquote>
<pre>print("hello")</pre>
</article>
<div class="categories">
<a href="/c/1">Programming languages</a>
<a href="/c/2">   </a>
<a href="/c/3"> Scripting </a>
</div>
<div class="category"><a href="/c/4">Free software</a></div>
</body>
</html>
"""


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _blocks(article: Article) -> list[str]:
    return article.content.split("\n\n") if article.content else []


class TestNormalizeWhitespace:
    def test_collapses_runs_and_trims(self) -> None:
        assert normalize_whitespace("  a \n\t b   c ") == "a b c"

    def test_empty(self) -> None:
        assert normalize_whitespace(" \n ") == ""


class TestContentExtractor:
    """Test suite for ContentExtractor.extract."""

    def test_extract_full_article(self) -> None:
        """Test that a well-formed article yields every field."""
        article = ContentExtractor().extract(_soup(ARTICLE_HTML), URL)

        assert article.title == "Python"
        assert article.url == URL
        assert _blocks(article) == [
            "Overview",
            "Python is a high-level, general-purpose programming language "
            "emphasizing code readability.",
            "Dynamic typing",
            "Garbage collection",
            "History",
            "Beautiful is better than ugly.",
            'print("hello")',
        ]
        assert article.summary.startswith("Python is a high-level")
        assert article.last_updated == "2025-10-28T12:00:00Z"
        assert article.categories == (
            "Programming languages",
            "Scripting",
            "Free software",
        )

    def test_content_outside_article_root_ignored(self) -> None:
        """Test that navigation text outside <article> is not extracted."""
        article = ContentExtractor().extract(_soup(ARTICLE_HTML), URL)

        assert "Navigation paragraph" not in article.content

    def test_blocks_joined_with_blank_line(self) -> None:
        html = "<article><h2>First heading</h2><h3>Second heading</h3></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.content == "First heading\n\nSecond heading"

    def test_extract_is_idempotent_and_leaves_tree_untouched(self) -> None:
        """Test that extracting twice gives identical output and no tree changes."""
        soup = _soup(ARTICLE_HTML)
        before = str(soup)
        extractor = ContentExtractor()

        first = extractor.extract(soup, URL)
        second = extractor.extract(soup, URL)

        assert first == second
        assert str(soup) == before

    def test_non_tree_input_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            ContentExtractor().extract("<p>not parsed</p>", URL)  # type: ignore[arg-type]


class TestBlockAcceptance:
    """Test suite for stripping, length filtering and duplicate suppression."""

    def test_strips_buttons_svg_style_and_script(self) -> None:
        html = """
        <article><p>Click <button>Copy</button>here to continue reading
        <svg><text>icon</text></svg><style>p{}</style><script>var x = 1;</script></p>
        </article>
        """
        soup = _soup(html)
        article = ContentExtractor().extract(soup, URL)

        assert article.content == "Click here to continue reading"
        # The source tree still has the stripped elements
        assert soup.find("button") is not None
        assert soup.find("script") is not None

    def test_short_blocks_dropped(self) -> None:
        html = "<article><li>ab</li><li>abc</li><p> x </p></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["abc"]

    def test_length_counts_code_points_not_bytes(self) -> None:
        """Test that multi-byte scripts are measured in characters."""
        html = "<article><li>日本</li><li>日本語</li></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["日本語"]

    def test_adjacent_duplicates_suppressed(self) -> None:
        html = """
        <article>
        <h2>Notes</h2><h2>Notes</h2><p>Between</p><h2>Notes</h2>
        </article>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Notes", "Between", "Notes"]

    def test_nested_candidates_with_same_text_emitted_once(self) -> None:
        html = "<article><ul><li><p>Item paragraph</p></li></ul></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Item paragraph"]

    def test_no_two_consecutive_blocks_equal(self) -> None:
        html = "<article>" + "<li>Repeat</li><li>Repeat</li><h3>Other</h3>" * 5 + "</article>"
        blocks = _blocks(ContentExtractor().extract(_soup(html), URL))

        assert all(a != b for a, b in zip(blocks, blocks[1:]))
        assert blocks.count("Repeat") == 5
        assert all(len(b) >= 3 for b in blocks)


class TestSpanPolicy:
    """Test suite for inline span handling."""

    def test_body_text_span_included(self) -> None:
        html = """
        <article><div>
        <span class="text-base break-words">Rendered prose wrapped in a generic span element</span>
        <span class="leading-7">Another span of body text</span>
        </div></article>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == [
            "Rendered prose wrapped in a generic span element",
            "Another span of body text",
        ]

    def test_plain_span_excluded(self) -> None:
        html = "<article><div><span>Plain span text</span><h2>Heading</h2></div></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Heading"]

    def test_math_and_screen_reader_spans_skipped(self) -> None:
        html = """
        <article><div>
        <span class="katex break-words">x squared plus y</span>
        <span class="sr-only leading-7">Screen reader label</span>
        <span class="break-words">Visible text</span>
        </div></article>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Visible text"]

    def test_body_text_span_can_become_summary(self) -> None:
        text = "A long body-text span that is certainly longer than fifty characters."
        html = f'<article><div><span class="break-words">{text}</span></div></article>'
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == text


class TestSummarySelection:
    """Test suite for summary choice and fallbacks."""

    LONG_1 = "The first long paragraph is comfortably over the fifty character limit."
    LONG_2 = "The second long paragraph is also comfortably over the fifty character limit."

    def test_first_long_summary_candidate_wins(self) -> None:
        html = f"<article><p>{self.LONG_1}</p><p>{self.LONG_2}</p></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == self.LONG_1

    def test_non_candidate_blocks_never_become_summary(self) -> None:
        html = f"<article><li>{self.LONG_1}</li><h2>{self.LONG_2}</h2><p>{self.LONG_2}!</p></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == self.LONG_2 + "!"

    def test_blockquote_is_summary_candidate(self) -> None:
        html = f"<article><blockquote>{self.LONG_1}</blockquote></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == self.LONG_1

    def test_exactly_fifty_characters_not_enough(self) -> None:
        fifty = "x" * 50
        html = f'<head><meta name="description" content="Described"></head><article><p>{fifty}</p></article>'
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == "Described"

    def test_meta_description_fallback(self) -> None:
        html = """
        <head>
        <meta name="description" content="  Page description  ">
        <meta property="og:description" content="OG description">
        </head>
        <article><p>Short paragraph.</p></article>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == "Page description"

    def test_og_description_fallback(self) -> None:
        html = """
        <head>
        <meta name="description" content="   ">
        <meta property="og:description" content="OG description">
        </head>
        <article><p>Short paragraph.</p></article>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == "OG description"

    def test_summary_empty_when_nothing_qualifies(self) -> None:
        html = "<article><p>Short paragraph.</p></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.summary == ""


class TestRootSelection:
    """Test suite for root choice and whole-document fallback."""

    def test_main_used_when_no_article(self) -> None:
        html = """
        <body><aside><p>Sidebar text</p></aside>
        <main><p>Main region text</p></main></body>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Main region text"]

    def test_whole_document_when_no_semantic_root(self) -> None:
        html = "<body><div><h2>Loose heading</h2><p>Loose paragraph</p></div></body>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Loose heading", "Loose paragraph"]

    def test_whole_document_fallback_when_root_yields_nothing(self) -> None:
        html = """
        <body>
        <article><p>ab</p><span>ignored span</span></article>
        <div><p>Paragraph outside the empty article</p></div>
        </body>
        """
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Paragraph outside the empty article"]

    def test_article_preferred_over_main(self) -> None:
        html = "<main><p>Main only</p><article><p>Inside article</p></article></main>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Inside article"]

    def test_multiple_articles_walked_in_order(self) -> None:
        html = "<article><p>First article</p></article><article><p>Second article</p></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["First article", "Second article"]

    def test_nested_articles_walked_once(self) -> None:
        html = "<article><p>Outer text</p><article><p>Inner text</p></article></article>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert _blocks(article) == ["Outer text", "Inner text"]

    def test_empty_document_degrades_to_empty_article(self) -> None:
        article = ContentExtractor().extract(_soup(""), URL)

        assert article == Article(title="", url=URL, content="")


class TestTitleAndMetadata:
    def test_title_falls_back_to_title_tag(self) -> None:
        html = "<head><title> Page Title </title></head><body><h1>  </h1></body>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.title == "Page Title"

    def test_first_h1_used(self) -> None:
        html = "<h1>First</h1><h1>Second</h1>"
        article = ContentExtractor().extract(_soup(html), URL)

        assert article.title == "First"

    def test_missing_metadata_is_empty(self) -> None:
        article = ContentExtractor().extract(_soup("<article><p>Body</p></article>"), URL)

        assert article.last_updated == ""
        assert article.categories == ()


class TestCustomRules:
    def test_custom_body_text_marker(self) -> None:
        rules = ExtractionRules(body_text_markers=("prose",))
        html = '<article><div><span class="prose">Custom marked text</span></div></article>'
        article = ContentExtractor(rules).extract(_soup(html), URL)

        assert _blocks(article) == ["Custom marked text"]
