"""Per-tag policy deciding which elements become content blocks."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from app.services.extractors.base import ExtractionRules


class BlockAction(str, Enum):
    """What the extractor does with an element it visits."""

    ACCEPT = "accept"
    ACCEPT_AS_SUMMARY_CANDIDATE = "accept_as_summary_candidate"
    SKIP = "skip"


def class_string(classes: str | Iterable[str] | None) -> str:
    """Return the class attribute as a single space-joined string."""
    if classes is None:
        return ""
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def classify_node(
    tag_name: str,
    classes: str | Iterable[str] | None,
    rules: ExtractionRules,
) -> BlockAction:
    """Map an element's tag name and classes to a BlockAction.

    Generic inline containers are skipped unless their class marks them as
    body text; math and screen-reader-only markers win over body-text markers.
    """
    if tag_name in rules.summary_tags:
        return BlockAction.ACCEPT_AS_SUMMARY_CANDIDATE
    if tag_name in rules.block_tags:
        return BlockAction.ACCEPT
    if tag_name != rules.inline_tag:
        return BlockAction.SKIP

    class_attr = class_string(classes)
    if any(marker in class_attr for marker in rules.excluded_markers):
        return BlockAction.SKIP
    if any(marker in class_attr for marker in rules.body_text_markers):
        return BlockAction.ACCEPT_AS_SUMMARY_CANDIDATE
    return BlockAction.SKIP
