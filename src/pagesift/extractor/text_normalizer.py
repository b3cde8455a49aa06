"""
Flatten a content region into readable plain text.

Attempts, in order:

1. the region with boilerplate removed and block structure kept as lines
2. paragraph elements only
3. every piece of text in the region

The first attempt that reaches ``min_content_length`` wins, otherwise the
longest one is used. Anything under ``min_viable_length`` is replaced by the
placeholder text.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional, Sequence, Tuple

import structlog

from ..config.config import ExtractionSettings
from .markup import (
    collapse_whitespace,
    decode_entities,
    flatten,
    iter_elements,
    mark_block_boundaries,
    normalize_lines,
    remove_elements,
    strip_tags,
)

logger = structlog.get_logger(__name__)

BOILERPLATE_TAGS = ("nav", "aside", "header", "footer")
_BOILERPLATE_CLASS = re.compile(r"\b(?:ads?|advert\w*|banner\w*|sidebar\w*|sponsor\w*)\b")
_CELL = re.compile(r"</?t[dh]\b[^>]*>", re.IGNORECASE)

NormalizeAttempt = Callable[[str], str]


def _is_boilerplate_class(tag: str, attrs: Dict[str, str]) -> bool:
    return bool(_BOILERPLATE_CLASS.search(attrs.get("class", "").lower()))


def strip_boilerplate(region: str) -> str:
    """Remove navigation, asides, headers, footers and ad/banner/sidebar blocks."""
    region = remove_elements(region, BOILERPLATE_TAGS)
    return remove_elements(region, predicate=_is_boilerplate_class)


def structured_text(region: str) -> str:
    text = collapse_whitespace(_CELL.sub(" ", strip_boilerplate(region)))
    text = mark_block_boundaries(text, "\n")
    text = strip_tags(text)
    return normalize_lines(decode_entities(text))


def paragraph_text(region: str) -> str:
    paragraphs = (flatten(p.inner) for p in iter_elements(region, {"p"}))
    return "\n".join(p for p in paragraphs if p)


def all_text(region: str) -> str:
    return flatten(region)


DEFAULT_ATTEMPTS: Tuple[Tuple[str, NormalizeAttempt], ...] = (
    ("structured", structured_text),
    ("paragraphs", paragraph_text),
    ("all-text", all_text),
)


class TextNormalizer:
    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        attempts: Sequence[Tuple[str, NormalizeAttempt]] = DEFAULT_ATTEMPTS,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.attempts = tuple(attempts)

    def normalize(self, region: str) -> str:
        best = ""
        for name, attempt in self.attempts:
            text = attempt(region)
            if len(text) >= self.settings.min_content_length:
                logger.debug("Normalized content", attempt=name, length=len(text))
                return text
            if len(text) > len(best):
                best = text

        if len(best) < self.settings.min_viable_length:
            logger.debug("No viable content found", best_length=len(best))
            return self.settings.placeholder_content
        return best
