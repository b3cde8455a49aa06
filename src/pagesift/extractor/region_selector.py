"""
Content region selection.

Selectors are tried in priority order: semantic containers first, then
elements whose class or id carries a content-indicating token. Within one
selector the candidate with the most text wins; the first selector with any
non-empty candidate decides the region.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import structlog

from ..config.config import ExtractionSettings
from .markup import Element, class_and_id, iter_elements, text_length

logger = structlog.get_logger(__name__)

SEMANTIC_TAGS = ("article", "main", "section")
CONTENT_TOKENS = ("content", "article", "post", "main", "body", "text", "container", "wrapper")


@dataclass(slots=True, frozen=True)
class ContentRegion:
    """Markup of the selected region and the selector that produced it."""

    markup: str
    selector: str


SelectorFn = Callable[[str, int], Iterable[Element]]


def tag_selector(tag: str) -> SelectorFn:
    def select(markup: str, limit: int) -> Iterable[Element]:
        return iter_elements(markup, {tag}, limit=limit)

    return select


def attribute_token_selector(token: str) -> SelectorFn:
    def matches(tag: str, attrs: Dict[str, str]) -> bool:
        return token in class_and_id(attrs)

    def select(markup: str, limit: int) -> Iterable[Element]:
        return iter_elements(markup, predicate=matches, limit=limit)

    return select


DEFAULT_SELECTORS: Tuple[Tuple[str, SelectorFn], ...] = tuple(
    [(tag, tag_selector(tag)) for tag in SEMANTIC_TAGS]
    + [(f"class-or-id:{token}", attribute_token_selector(token)) for token in CONTENT_TOKENS]
)


class ContentRegionSelector:
    """Pick the part of a cleaned document most likely to hold its content."""

    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        selectors: Sequence[Tuple[str, SelectorFn]] = DEFAULT_SELECTORS,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.selectors = tuple(selectors)

    def best_match(self, markup: str, selector: SelectorFn) -> Optional[Element]:
        """Largest candidate by text length; earlier elements win ties."""
        best: Optional[Element] = None
        best_length = 0
        for element in selector(markup, self.settings.max_region_candidates):
            length = text_length(element.inner)
            if length > best_length:
                best, best_length = element, length
        return best

    def select(self, cleaned_markup: str) -> ContentRegion:
        """
        Select the content region.

        Args:
            cleaned_markup: Markup with script, style, comment and noscript blocks removed

        Returns:
            ContentRegion, falling back to <body> and then to the whole markup
        """
        for name, selector in self.selectors:
            element = self.best_match(cleaned_markup, selector)
            if element is not None:
                logger.debug("Selected content region", selector=name, length=len(element.inner))
                return ContentRegion(markup=element.inner, selector=name)

        for body in iter_elements(cleaned_markup, {"body"}, limit=1):
            return ContentRegion(markup=body.inner, selector="body")

        return ContentRegion(markup=cleaned_markup, selector="document")
