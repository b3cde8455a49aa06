"""
Highlight harvesting.

One pass per category over the selected content region. Each pass has a
fixed importance tier and an inclusive length band for the flattened text.
Elements that are never closed are not highlights, and each pass looks at no
more than ``max_highlight_candidates`` elements.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from ..config.config import ExtractionSettings
from .markup import class_and_id, count_tags, flatten, iter_elements
from .models import Highlight, Importance

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class HighlightPass:
    category: str
    importance: Importance
    tags: Tuple[str, ...]
    min_length: int
    max_length: int
    predicate: Optional[Callable[[str, Dict[str, str]], bool]] = None


def _is_marked(tag: str, attrs: Dict[str, str]) -> bool:
    return tag == "mark" or "highlight" in class_and_id(attrs)


PASSES: Tuple[HighlightPass, ...] = (
    HighlightPass("emphasis", Importance.HIGH, ("strong", "b", "em", "i"), 10, 500),
    HighlightPass("highlight", Importance.MEDIUM, ("mark", "span"), 5, 300, _is_marked),
    HighlightPass("quote", Importance.MEDIUM, ("blockquote",), 20, 800),
    HighlightPass("heading", Importance.MEDIUM, ("h2", "h3", "h4", "h5", "h6"), 5, 200),
    HighlightPass("list-item", Importance.LOW, ("li",), 10, 300),
)


class HighlightHarvester:
    """Collect salient fragments from a content region."""

    def __init__(self, settings: Optional[ExtractionSettings] = None, passes: Iterable[HighlightPass] = PASSES):
        self.settings = settings or ExtractionSettings()
        self.passes = tuple(passes)

    def _run_pass(self, region: str, rule: HighlightPass) -> List[Highlight]:
        if rule.category == "list-item" and count_tags(region, "li") > self.settings.max_list_items:
            return []

        found = []
        limit = self.settings.max_highlight_candidates
        for element in iter_elements(region, rule.tags, predicate=rule.predicate, limit=limit):
            if not element.closed:
                continue
            text = flatten(element.inner)
            if rule.min_length <= len(text) <= rule.max_length:
                found.append(Highlight(text=text, importance=rule.importance, category=rule.category))
        return found

    def harvest(self, region: str) -> Tuple[Highlight, ...]:
        seen = set()
        highlights: List[Highlight] = []
        for rule in self.passes:
            for highlight in self._run_pass(region, rule):
                if highlight.text in seen:
                    continue
                seen.add(highlight.text)
                highlights.append(highlight)
                if len(highlights) >= self.settings.max_highlights:
                    logger.debug("Highlight cap reached", cap=self.settings.max_highlights)
                    return tuple(highlights)
        return tuple(highlights)
