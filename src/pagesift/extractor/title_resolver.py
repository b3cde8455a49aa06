"""
Title resolution.

Each strategy yields candidates in document order, and strategies are tried
in priority order. The first candidate whose decoded text fits the length
window wins:

1. Open Graph ``og:title``
2. Twitter Card ``twitter:title``
3. ``<title>``
4. first ``<h1>``
5. ``headline`` / ``name`` in JSON-LD blocks
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence, Tuple

import structlog

from ..config.config import ExtractionSettings
from .markup import clean_markup, collapse_whitespace, decode_entities, iter_elements, strip_tags

logger = structlog.get_logger(__name__)

TitleStrategy = Callable[[str], Iterable[str]]

_LD_JSON = re.compile(
    r"<script\b[^>]*type\s*=\s*[\"']?application/ld\+json[\"']?[^>]*>(.*?)</script\s*>",
    re.IGNORECASE | re.DOTALL,
)


def _meta_content(markup: str, key: str) -> Iterator[str]:
    for element in iter_elements(clean_markup(markup), {"meta"}):
        attrs = element.attrs
        if key in (attrs.get("property", "").strip().lower(), attrs.get("name", "").strip().lower()):
            content = attrs.get("content")
            if content is not None:
                yield content


def open_graph_title(markup: str) -> Iterator[str]:
    return _meta_content(markup, "og:title")


def twitter_card_title(markup: str) -> Iterator[str]:
    return _meta_content(markup, "twitter:title")


def document_title(markup: str) -> Iterator[str]:
    for element in iter_elements(clean_markup(markup), {"title"}, limit=1):
        yield strip_tags(element.inner, " ")


def first_heading(markup: str) -> Iterator[str]:
    for element in iter_elements(clean_markup(markup), {"h1"}, limit=1):
        yield strip_tags(element.inner, " ")


def _walk_linked_data(node: Any) -> Iterator[dict]:
    if isinstance(node, list):
        for item in node:
            yield from _walk_linked_data(item)
    elif isinstance(node, dict):
        yield node
        graph = node.get("@graph")
        if graph is not None:
            yield from _walk_linked_data(graph)


def linked_data_title(markup: str) -> Iterator[str]:
    """Headlines and names from embedded JSON-LD. Unparseable blocks are skipped."""
    for match in _LD_JSON.finditer(markup):
        try:
            data = json.loads(match.group(1).strip())
        except (ValueError, RecursionError) as e:
            logger.debug("Skipping unparseable JSON-LD block", error=str(e))
            continue

        for node in _walk_linked_data(data):
            for key in ("headline", "name"):
                value = node.get(key)
                if isinstance(value, str) and value.strip():
                    yield value


DEFAULT_STRATEGIES: Tuple[Tuple[str, TitleStrategy], ...] = (
    ("og:title", open_graph_title),
    ("twitter:title", twitter_card_title),
    ("title", document_title),
    ("h1", first_heading),
    ("json-ld", linked_data_title),
)


class TitleResolver:
    """Resolve a document title through an ordered list of strategies."""

    def __init__(
        self,
        settings: Optional[ExtractionSettings] = None,
        strategies: Sequence[Tuple[str, TitleStrategy]] = DEFAULT_STRATEGIES,
    ) -> None:
        self.settings = settings or ExtractionSettings()
        self.strategies = tuple(strategies)

    def accept(self, candidate: Optional[str]) -> Optional[str]:
        """Return the cleaned candidate if its length is within (0, max_title_length]."""
        if candidate is None:
            return None
        cleaned = collapse_whitespace(decode_entities(candidate))
        if 0 < len(cleaned) <= self.settings.max_title_length:
            return cleaned
        return None

    def resolve(self, markup: str) -> str:
        for name, strategy in self.strategies:
            for candidate in strategy(markup):
                title = self.accept(candidate)
                if title is not None:
                    logger.debug("Resolved title", strategy=name, length=len(title))
                    return title
        return self.settings.unknown_title
