"""
Parser-free HTML content extractor.

Combines title resolution, content region selection, highlight harvesting
and text normalization. Extraction is total: malformed or hostile markup
degrades the result instead of raising.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from ..config.config import ExtractionSettings
from .highlights import HighlightHarvester
from .markup import clean_markup
from .models import ExtractionResult
from .protocols import Extractor
from .region_selector import ContentRegionSelector
from .text_normalizer import TextNormalizer
from .title_resolver import TitleResolver

logger = structlog.get_logger(__name__)


class HeuristicExtractor(Extractor):
    """Extract title, readable text and highlights with layered heuristics."""

    name = "heuristic"

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        self.settings = settings or ExtractionSettings()
        self.title_resolver = TitleResolver(self.settings)
        self.region_selector = ContentRegionSelector(self.settings)
        self.harvester = HighlightHarvester(self.settings)
        self.normalizer = TextNormalizer(self.settings)

    def extract(self, url: str, markup: Any) -> ExtractionResult:
        """Extract content from already fetched markup.

        Args:
            url: Source address, carried through to the result
            markup: Raw HTML; None or non-string input is treated as empty

        Returns:
            ExtractionResult, never None
        """
        if not isinstance(markup, str):
            markup = ""

        try:
            return self._extract(url, markup)
        except Exception as e:
            logger.warning(
                "Heuristic extraction failed",
                event_type="extractor_failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._placeholder(url)

    def _extract(self, url: str, markup: str) -> ExtractionResult:
        title = self.title_resolver.resolve(markup)

        region = self.region_selector.select(clean_markup(markup))
        highlights = self.harvester.harvest(region.markup)
        content = self.normalizer.normalize(region.markup)

        logger.debug(
            "Extraction completed",
            url=url,
            selector=region.selector,
            text_length=len(content),
            highlights=len(highlights),
        )

        return ExtractionResult(
            url=url,
            title=title,
            content=content,
            highlights=highlights,
            word_count=len(content.split()),
        )

    def _placeholder(self, url: str) -> ExtractionResult:
        content = self.settings.placeholder_content
        return ExtractionResult(
            url=url,
            title=self.settings.unknown_title,
            content=content,
            highlights=(),
            word_count=len(content.split()),
        )


def extract(url: str, markup: Any, settings: Optional[ExtractionSettings] = None) -> ExtractionResult:
    """
    Convenience function for one-off extraction.

    Args:
        url: Source address of the document
        markup: Raw HTML

    Returns:
        ExtractionResult
    """
    return HeuristicExtractor(settings).extract(url, markup)
