"""
pagesift Content Extraction Module - parser-free heuristic extractor.

Extraction runs as a set of ordered fallback chains over raw markup:
1. Title: og:title, twitter:title, <title>, first <h1>, JSON-LD headline/name
2. Region: article/main/section, then class/id content tokens, then <body>
3. Highlights: emphasis, marked spans, quotes, sub-headings, short lists
4. Text: structured region text, then paragraphs only, then all text
"""

from .heuristic_extractor import HeuristicExtractor, extract
from .highlights import HighlightHarvester, HighlightPass
from .models import ExtractionResult, Highlight, Importance
from .protocols import Extractor
from .region_selector import ContentRegion, ContentRegionSelector
from .text_normalizer import TextNormalizer
from .title_resolver import TitleResolver

__all__ = [
    "HeuristicExtractor",
    "extract",
    "Extractor",
    "ExtractionResult",
    "Highlight",
    "Importance",
    "TitleResolver",
    "ContentRegion",
    "ContentRegionSelector",
    "HighlightHarvester",
    "HighlightPass",
    "TextNormalizer",
]
