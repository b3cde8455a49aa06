"""
Protocols for pluggable HTML extraction strategies.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ExtractionResult


@runtime_checkable
class Extractor(Protocol):
    """Pluggable markup-to-ExtractionResult strategy."""

    name: str

    def extract(self, url: str, markup: str) -> ExtractionResult:
        """Extract content from an already fetched document.

        Args:
            url: Source address of the document
            markup: Raw HTML

        Returns:
            ExtractionResult; implementations degrade instead of raising
        """
        ...
