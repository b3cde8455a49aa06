"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Importance(str, Enum):
    """Importance tier of a highlight."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(slots=True, frozen=True)
class Highlight:
    """A short fragment judged salient by its markup."""

    text: str
    importance: Importance
    category: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "importance": self.importance.value, "category": self.category}


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Result of HTML content extraction."""

    url: str
    title: str
    content: str
    highlights: tuple[Highlight, ...]
    word_count: int

    def __post_init__(self) -> None:
        """Validate the result."""
        if not self.title:
            raise ValueError("title must not be empty")
        if self.content is None:
            raise ValueError("content must not be None")
        if self.word_count < 0:
            raise ValueError("word_count must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        """Plain data for summarization and persistence layers."""
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "highlights": [h.to_dict() for h in self.highlights],
            "word_count": self.word_count,
        }
