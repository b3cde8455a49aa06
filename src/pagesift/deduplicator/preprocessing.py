"""
Text preprocessing shared by the token-based similarity and fingerprint algorithms.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List, Optional

# \w is Unicode-aware, so Latin and CJK word characters survive.
_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def preprocess_text(text: str) -> str:
    """Lower-case, replace punctuation with spaces and collapse whitespace."""
    text = _PUNCTUATION.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> List[str]:
    return preprocess_text(text).split()


def extract_keywords(
    text: str,
    limit: int = 10,
    min_length: int = 3,
    stop_words: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Most frequent tokens of a text.

    Args:
        text: Raw text
        limit: Maximum number of keywords
        min_length: Shortest eligible token
        stop_words: Tokens never treated as keywords

    Returns:
        Up to ``limit`` tokens by descending frequency; ties keep first-seen order
    """
    excluded = set(stop_words or ())
    counts = Counter(t for t in tokenize(text) if len(t) >= min_length and t not in excluded)
    return [word for word, _ in counts.most_common(limit)]
