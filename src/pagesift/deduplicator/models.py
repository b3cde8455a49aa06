"""
Data models and algorithm selectors for the similarity engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

_E = TypeVar("_E", bound="_AlgorithmEnum")


class UnsupportedAlgorithmError(ValueError):
    """Raised when a similarity or fingerprint algorithm name is not recognized."""

    def __init__(self, kind: str, algorithm: Any, supported: Tuple[str, ...]):
        self.kind = kind
        self.algorithm = algorithm
        self.supported = supported
        super().__init__(f"Unsupported {kind} algorithm: {algorithm!r}. Supported: {', '.join(supported)}")


class _AlgorithmEnum(str, Enum):
    @classmethod
    def parse(cls: Type[_E], value: Union[str, _E]) -> _E:
        """Resolve a selector; unknown names raise UnsupportedAlgorithmError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(cls._kind(), value, tuple(m.value for m in cls))

    @classmethod
    def _kind(cls) -> str:
        return "similarity"


class SimilarityAlgorithm(_AlgorithmEnum):
    COSINE = "cosine"
    JACCARD = "jaccard"
    LEVENSHTEIN = "levenshtein"
    # Keyword-overlap proxy, not an embedding distance.
    FINGERPRINT = "fingerprint"


class FingerprintAlgorithm(_AlgorithmEnum):
    SIMHASH = "simhash"
    MINHASH = "minhash"
    SHINGLE = "shingle"

    @classmethod
    def _kind(cls) -> str:
        return "fingerprint"


@dataclass(slots=True, frozen=True)
class Document:
    """A member of a collection to be clustered."""

    id: str
    content: str
    title: Optional[str] = None


@dataclass(slots=True, frozen=True)
class SimilarityScore:
    """Similarity of two texts. ``details`` is diagnostic only."""

    value: float
    algorithm: SimilarityAlgorithm
    details: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not (0.0 <= self.value <= 1.0):
            raise ValueError("Similarity must be between 0.0 and 1.0")


@dataclass(slots=True, frozen=True)
class DuplicateGroup:
    """Documents grouped with their representative (always the first member)."""

    members: Tuple[str, ...]
    representative: str
    similarity: float


@dataclass(slots=True, frozen=True)
class DuplicateReport:
    groups: Tuple[DuplicateGroup, ...]
    unique_documents: Tuple[str, ...]
    total_processed: int
    threshold: float
    algorithm: SimilarityAlgorithm

    @property
    def duplicate_count(self) -> int:
        """Documents that belong to a group but are not its representative."""
        return sum(len(g.members) - 1 for g in self.groups)


@dataclass(slots=True, frozen=True)
class Fingerprint:
    """Fixed-width, deterministic content digest."""

    value: str
    algorithm: FingerprintAlgorithm
    content_length: int


@dataclass(slots=True, frozen=True)
class BatchMatch:
    index: int
    similarity: float
    is_match: bool


@dataclass(slots=True, frozen=True)
class SeenCheck:
    """Outcome of checking content against previously seen fingerprints."""

    is_duplicate: bool
    fingerprint: Fingerprint
    first_seen_id: Optional[str] = None
