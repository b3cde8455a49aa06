"""
Content fingerprints for fast approximate matching and index keys.

- simhash: 64-bit locality-sensitive signature over word tokens
- minhash: per-permutation minimum hashes of the distinct tokens (datasketch)
- shingle: minimum hash over character n-grams

Every digest is a pure function of the content: no randomness, no process
state, so identical content always yields an identical digest.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, Optional

import numpy as np  # type: ignore[import-not-found]
import structlog
from datasketch import MinHash  # type: ignore[import-not-found]

from ..config.config import FingerprintSettings
from .models import Fingerprint, FingerprintAlgorithm
from .preprocessing import preprocess_text, tokenize

logger = structlog.get_logger(__name__)

SIMHASH_BITS = 64
_HASH_WIDTH = 16  # hex characters in a 64-bit value
_MINHASH_SLOT = 8  # hex characters per 32-bit MinHash value


def hash64(token: str) -> int:
    """Stable 64-bit hash of a token (first 8 bytes of SHA-1)."""
    return int.from_bytes(hashlib.sha1(token.encode("utf-8")).digest()[:8], "big")


def simhash(content: str) -> str:
    """
    64-bit SimHash.

    Each token occurrence votes +1 or -1 on every bit position according to
    that bit of its hash; a bit is set when its total is >= 0.
    """
    tokens = tokenize(content)
    weights = np.zeros(SIMHASH_BITS, dtype=np.int64)
    if tokens:
        hashes = np.array([hash64(t) for t in tokens], dtype=np.uint64)
        positions = np.arange(SIMHASH_BITS, dtype=np.uint64)
        bits = ((hashes[:, None] >> positions) & np.uint64(1)).astype(np.int64)
        weights = (2 * bits - 1).sum(axis=0)

    value = 0
    for i in range(SIMHASH_BITS):
        if weights[i] >= 0:
            value |= 1 << i
    return f"{value:0{_HASH_WIDTH}x}"


def minhash(content: str, num_perm: int = 128, seed: int = 1, digest_width: int = 32) -> str:
    """
    MinHash signature over the distinct tokens, truncated to ``digest_width`` hex characters.

    Empty content keeps datasketch's initial maximum values.
    """
    signature = MinHash(num_perm=num_perm, seed=seed)
    for token in sorted(set(tokenize(content))):
        signature.update(token.encode("utf-8"))

    digest = "".join(f"{int(v):0{_MINHASH_SLOT}x}" for v in signature.hashvalues)
    return digest[:digest_width]


def shingle_hash(content: str, shingle_size: int = 3) -> str:
    """Minimum 64-bit hash over the character shingles of the preprocessed text."""
    text = preprocess_text(content)
    if not text:
        return "f" * _HASH_WIDTH

    if len(text) < shingle_size:
        shingles = {text}
    else:
        shingles = {text[i : i + shingle_size] for i in range(len(text) - shingle_size + 1)}
    return f"{min(hash64(s) for s in shingles):0{_HASH_WIDTH}x}"


def hamming_distance(value1: str, value2: str) -> int:
    """Differing bits between two hex digests of equal width."""
    if len(value1) != len(value2):
        raise ValueError("Digests must have the same width")
    return bin(int(value1, 16) ^ int(value2, 16)).count("1")


_Generator = Callable[[str, FingerprintSettings], str]

GENERATORS: Dict[FingerprintAlgorithm, _Generator] = {
    FingerprintAlgorithm.SIMHASH: lambda content, settings: simhash(content),
    FingerprintAlgorithm.MINHASH: lambda content, settings: minhash(
        content,
        num_perm=settings.minhash_num_perm,
        seed=settings.minhash_seed,
        digest_width=settings.minhash_digest_width,
    ),
    FingerprintAlgorithm.SHINGLE: lambda content, settings: shingle_hash(content, settings.shingle_size),
}


def fingerprint(
    content: str,
    algorithm: FingerprintAlgorithm | str = FingerprintAlgorithm.SIMHASH,
    settings: Optional[FingerprintSettings] = None,
) -> Fingerprint:
    """
    Compute a content fingerprint.

    Args:
        content: Plain text
        algorithm: simhash, minhash or shingle

    Returns:
        Fingerprint with a fixed-width hex value

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not recognized
    """
    settings = settings or FingerprintSettings()
    selected = FingerprintAlgorithm.parse(algorithm)
    value = GENERATORS[selected](content, settings)
    logger.debug("Generated fingerprint", algorithm=selected.value, content_length=len(content))
    return Fingerprint(value=value, algorithm=selected, content_length=len(content))


def estimate_similarity(first: Fingerprint, second: Fingerprint) -> float:
    """
    Approximate similarity of two fingerprints, for pre-filtering before full scoring.

    simhash: share of equal bits. minhash: share of equal 32-bit slots.
    shingle: 1.0 when the digests are equal, else 0.0.
    """
    if first.algorithm != second.algorithm:
        raise ValueError(
            f"Cannot compare {first.algorithm.value} fingerprint with {second.algorithm.value} fingerprint"
        )

    if first.algorithm is FingerprintAlgorithm.SIMHASH:
        bits = len(first.value) * 4
        return 1.0 - hamming_distance(first.value, second.value) / bits
    if first.algorithm is FingerprintAlgorithm.MINHASH:
        if len(first.value) != len(second.value):
            raise ValueError("Digests must have the same width")
        slots = range(0, len(first.value), _MINHASH_SLOT)
        if not slots:
            return 1.0
        equal = sum(
            first.value[i : i + _MINHASH_SLOT] == second.value[i : i + _MINHASH_SLOT] for i in slots
        )
        return equal / len(slots)
    return 1.0 if first.value == second.value else 0.0
