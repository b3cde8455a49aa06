"""
Check content against fingerprints of previously seen documents.

The index keeps nothing itself: fingerprints live in a caller-supplied
:class:`~pagesift.protocols.KeyValueStore`, and the caller decides how long
entries live.
"""

from __future__ import annotations

from typing import Optional

import structlog

from ..config.config import FingerprintSettings
from ..protocols import KeyValueStore
from .fingerprint import fingerprint
from .models import Fingerprint, FingerprintAlgorithm, SeenCheck

logger = structlog.get_logger(__name__)


class SeenContentIndex:
    """
    Exact-fingerprint duplicate check backed by an injected key/value store.

    Keys have the form ``<namespace>:<algorithm>:<digest>`` and map to the id
    of the first document seen with that fingerprint.
    """

    def __init__(
        self,
        store: KeyValueStore,
        algorithm: FingerprintAlgorithm | str = FingerprintAlgorithm.SIMHASH,
        namespace: str = "pagesift",
        settings: Optional[FingerprintSettings] = None,
    ) -> None:
        self.store = store
        self.algorithm = FingerprintAlgorithm.parse(algorithm)
        self.namespace = namespace
        self.settings = settings or FingerprintSettings()

    def key_for(self, fp: Fingerprint) -> str:
        return f"{self.namespace}:{fp.algorithm.value}:{fp.value}"

    def check(self, doc_id: str, content: str, ttl: Optional[int] = None) -> SeenCheck:
        """
        Report whether content was seen before, recording it if not.

        Args:
            doc_id: Id stored for first-seen content
            content: Plain text to fingerprint
            ttl: Expiry in seconds passed to the store, None for no expiry

        Returns:
            SeenCheck with the id of the first document that had this fingerprint
        """
        fp = fingerprint(content, self.algorithm, self.settings)
        key = self.key_for(fp)

        first_seen = self.store.get(key)
        if first_seen is not None:
            logger.debug("Duplicate content detected", doc_id=doc_id, first_seen_id=first_seen, key=key)
            return SeenCheck(is_duplicate=True, fingerprint=fp, first_seen_id=str(first_seen))

        self.store.put(key, doc_id, ttl)
        logger.debug("Content recorded", doc_id=doc_id, key=key)
        return SeenCheck(is_duplicate=False, fingerprint=fp, first_seen_id=doc_id)

    def forget(self, content: str) -> bool:
        """Remove the record for content. Returns True if one existed."""
        fp = fingerprint(content, self.algorithm, self.settings)
        return self.store.delete(self.key_for(fp))
