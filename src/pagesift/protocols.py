"""
Contracts for collaborators injected into pagesift.

The core never owns a concrete store. Anything that caches, indexes or
remembers content across calls does so through the :class:`KeyValueStore`
capability supplied by the host application (Redis, Workers KV, a dict in
tests, ...).
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal key/value capability with per-entry expiry."""

    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when absent or expired."""
        ...

    def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store ``value`` under ``key``; ``ttl`` is in seconds, None means no expiry."""
        ...

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if something was deleted."""
        ...
