"""
Shared fixtures for pagesift tests.
"""

from typing import Any, Dict, Optional, Tuple

import pytest

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Collaborator Fakes
# ============================================================================


class DictStore:
    """Dict-backed key/value store with a controllable clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self.puts = []

    def get(self, key: str) -> Optional[Any]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self.entries[key]
            return None
        return value

    def put(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        self.puts.append((key, value, ttl))
        self.entries[key] = (value, None if ttl is None else self.now + ttl)

    def delete(self, key: str) -> bool:
        return self.entries.pop(key, None) is not None


@pytest.fixture
def memory_store() -> DictStore:
    return DictStore()


# ============================================================================
# Sample Documents
# ============================================================================


@pytest.fixture
def article_html() -> str:
    """A realistic news page with boilerplate around an <article>."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="utf-8">
        <meta property="og:title" content="City Council Approves New Bike Lanes">
        <title>City Council Approves New Bike Lanes | Daily Gazette</title>
        <script>window.dataLayer = [{"page": "article"}];</script>
        <style>.banner { display: none; }</style>
    </head>
    <body>
        <nav class="site-nav"><ul><li>Home</li><li>News</li><li>Sports</li></ul></nav>
        <div class="ad-banner">Buy one get one free on all mattresses this weekend only</div>
        <article class="story">
            <h1>City Council Approves New Bike Lanes</h1>
            <p>The city council voted on Tuesday to approve <strong>twelve miles of protected bike lanes</strong>
               across the downtown core, ending a debate that lasted nearly two years.</p>
            <h2>What changes for drivers</h2>
            <p>Parking on Main Street will move to the outer edge of the lane &amp; several
               intersections will get new signal timing.</p>
            <blockquote>We listened to residents and this plan reflects what they asked for.</blockquote>
            <ul>
                <li>Construction begins in the spring</li>
                <li>Work is expected to finish by autumn</li>
            </ul>
            <aside class="related">Related: Bus routes to change in March</aside>
        </article>
        <footer>Copyright Daily Gazette. All rights reserved.</footer>
    </body>
    </html>
    """


@pytest.fixture
def minimal_article_html() -> str:
    return (
        "<html><body><article><h1>T</h1><p>Hello world, this is a test paragraph that is "
        "sufficiently long to pass the minimum extraction threshold for content.</p>"
        "</article></body></html>"
    )
