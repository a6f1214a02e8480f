import pathlib
import threading
from typing import Dict, List, Optional, Set

import pytest

from sitefeeds.http import FetchResult

PAGES = pathlib.Path(__file__).parent / "pages"


def load_page(name: str) -> str:
    return (PAGES / name).read_text(encoding="utf-8")


class FakeWeb:
    """Stands in for polite_get: serves canned pages and records every call."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, down: Optional[Set[str]] = None) -> None:
        self.pages = dict(pages or {})
        self.down = set(down or ())
        self.calls: List[str] = []
        self.referers: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def __call__(self, url: str, referer: Optional[str] = None) -> FetchResult:
        with self._lock:
            self.calls.append(url)
            self.referers[url] = referer
        if url in self.down:
            return FetchResult(url=url, ok=False, error="connection refused")
        if url not in self.pages:
            return FetchResult(url=url, ok=False, status=404, error="http 404")
        return FetchResult(url=url, ok=True, text=self.pages[url], status=200)

    def count(self, url: str) -> int:
        return self.calls.count(url)


@pytest.fixture
def fake_web():
    return FakeWeb()
