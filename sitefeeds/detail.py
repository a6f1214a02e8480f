from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import List, Optional

from bs4 import BeautifulSoup

from .cache import CacheGate, NullCache
from .dates import try_normalize
from .errors import DetailFetchError
from .http import Getter, polite_get
from .links import is_detail_fetchable
from .models import DetailSelectors, Entry


# ============================
# DETAIL PAGE EXTRACTION
# ============================

@dataclass
class DetailResult:
    entry: Entry
    error: Optional[DetailFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def enrich_from_html(entry: Entry, html: str, selectors: DetailSelectors, utc_offset_hours: float = 8) -> Entry:
    """Return a copy of ``entry`` carrying the detail page's body and date."""
    soup = BeautifulSoup(html, "html.parser")
    out = replace(entry)

    # the date usually sits inside a metadata block that is stripped below
    if selectors.date:
        d = soup.select_one(selectors.date)
        if d is not None:
            dt = try_normalize(d.get_text(" ", strip=True), selectors.date_pattern, utc_offset_hours)
            if dt is not None:
                out.published_at = dt

    for sel in selectors.strip:
        for node in soup.select(sel):
            node.decompose()

    body = soup.select_one(selectors.body)
    if body is not None:
        out.description = body.decode_contents().strip() or None

    return out


def load_detail(
    entry: Entry,
    selectors: DetailSelectors,
    *,
    cache: Optional[CacheGate] = None,
    get: Getter = polite_get,
    utc_offset_hours: float = 8,
) -> DetailResult:
    if not is_detail_fetchable(entry.link_class):
        return DetailResult(entry)

    def populate() -> Entry:
        res = get(entry.link)
        if not res.ok or res.text is None:
            raise DetailFetchError(entry.link, res.error or "no body", res.status)
        return enrich_from_html(entry, res.text, selectors, utc_offset_hours)

    gate = cache if cache is not None else NullCache()
    try:
        enriched = gate.get_or_populate(entry.link, populate)
    except DetailFetchError as e:
        return DetailResult(entry, e)

    # the cached copy stays untouched; the caller's entry is updated in place
    entry.description = enriched.description
    if enriched.published_at is not None:
        entry.published_at = enriched.published_at
    return DetailResult(entry)


def fetch_detail(
    entry: Entry,
    selectors: DetailSelectors,
    *,
    cache: Optional[CacheGate] = None,
    get: Getter = polite_get,
    utc_offset_hours: float = 8,
) -> Entry:
    result = load_detail(entry, selectors, cache=cache, get=get, utc_offset_hours=utc_offset_hours)
    if not result.ok:
        print(f"[warn] detail skipped: {result.error}", flush=True)
    return result.entry


def fetch_details(
    entries: List[Entry],
    selectors: DetailSelectors,
    *,
    cache: Optional[CacheGate] = None,
    get: Getter = polite_get,
    utc_offset_hours: float = 8,
) -> List[Entry]:
    """
    Enrich every entry at once, one worker per entry.
    Results come back in listing order, not completion order.
    """
    if not entries:
        return []

    def one(e: Entry) -> Entry:
        return fetch_detail(e, selectors, cache=cache, get=get, utc_offset_hours=utc_offset_hours)

    with ThreadPoolExecutor(max_workers=len(entries)) as executor:
        out = list(executor.map(one, entries))

    enriched = sum(1 for e in out if e.description)
    print(f"[detail] enriched {enriched}/{len(out)}", flush=True)
    return out
