from __future__ import annotations

import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from .dates import try_normalize
from .links import classify, resolve
from .models import Entry, ListingSelectors


def clean_text(s: str) -> str:
    return re.sub(r"\s+", " ", (s or "").strip())


def extract(
    html: str,
    selectors: ListingSelectors,
    *,
    base_url: str,
    own_host: str,
    page_url: Optional[str] = None,
    known_hosts: Iterable[str] = (),
    utc_offset_hours: float = 8,
) -> List[Entry]:
    """
    Turn a listing page into stub entries, one per ``selectors.item`` match,
    in document order. Sites list newest first but nothing here sorts.
    Relative links are resolved against ``base_url``.
    """
    where = page_url or base_url
    soup = BeautifulSoup(html or "", "html.parser")
    known = tuple(known_hosts)

    entries: List[Entry] = []
    for node in soup.select(selectors.item):
        a = node.select_one(selectors.title)
        if a is None:
            print(f"[warn] listing item without title node: {where}", flush=True)
            continue

        title = clean_text(a.get_text(" ", strip=True))
        href = (a.get(selectors.link_attr) or "").strip()
        if not title or not href:
            print(f"[warn] listing item missing title/link: {where} :: {title!r} {href!r}", flush=True)
            continue

        link_class = classify(href, own_host, known)
        entry = Entry(
            title=title,
            link=resolve(href, base_url, link_class),
            link_class=link_class,
        )

        if selectors.date:
            d = node.select_one(selectors.date)
            if d is not None:
                entry.published_at = try_normalize(d.get_text(" ", strip=True), selectors.date_pattern, utc_offset_hours)

        entries.append(entry)

    print(f"[list] {len(entries)} entries from {where}", flush=True)
    return entries
