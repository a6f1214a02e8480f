from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup

from .cache import CacheGate
from .detail import fetch_details
from .errors import ListingFetchError
from .feed import assemble
from .http import Getter, polite_get
from .listing import clean_text, extract
from .models import FeedPayload
from .render import render_description
from .routes import SiteRoute, get_route


def page_title(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    t = soup.find("title")
    return clean_text(t.get_text(" ", strip=True)) if t else ""


def feed_title(route: SiteRoute, subtitle: Optional[str]) -> str:
    return f"{route.title} - {subtitle}" if subtitle else route.title


def handle(
    route_name: str,
    type_: Optional[str] = None,
    *,
    cache: Optional[CacheGate] = None,
    get: Getter = polite_get,
) -> FeedPayload:
    """
    Run one route: listing page -> stubs -> detail pages -> payload.

    Upstream failures never escape. A dead listing page yields the fallback
    payload; dead detail pages leave their items without a description.
    Only an unknown route name raises (RouteNotFound).
    """
    route = get_route(route_name)
    request, subtitle = route.request_for(type_)
    print(f"[try] {route.name} :: {type_ or route.default_type} :: {request.url}", flush=True)

    title = feed_title(route, subtitle or (type_ or route.default_type))

    res = get(request.url, referer=request.referer)
    if not res.ok or res.text is None:
        err = ListingFetchError(request.url, res.error or "no body", res.status)
        print(f"[skip] listing unreachable, emitting fallback feed: {err}", flush=True)
        return assemble(request, title, None, fetch_failed=True)

    if subtitle is None:
        title = feed_title(route, page_title(res.text) or (type_ or route.default_type))

    stubs = extract(
        res.text,
        route.listing,
        base_url=route.base_url,
        own_host=route.own_host,
        page_url=request.url,
        known_hosts=route.known_hosts,
        utc_offset_hours=route.utc_offset_hours,
    )
    items = fetch_details(
        stubs,
        route.detail,
        cache=cache,
        get=get,
        utc_offset_hours=route.utc_offset_hours,
    )

    if route.wrap_description:
        for e in items:
            e.description = render_description(e.description)

    print(f"[ok] {route.name}: {len(items)} items", flush=True)
    return assemble(request, title, items, fetch_failed=False)
