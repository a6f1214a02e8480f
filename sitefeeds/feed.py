from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from html import escape
from typing import Any, Dict, List, Optional

from . import config
from .models import Entry, FeedPayload, LinkClass, ListingRequest


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_z(dt: datetime) -> str:
    dt = dt.astimezone(timezone.utc).replace(microsecond=0)
    return dt.isoformat().replace("+00:00", "Z")


# ============================
# ASSEMBLY
# ============================

def unreachable_notice(issues_url: str = config.ISSUES_URL) -> Entry:
    return Entry(
        title="提示信息",
        link=issues_url,
        link_class=LinkClass.UNKNOWN,
        description=f"<h2>请到<a href={issues_url}>此处</a>提交Issue</h2>",
    )


def assemble(
    request: ListingRequest,
    title: str,
    items: Optional[List[Entry]],
    fetch_failed: bool,
) -> FeedPayload:
    """
    Build the final payload. When the listing page could not be fetched the
    feed still comes out valid: one notice item pointing at the issue tracker
    and a description naming the dead URL.
    """
    if fetch_failed or items is None:
        return FeedPayload(
            title=title,
            link=request.url,
            description="链接失效" + request.url,
            items=[unreachable_notice()],
        )
    return FeedPayload(title=title, link=request.url, description=None, items=list(items))


# ============================
# RENDERING
# ============================

def entry_to_dict(e: Entry) -> Dict[str, Any]:
    d: Dict[str, Any] = {"title": e.title, "link": e.link}
    if e.published_at is not None:
        d["pubDate"] = iso_z(e.published_at)
    if e.description is not None:
        d["description"] = e.description
    return d


def to_dict(payload: FeedPayload) -> Dict[str, Any]:
    return {
        "title": payload.title,
        "link": payload.link,
        "description": payload.description,
        "item": [entry_to_dict(e) for e in payload.items],
    }


def to_rss(payload: FeedPayload, *, self_url: Optional[str] = None, now: Optional[datetime] = None) -> str:
    built = format_datetime((now or utc_now()).astimezone(timezone.utc), usegmt=True)
    channel_desc = payload.description or payload.title

    parts: List[str] = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">',
        "<channel>",
        f"  <title>{escape(payload.title)}</title>",
        f"  <link>{escape(payload.link)}</link>",
        f"  <description>{escape(channel_desc)}</description>",
        f"  <lastBuildDate>{built}</lastBuildDate>",
        "  <generator>sitefeeds</generator>",
    ]
    if self_url:
        parts.append(f'  <atom:link href="{escape(self_url)}" rel="self" type="application/rss+xml" />')

    for e in payload.items:
        parts.append("  <item>")
        parts.append(f"    <title>{escape(e.title)}</title>")
        parts.append(f"    <link>{escape(e.link)}</link>")
        parts.append(f'    <guid isPermaLink="false">{escape(e.link)}</guid>')
        if e.published_at is not None:
            parts.append(f"    <pubDate>{format_datetime(e.published_at)}</pubDate>")
        if e.description:
            parts.append(f"    <description>{escape(e.description)}</description>")
        parts.append("  </item>")

    parts.append("</channel>")
    parts.append("</rss>")
    return "\n".join(parts) + "\n"
