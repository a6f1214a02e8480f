from __future__ import annotations

from typing import Iterable
from urllib.parse import urldefrag, urljoin, urlparse

from .models import LinkClass


def scheme(url: str) -> str:
    try:
        return urlparse(url).scheme.lower()
    except ValueError:
        return ""


def host(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def canonical_url(url: str) -> str:
    url, _frag = urldefrag(url)
    return url.strip()


def classify(link: str, own_host: str, known_hosts: Iterable[str] = ()) -> LinkClass:
    """
    SAME_SITE: relative links and absolute links on ``own_host``.
    KNOWN_EXTERNAL: absolute links on one of ``known_hosts``; these share the
    article layout and can be detail-fetched.
    UNKNOWN: everything else, never detail-fetched.
    """
    link = (link or "").strip()
    s = scheme(link)
    if not s:
        # protocol-relative ("//host/path") still names a host
        if link.startswith("//"):
            return classify("http:" + link, own_host, known_hosts)
        return LinkClass.SAME_SITE
    if s not in ("http", "https"):
        return LinkClass.UNKNOWN

    h = host(link)
    if h == own_host.lower():
        return LinkClass.SAME_SITE
    if h in {k.lower() for k in known_hosts}:
        return LinkClass.KNOWN_EXTERNAL
    return LinkClass.UNKNOWN


def resolve(link: str, base_url: str, link_class: LinkClass) -> str:
    """SAME_SITE and KNOWN_EXTERNAL links come back absolute; UNKNOWN ones as found."""
    link = (link or "").strip()
    if link_class is LinkClass.UNKNOWN:
        return link
    # also turns protocol-relative "//host/path" into the base scheme
    return canonical_url(urljoin(base_url, link))


def is_detail_fetchable(link_class: LinkClass) -> bool:
    return link_class in (LinkClass.SAME_SITE, LinkClass.KNOWN_EXTERNAL)
