from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


class LinkClass(str, Enum):
    SAME_SITE = "same-site"
    KNOWN_EXTERNAL = "known-external"
    UNKNOWN = "unknown"


@dataclass
class Entry:
    title: str
    link: str
    link_class: LinkClass = LinkClass.SAME_SITE
    published_at: Optional[datetime] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ListingSelectors:
    item: str
    title: str
    link_attr: str = "href"
    date: Optional[str] = None
    date_pattern: Optional[str] = None


@dataclass(frozen=True)
class DetailSelectors:
    body: str
    date: Optional[str] = None
    date_pattern: Optional[str] = None
    # removed before the body is read (duplicate title/metadata blocks)
    strip: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ListingRequest:
    base_url: str
    path: str
    referer: Optional[str] = None

    @property
    def url(self) -> str:
        return self.base_url.rstrip("/") + "/" + self.path.lstrip("/")


@dataclass
class FeedPayload:
    title: str
    link: str
    description: Optional[str] = None
    items: List[Entry] = field(default_factory=list)
