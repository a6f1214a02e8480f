from __future__ import annotations

from typing import Optional


class SiteFeedsError(Exception):
    """Base class for everything raised inside sitefeeds."""


class FetchError(SiteFeedsError):
    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"{url} :: {reason}")


class ListingFetchError(FetchError):
    """The listing page itself could not be fetched."""


class DetailFetchError(FetchError):
    """A single detail page could not be fetched."""


class DateParseError(SiteFeedsError, ValueError):
    def __init__(self, raw: str, pattern: Optional[str]) -> None:
        self.raw = raw
        self.pattern = pattern
        super().__init__(f"cannot parse {raw!r} with pattern {pattern!r}")


class RouteNotFound(SiteFeedsError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown route: {self.name}"
