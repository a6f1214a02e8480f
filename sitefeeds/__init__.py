"""Listing + detail page scrapers that turn institutional sites into feeds."""

from .handler import handle
from .models import Entry, FeedPayload, LinkClass

__all__ = ["handle", "Entry", "FeedPayload", "LinkClass"]
