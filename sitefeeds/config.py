from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    """Return an integer from the environment or ``default`` on failure."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[warn] invalid {name}={raw!r}; falling back to {default}", flush=True)
        return default


# ============================
# CONFIG
# ============================

OUT_DIR = os.getenv("SITEFEEDS_OUT_DIR", "docs/feeds")

HTTP_TIMEOUT = _env_int("HTTP_TIMEOUT", 25)
CONNECT_TIMEOUT = _env_int("CONNECT_TIMEOUT", 10)
REQUEST_DELAY_SEC = _env_int("REQUEST_DELAY_MS", 0) / 1000.0

# detail pages are cached per link for this long
CACHE_TTL_SEC = _env_int("CACHE_TTL_SEC", 3600)

UA = "sitefeeds/1.0 (+https://github.com/DIYgod/RSSHub)"

# where readers are sent when a listing page cannot be fetched
ISSUES_URL = "https://github.com/DIYgod/RSSHub/issues"

# both shipped sites publish local times without a zone marker
DEFAULT_UTC_OFFSET_HOURS = 8
