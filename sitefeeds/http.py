from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests

from . import config


# ============================
# HTTP SESSION
# - requests.Session is not thread-safe; detail fetches run on a thread pool,
#   so every thread gets its own session with the same headers
# ============================

HEADERS = {
    "User-Agent": config.UA,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Connection": "keep-alive",
}

_local = threading.local()


def thread_session() -> requests.Session:
    sess = getattr(_local, "session", None)
    if sess is None:
        sess = requests.Session()
        sess.headers.update(HEADERS)
        _local.session = sess
    return sess


@dataclass
class FetchResult:
    url: str
    ok: bool
    text: Optional[str] = None
    status: Optional[int] = None
    error: Optional[str] = None


# signature shared by polite_get and the fakes used in tests
Getter = Callable[..., FetchResult]


def is_http_url(url: str) -> bool:
    return url.lower().startswith(("http://", "https://"))


def _decode(r: requests.Response) -> str:
    # Chinese sites often omit the charset; requests then assumes ISO-8859-1
    if r.encoding is None or r.encoding.lower() == "iso-8859-1":
        r.encoding = r.apparent_encoding or "utf-8"
    return r.text


def polite_get(
    url: str,
    referer: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> FetchResult:
    """
    GET a page and report the outcome instead of raising.
    Non-2xx statuses, transport errors and empty bodies all come back as ok=False.
    """
    if not is_http_url(url):
        return FetchResult(url=url, ok=False, error="not an http(s) url")

    sess = session or thread_session()
    headers: Dict[str, str] = {}
    if referer:
        headers["Referer"] = referer

    try:
        if config.REQUEST_DELAY_SEC:
            time.sleep(config.REQUEST_DELAY_SEC)
        r = sess.get(
            url,
            headers=headers,
            timeout=(config.CONNECT_TIMEOUT, config.HTTP_TIMEOUT),
            allow_redirects=True,
        )
    except requests.RequestException as e:
        print(f"[warn] GET failed: {url} :: {e}", flush=True)
        return FetchResult(url=url, ok=False, error=str(e))

    if r.status_code >= 400:
        print(f"[warn] GET {r.status_code}: {url}", flush=True)
        return FetchResult(url=url, ok=False, status=r.status_code, error=f"http {r.status_code}")

    text = _decode(r)
    if not (text or "").strip():
        return FetchResult(url=url, ok=False, status=r.status_code, error="empty body")

    return FetchResult(url=url, ok=True, text=text, status=r.status_code)
