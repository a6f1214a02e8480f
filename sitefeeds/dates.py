from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from dateutil import parser as dtparser

from .errors import DateParseError


# ============================
# DATE PATTERNS
# - day.js style tokens: YYYY MM M DD D HH H mm ss
# - everything else in a pattern is literal text
# ============================

TOKEN_RE = re.compile(r"YYYY|MM|M|DD|D|HH|H|mm|ss")

TOKEN_GROUPS: Dict[str, str] = {
    "YYYY": r"(?P<year>\d{4})",
    "MM": r"(?P<month>\d{1,2})",
    "M": r"(?P<month>\d{1,2})",
    "DD": r"(?P<day>\d{1,2})",
    "D": r"(?P<day>\d{1,2})",
    "HH": r"(?P<hour>\d{1,2})",
    "H": r"(?P<hour>\d{1,2})",
    "mm": r"(?P<minute>\d{1,2})",
    "ss": r"(?P<second>\d{2})",
}

_compiled: Dict[str, re.Pattern] = {}


def compile_pattern(pattern: str) -> re.Pattern:
    rx = _compiled.get(pattern)
    if rx is not None:
        return rx

    parts = []
    pos = 0
    for m in TOKEN_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos:m.start()]))
        parts.append(TOKEN_GROUPS[m.group(0)])
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))

    rx = re.compile("".join(parts))
    _compiled[pattern] = rx
    return rx


def fixed_offset(hours: float) -> timezone:
    return timezone(timedelta(hours=hours))


def normalize(raw: str, pattern: Optional[str], utc_offset_hours: float) -> datetime:
    """
    Parse a site-local date string and pin it to UTC+utc_offset_hours.

    With a pattern the first match inside ``raw`` is used, so label text around
    the date is fine. Without one, dateutil's fuzzy parser is used. A parsed
    value that already carries a zone keeps it.
    """
    text = (raw or "").strip()
    if not text:
        raise DateParseError(raw, pattern)

    tz = fixed_offset(utc_offset_hours)

    if pattern is None:
        try:
            dt = dtparser.parse(text, fuzzy=True)
        except (ValueError, OverflowError) as e:
            raise DateParseError(raw, pattern) from e
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=tz)
        return dt

    m = compile_pattern(pattern).search(text)
    if not m:
        raise DateParseError(raw, pattern)

    fields = m.groupdict()
    try:
        return datetime(
            int(fields["year"]),
            int(fields.get("month") or 1),
            int(fields.get("day") or 1),
            int(fields.get("hour") or 0),
            int(fields.get("minute") or 0),
            int(fields.get("second") or 0),
            tzinfo=tz,
        )
    except (KeyError, ValueError) as e:
        # no year token, or out-of-range values like month 13
        raise DateParseError(raw, pattern) from e


def try_normalize(raw: str, pattern: Optional[str], utc_offset_hours: float) -> Optional[datetime]:
    try:
        return normalize(raw, pattern, utc_offset_hours)
    except DateParseError as e:
        print(f"[warn] date skipped: {e}", flush=True)
        return None
