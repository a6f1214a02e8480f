from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional, Tuple

from sitefeeds import config
from sitefeeds.cache import MemoryCache
from sitefeeds.feed import to_dict, to_rss
from sitefeeds.handler import handle
from sitefeeds.models import FeedPayload
from sitefeeds.routes import ROUTES, get_route


# ============================
# CONFIG
# ============================

OUT_DIR = config.OUT_DIR


# ============================
# HELPERS
# ============================

def ensure_dir(p: str) -> None:
    os.makedirs(p, exist_ok=True)


def route_slug(name: str) -> str:
    return name.strip("/").replace("/", "-")


def planned_feeds(route_name: Optional[str] = None, type_: Optional[str] = None) -> List[Tuple[str, Optional[str]]]:
    """
    (route, type) pairs to build. Every named type of every route by default;
    templated routes only build their default id unless one is given.
    """
    if route_name:
        route = get_route(route_name)
        if type_:
            return [(route.name, type_)]
        names = list(route.types) or [route.default_type]
        return [(route.name, t) for t in names]

    out: List[Tuple[str, Optional[str]]] = []
    for route in ROUTES.values():
        names = list(route.types) or [route.default_type]
        out.extend((route.name, t) for t in names)
    return out


def write_feed(out_dir: str, route_name: str, type_: str, payload: FeedPayload) -> Tuple[str, str]:
    ensure_dir(out_dir)
    stem = os.path.join(out_dir, f"{route_slug(route_name)}-{type_}")
    json_path = stem + ".json"
    xml_path = stem + ".xml"

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(to_dict(payload), f, ensure_ascii=False, indent=2)

    with open(xml_path, "w", encoding="utf-8") as f:
        f.write(to_rss(payload))

    return json_path, xml_path


# ============================
# BUILD
# ============================

def build(
    route_name: Optional[str] = None,
    type_: Optional[str] = None,
    out_dir: str = OUT_DIR,
    stdout: bool = False,
) -> int:
    # one cache per run: the same article listed under two types is fetched once
    cache = MemoryCache()
    written = 0

    for name, t in planned_feeds(route_name, type_):
        print(f"\n[route] {name} :: {t}", flush=True)
        payload = handle(name, t, cache=cache)

        if stdout:
            json.dump(to_dict(payload), sys.stdout, ensure_ascii=False, indent=2)
            sys.stdout.write("\n")
            continue

        json_path, xml_path = write_feed(out_dir, name, t or get_route(name).default_type, payload)
        written += 1
        print(f"[ok] wrote {json_path}, {xml_path} ({len(payload.items)} items)", flush=True)

    if not stdout:
        print(f"\n[ok] {written} feeds written to {out_dir}", flush=True)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Scrape the configured sites into JSON + RSS feeds.")
    ap.add_argument("--route", help=f"route name ({', '.join(ROUTES)}); default: all")
    ap.add_argument("--type", dest="type_", help="listing type or category id; default: every named type")
    ap.add_argument("--out", default=OUT_DIR, help=f"output directory (default: {OUT_DIR})")
    ap.add_argument("--stdout", action="store_true", help="print JSON payloads instead of writing files")
    args = ap.parse_args(argv)

    if args.type_ and not args.route:
        ap.error("--type needs --route")

    if args.route and args.route.strip("/") not in ROUTES:
        ap.error(f"unknown route: {args.route}")

    return build(route_name=args.route, type_=args.type_, out_dir=args.out, stdout=args.stdout)


if __name__ == "__main__":
    sys.exit(main())
