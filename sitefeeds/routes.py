from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from . import config
from .errors import RouteNotFound
from .models import DetailSelectors, ListingRequest, ListingSelectors


# ============================
# ROUTE CONFIG
# - One SiteRoute per site; the `type` parameter picks the listing page.
# - Named types map to fixed paths; a path_template route accepts any id.
# ============================

@dataclass(frozen=True)
class RouteType:
    subtitle: str
    path: str


@dataclass(frozen=True)
class SiteRoute:
    name: str
    title: str
    base_url: str
    own_host: str
    listing: ListingSelectors
    detail: DetailSelectors
    default_type: str
    types: Dict[str, RouteType] = field(default_factory=dict)
    path_template: Optional[str] = None
    known_hosts: FrozenSet[str] = frozenset()
    send_referer: bool = False
    wrap_description: bool = False
    utc_offset_hours: float = config.DEFAULT_UTC_OFFSET_HOURS

    def request_for(self, type_: Optional[str] = None) -> Tuple[ListingRequest, Optional[str]]:
        """
        Resolve the type parameter to a listing request and its subtitle.
        Templated routes render any id and have no fixed subtitle; named
        routes fall back to the default type for anything unrecognised.
        """
        key = (type_ or "").strip() or self.default_type
        referer = self.base_url if self.send_referer else None

        if self.path_template is not None:
            return ListingRequest(self.base_url, self.path_template.format(type=key), referer), None

        rt = self.types.get(key) or self.types[self.default_type]
        return ListingRequest(self.base_url, rt.path, referer), rt.subtitle


TJU_CIC = SiteRoute(
    name="tju/cic",
    title="天津大学智能与计算学部",
    base_url="http://cic.tju.edu.cn/",
    own_host="cic.tju.edu.cn",
    listing=ListingSelectors(item=".wenzi_list_ul > li", title="a"),
    detail=DetailSelectors(
        body=".con_news_body > div",
        date=".news_info > span",
        date_pattern="YYYY年MM月DD日 HH:mm",
        strip=(".news_tit", ".news_info"),
    ),
    default_type="news",
    types={
        "news": RouteType("学部新闻", "xwzx/xyxw.htm"),
        "notification": RouteType("通知公告", "xwzx/tzgg.htm"),
        "forum": RouteType("北洋智算论坛", "byzslt.htm"),
    },
    send_referer=True,
)

CAAI = SiteRoute(
    name="caai",
    title="中国人工智能学会",
    base_url="http://www.caai.cn",
    own_host="www.caai.cn",
    known_hosts=frozenset({"caai.cn"}),
    listing=ListingSelectors(
        item="div.article-list > ul > li",
        title="h3 a[href]",
        date="h4",
        date_pattern="YYYY-MM-DD",
    ),
    detail=DetailSelectors(body="div.article"),
    default_type="45",
    path_template="index.php?s=/home/article/index/id/{type}.html",
    wrap_description=True,
)

ROUTES: Dict[str, SiteRoute] = {r.name: r for r in (TJU_CIC, CAAI)}


def get_route(name: str) -> SiteRoute:
    key = (name or "").strip().strip("/")
    try:
        return ROUTES[key]
    except KeyError:
        raise RouteNotFound(name) from None
