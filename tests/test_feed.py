from datetime import datetime, timedelta, timezone

import feedparser

from sitefeeds import config
from sitefeeds.feed import assemble, to_dict, to_rss
from sitefeeds.models import Entry, ListingRequest

CST = timezone(timedelta(hours=8))
REQ = ListingRequest("http://cic.tju.edu.cn/", "xwzx/xyxw.htm", referer="http://cic.tju.edu.cn/")


def sample_items():
    return [
        Entry(
            title="学部召开2024年工作会议",
            link="http://cic.tju.edu.cn/info/1025/7001.htm",
            published_at=datetime(2024, 3, 5, 14, 30, tzinfo=CST),
            description="<p>3月5日 & more</p>",
        ),
        Entry(title="公众号文章", link="https://mp.weixin.qq.com/s/AbCdEf"),
    ]


def test_request_url_joins_base_and_path():
    assert REQ.url == "http://cic.tju.edu.cn/xwzx/xyxw.htm"
    assert ListingRequest("http://www.caai.cn", "index.php?s=/x/45.html").url == "http://www.caai.cn/index.php?s=/x/45.html"


def test_unreachable_listing_gives_single_notice_item():
    payload = assemble(REQ, "天津大学智能与计算学部 - 学部新闻", None, fetch_failed=True)
    assert payload.link == REQ.url
    assert REQ.url in payload.description
    assert len(payload.items) == 1
    notice = payload.items[0]
    assert notice.link == config.ISSUES_URL
    assert config.ISSUES_URL in notice.description


def test_reachable_listing_has_no_description():
    items = sample_items()
    payload = assemble(REQ, "t", items, fetch_failed=False)
    assert payload.description is None
    assert payload.items == items


def test_to_dict_shape():
    d = to_dict(assemble(REQ, "t", sample_items(), fetch_failed=False))
    assert set(d) == {"title", "link", "description", "item"}
    first, second = d["item"]
    assert first["pubDate"] == "2024-03-05T06:30:00Z"
    assert first["description"] == "<p>3月5日 & more</p>"
    assert second == {"title": "公众号文章", "link": "https://mp.weixin.qq.com/s/AbCdEf"}


def test_rss_parses_back():
    payload = assemble(REQ, "天津大学智能与计算学部 - 学部新闻", sample_items(), fetch_failed=False)
    xml = to_rss(payload, self_url="https://example.org/tju-cic-news.xml")
    parsed = feedparser.parse(xml.encode("utf-8"))

    assert not parsed.bozo
    assert parsed.feed.title == "天津大学智能与计算学部 - 学部新闻"
    assert [e.title for e in parsed.entries] == [e.title for e in payload.items]
    assert tuple(parsed.entries[0].published_parsed)[:5] == (2024, 3, 5, 6, 30)
    assert "&lt;p&gt;3月5日 &amp; more&lt;/p&gt;" in xml


def test_fallback_rss_is_still_a_feed():
    payload = assemble(REQ, "t", None, fetch_failed=True)
    parsed = feedparser.parse(to_rss(payload).encode("utf-8"))
    assert not parsed.bozo
    assert len(parsed.entries) == 1
    assert parsed.entries[0].link == config.ISSUES_URL
