import pytest

from sitefeeds.links import classify, is_detail_fetchable, resolve
from sitefeeds.models import LinkClass


def test_relative_link_is_same_site_and_resolved():
    cls = classify("/a/b.htm", "example.org")
    assert cls is LinkClass.SAME_SITE
    assert resolve("/a/b.htm", "http://example.org", cls) == "http://example.org/a/b.htm"


def test_unrecognised_host_is_unknown_and_left_alone():
    link = "https://mp.weixin.qq.com/s/AbCdEf"
    cls = classify(link, "example.org")
    assert cls is LinkClass.UNKNOWN
    assert resolve(link, "http://example.org", cls) == link
    assert not is_detail_fetchable(cls)


def test_absolute_link_on_own_host_is_same_site():
    assert classify("http://example.org/x.htm", "example.org") is LinkClass.SAME_SITE
    assert classify("https://EXAMPLE.org/x.htm", "example.org") is LinkClass.SAME_SITE


def test_known_host_is_known_external():
    cls = classify("http://caai.cn/a.html", "www.caai.cn", {"caai.cn"})
    assert cls is LinkClass.KNOWN_EXTERNAL
    assert is_detail_fetchable(cls)


def test_subdomain_is_not_own_host():
    assert classify("http://news.example.org/x", "example.org") is LinkClass.UNKNOWN


@pytest.mark.parametrize("link", ["mailto:office@example.org", "javascript:void(0)", "ftp://example.org/f"])
def test_non_http_schemes_are_unknown(link):
    assert classify(link, "example.org") is LinkClass.UNKNOWN


def test_protocol_relative_links_use_their_host():
    assert classify("//example.org/x", "example.org") is LinkClass.SAME_SITE
    assert classify("//cdn.other.net/x", "example.org") is LinkClass.UNKNOWN


def test_parent_segments_and_fragments():
    cls = classify("../info/1025/7001.htm#top", "cic.tju.edu.cn")
    assert resolve("../info/1025/7001.htm#top", "http://cic.tju.edu.cn/", cls) == "http://cic.tju.edu.cn/info/1025/7001.htm"


def test_protocol_relative_known_host_is_made_absolute():
    cls = classify("//caai.cn/x.html", "www.caai.cn", {"caai.cn"})
    assert cls is LinkClass.KNOWN_EXTERNAL
    assert resolve("//caai.cn/x.html", "http://www.caai.cn", cls) == "http://caai.cn/x.html"
    assert resolve("//caai.cn/x.html", "https://www.caai.cn", cls) == "https://caai.cn/x.html"


def test_protocol_relative_unknown_host_is_left_alone():
    cls = classify("//cdn.other.net/x", "example.org")
    assert resolve("//cdn.other.net/x", "http://example.org", cls) == "//cdn.other.net/x"
