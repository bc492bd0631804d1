import httpx
from fakes import TRENDS_RSS

from viewscout.tools.trends import fetch_google_trends_kr, is_korean_friendly, parse_traffic, parse_trends_rss


def test_parse_traffic():
    assert parse_traffic("20,000+") == 20000
    assert parse_traffic(None) == 0


def test_foreign_scripts_are_filtered():
    assert is_korean_friendly("아이폰 16 iPhone")
    assert not is_korean_friendly("Москва")
    assert not is_korean_friendly("ข่าว")


def test_parse_rss():
    results = parse_trends_rss(TRENDS_RSS)
    assert [r.keyword for r in results] == ["손흥민", "아이폰 16"]
    assert results[0].traffic == 20000
    assert results[0].published_at == "Mon, 01 Apr 2024 10:00:00 +0900"
    assert results[1].traffic == 0


async def test_fetch_uses_rss(make_settings, mock_http):
    http = mock_http(lambda r: httpx.Response(200, text=TRENDS_RSS))
    results = await fetch_google_trends_kr(make_settings(), http, limit=1)
    assert [r.keyword for r in results] == ["손흥민"]
