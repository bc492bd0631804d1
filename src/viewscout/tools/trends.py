"""Google Trends — realtime trending searches in South Korea."""

from __future__ import annotations

import asyncio
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

import httpx
import structlog

from viewscout.config import Settings

logger = structlog.get_logger()

# Cyrillic, Vietnamese-extended Latin, Arabic and Thai titles are other markets' trends
_FOREIGN_SCRIPT = re.compile(r"[\u0400-\u04FF\u1E00-\u1EFF\u0600-\u06FF\u0E00-\u0E7F]")


@dataclass
class GoogleTrendsResult:
    keyword: str
    traffic: int = 0
    published_at: str = ""


def is_korean_friendly(text: str) -> bool:
    return not _FOREIGN_SCRIPT.search(text)


def parse_traffic(value: str | None) -> int:
    """``"20,000+"`` -> 20000."""
    digits = re.sub(r"[^0-9]", "", value or "")
    return int(digits) if digits else 0


def parse_trends_rss(xml_text: str) -> list[GoogleTrendsResult]:
    root = ET.fromstring(xml_text)
    results: list[GoogleTrendsResult] = []
    for item in root.iter("item"):
        title_el = item.find("title")
        if title_el is None or not title_el.text:
            continue
        keyword = title_el.text.strip()
        if not is_korean_friendly(keyword):
            continue

        traffic = 0
        for child in item:
            # ht:approx_traffic lives in the trends namespace
            if child.tag.endswith("approx_traffic"):
                traffic = parse_traffic(child.text)
        pub_el = item.find("pubDate")
        results.append(
            GoogleTrendsResult(
                keyword=keyword,
                traffic=traffic,
                published_at=(pub_el.text or "").strip() if pub_el is not None else "",
            )
        )
    return results


async def fetch_google_trends_kr(
    config: Settings, http: httpx.AsyncClient, limit: int = 10
) -> list[GoogleTrendsResult]:
    """Trending searches in South Korea, at most *limit*.

    The RSS feed is tried first; pytrends (blocking) runs in the default
    executor when the feed fails or is empty. Both failing yields ``[]``.
    """
    # RSS
    try:
        resp = await http.get(config.google_trends_rss_url)
        resp.raise_for_status()
        results = parse_trends_rss(resp.text)
        if results:
            logger.info("google_trends.rss_done", keyword_count=len(results))
            return results[:limit]
    except (httpx.HTTPError, ET.ParseError):
        logger.warning("google_trends.rss_failed", reason="Falling back to pytrends")

    # pytrends
    loop = asyncio.get_running_loop()

    def _fetch() -> list[str]:
        from pytrends.request import TrendReq  # lazy import — heavy module

        pytrends = TrendReq(hl="ko", tz=540)  # KST = UTC+9
        df = pytrends.trending_searches(pn="south_korea")
        return df[0].tolist()

    try:
        kw_list = await loop.run_in_executor(None, _fetch)
        results = [GoogleTrendsResult(keyword=str(kw)) for kw in kw_list if is_korean_friendly(str(kw))]
        logger.info("google_trends.pytrends_done", keyword_count=len(results))
        return results[:limit]
    except Exception:
        logger.exception("google_trends.failed")
        return []
