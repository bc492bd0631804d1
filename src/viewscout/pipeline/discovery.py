"""Topic discovery — realtime trending keywords and LLM video ideas."""

from __future__ import annotations

import httpx
import structlog

from viewscout.config import Settings
from viewscout.models.keyword import TrendingKeyword
from viewscout.models.video import VideoIdea
from viewscout.tools.llm import LLMClient, fallback_ideas
from viewscout.tools.trends import fetch_google_trends_kr
from viewscout.tools.youtube import YouTubeClient

logger = structlog.get_logger()

TRENDING_LIMIT = 10


async def fetch_trending_keywords(
    config: Settings,
    http: httpx.AsyncClient,
    youtube: YouTubeClient,
    limit: int = TRENDING_LIMIT,
) -> list[TrendingKeyword]:
    """Google Trends first, topped up with YouTube most-popular titles."""
    google = await fetch_google_trends_kr(config, http, limit=limit)

    keywords: list[TrendingKeyword] = []
    seen: set[str] = set()
    for item in google:
        if item.keyword.lower() in seen:
            continue
        seen.add(item.keyword.lower())
        keywords.append(
            TrendingKeyword(rank=len(keywords) + 1, keyword=item.keyword, traffic=item.traffic)
        )
        if len(keywords) >= limit:
            return keywords

    needed = limit - len(keywords)
    # fetch extra to absorb duplicates
    titles = (await youtube.fetch_trending_titles(needed + 5)).unwrap_or([])
    for title in titles:
        if len(keywords) >= limit:
            break
        if title.lower() in seen:
            continue
        seen.add(title.lower())
        keywords.append(TrendingKeyword(rank=len(keywords) + 1, keyword=title, source="youtube"))

    logger.info("discovery.trending_done", google=len(google), total=len(keywords))
    return keywords


async def generate_video_ideas(
    llm: LLMClient,
    keyword: str,
    related_keywords: list[str],
    top_video_titles: list[str],
) -> list[VideoIdea]:
    """Three video ideas for *keyword*; template ideas when the LLM is unavailable."""
    result = await llm.generate_ideas(keyword, related_keywords, top_video_titles)
    ideas = result.unwrap_or([])
    if not ideas:
        logger.warning("discovery.ideas_fallback", keyword=keyword)
        return fallback_ideas(keyword)
    return ideas
