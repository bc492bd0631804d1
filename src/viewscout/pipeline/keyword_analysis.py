"""Keyword flow — demand, supply and competitor signals → cached KeywordReport."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import structlog
from pydantic import ValidationError

from viewscout.errors import InvalidInputError
from viewscout.memory.keyword_cache import KeywordCache
from viewscout.models.keyword import DailyCountModel, KeywordReport, TopVideoModel
from viewscout.models.result import Found
from viewscout.models.scores import KeywordSignals
from viewscout.pipeline.synthetic import generate_synthetic_report
from viewscout.scoring.market import analyze_market
from viewscout.tools.naver import NaverKeywordClient
from viewscout.tools.youtube import SearchHit, SearchPage, YouTubeClient

logger = structlog.get_logger()

SEARCH_PAGE_SIZE = 10
TOP_VIDEO_SAMPLE = 6
RECENT_WINDOW_DAYS = 30
MAX_RELATED_KEYWORDS = 10

# Without Naver data, demand is estimated from YouTube's result count
VOLUME_PER_RESULT = 10

# Used when no competitor video details could be fetched
DEFAULT_TOP_AVG_VIEWS = 10_000.0
DEFAULT_SMALL_CHANNEL_RATIO = 0.3

# A channel is "small" below this many subscribers or below 10% of the #1 video's channel
SMALL_CHANNEL_SUBSCRIBERS = 50_000
SMALL_CHANNEL_LEADER_FRACTION = 0.1


@dataclass
class CompetitorLandscape:
    avg_views: float = DEFAULT_TOP_AVG_VIEWS
    small_channel_ratio: float = DEFAULT_SMALL_CHANNEL_RATIO
    top_videos: list[TopVideoModel] = field(default_factory=list)


def normalize_keyword(keyword: str | None) -> str:
    cleaned = " ".join((keyword or "").split())
    if not cleaned:
        raise InvalidInputError("keyword must not be empty")
    return cleaned


class KeywordAnalyzer:
    """Runs the keyword flow: cache → providers (concurrently) → scoring → cache."""

    def __init__(self, youtube: YouTubeClient, naver: NaverKeywordClient, cache: KeywordCache):
        self._youtube = youtube
        self._naver = naver
        self._cache = cache

    async def analyze(self, keyword: str) -> KeywordReport:
        keyword = normalize_keyword(keyword)

        cached = await self._cache.get(keyword)
        if cached is not None:
            try:
                report = KeywordReport.model_validate(cached)
                logger.info("keyword_analysis.cache_hit", keyword=keyword)
                return report
            except ValidationError:
                logger.warning("keyword_analysis.cache_invalid", keyword=keyword)

        logger.info("keyword_analysis.cache_miss", keyword=keyword)
        try:
            report = await self._fetch(keyword)
        except Exception:
            logger.exception("keyword_analysis.failed", keyword=keyword)
            return generate_synthetic_report(keyword)

        if not report.is_synthetic:
            await self._cache.set(keyword, report.model_dump(mode="json"))
        return report

    async def _fetch(self, keyword: str) -> KeywordReport:
        # ── Demand + supply in parallel ────────────────────────────────
        demand, supply = await asyncio.gather(
            self._naver.get_keyword_volume(keyword),
            self._youtube.search_videos(keyword, SEARCH_PAGE_SIZE, "relevance"),
        )
        volume = demand.value if isinstance(demand, Found) else None
        supply_page = supply.unwrap_or(SearchPage())

        if volume is None and supply_page.total_results == 0:
            logger.warning(
                "keyword_analysis.providers_unavailable",
                keyword=keyword,
                demand=type(demand).__name__,
                supply=type(supply).__name__,
            )
            return generate_synthetic_report(keyword)

        search_volume = volume.total if volume else supply_page.total_results * VOLUME_PER_RESULT

        # ── Performance + recent supply in parallel ────────────────────
        top_hits, recent_count, trend, last_7_days = await asyncio.gather(
            self._youtube.search_videos(keyword, SEARCH_PAGE_SIZE, "viewCount"),
            self._youtube.fetch_recent_count(keyword, RECENT_WINDOW_DAYS),
            self._youtube.fetch_monthly_trend(keyword),
            self._youtube.fetch_last_7_days_volume(keyword),
        )
        hits = top_hits.unwrap_or(SearchPage()).results or supply_page.results
        landscape = await self.competitor_landscape(hits[:TOP_VIDEO_SAMPLE])

        monthly_video_count = recent_count.unwrap_or(supply_page.total_results)

        signals = KeywordSignals(
            monthly_search_volume=search_volume,
            competitor_video_count_30d=monthly_video_count,
            top_video_average_views=landscape.avg_views,
            small_channel_ratio=landscape.small_channel_ratio,
        )
        market = analyze_market(signals)

        related = [r.keyword for r in volume.related] if volume else []

        logger.info(
            "keyword_analysis.done",
            keyword=keyword,
            search_volume=search_volume,
            monthly_video_count=monthly_video_count,
            saturation=round(market.saturation_index, 4),
            opportunity=market.opportunity_score,
        )

        return KeywordReport(
            keyword=keyword,
            search_volume=search_volume,
            pc_volume=volume.pc if volume else 0,
            mobile_volume=volume.mobile if volume else 0,
            video_count=supply_page.total_results,
            monthly_video_count=monthly_video_count,
            avg_views=landscape.avg_views,
            saturation_index=market.saturation_index,
            small_channel_ratio=landscape.small_channel_ratio,
            trend=trend,
            last_7_days=[DailyCountModel(day=d.day, value=d.value) for d in last_7_days],
            top_videos=landscape.top_videos,
            related_keywords=related[:MAX_RELATED_KEYWORDS],
            market=market,
        )

    async def competitor_landscape(self, hits: list[SearchHit]) -> CompetitorLandscape:
        """Average views and small-channel ratio across the given top videos."""
        if not hits:
            return CompetitorLandscape()

        details = await asyncio.gather(*[self._youtube.get_video_details(h.video_id) for h in hits])
        videos = [d.value for d in details if isinstance(d, Found)]
        if not videos:
            return CompetitorLandscape()

        channels = (
            await self._youtube.get_channels_details([v.channel_id for v in videos])
        ).unwrap_or({})

        leader = channels.get(videos[0].channel_id)
        leader_subs = leader.subscriber_count if leader else 0

        small = 0
        for video in videos:
            channel = channels.get(video.channel_id)
            if channel is None:
                continue
            subs = channel.subscriber_count
            if subs < SMALL_CHANNEL_SUBSCRIBERS or (
                leader_subs > 0 and subs < leader_subs * SMALL_CHANNEL_LEADER_FRACTION
            ):
                small += 1

        top_videos = [
            TopVideoModel(
                id=v.id,
                title=v.title,
                thumbnail=v.thumbnail_url,
                channel_name=v.channel_title,
                views=v.view_count,
                published_at=v.published_at,
                subscriber_count=channels[v.channel_id].subscriber_count if v.channel_id in channels else 0,
            )
            for v in videos
        ]

        return CompetitorLandscape(
            avg_views=sum(v.view_count for v in videos) / len(videos),
            small_channel_ratio=small / len(videos),
            top_videos=top_videos,
        )
