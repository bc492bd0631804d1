"""YouTube Data API v3 — async helper client.

Every public method returns a tagged result (Found / NotFound / ProviderError)
and never raises for network or payload problems.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import httpx
import structlog

from viewscout.config import Settings
from viewscout.models.result import Found, NotFound, ProviderError, ProviderResult

logger = structlog.get_logger()

PROVIDER = "youtube"

# Failures a provider call recovers from (network, status, malformed payload)
_FAILURES = (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError)


# ---------------------------------------------------------------------------
# Return types
# ---------------------------------------------------------------------------


@dataclass
class SearchHit:
    video_id: str
    title: str
    channel_id: str
    published_at: str


@dataclass
class SearchPage:
    results: list[SearchHit] = field(default_factory=list)
    total_results: int = 0


@dataclass
class VideoDetails:
    id: str
    title: str
    description: str
    thumbnail_url: str
    channel_title: str
    channel_id: str
    published_at: str
    view_count: int
    duration: str
    duration_minutes: float
    category_id: str


@dataclass
class ChannelStats:
    id: str
    subscriber_count: int
    video_count: int


@dataclass
class DailyCount:
    day: str
    value: int


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def parse_duration(duration: str) -> float:
    """Convert an ISO-8601 duration (``PT1H2M10S``) to minutes; 0 when unparsable."""
    match = _DURATION_RE.match(duration or "")
    if not match:
        return 0.0
    parts = {k: int(v) if v else 0 for k, v in match.groupdict().items()}
    return parts["days"] * 1440 + parts["hours"] * 60 + parts["minutes"] + parts["seconds"] / 60


def _to_int(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _best_thumbnail(thumbnails: dict) -> str:
    for size in ("high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return ""


def _parse_video(item: dict) -> VideoDetails:
    snippet = item["snippet"]
    duration = (item.get("contentDetails") or {}).get("duration") or ""
    return VideoDetails(
        id=item["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        thumbnail_url=_best_thumbnail(snippet.get("thumbnails") or {}),
        channel_title=snippet.get("channelTitle", ""),
        channel_id=snippet.get("channelId", ""),
        published_at=snippet.get("publishedAt", ""),
        view_count=_to_int((item.get("statistics") or {}).get("viewCount")),
        duration=duration,
        duration_minutes=parse_duration(duration),
        category_id=str(snippet.get("categoryId", "")),
    )


_TITLE_NOISE = (
    re.compile(r"\[.*?\]"),
    re.compile(r"【.*?】"),
    re.compile(r"\(.*?\)"),
)


def clean_trending_title(title: str) -> str:
    """Reduce a video title to a short keyword-like phrase."""
    cleaned = title
    for pattern in _TITLE_NOISE:
        cleaned = pattern.sub("", cleaned)
    cleaned = re.sub(r"[|｜·]", " ", cleaned).strip()
    short = re.split(r"\s*[-~:,]\s*", cleaned)[0].strip()
    return short[:30].strip() if len(short) > 2 else cleaned[:30].strip()


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class YouTubeClient:
    """Thin async wrapper over the YouTube Data API endpoints we need."""

    def __init__(self, config: Settings, http: httpx.AsyncClient):
        self._config = config
        self._http = http

    @property
    def enabled(self) -> bool:
        return self._config.youtube_enabled

    def _disabled(self) -> ProviderError:
        return ProviderError(PROVIDER, "YOUTUBE_API_KEY not configured")

    async def _get(self, endpoint: str, params: dict) -> dict:
        resp = await self._http.get(
            f"{self._config.youtube_base_url}/{endpoint}",
            params={**params, "key": self._config.youtube_api_key},
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"unexpected {endpoint} payload")
        return data

    async def search_videos(
        self, query: str, limit: int = 20, order: str = "relevance"
    ) -> ProviderResult[SearchPage]:
        """Search videos; ``total_results`` is YouTube's own estimate."""
        if not self.enabled:
            return self._disabled()
        try:
            data = await self._get(
                "search",
                {"part": "snippet", "q": query, "type": "video", "maxResults": limit, "order": order},
            )
            results = [
                SearchHit(
                    video_id=item["id"]["videoId"],
                    title=item["snippet"].get("title", ""),
                    channel_id=item["snippet"].get("channelId", ""),
                    published_at=item["snippet"].get("publishedAt", ""),
                )
                for item in data.get("items") or []
                if (item.get("id") or {}).get("videoId")
            ]
            total = _to_int((data.get("pageInfo") or {}).get("totalResults"))
            logger.info("youtube.search_done", query=query, order=order, hits=len(results), total=total)
            return Found(SearchPage(results=results, total_results=total))
        except _FAILURES as exc:
            logger.warning("youtube.search_failed", query=query, order=order, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

    async def get_videos_details(self, video_ids: list[str]) -> ProviderResult[list[VideoDetails]]:
        if not self.enabled:
            return self._disabled()
        unique_ids = list(dict.fromkeys(v for v in video_ids if v))
        if not unique_ids:
            return Found([])
        try:
            data = await self._get(
                "videos",
                {"part": "snippet,contentDetails,statistics", "id": ",".join(unique_ids)},
            )
            return Found([_parse_video(item) for item in data.get("items") or []])
        except _FAILURES as exc:
            logger.warning("youtube.videos_failed", ids=unique_ids, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

    async def get_video_details(self, video_id: str) -> ProviderResult[VideoDetails]:
        result = await self.get_videos_details([video_id])
        if not isinstance(result, Found):
            return result
        if not result.value:
            return NotFound(f"video {video_id}")
        return Found(result.value[0])

    async def get_channels_details(
        self, channel_ids: list[str]
    ) -> ProviderResult[dict[str, ChannelStats]]:
        if not self.enabled:
            return self._disabled()
        unique_ids = list(dict.fromkeys(c for c in channel_ids if c))
        if not unique_ids:
            return Found({})
        try:
            data = await self._get("channels", {"part": "statistics", "id": ",".join(unique_ids)})
            channels = {}
            for item in data.get("items") or []:
                stats = item.get("statistics") or {}
                channels[item["id"]] = ChannelStats(
                    id=item["id"],
                    subscriber_count=_to_int(stats.get("subscriberCount")),
                    video_count=_to_int(stats.get("videoCount")),
                )
            return Found(channels)
        except _FAILURES as exc:
            logger.warning("youtube.channels_failed", ids=unique_ids, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

    async def fetch_video_count(
        self, query: str, published_after: str, published_before: str
    ) -> ProviderResult[int]:
        """Estimated number of videos for *query* published inside the window."""
        if not self.enabled:
            return self._disabled()
        try:
            data = await self._get(
                "search",
                {
                    "part": "id",
                    "q": query,
                    "type": "video",
                    "publishedAfter": published_after,
                    "publishedBefore": published_before,
                    "maxResults": 1,
                },
            )
            return Found(_to_int((data.get("pageInfo") or {}).get("totalResults")))
        except _FAILURES as exc:
            logger.warning("youtube.count_failed", query=query, error=str(exc))
            return ProviderError(PROVIDER, str(exc))

    async def fetch_recent_count(
        self, query: str, days: int = 30, now: datetime | None = None
    ) -> ProviderResult[int]:
        now = now or datetime.now(timezone.utc)
        return await self.fetch_video_count(query, _iso(now - timedelta(days=days)), _iso(now))

    async def fetch_monthly_trend(
        self, query: str, months: int = 6, now: datetime | None = None
    ) -> list[int]:
        """Upload counts per calendar month, oldest first. Failed months count as 0."""
        now = now or datetime.now(timezone.utc)
        windows = []
        for i in range(months):
            offset = months - 1 - i
            year, month0 = divmod(now.year * 12 + (now.month - 1) - offset, 12)
            start = datetime(year, month0 + 1, 1, tzinfo=timezone.utc)
            next_year, next_month0 = divmod(year * 12 + month0 + 1, 12)
            end = datetime(next_year, next_month0 + 1, 1, tzinfo=timezone.utc)
            windows.append((_iso(start), _iso(end)))

        results = await asyncio.gather(
            *[self.fetch_video_count(query, start, end) for start, end in windows]
        )
        return [r.unwrap_or(0) for r in results]

    async def fetch_last_7_days_volume(
        self, query: str, now: datetime | None = None
    ) -> list[DailyCount]:
        """Uploads per 24h block for the last week, oldest first (7 quota units)."""
        now = now or datetime.now(timezone.utc)

        def _label(i: int) -> str:
            if i == 0:
                return "오늘"
            if i == 1:
                return "어제"
            return f"{i}일 전"

        results = await asyncio.gather(
            *[
                self.fetch_video_count(
                    query, _iso(now - timedelta(days=i + 1)), _iso(now - timedelta(days=i))
                )
                for i in range(7)
            ]
        )
        daily = [DailyCount(day=_label(i), value=r.unwrap_or(0)) for i, r in enumerate(results)]
        return list(reversed(daily))

    async def fetch_trending_titles(self, count: int, region: str = "KR") -> ProviderResult[list[str]]:
        """Most-popular videos in *region*, titles reduced to keyword-like phrases."""
        if not self.enabled:
            return self._disabled()
        try:
            data = await self._get(
                "videos",
                {"part": "snippet", "chart": "mostPopular", "regionCode": region, "maxResults": count, "hl": "ko"},
            )
            titles = [clean_trending_title(item["snippet"]["title"]) for item in data.get("items") or []]
            return Found([t for t in titles if t])
        except _FAILURES as exc:
            logger.warning("youtube.trending_failed", region=region, error=str(exc))
            return ProviderError(PROVIDER, str(exc))
