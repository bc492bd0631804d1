"""Synthetic keyword report used when every demand/supply provider is down.

The generator is seeded from the keyword itself, so the same keyword always
produces the same report, dates included. Reports are flagged ``is_synthetic`` and are never
cached.
"""

from __future__ import annotations

import hashlib
import random
from datetime import date, timedelta
from urllib.parse import quote

from viewscout.models.keyword import KeywordReport, TopVideoModel
from viewscout.models.scores import KeywordSignals
from viewscout.scoring.market import analyze_market

# Keywords starting with these letters are simulated as crowded markets
_RED_OCEAN_INITIALS = frozenset("aisr")
TREND_MONTHS = 6
TOP_VIDEO_COUNT = 5
SMALL_CHANNEL_SUBSCRIBERS = 50_000

# Publish dates count back from here
SYNTHETIC_EPOCH = date(2025, 1, 1)


def seeded_rng(keyword: str) -> random.Random:
    seed = keyword.lower().strip()
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return random.Random(int.from_bytes(digest[:8], "big"))


def generate_synthetic_report(keyword: str) -> KeywordReport:
    seed = keyword.lower().strip()
    rng = seeded_rng(keyword)

    base_volume = rng.randint(1_000, 501_000)
    if seed[:1] in _RED_OCEAN_INITIALS:
        video_ratio = rng.uniform(0.2, 1.0)
    else:
        video_ratio = rng.uniform(0.001, 0.051)
    video_count = int(base_volume * video_ratio)
    avg_views = rng.randint(5_000, 1_005_000)

    trend = [int(base_volume * rng.uniform(0.8, 1.2)) for _ in range(TREND_MONTHS)]

    top_videos = []
    for i in range(TOP_VIDEO_COUNT):
        views = int(avg_views * (1.5 - rng.random()))
        days_ago = rng.randint(0, 364)
        top_videos.append(
            TopVideoModel(
                id=f"synthetic-video-{i}",
                title=f"{keyword} - Ultimate Guide {SYNTHETIC_EPOCH.year + i}",
                thumbnail=f"https://placehold.co/600x400/2a2a2a/FFF?text={quote(keyword)}+{i + 1}",
                channel_name=f"Channel {chr(65 + i)}",
                views=max(views, 1_000),
                published_at=(SYNTHETIC_EPOCH - timedelta(days=days_ago)).isoformat(),
                subscriber_count=rng.randint(1_000, 1_001_000),
            )
        )

    small = sum(1 for v in top_videos if v.subscriber_count < SMALL_CHANNEL_SUBSCRIBERS)
    signals = KeywordSignals(
        monthly_search_volume=base_volume,
        competitor_video_count_30d=video_count,
        top_video_average_views=float(avg_views),
        small_channel_ratio=small / len(top_videos),
    )
    market = analyze_market(signals)

    related = [
        f"{keyword} tips",
        f"{keyword} tutorial",
        f"how to {keyword}",
        f"best {keyword}",
        f"{keyword} review",
        f"{keyword} {SYNTHETIC_EPOCH.year}",
    ]

    return KeywordReport(
        keyword=keyword,
        search_volume=base_volume,
        video_count=video_count,
        monthly_video_count=video_count,
        avg_views=float(avg_views),
        saturation_index=market.saturation_index,
        small_channel_ratio=signals.small_channel_ratio,
        trend=trend,
        top_videos=top_videos,
        related_keywords=related,
        market=market,
        is_synthetic=True,
    )
