"""Market scoring — saturation, opportunity and the topic half of the dual-core score.

Breakpoints (0.05 / 5.0 saturation, 100k views, 10k searches) are product
calibration values and must not be re-derived.
"""

from __future__ import annotations

import math

from viewscout.models.scores import KeywordSignals, MarketAnalysis

ZERO_VOLUME_SATURATION = 999.0

# Saturation normalisation: at or below BEST maps to 0.0, at or above WORST to 1.0
SATURATION_BEST = 0.05
SATURATION_WORST = 5.0

VIEW_GAP_CEILING = 100_000
BLUE_OCEAN_THRESHOLD = 0.5

TOPIC_VOLUME_CEILING = 10_000
TOPIC_HALF_MAX = 25
TOPIC_MAX = 50

INSIGHT_NO_DATA = "데이터가 부족하여 분석할 수 없습니다."
INSIGHT_LOW_DEMAND = "⚠️ 사람들이 거의 찾지 않는 주제입니다. 검색량이 너무 적습니다."
INSIGHT_RED_OCEAN = "⚠️ 검색량에 비해 이미 발행된 영상이 너무 많습니다. (레드오션)"
INSIGHT_COMPETITIVE = "⚡ 경쟁이 다소 치열합니다. 차별화된 콘텐츠가 필수입니다."
INSIGHT_BLUE_OCEAN = "🎉 경쟁자가 거의 없는 완벽한 블루오션입니다! 지금 바로 진입하세요."
INSIGHT_MODERATE = "✅ 적절한 수준의 경쟁 강도입니다. 퀄리티로 승부할 수 있습니다."


def compute_saturation(volume: int, competitor_count: int) -> float:
    """Competing uploads per search.

    Zero demand returns ``ZERO_VOLUME_SATURATION``. The full zero-volume result
    (opportunity 0, not blue ocean) is ``zero_volume_analysis``, which
    ``analyze_market`` returns instead of scoring the sentinel.
    """
    if volume <= 0:
        return ZERO_VOLUME_SATURATION
    return competitor_count / max(volume, 1)


def normalize_saturation(saturation_index: float) -> float:
    if saturation_index <= SATURATION_BEST:
        return 0.0
    if saturation_index >= SATURATION_WORST:
        return 1.0
    return (saturation_index - SATURATION_BEST) / (SATURATION_WORST - SATURATION_BEST)


def compute_opportunity(saturation_index: float, top_avg_views: float) -> int:
    """Opportunity score (0-100): 60 points for low saturation, 40 for proven views."""
    c_norm = normalize_saturation(saturation_index)
    v_gap = min(1.0, max(0.0, top_avg_views) / VIEW_GAP_CEILING)
    score = math.floor(max(0.0, (1 - c_norm) * 60 + v_gap * 40))
    return min(100, score)


def market_insight(monthly_search_volume: int, saturation_index: float) -> str:
    if monthly_search_volume < 1000:
        return INSIGHT_LOW_DEMAND
    if saturation_index > 2.0:
        return INSIGHT_RED_OCEAN
    if saturation_index > 1.0:
        return INSIGHT_COMPETITIVE
    if saturation_index < 0.1:
        return INSIGHT_BLUE_OCEAN
    return INSIGHT_MODERATE


def zero_volume_analysis() -> MarketAnalysis:
    return MarketAnalysis(
        saturation_index=ZERO_VOLUME_SATURATION,
        opportunity_score=0,
        is_blue_ocean=False,
        competition="Red",
        niche_score=0,
        monthly_volume=0,
        market_insight=INSIGHT_NO_DATA,
    )


def analyze_market(signals: KeywordSignals) -> MarketAnalysis:
    """Turn raw keyword signals into a MarketAnalysis.

    ``niche_score`` rewards keywords where small channels already rank, i.e.
    ``(1 - big_channel_ratio) * 100`` with ``big = 1 - small``.
    """
    volume = signals.monthly_search_volume
    if volume == 0:
        return zero_volume_analysis()

    saturation = compute_saturation(volume, signals.competitor_video_count_30d)
    big_channel_ratio = 1.0 - signals.small_channel_ratio
    niche_score = max(0, min(100, math.floor((1 - big_channel_ratio) * 100)))
    is_blue = saturation < BLUE_OCEAN_THRESHOLD

    return MarketAnalysis(
        saturation_index=saturation,
        opportunity_score=compute_opportunity(saturation, signals.top_video_average_views),
        is_blue_ocean=is_blue,
        competition="Blue" if is_blue else "Red",
        niche_score=niche_score,
        monthly_volume=volume,
        market_insight=market_insight(volume, saturation),
    )


def compute_topic_score(market: MarketAnalysis) -> int:
    """Topic half of the dual-core score (0-50): demand plus lack of competition."""
    volume_points = min(market.monthly_volume / TOPIC_VOLUME_CEILING * TOPIC_HALF_MAX, TOPIC_HALF_MAX)

    sat = market.saturation_index
    if sat < 0.1:
        blue_points = float(TOPIC_HALF_MAX)
    elif sat > 2.0:
        blue_points = 0.0
    else:
        blue_points = TOPIC_HALF_MAX * (1 - sat / 2.0)

    return max(0, min(TOPIC_MAX, math.floor(volume_points + blue_points)))
