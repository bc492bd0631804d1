"""Revenue estimation and viral velocity."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from viewscout.models.scores import RevenueEstimate, RevenueFactors

# RPM bands in KRW per 1000 views
RPM_RANGES_KRW: dict[str, tuple[int, int]] = {
    "finance": (15_000, 35_000),
    "tech": (6_000, 12_000),
    "vlog": (1_500, 4_000),
    "entertainment": (1_500, 4_000),
    "news": (1_000, 2_500),
    "shorts": (10, 30),
    "default": (2_000, 5_000),
}

SHORTS_MAX_MINUTES = 1.0
LONG_FORM_MINUTES = 8.0
LONG_FORM_MULTIPLIER = 1.8

# upload month -> multiplier
SEASON_MULTIPLIERS: dict[int, float] = {12: 1.3, 1: 0.7, 2: 0.7}


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; ``None`` when unparsable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def rpm_range(category: str) -> tuple[int, int]:
    key = (category or "").lower()
    if key in RPM_RANGES_KRW:
        return RPM_RANGES_KRW[key]
    if "vlog" in key:
        return RPM_RANGES_KRW["vlog"]
    return RPM_RANGES_KRW["default"]


def season_multiplier(upload_date: str | None) -> float:
    parsed = parse_timestamp(upload_date)
    if parsed is None:
        return 1.0
    return SEASON_MULTIPLIERS.get(parsed.month, 1.0)


def estimate_revenue(
    views: float,
    category: str,
    duration_minutes: float,
    upload_date: str | None = None,
) -> RevenueEstimate:
    """Estimate the revenue band (KRW) a video earns from *views*.

    Shorts (<1 minute) use their own tiny RPM band with no multipliers.
    Regular videos get a category RPM band, a 1.8x boost at 8+ minutes
    (mid-roll ads) and a seasonal multiplier from the upload month.
    """
    is_shorts = duration_minutes < SHORTS_MAX_MINUTES

    length_mult = 1.0
    season_mult = 1.0
    if is_shorts:
        rpm_min, rpm_max = RPM_RANGES_KRW["shorts"]
    else:
        rpm_min, rpm_max = rpm_range(category)
        if duration_minutes >= LONG_FORM_MINUTES:
            length_mult = LONG_FORM_MULTIPLIER
        season_mult = season_multiplier(upload_date)

    views = max(0.0, views)

    def _calc(rpm: int) -> int:
        return math.floor((views / 1000) * rpm * length_mult * season_mult)

    return RevenueEstimate(
        min=_calc(rpm_min),
        max=_calc(rpm_max),
        currency="KRW",
        factors=RevenueFactors(
            rpm_range_used=f"{rpm_min:,} ~ {rpm_max:,}",
            length_boost_applied=length_mult > 1.0,
            season_multiplier=season_mult,
        ),
    )


def calculate_viral_velocity(views: float, hours_since_upload: float) -> float:
    """views / hours^1.5, with uploads younger than an hour counted as one hour."""
    hours = max(1.0, hours_since_upload)
    return views / math.pow(hours, 1.5)


def hours_since(published_at: str | None, now: datetime | None = None) -> float:
    parsed = parse_timestamp(published_at)
    if parsed is None:
        return 0.0
    now = now or datetime.now(timezone.utc)
    return max(0.0, (now - parsed).total_seconds() / 3600)
