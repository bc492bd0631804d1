"""Pydantic models for keyword analysis reports."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from viewscout.models.scores import MarketAnalysis


class TopVideoModel(BaseModel):
    id: str
    title: str
    thumbnail: str = ""
    channel_name: str = ""
    views: int = Field(ge=0)
    published_at: str = ""
    subscriber_count: int = Field(default=0, ge=0)


class DailyCountModel(BaseModel):
    day: str
    value: int = Field(ge=0)


class KeywordReport(BaseModel):
    """Everything the dashboard needs for a single keyword."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    search_volume: int = Field(ge=0)
    pc_volume: int = Field(default=0, ge=0)
    mobile_volume: int = Field(default=0, ge=0)
    video_count: int = Field(ge=0, description="Estimated total results for the keyword")
    monthly_video_count: int = Field(ge=0, description="Videos published in the last 30 days")
    avg_views: float = Field(ge=0)
    saturation_index: float = Field(ge=0)
    small_channel_ratio: float = Field(ge=0.0, le=1.0)
    trend: list[int] = Field(default_factory=list, description="Monthly upload counts, oldest first")
    last_7_days: list[DailyCountModel] = Field(default_factory=list)
    top_videos: list[TopVideoModel] = Field(default_factory=list)
    related_keywords: list[str] = Field(default_factory=list)
    market: MarketAnalysis
    is_synthetic: bool = False


class TrendingKeyword(BaseModel):
    rank: int = Field(ge=1)
    keyword: str
    traffic: int = Field(default=0, ge=0)
    source: Literal["google_trends", "youtube"] = "google_trends"
