"""Pydantic models for scoring inputs and outputs."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class KeywordSignals(BaseModel):
    """Normalized demand / supply / performance signals for one keyword."""

    model_config = ConfigDict(frozen=True)

    monthly_search_volume: int = Field(ge=0)
    competitor_video_count_30d: int = Field(ge=0)
    top_video_average_views: float = Field(ge=0)
    small_channel_ratio: float = Field(ge=0.0, le=1.0)


class MarketAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    saturation_index: float = Field(ge=0)
    opportunity_score: int = Field(ge=0, le=100)
    is_blue_ocean: bool
    competition: Literal["Blue", "Red"]
    niche_score: int = Field(ge=0, le=100)
    monthly_volume: int = Field(ge=0)
    market_insight: str


class ContentBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: int = Field(ge=0, le=20)
    script: int = Field(ge=0, le=20)
    relevance: int = Field(ge=0, le=10)
    feedback: list[str] = Field(default_factory=list)
    summary: Optional[str] = None

    @property
    def total(self) -> int:
        return self.metadata + self.script + self.relevance


MatrixLabel = Literal["S", "A+", "A-", "B+", "B-", "C"]


class DualCoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic_score: int = Field(ge=0, le=50)
    content_score: int = Field(ge=0, le=50)
    total_score: int = Field(ge=0, le=100)
    matrix_label: MatrixLabel
    grade_reason: str
    market_insight: str
    breakdown: ContentBreakdown


class RevenueFactors(BaseModel):
    model_config = ConfigDict(frozen=True)

    rpm_range_used: str
    length_boost_applied: bool
    season_multiplier: float


class RevenueEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)
    currency: str = "KRW"
    factors: RevenueFactors


class ScriptAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    hook_score: int = Field(ge=0, le=100)
    structure_score: int = Field(ge=0, le=100)
    hook_feedback: list[str] = Field(default_factory=list)
    structure_feedback: list[str] = Field(default_factory=list)
