"""Pydantic models for video diagnosis and LLM structured output."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from viewscout.models.keyword import KeywordReport, TopVideoModel
from viewscout.models.scores import DualCoreResult, RevenueEstimate, ScriptAnalysis


class VideoMetadataModel(BaseModel):
    video_id: str
    title: str
    thumbnail_url: str = ""
    channel_name: str = ""
    published_at: str = ""
    duration_minutes: float = Field(ge=0)
    view_count: int = Field(ge=0)
    category: str = "vlog"


class VideoDiagnosis(BaseModel):
    model_config = ConfigDict(frozen=True)

    metadata: VideoMetadataModel
    transcript: str
    extracted_keyword: str
    script_analysis: ScriptAnalysis
    trend_analysis: KeywordReport
    dual_core_analysis: DualCoreResult
    revenue_estimate: RevenueEstimate
    viral_velocity: float = Field(ge=0)
    is_placeholder_transcript: bool = False
    is_placeholder_metadata: bool = False
    top_videos: list[TopVideoModel] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# LLM Structured Output models
# ---------------------------------------------------------------------------


class ScoredAspect(BaseModel):
    score: int = Field(ge=0, le=100, description="0-100 score; be strict")
    reason: str = Field(description="Why this score was given")


class AIQualityAnalysis(BaseModel):
    """LLM audit of a video's title, script and keyword relevance."""

    metadata: ScoredAspect = Field(description="Title / thumbnail click potential")
    script: ScoredAspect = Field(description="Hook strength in the first 60s and logical structure")
    relevance: ScoredAspect = Field(description="Whether the content delivers on the keyword")
    feedback: list[str] = Field(description="Actionable advice, written in Korean")
    summary: str = Field(description="Three-sentence summary of the video, in Korean")


class ExtractedKeyword(BaseModel):
    keyword: str = Field(description="The single core search keyword, short compound noun, no quotes")


IdeaType = Literal["Viral Hit", "Search-Optimized", "Creative Twist"]


class VideoIdea(BaseModel):
    type: IdeaType
    title: str = Field(description="Natural, catchy Korean title")
    reason: str = Field(description="Why this title works, in Korean")


class VideoIdeaList(BaseModel):
    ideas: list[VideoIdea] = Field(description="Exactly three ideas, one per type", min_length=1)
