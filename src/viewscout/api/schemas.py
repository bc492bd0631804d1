"""Request schemas for the FastAPI endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class KeywordAnalysisRequest(BaseModel):
    keyword: str


class VideoAnalysisRequest(BaseModel):
    url: str


class RevenueRequest(BaseModel):
    views: float = Field(ge=0)
    category: str = "default"
    duration_minutes: float = Field(ge=0)
    upload_date: Optional[str] = Field(default=None, description="ISO date, e.g. 2024-12-15")


class IdeasRequest(BaseModel):
    keyword: str
    related_keywords: list[str] = Field(default_factory=list)
    top_video_titles: list[str] = Field(default_factory=list)
