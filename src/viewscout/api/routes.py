"""FastAPI route handlers for the analytics API."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException

from viewscout.api.dependencies import get_services
from viewscout.api.schemas import (
    IdeasRequest,
    KeywordAnalysisRequest,
    RevenueRequest,
    VideoAnalysisRequest,
)
from viewscout.errors import InvalidInputError, VideoNotFoundError
from viewscout.models.keyword import KeywordReport, TrendingKeyword
from viewscout.models.scores import RevenueEstimate
from viewscout.models.video import VideoDiagnosis, VideoIdea
from viewscout.pipeline.discovery import fetch_trending_keywords, generate_video_ideas
from viewscout.pipeline.keyword_analysis import normalize_keyword
from viewscout.pipeline.services import AnalysisServices
from viewscout.scoring.revenue import estimate_revenue

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1")


@router.post("/analysis/keyword", response_model=KeywordReport)
async def analyze_keyword(
    request: KeywordAnalysisRequest, services: AnalysisServices = Depends(get_services)
):
    """Market analysis for a keyword (cached for the configured TTL)."""
    try:
        return await services.keywords.analyze(request.keyword)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/analysis/video", response_model=VideoDiagnosis)
async def analyze_video(
    request: VideoAnalysisRequest, services: AnalysisServices = Depends(get_services)
):
    """Dual-core diagnosis of a single YouTube video."""
    try:
        return await services.videos.diagnose(request.url)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except VideoNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception:
        logger.exception("api.video_analysis_failed", url=request.url)
        raise HTTPException(
            status_code=500,
            detail="Failed to analyze video. Please check the URL and try again.",
        )


@router.post("/analysis/revenue", response_model=RevenueEstimate)
async def estimate_video_revenue(request: RevenueRequest):
    return estimate_revenue(
        request.views, request.category, request.duration_minutes, request.upload_date
    )


@router.post("/ideas", response_model=list[VideoIdea])
async def video_ideas(request: IdeasRequest, services: AnalysisServices = Depends(get_services)):
    try:
        keyword = normalize_keyword(request.keyword)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return await generate_video_ideas(
        services.llm, keyword, request.related_keywords, request.top_video_titles
    )


@router.get("/trends", response_model=list[TrendingKeyword])
async def trending_keywords(services: AnalysisServices = Depends(get_services)):
    return await fetch_trending_keywords(services.config, services.http, services.youtube)
