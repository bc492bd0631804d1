"""Video flow: URL → metadata + transcript → keyword → dual-core grade."""

import math
from datetime import datetime, timezone

import pytest
from fakes import FakeLLM, FakeTranscripts, FakeYouTube, make_video

from viewscout.errors import InvalidInputError, VideoNotFoundError
from viewscout.models.result import Found, ProviderError
from viewscout.models.video import AIQualityAnalysis, ScoredAspect
from viewscout.pipeline.synthetic import generate_synthetic_report
from viewscout.pipeline.video_diagnostics import (
    DEFAULT_KEYWORD,
    PLACEHOLDER_TRANSCRIPT,
    VideoDiagnostician,
    extract_keyword_from_title,
    map_category,
)

VIDEO_ID = "dQw4w9WgXcQ"
URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"
TITLE = "[주식] 초보자를 위한 투자 방법!"
TRANSCRIPT = "주식 투자 손해 보지 않는 방법이 궁금하신가요? 첫째 분산 투자입니다."
NOW = datetime(2024, 12, 1, 4, tzinfo=timezone.utc)


class FakeKeywordAnalyzer:
    def __init__(self):
        self.keywords = []

    async def analyze(self, keyword):
        self.keywords.append(keyword)
        return generate_synthetic_report(keyword)


def _youtube(**overrides) -> FakeYouTube:
    video = make_video(VIDEO_ID, 1_000_000, "UC1", title=TITLE)
    return FakeYouTube(videos={VIDEO_ID: video}, **overrides)


def _diagnostician(youtube=None, transcript=None, llm=None, analyzer=None):
    return VideoDiagnostician(
        youtube or _youtube(),
        FakeTranscripts(transcript or Found(TRANSCRIPT)),
        llm or FakeLLM(),
        analyzer or FakeKeywordAnalyzer(),
        clock=lambda: NOW,
    )


class TestKeywordFromTitle:
    @pytest.mark.parametrize(
        "title,keyword",
        [
            ("[주식] 초보자 가이드", "주식"),
            ("(리뷰) 아이폰 16", "리뷰"),
            ("a 캠핑 브이로그", "캠핑"),
            ("[ ] 캠핑", "캠핑"),
            ("", DEFAULT_KEYWORD),
        ],
    )
    def test_heuristic(self, title, keyword):
        assert extract_keyword_from_title(title) == keyword


class TestMapCategory:
    @pytest.mark.parametrize(
        "category_id,title,category",
        [
            ("28", "일상", "tech"),
            ("25", "오늘의 뉴스", "news"),
            ("24", "코인 폭락", "finance"),
            ("22", "갤럭시 언박싱", "tech"),
            ("22", "주식 하다가 아이폰 샀다", "tech"),
            ("", "", "vlog"),
            ("abc", "일상", "vlog"),
        ],
    )
    def test_mapping(self, category_id, title, category):
        assert map_category(category_id, title) == category


class TestDiagnose:
    async def test_full_diagnosis(self):
        analyzer = FakeKeywordAnalyzer()
        result = await _diagnostician(analyzer=analyzer).diagnose(URL)

        assert result.extracted_keyword == "주식"
        assert analyzer.keywords == ["주식"]
        assert result.metadata.category == "finance"
        assert result.metadata.view_count == 1_000_000
        assert result.is_placeholder_transcript is False
        assert result.is_placeholder_metadata is False
        assert result.transcript == TRANSCRIPT
        assert result.revenue_estimate.min == math.floor(1000 * 15000 * 1.8 * 1.3)
        assert result.viral_velocity == 125_000
        assert result.trend_analysis.keyword == "주식"
        assert len(result.top_videos) == 5
        assert result.dual_core_analysis.content_score == 50
        assert result.dual_core_analysis.total_score == (
            result.dual_core_analysis.topic_score + result.dual_core_analysis.content_score
        )

    async def test_invalid_url(self):
        youtube = _youtube()
        with pytest.raises(InvalidInputError):
            await _diagnostician(youtube=youtube).diagnose("https://example.com/watch")
        assert youtube.calls["video"] == 0

    async def test_unknown_video(self):
        with pytest.raises(VideoNotFoundError):
            await _diagnostician(youtube=FakeYouTube()).diagnose(URL)

    async def test_transcript_fallback(self):
        result = await _diagnostician(transcript=ProviderError("supadata", "down")).diagnose(URL)
        assert result.is_placeholder_transcript is True
        assert result.transcript == PLACEHOLDER_TRANSCRIPT

    async def test_metadata_fallback(self):
        result = await _diagnostician(youtube=FakeYouTube(down=True)).diagnose(URL)

        assert result.is_placeholder_metadata is True
        assert result.extracted_keyword == DEFAULT_KEYWORD
        assert result.metadata.video_id == VIDEO_ID
        assert result.revenue_estimate.min == 0
        assert result.viral_velocity == 0

    async def test_llm_keyword_overrides_heuristic(self):
        analyzer = FakeKeywordAnalyzer()
        llm = FakeLLM(keyword=Found("주식 투자"))
        result = await _diagnostician(llm=llm, analyzer=analyzer).diagnose(URL)

        assert result.extracted_keyword == "주식 투자"
        assert analyzer.keywords == ["주식 투자"]

    async def test_llm_quality_audit_is_used(self):
        audit = AIQualityAnalysis(
            metadata=ScoredAspect(score=50, reason="m"),
            script=ScoredAspect(score=50, reason="s"),
            relevance=ScoredAspect(score=50, reason="r"),
            feedback=["훅을 강화하세요."],
            summary="요약",
        )
        result = await _diagnostician(llm=FakeLLM(quality=Found(audit))).diagnose(URL)

        breakdown = result.dual_core_analysis.breakdown
        assert (breakdown.metadata, breakdown.script, breakdown.relevance) == (10, 10, 5)
        assert breakdown.summary == "요약"
        assert result.dual_core_analysis.content_score == 25
