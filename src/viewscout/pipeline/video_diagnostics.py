"""Video flow — grade a single YouTube video on the dual-core model."""

from __future__ import annotations

import asyncio
import re
from datetime import datetime, timezone
from typing import Callable

import structlog

from viewscout.errors import InvalidInputError, VideoNotFoundError
from viewscout.models.result import Found, NotFound
from viewscout.models.video import VideoDiagnosis, VideoMetadataModel
from viewscout.pipeline.keyword_analysis import KeywordAnalyzer
from viewscout.pipeline.video_url import extract_video_id
from viewscout.scoring.content import compute_content_score, diagnose
from viewscout.scoring.revenue import calculate_viral_velocity, estimate_revenue, hours_since
from viewscout.scoring.script import analyze_script
from viewscout.tools.llm import LLMClient
from viewscout.tools.supadata import TranscriptClient
from viewscout.tools.youtube import VideoDetails, YouTubeClient

logger = structlog.get_logger()

DEFAULT_KEYWORD = "유튜브"
REFERENCE_VIDEO_COUNT = 5

PLACEHOLDER_TRANSCRIPT = """\
여러분, 유튜브 조회수가 안 나와서 고민이신가요?
오늘 영상에서는 절대 실패하지 않는 떡상 비법 3가지를 공개합니다.
이 내용을 모르면 여러분 채널은 평생 제자리걸음일 수도 있습니다.

첫째, 썸네일의 클릭률을 높여야 합니다.
둘째, 초반 30초 내에 이탈률을 잡아야 합니다.
셋째, 마지막까지 시청하게 만드는 구조를 짜야 합니다.

잠시 후에 보여드릴 실제 예시를 보시면 깜짝 놀라실 겁니다.
끝까지 시청해주시면 구독자 1만 명 달성 시크릿 문서를 드립니다."""

_BRACKETED = re.compile(r"[\[(]([^\])]+)[\])]")

# YouTube categoryId -> RPM category
_CATEGORY_BY_ID = {
    20: "entertainment",
    24: "entertainment",
    25: "news",
    27: "education",
    28: "tech",
}
_FINANCE_WORDS = ("주식", "투자", "코인")
_TECH_WORDS = ("아이폰", "갤럭시")


def extract_keyword_from_title(title: str) -> str:
    """Bracketed fragment if present, else the first word of 2+ characters."""
    bracket = _BRACKETED.search(title)
    if bracket and bracket.group(1).strip():
        return bracket.group(1).strip()
    words = [w for w in title.split() if len(w) >= 2]
    return words[0] if words else DEFAULT_KEYWORD


def map_category(category_id: str, title: str) -> str:
    try:
        category = _CATEGORY_BY_ID.get(int(category_id), "vlog")
    except (TypeError, ValueError):
        category = "vlog"

    if any(w in title for w in _FINANCE_WORDS):
        category = "finance"
    if any(w in title for w in _TECH_WORDS):
        category = "tech"
    return category


def _placeholder_metadata(video_id: str) -> VideoMetadataModel:
    return VideoMetadataModel(
        video_id=video_id,
        title="",
        duration_minutes=0.0,
        view_count=0,
    )


def _metadata_from(details: VideoDetails) -> VideoMetadataModel:
    return VideoMetadataModel(
        video_id=details.id,
        title=details.title,
        thumbnail_url=details.thumbnail_url,
        channel_name=details.channel_title,
        published_at=details.published_at,
        duration_minutes=details.duration_minutes,
        view_count=details.view_count,
        category=map_category(details.category_id, details.title),
    )


class VideoDiagnostician:
    """Resolves a URL, gathers video + market data and grades the video.

    Only an unparsable URL or a video YouTube says does not exist is an
    error; every other provider failure falls back to a default.
    """

    def __init__(
        self,
        youtube: YouTubeClient,
        transcripts: TranscriptClient,
        llm: LLMClient,
        keyword_analyzer: KeywordAnalyzer,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._youtube = youtube
        self._transcripts = transcripts
        self._llm = llm
        self._keyword_analyzer = keyword_analyzer
        self._clock = clock

    async def diagnose(self, url: str) -> VideoDiagnosis:
        video_id = extract_video_id(url)
        if video_id is None:
            raise InvalidInputError("invalid URL")

        logger.info("video_diagnostics.start", video_id=video_id)

        # ── Metadata + transcript in parallel ──────────────────────────
        details, transcript_result = await asyncio.gather(
            self._youtube.get_video_details(video_id),
            self._transcripts.get_transcript(video_id),
        )

        if isinstance(details, NotFound):
            raise VideoNotFoundError(video_id)
        if isinstance(details, Found):
            metadata = _metadata_from(details.value)
            placeholder_metadata = False
        else:
            logger.warning("video_diagnostics.metadata_fallback", video_id=video_id, reason=details.reason)
            metadata = _placeholder_metadata(video_id)
            placeholder_metadata = True

        if isinstance(transcript_result, Found):
            transcript = transcript_result.value
            placeholder_transcript = False
        else:
            logger.warning("video_diagnostics.transcript_fallback", video_id=video_id)
            transcript = PLACEHOLDER_TRANSCRIPT
            placeholder_transcript = True

        # ── Keyword ────────────────────────────────────────────────────
        keyword = extract_keyword_from_title(metadata.title)
        ai_keyword = await self._llm.extract_keyword(metadata.title, transcript)
        if isinstance(ai_keyword, Found):
            keyword = ai_keyword.value

        # ── Market analysis + LLM audit in parallel ────────────────────
        report, quality = await asyncio.gather(
            self._keyword_analyzer.analyze(keyword),
            self._llm.analyze_quality(metadata.title, keyword, transcript),
        )
        ai_result = quality.value if isinstance(quality, Found) else None

        breakdown = compute_content_score(transcript, metadata.title, keyword, ai_result)
        dual_core = diagnose(report.market, breakdown)

        revenue = estimate_revenue(
            metadata.view_count, metadata.category, metadata.duration_minutes, metadata.published_at
        )
        velocity = calculate_viral_velocity(
            metadata.view_count, hours_since(metadata.published_at, self._clock())
        )

        logger.info(
            "video_diagnostics.done",
            video_id=video_id,
            keyword=keyword,
            total_score=dual_core.total_score,
            grade=dual_core.matrix_label,
            ai_assisted=ai_result is not None,
        )

        return VideoDiagnosis(
            metadata=metadata,
            transcript=transcript,
            extracted_keyword=keyword,
            script_analysis=analyze_script(transcript),
            trend_analysis=report,
            dual_core_analysis=dual_core,
            revenue_estimate=revenue,
            viral_velocity=velocity,
            is_placeholder_transcript=placeholder_transcript,
            is_placeholder_metadata=placeholder_metadata,
            top_videos=report.top_videos[:REFERENCE_VIDEO_COUNT],
        )
