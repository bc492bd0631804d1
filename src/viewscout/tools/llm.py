"""LLM helpers — content audit, keyword extraction and idea generation."""

from __future__ import annotations

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from viewscout.config import Settings
from viewscout.models.result import Found, NotFound, ProviderError, ProviderResult
from viewscout.models.video import (
    AIQualityAnalysis,
    ExtractedKeyword,
    VideoIdea,
    VideoIdeaList,
)

logger = structlog.get_logger()

PROVIDER = "llm"

# Transcript slices sent to the model
QUALITY_TRANSCRIPT_CHARS = 15_000
KEYWORD_TRANSCRIPT_CHARS = 5_000

# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

QUALITY_SYSTEM_PROMPT = """\
You are a strict YouTube content auditor for the Korean market. Score each metric \
from 0 to 100 and do not hand out high scores easily. Write every feedback item and \
the summary in Korean, as concrete, actionable advice."""

QUALITY_USER_PROMPT = """\
Target keyword: '{keyword}'
Title: "{title}"
Transcript (truncated): "{transcript}"

1. metadata: click potential of the title (power words, curiosity).
2. script: is the first 60 seconds gripping, is there logical structure?
3. relevance: does the content deliver on the keyword's promise?"""

KEYWORD_SYSTEM_PROMPT = """\
Identify the single most important search keyword (core topic) of a Korean YouTube \
video. Prefer short compound nouns that people actually search on Naver / YouTube, \
e.g. "아이폰15 후기" rather than "아이폰15를 써봤는데"."""

KEYWORD_USER_PROMPT = """\
Title: "{title}"
Transcript start: "{transcript}" """

IDEAS_SYSTEM_PROMPT = """\
You are a YouTube strategist. Combine user search intent with the formats that are \
already winning and propose three video ideas: one "Viral Hit" (curiosity gap, CTR), \
one "Search-Optimized" (exact keyword match, solves a specific problem) and one \
"Creative Twist" (a unique angle). Titles and reasons must be natural Korean."""

IDEAS_USER_PROMPT = """\
Keyword: '{keyword}'
Related searches (search intent): {related}
Top videos by views (winning formats): {titles}"""


def fallback_ideas(keyword: str) -> list[VideoIdea]:
    return [
        VideoIdea(type="Viral Hit", title=f"{keyword}, 아무도 말하지 않은 충격적인 진실", reason="호기심 격차로 클릭률을 높입니다."),
        VideoIdea(type="Search-Optimized", title=f"{keyword} 완벽 가이드 (초보자용 총정리)", reason="검색 의도와 정확히 일치합니다."),
        VideoIdea(type="Creative Twist", title=f"{keyword} 30일 동안 직접 해봤습니다", reason="개인 챌린지 형식으로 차별화됩니다."),
    ]


class LLMClient:
    """Structured-output calls against the reasoning model."""

    def __init__(self, config: Settings, llm: BaseChatModel | None = None):
        self._config = config
        self._llm = llm

    @property
    def enabled(self) -> bool:
        return self._llm is not None or self._config.llm_enabled

    def _model(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self._config.reasoning_model,
                api_key=self._config.openai_api_key,
                temperature=0.3,
            )
        return self._llm

    def _disabled(self) -> ProviderError:
        return ProviderError(PROVIDER, "OPENAI_API_KEY not configured")

    async def analyze_quality(
        self, title: str, keyword: str, transcript: str
    ) -> ProviderResult[AIQualityAnalysis]:
        if not self.enabled:
            return self._disabled()
        try:
            auditor = self._model().with_structured_output(AIQualityAnalysis)
            result: AIQualityAnalysis = await auditor.ainvoke(
                [
                    {"role": "system", "content": QUALITY_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": QUALITY_USER_PROMPT.format(
                            keyword=keyword,
                            title=title,
                            transcript=transcript[:QUALITY_TRANSCRIPT_CHARS],
                        ),
                    },
                ]
            )
        except Exception as exc:
            logger.exception("llm.quality_failed", keyword=keyword)
            return ProviderError(PROVIDER, str(exc))

        logger.info(
            "llm.quality_done",
            keyword=keyword,
            metadata=result.metadata.score,
            script=result.script.score,
            relevance=result.relevance.score,
        )
        return Found(result)

    async def extract_keyword(self, title: str, transcript: str) -> ProviderResult[str]:
        if not self.enabled:
            return self._disabled()
        try:
            extractor = self._model().with_structured_output(ExtractedKeyword)
            result: ExtractedKeyword = await extractor.ainvoke(
                [
                    {"role": "system", "content": KEYWORD_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": KEYWORD_USER_PROMPT.format(
                            title=title, transcript=transcript[:KEYWORD_TRANSCRIPT_CHARS]
                        ),
                    },
                ]
            )
        except Exception as exc:
            logger.exception("llm.keyword_failed", title=title)
            return ProviderError(PROVIDER, str(exc))

        keyword = result.keyword.strip().strip("\"'")
        if not keyword:
            return NotFound("keyword")
        logger.info("llm.keyword_done", keyword=keyword)
        return Found(keyword)

    async def generate_ideas(
        self, keyword: str, related_keywords: list[str], top_video_titles: list[str]
    ) -> ProviderResult[list[VideoIdea]]:
        if not self.enabled:
            return self._disabled()
        try:
            planner = self._model().with_structured_output(VideoIdeaList)
            result: VideoIdeaList = await planner.ainvoke(
                [
                    {"role": "system", "content": IDEAS_SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": IDEAS_USER_PROMPT.format(
                            keyword=keyword,
                            related=", ".join(related_keywords[:10]) or "None provided",
                            titles=", ".join(top_video_titles[:10]) or "None provided",
                        ),
                    },
                ]
            )
        except Exception as exc:
            logger.exception("llm.ideas_failed", keyword=keyword)
            return ProviderError(PROVIDER, str(exc))

        if not result.ideas:
            return NotFound("ideas")
        return Found(result.ideas[:3])
