"""Content half of the dual-core score and the final matrix grade."""

from __future__ import annotations

import math
import re

from viewscout.models.scores import ContentBreakdown, DualCoreResult, MarketAnalysis
from viewscout.models.video import AIQualityAnalysis
from viewscout.scoring.market import compute_topic_score

METADATA_MAX = 20
SCRIPT_MAX = 20
RELEVANCE_MAX = 10

# Roughly the first 60 seconds of speech
OPENING_CHARS = 300

_PUNCTUATION_HOOK = re.compile(r"[?!]")
_POWER_WORDS = re.compile(r"이유|방법|충격|공개|비밀")
_QUESTION = re.compile(r"\?")
_PAIN_WORDS = re.compile(r"손해|위험|조심|절대")
_PROMISE_WORDS = re.compile(r"공개|알려|해결|방법")
_STRUCTURE_MARKERS = re.compile(r"첫째|두번째|결론|요약")

FEEDBACK_TITLE_LENGTH = "제목 길이가 너무 짧거나 깁니다. (15~40자 권장)"
FEEDBACK_POWER_WORDS = "제목에 '충격, 공개, 이유' 등의 훅킹 키워드를 추가해보세요."
FEEDBACK_WEAK_HOOK = "초반 60초 내에 시청자의 고통(Pain)이나 이득(Benefit)을 더 강력하게 언급하세요."
FEEDBACK_NO_STRUCTURE = "대본에 '첫째, 둘째'와 같은 논리적 구조(Numbering)를 사용하면 이탈률이 줄어듭니다."


def feedback_missing_keyword(keyword: str) -> str:
    return f"영상 본문에 타겟 키워드 '{keyword}' 언급이 부족합니다."


def feedback_late_keyword(keyword: str) -> str:
    return f"영상 시작 후 30초 이내에 주제어 '{keyword}'를 언급하는 것이 좋습니다."


def _scale(score: int, factor: float, cap: int) -> int:
    return max(0, min(cap, math.floor(score * factor)))


def compute_content_score(
    transcript: str,
    title: str,
    keyword: str,
    ai_result: AIQualityAnalysis | None = None,
) -> ContentBreakdown:
    """Score metadata (0-20), script (0-20) and relevance (0-10).

    With an LLM audit the three 0-100 sub-scores are scaled down; otherwise a
    fixed text heuristic is applied and every missed criterion adds a
    feedback line.
    """
    if ai_result is not None:
        return ContentBreakdown(
            metadata=_scale(ai_result.metadata.score, 0.2, METADATA_MAX),
            script=_scale(ai_result.script.score, 0.2, SCRIPT_MAX),
            relevance=_scale(ai_result.relevance.score, 0.1, RELEVANCE_MAX),
            feedback=list(ai_result.feedback),
            summary=ai_result.summary,
        )

    feedback: list[str] = []
    meta = 0
    script = 0
    relevance = 0

    # Metadata
    if 15 <= len(title) <= 40:
        meta += 5
    else:
        feedback.append(FEEDBACK_TITLE_LENGTH)

    if _PUNCTUATION_HOOK.search(title) or _POWER_WORDS.search(title):
        meta += 5
    else:
        feedback.append(FEEDBACK_POWER_WORDS)

    # Thumbnail and thumbnail text ratio are not analysed; fixed credit.
    meta += 10

    # Script
    opening = transcript[:OPENING_CHARS]
    hook = 0
    if _QUESTION.search(opening):
        hook += 3
    if _PAIN_WORDS.search(opening):
        hook += 4
    if _PROMISE_WORDS.search(opening):
        hook += 3
    if hook < 5:
        feedback.append(FEEDBACK_WEAK_HOOK)
    script += min(10, hook)

    if _STRUCTURE_MARKERS.search(transcript):
        script += 5
    else:
        feedback.append(FEEDBACK_NO_STRUCTURE)

    # Readability is not measured; fixed credit.
    script += 5

    # Relevance
    if keyword and keyword in transcript:
        relevance += 5
    else:
        feedback.append(feedback_missing_keyword(keyword))

    if keyword and keyword in opening:
        relevance += 5
    else:
        feedback.append(feedback_late_keyword(keyword))

    return ContentBreakdown(
        metadata=min(METADATA_MAX, meta),
        script=min(SCRIPT_MAX, script),
        relevance=min(RELEVANCE_MAX, relevance),
        feedback=feedback,
    )


_MATRIX_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "S"),
    (80, "A+"),
    (70, "A-"),
    (60, "B+"),
    (50, "B-"),
)


def classify_matrix(total_score: int) -> str:
    for threshold, label in _MATRIX_THRESHOLDS:
        if total_score >= threshold:
            return label
    return "C"


def grade_reason(total_score: int, topic_score: int, content_score: int) -> str:
    gap = topic_score - content_score
    if total_score >= 90:
        return "주제 선정과 콘텐츠 품질이 완벽한 조화를 이루고 있습니다. 떡상 가능성이 매우 높습니다!"
    if total_score >= 80:
        return "매우 우수한 영상입니다. 아주 작은 디테일만 보완하면 S등급 도달이 가능합니다."
    if gap >= 15:
        return "주제(키워드)는 훌륭하게 선정했으나, 콘텐츠의 몰입도나 구성이 아쉽습니다. 대본 품질을 높여보세요."
    if gap <= -15:
        return "영상 퀄리티는 매우 좋으나, 사람들이 많이 찾지 않거나 경쟁이 너무 치열한 주제입니다. 시장성을 더 고려해보세요."
    if total_score >= 60:
        return "전반적으로 무난하지만, 확실한 강점이 부족합니다. 썸네일이나 초반 후킹을 더 강화해보세요."
    return "주제 선정부터 콘텐츠 구성까지 전면적인 재검토가 필요합니다."


def diagnose(market: MarketAnalysis, breakdown: ContentBreakdown) -> DualCoreResult:
    """Combine topic (market) and content halves into a graded result."""
    topic_score = compute_topic_score(market)
    content_score = min(50, breakdown.total)
    total_score = topic_score + content_score

    return DualCoreResult(
        topic_score=topic_score,
        content_score=content_score,
        total_score=total_score,
        matrix_label=classify_matrix(total_score),
        grade_reason=grade_reason(total_score, topic_score, content_score),
        market_insight=market.market_insight,
        breakdown=breakdown,
    )
