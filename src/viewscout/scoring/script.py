"""Rule-based script structure analysis (hook and body)."""

from __future__ import annotations

from dataclasses import dataclass

from viewscout.models.scores import ScriptAnalysis

NEGATIVE_WORDS = ("주의", "실수", "절대", "손해", "위험", "망하는", "비밀", "경고", "최악")
DIRECT_ADDRESS = ("당신", "여러분", "너", "구독자님", "시청자")

LOGICAL_MARKERS = (
    "첫째", "둘째", "셋째", "첫 번째", "두 번째", "세 번째",
    "우선", "결론적으로", "요약하면", "예를 들어", "하지만", "반면",
)
OPEN_LOOPS = ("잠시 후에", "영상 끝까지", "마지막에", "뒤에서", "공개합니다", "알려드릴게요")


@dataclass(frozen=True)
class ScriptSegments:
    intro: str
    body: str
    outro: str


def split_script(text: str) -> ScriptSegments:
    """Split by character length into intro (15%), body (75%) and outro (10%)."""
    trimmed = text.strip()
    length = len(trimmed)
    if length == 0:
        return ScriptSegments("", "", "")

    intro_end = int(length * 0.15)
    outro_start = int(length * 0.90)
    return ScriptSegments(
        intro=trimmed[:intro_end],
        body=trimmed[intro_end:outro_start],
        outro=trimmed[outro_start:],
    )


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def _hook_score(intro: str) -> tuple[int, list[str]]:
    score = 50
    feedback: list[str] = []

    if "?" in intro:
        score += 10
    else:
        feedback.append("초반 15% 내에 시청자에게 질문을 던져 참여를 유도해보세요. (?)")

    if any(w in intro for w in NEGATIVE_WORDS):
        score += 10
    else:
        feedback.append("손실 회피 본능을 자극하는 부정적 키워드('주의', '실수', '절대' 등)를 사용해보세요.")

    direct = [w for w in DIRECT_ADDRESS if w in intro]
    if direct:
        score += min(10, len(direct) * 5)
    else:
        feedback.append("시청자를 '여러분'이나 '당신'으로 직접 지칭하여 몰입감을 높이세요.")

    if len(intro) >= 100:
        score += 5

    return _clamp(score), feedback


def _structure_score(full_text: str, body: str) -> tuple[int, list[str]]:
    score = 40
    feedback: list[str] = []

    markers = [w for w in LOGICAL_MARKERS if w in body]
    if len(markers) >= 2:
        score += 20
    elif len(markers) == 1:
        score += 10
        feedback.append("논리적 연결어('첫째', '하지만' 등)를 더 사용하여 내용을 구조화하세요.")
    else:
        feedback.append("본문에 '첫째', '둘째' 같은 순서나 대조를 나타내는 접속사가 부족합니다.")

    if any(w in body for w in OPEN_LOOPS):
        score += 20
    else:
        feedback.append("영상의 지속 시청을 유도하는 '오픈 루프'('잠시 후에 공개됩니다' 등) 멘트를 추가해보세요.")

    if len(full_text) > 500:
        score += 20

    return _clamp(score), feedback


def analyze_script(full_text: str) -> ScriptAnalysis:
    segments = split_script(full_text)
    hook, hook_feedback = _hook_score(segments.intro)
    structure, structure_feedback = _structure_score(full_text, segments.body)
    return ScriptAnalysis(
        hook_score=hook,
        structure_score=structure,
        hook_feedback=hook_feedback,
        structure_feedback=structure_feedback,
    )
