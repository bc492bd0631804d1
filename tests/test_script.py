from viewscout.scoring.script import analyze_script, split_script


def _script() -> str:
    intro = "여러분, 당신이 이 실수를 하면 손해입니다?"
    intro += "가" * (150 - len(intro))
    body = "첫째 이유입니다. 하지만 잠시 후에 공개합니다."
    body += "나" * (750 - len(body))
    return intro + body + "다" * 100


def test_split_by_length():
    segments = split_script("a" * 100)
    assert len(segments.intro) == 15
    assert len(segments.body) == 75
    assert len(segments.outro) == 10


def test_split_empty():
    segments = split_script("   ")
    assert (segments.intro, segments.body, segments.outro) == ("", "", "")


def test_strong_script():
    analysis = analyze_script(_script())
    assert analysis.hook_score == 85
    assert analysis.structure_score == 100
    assert analysis.hook_feedback == []
    assert analysis.structure_feedback == []


def test_empty_script_gets_base_scores_and_feedback():
    analysis = analyze_script("")
    assert analysis.hook_score == 50
    assert analysis.structure_score == 40
    assert len(analysis.hook_feedback) == 3
    assert len(analysis.structure_feedback) == 2


def test_single_logical_marker_is_partial_credit():
    text = "가" * 150 + "하지만" + "나" * 200
    analysis = analyze_script(text)
    # 40 base + 10 for one marker
    assert analysis.structure_score == 50
    assert len(analysis.structure_feedback) == 2
