import math

from passmeter.checks import (
    char_space,
    completes_sequence,
    estimate_entropy,
    has_digit,
    has_lower,
    has_repeat_run,
    has_sequence_run,
    has_special,
    has_upper,
    is_common_password,
    missing_classes,
)
from passmeter.evaluator import EMPTY_RESULT, Verdict, classify_score, score_password


def test_class_predicates():
    assert has_lower("ABc") and not has_lower("ABC1!")
    assert has_upper("abC") and not has_upper("abc1!")
    assert has_digit("ab3") and not has_digit("abc!")
    assert has_special("ab!") and not has_special("aB3")
    # anything outside [A-Za-z0-9] is special
    assert has_special("pass word")
    assert has_special("café")
    assert missing_classes("password") == ["uppercase", "digit", "special"]
    assert missing_classes("aB3!") == []


def test_entropy_and_charspace():
    assert estimate_entropy("") == 0.0
    assert char_space("") == 0
    assert char_space("aB3!") == 94
    assert math.isclose(estimate_entropy("Ab1!"), 4 * math.log2(94))
    assert estimate_entropy("Ab1!" * 4) > estimate_entropy("Ab1!")


def test_repeat_detection():
    assert has_repeat_run("baaa")
    assert has_repeat_run("xx!!!y")
    assert not has_repeat_run("aab")
    assert not has_repeat_run("abab")


def test_sequence_detection():
    assert has_sequence_run("abc")
    assert has_sequence_run("zz987")
    assert has_sequence_run("CbA")  # case-folded
    assert has_sequence_run("xYz")
    assert not has_sequence_run("a1b2c3")
    assert not has_sequence_run("ab")
    assert completes_sequence("x", "y", "z")
    assert not completes_sequence("a", "b", "d")


def test_common_password_case_insensitive():
    assert is_common_password("PassWord")
    assert is_common_password("letmein")
    assert not is_common_password("password!")


def test_empty_and_whitespace_are_invalid():
    assert score_password("") == EMPTY_RESULT
    assert score_password("   ") == EMPTY_RESULT
    assert EMPTY_RESULT.score == 0
    assert EMPTY_RESULT.verdict is Verdict.INVALID
    assert not EMPTY_RESULT.is_valid


def test_verdict_thresholds():
    expected = {
        0: Verdict.VERY_WEAK,
        24: Verdict.VERY_WEAK,
        25: Verdict.WEAK,
        39: Verdict.WEAK,
        40: Verdict.MODERATE,
        59: Verdict.MODERATE,
        60: Verdict.STRONG,
        79: Verdict.STRONG,
        80: Verdict.VERY_STRONG,
        100: Verdict.VERY_STRONG,
    }
    for score, verdict in expected.items():
        assert classify_score(score) is verdict


def test_common_password_penalty():
    # same length, same classes, no patterns
    assert score_password("qmzkvtnh").score == 32
    assert score_password("password").score == 12
    assert score_password("PASSWORD").score == score_password("QMZKVTNH").score - 20


def test_sequence_penalty_removed_by_permutation():
    assert score_password("abcXYZ").score == 28
    assert score_password("aXbYcZ").score == 34


def test_repeat_penalty():
    assert score_password("aaaQ7!mz").score == 58
    assert score_password("aaQ7!mzk").score == 64


def test_score_is_clamped():
    # 18 + 8 - 6 (repeat) - 20 (common) - 6 (entropy) < 0
    result = score_password("111111")
    assert result.score == 0
    assert result.verdict is Verdict.VERY_WEAK

    result = score_password("X7f!9Lq@2Vb#tR4sYp")
    assert result.score == 100
    assert result.verdict is Verdict.VERY_STRONG


def test_scores_stay_in_range():
    for pw in ["a", "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa", "!", "Zz9!" * 30, "abc123", "é" * 5]:
        assert 0 <= score_password(pw).score <= 100


def test_scoring_is_pure():
    pw = "Tr0ub4dor&3"
    assert score_password(pw) == score_password(pw)

