"""
passmeter.evaluator

Password strength scorer:
- score_password(password): returns a ScoreResult with score (0-100),
  verdict, suggestions (list of strings) and the entropy estimate
- classify_score(score): maps a score to its Verdict

Weights:
    length          min(len * 3, 60)
    each class      +8 (lowercase, uppercase, digit, special)
    'aaa' repeat    -6
    'abc' sequence  -6
    common password -20
    entropy         > 60 bits: +15, > 45: +8, < 28: -6
"""

import enum
from dataclasses import dataclass, field
from typing import Tuple

from .checks import (
    CLASS_CHECKS,
    estimate_entropy,
    has_repeat_run,
    has_sequence_run,
    is_common_password,
)
from .suggestions import EMPTY_SUGGESTION, build_suggestions

MIN_SCORE = 0
MAX_SCORE = 100

LENGTH_POINTS = 3
LENGTH_CAP = 60
CLASS_POINTS = 8
REPEAT_PENALTY = 6
SEQUENCE_PENALTY = 6
COMMON_PENALTY = 20

ENTROPY_HIGH_BITS = 60
ENTROPY_HIGH_BONUS = 15
ENTROPY_MID_BITS = 45
ENTROPY_MID_BONUS = 8
ENTROPY_LOW_BITS = 28
ENTROPY_LOW_PENALTY = 6


class Verdict(enum.Enum):
    INVALID = "Invalid (Empty Password)"
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScoreResult:
    score: int
    verdict: Verdict
    suggestions: Tuple[str, ...] = field(default_factory=tuple)
    entropy: float = 0.0

    @property
    def label(self) -> str:
        return self.verdict.value

    @property
    def is_valid(self) -> bool:
        return self.verdict is not Verdict.INVALID


EMPTY_RESULT = ScoreResult(
    score=0,
    verdict=Verdict.INVALID,
    suggestions=(EMPTY_SUGGESTION,),
    entropy=0.0,
)


def classify_score(score: int) -> Verdict:
    if score < 25:
        return Verdict.VERY_WEAK
    elif score < 40:
        return Verdict.WEAK
    elif score < 60:
        return Verdict.MODERATE
    elif score < 80:
        return Verdict.STRONG
    else:
        return Verdict.VERY_STRONG


def compute_score(password: str) -> int:
    """Raw 0-100 score, without the empty-input sentinel handling."""
    score = min(len(password) * LENGTH_POINTS, LENGTH_CAP)

    # --- Character variety ---
    for _, check in CLASS_CHECKS:
        if check(password):
            score += CLASS_POINTS

    # --- Pattern penalties ---
    if has_repeat_run(password):
        score -= REPEAT_PENALTY
    if has_sequence_run(password):
        score -= SEQUENCE_PENALTY
    if is_common_password(password):
        score -= COMMON_PENALTY

    # --- Entropy ---
    entropy = estimate_entropy(password)
    if entropy > ENTROPY_HIGH_BITS:
        score += ENTROPY_HIGH_BONUS
    elif entropy > ENTROPY_MID_BITS:
        score += ENTROPY_MID_BONUS
    elif entropy < ENTROPY_LOW_BITS:
        score -= ENTROPY_LOW_PENALTY

    return max(MIN_SCORE, min(score, MAX_SCORE))


def score_password(password: str) -> ScoreResult:
    """
    Score a candidate password.

    Empty or whitespace-only input is not an error: it yields EMPTY_RESULT
    (score 0, verdict INVALID, a single "enter a password" suggestion).
    """
    if not password or password.isspace():
        return EMPTY_RESULT

    score = compute_score(password)
    return ScoreResult(
        score=score,
        verdict=classify_score(score),
        suggestions=tuple(build_suggestions(password, score)),
        entropy=estimate_entropy(password),
    )

