"""PassMeter: heuristic password scoring and max-score password generation."""

from .evaluator import ScoreResult, Verdict, classify_score, score_password
from .generator import generate

__all__ = ["ScoreResult", "Verdict", "classify_score", "score_password", "generate"]
