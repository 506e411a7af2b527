"""
passmeter.suggestions

Turn the checks in passmeter.checks into a fixed-order list of advisory
strings, and render that list numbered for display.
"""

from typing import Iterable, List

from .checks import (
    has_repeat_run,
    has_sequence_run,
    is_common_password,
    missing_classes,
)

MIN_RECOMMENDED_LENGTH = 12
MAX_SCORE = 100

EMPTY_SUGGESTION = "Enter a password."
COMMON_SUGGESTION = "This is a well-known password. Pick something nobody else uses."
LENGTH_SUGGESTION = f"Use at least {MIN_RECOMMENDED_LENGTH} characters."
CLASS_SUGGESTIONS = {
    "lowercase": "Add lowercase letters (a-z).",
    "uppercase": "Add uppercase letters (A-Z).",
    "digit": "Add digits (0-9).",
    "special": "Add special characters (e.g. !@#$%).",
}
REPEAT_SUGGESTION = "Avoid repeating the same character three or more times in a row (e.g. 'aaa')."
SEQUENCE_SUGGESTION = "Avoid sequences like 'abc', 'cba' or '123'."
MAXED_SUGGESTION = "Maxed out: this password reaches the top score of 100."
LOOKS_GOOD_SUGGESTION = "Looks good. Consider making it even longer."


def build_suggestions(password: str, score: int) -> List[str]:
    """
    Check each weakness independently, in a fixed order, and append one
    advisory string per problem found.
    """
    suggestions: List[str] = []

    if is_common_password(password):
        suggestions.append(COMMON_SUGGESTION)
    if len(password) < MIN_RECOMMENDED_LENGTH:
        suggestions.append(LENGTH_SUGGESTION)
    for name in missing_classes(password):
        suggestions.append(CLASS_SUGGESTIONS[name])
    if has_repeat_run(password):
        suggestions.append(REPEAT_SUGGESTION)
    if has_sequence_run(password):
        suggestions.append(SEQUENCE_SUGGESTION)

    found_issues = bool(suggestions)
    if score >= MAX_SCORE:
        suggestions.append(MAXED_SUGGESTION)
    if not found_issues:
        suggestions.append(LOOKS_GOOD_SUGGESTION)
    return suggestions


def format_suggestions(suggestions: Iterable[str]) -> str:
    """Render suggestions one per line, numbered from 1."""
    return "\n".join(f"{i}. {s}" for i, s in enumerate(suggestions, start=1))
