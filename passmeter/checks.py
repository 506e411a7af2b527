"""
passmeter.checks

Character-set predicates used by the scorer and the generator:
- class membership: has_lower, has_upper, has_digit, has_special
- pattern checks: has_repeat_run, has_sequence_run, completes_sequence
- denylist: COMMON_PASSWORDS / is_common_password
- estimate_entropy(password): length * log2(charspace)

All checks work on plain code points; no regex engine is involved.
"""

import math
from typing import List

# original denylist plus a few extra well-known words
COMMON_PASSWORDS = frozenset({
    "password", "123456", "123456789", "qwerty", "abc123", "111111",
    "password1", "12345678", "iloveyou", "admin", "welcome", "letmein",
    "monkey", "dragon", "sunshine", "princess", "football", "baseball",
    "trustno1", "master", "hello", "freedom", "whatever", "secret",
})

LOWER_SPACE = 26
UPPER_SPACE = 26
DIGIT_SPACE = 10
SPECIAL_SPACE = 32


def is_lower_char(c: str) -> bool:
    return "a" <= c <= "z"


def is_upper_char(c: str) -> bool:
    return "A" <= c <= "Z"


def is_digit_char(c: str) -> bool:
    return "0" <= c <= "9"


def is_special_char(c: str) -> bool:
    return not (is_lower_char(c) or is_upper_char(c) or is_digit_char(c))


def has_lower(password: str) -> bool:
    return any(is_lower_char(c) for c in password)


def has_upper(password: str) -> bool:
    return any(is_upper_char(c) for c in password)


def has_digit(password: str) -> bool:
    return any(is_digit_char(c) for c in password)


def has_special(password: str) -> bool:
    """Anything outside [A-Za-z0-9] counts, including spaces and non-ASCII."""
    return any(is_special_char(c) for c in password)


CLASS_CHECKS = (
    ("lowercase", has_lower),
    ("uppercase", has_upper),
    ("digit", has_digit),
    ("special", has_special),
)


def missing_classes(password: str) -> List[str]:
    """Names of the four character classes absent from password, in fixed order."""
    return [name for name, check in CLASS_CHECKS if not check(password)]


def has_repeat_run(password: str, run: int = 3) -> bool:
    """True if any character appears `run` or more times in a row."""
    streak = 0
    prev = None
    for c in password:
        streak = streak + 1 if c == prev else 1
        if streak >= run:
            return True
        prev = c
    return False


def completes_sequence(a: str, b: str, c: str) -> bool:
    """
    True if a, b, c (case-folded) are consecutive code points,
    ascending ('abc', '123') or descending ('cba', '321').
    """
    x, y, z = ord(a.lower()), ord(b.lower()), ord(c.lower())
    return (y == x + 1 and z == y + 1) or (y == x - 1 and z == y - 1)


def has_sequence_run(password: str) -> bool:
    """Scan every length-3 window of the case-folded password for a sequence."""
    lower = password.lower()
    for i in range(len(lower) - 2):
        if completes_sequence(lower[i], lower[i + 1], lower[i + 2]):
            return True
    return False


def is_common_password(password: str) -> bool:
    return password.lower() in COMMON_PASSWORDS


def char_space(password: str) -> int:
    """Effective alphabet size from the classes actually present."""
    space = 0
    if has_lower(password):
        space += LOWER_SPACE
    if has_upper(password):
        space += UPPER_SPACE
    if has_digit(password):
        space += DIGIT_SPACE
    if has_special(password):
        space += SPECIAL_SPACE
    return space


def estimate_entropy(password: str) -> float:
    """
    Entropy bits = length * log2(charspace).
    Returns 0.0 for the empty string.
    """
    space = char_space(password)
    if space == 0:
        return 0.0
    return len(password) * math.log2(space)
