"""
passmeter.generator
Generate passwords that reach the top score of the evaluator.

generate(length) tries, in order:
  1. a constructive seed (one char per class, anti-repeat/anti-sequence
     fill, shuffle, class repair)
  2. up to MUTATION_ATTEMPTS swap+overwrite mutations of the best candidate
  3. up to FALLBACK_ATTEMPTS fresh random candidates
  4. the original seed, as a best-effort result
"""

import logging
import random
import string
from secrets import SystemRandom
from typing import List, Optional

from .checks import completes_sequence, missing_classes
from .evaluator import MAX_SCORE, compute_score

logger = logging.getLogger(__name__)

DEFAULT_SYMBOLS = string.punctuation
LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase
DIGITS = string.digits

# same order as passmeter.checks.CLASS_CHECKS
CLASS_POOLS = {
    "lowercase": LOWER,
    "uppercase": UPPER,
    "digit": DIGITS,
    "special": DEFAULT_SYMBOLS,
}
ALL_CHARS = LOWER + UPPER + DIGITS + DEFAULT_SYMBOLS

TARGET_SCORE = MAX_SCORE
SEED_SAMPLE_TRIES = 25
MUTATION_ATTEMPTS = 2000
FALLBACK_ATTEMPTS = 5000


def _rejects(chars: List[str], c: str) -> bool:
    """Local avoidance rule for the seed fill: no 'aa' and no 'abc'/'cba'."""
    if chars and chars[-1] == c:
        return True
    if len(chars) >= 2 and completes_sequence(chars[-2], chars[-1], c):
        return True
    return False


def _sample_avoiding(chars: List[str], rng: random.Random) -> str:
    c = rng.choice(ALL_CHARS)
    for _ in range(SEED_SAMPLE_TRIES - 1):
        if not _rejects(chars, c):
            break
        c = rng.choice(ALL_CHARS)
    return c


def repair_missing_classes(chars: List[str], rng: random.Random) -> List[str]:
    """
    Overwrite index 0, 1, 2, 3 (one per missing class, in class order) with
    a fresh character of the missing class. The result is not re-checked.
    """
    missing = missing_classes("".join(chars))
    for idx, name in enumerate(missing):
        if idx >= len(chars):
            break
        chars[idx] = rng.choice(CLASS_POOLS[name])
    return chars


def build_seed(length: int, rng: Optional[random.Random] = None) -> str:
    """Constructive seed: diversity first, local avoidance, shuffle, repair."""
    rng = rng or SystemRandom()
    chars: List[str] = []
    for pool in CLASS_POOLS.values():
        if len(chars) >= length:
            break
        chars.append(rng.choice(pool))

    while len(chars) < length:
        chars.append(_sample_avoiding(chars, rng))

    rng.shuffle(chars)
    repair_missing_classes(chars, rng)
    return "".join(chars)


def random_candidate(length: int, rng: Optional[random.Random] = None) -> str:
    """One char from each class, the rest from the full alphabet, shuffled."""
    rng = rng or SystemRandom()
    chars = [rng.choice(pool) for pool in CLASS_POOLS.values()][:length]
    for _ in range(length - len(chars)):
        chars.append(rng.choice(ALL_CHARS))
    rng.shuffle(chars)
    return "".join(chars)


def mutate(password: str, rng: Optional[random.Random] = None) -> str:
    """Swap two random positions, then overwrite one random position."""
    rng = rng or SystemRandom()
    chars = list(password)
    i = rng.randrange(len(chars))
    j = rng.randrange(len(chars))
    chars[i], chars[j] = chars[j], chars[i]
    chars[rng.randrange(len(chars))] = rng.choice(ALL_CHARS)
    return "".join(chars)


def generate(length: int = 26, rng: Optional[random.Random] = None) -> str:
    """
    Generate a password of exactly `length` characters that scores
    TARGET_SCORE with high probability. Not guaranteed: if every phase
    misses, the constructive seed is returned as is.
    """
    if length <= 0:
        raise ValueError("length must be > 0")
    rng = rng or SystemRandom()

    seed = build_seed(length, rng)
    best, best_score = seed, compute_score(seed)
    if best_score >= TARGET_SCORE:
        return seed

    for _ in range(MUTATION_ATTEMPTS):
        candidate = mutate(best, rng)
        sc = compute_score(candidate)
        if sc >= TARGET_SCORE:
            return candidate
        if sc > best_score:
            best, best_score = candidate, sc

    for _ in range(FALLBACK_ATTEMPTS):
        candidate = random_candidate(length, rng)
        if compute_score(candidate) >= TARGET_SCORE:
            return candidate

    logger.debug("no %d-char candidate reached %d; returning seed", length, TARGET_SCORE)
    return seed
