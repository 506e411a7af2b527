import random

import pytest

from passmeter.checks import has_digit, has_lower, has_special, has_upper, missing_classes
from passmeter import generator
from passmeter.evaluator import score_password
from passmeter.generator import (
    ALL_CHARS,
    build_seed,
    generate,
    mutate,
    random_candidate,
    repair_missing_classes,
)


def _has_all_classes(pw):
    return has_lower(pw) and has_upper(pw) and has_digit(pw) and has_special(pw)


def test_length_and_classes():
    for seed in range(20):
        pw = generate(26, rng=random.Random(seed))
        assert len(pw) == 26
        assert _has_all_classes(pw)


def test_default_source_reaches_max_score():
    pw = generate(26)
    assert len(pw) == 26
    assert score_password(pw).score == 100


def test_seeded_generation_reaches_max_score():
    for seed in range(5):
        assert score_password(generate(32, rng=random.Random(seed))).score == 100


def test_short_length_falls_back_to_seed():
    # 10 characters can never reach 100, so the constructive seed comes back
    pw = generate(10, rng=random.Random(7))
    assert pw == build_seed(10, random.Random(7))
    assert len(pw) == 10


def test_tiny_lengths_are_best_effort():
    for length in (1, 2, 3):
        assert len(generate(length, rng=random.Random(length))) == length


def test_non_positive_length_raises():
    with pytest.raises(ValueError):
        generate(0)


def test_seed_covers_all_classes():
    for seed in range(50):
        pw = build_seed(4, random.Random(seed))
        assert len(pw) == 4
        assert missing_classes(pw) == []


def test_repair_pass_overwrites_low_indices():
    chars = list("abcdefgh")
    repair_missing_classes(chars, random.Random(1))
    pw = "".join(chars)
    assert _has_all_classes(pw)
    assert has_upper(chars[0])
    assert has_digit(chars[1])
    assert has_special(chars[2])
    assert pw[3:] == "defgh"


def test_repair_pass_leaves_complete_buffer_alone():
    chars = list("aB3!xyz")
    repair_missing_classes(chars, random.Random(1))
    assert "".join(chars) == "aB3!xyz"


def test_mutate_preserves_length():
    rng = random.Random(3)
    pw = "aB3!" * 5
    for _ in range(50):
        out = mutate(pw, rng)
        assert len(out) == len(pw)
        assert all(c in ALL_CHARS for c in out)


def test_random_candidate_has_all_classes():
    rng = random.Random(11)
    for _ in range(20):
        pw = random_candidate(12, rng)
        assert len(pw) == 12
        assert _has_all_classes(pw)


def test_seed_fill_rejects_repeats_and_runs():
    assert generator._rejects(["a"], "a")
    assert generator._rejects(["a", "b"], "c")
    assert generator._rejects(["c", "B"], "a")
    assert generator._rejects(["3", "2"], "1")
    assert not generator._rejects(["a", "b"], "d")
    assert not generator._rejects([], "a")


class _StuckRandom:
    """Always draws the same character."""

    def __init__(self, c):
        self.c = c
        self.draws = 0

    def choice(self, seq):
        self.draws += 1
        return self.c


def test_seed_fill_gives_up_after_bounded_tries():
    rng = _StuckRandom("a")
    assert generator._sample_avoiding(["x", "a"], rng) == "a"
    assert rng.draws == generator.SEED_SAMPLE_TRIES

    rng = _StuckRandom("q")
    assert generator._sample_avoiding(["x", "a"], rng) == "q"
    assert rng.draws == 1


def test_mutation_builds_on_best_candidate(monkeypatch):
    monkeypatch.setattr(generator, "build_seed", lambda length, rng: "s")
    monkeypatch.setattr(generator, "mutate", lambda pw, rng: pw + "m")
    # each extra char is worth 10 points, so only a chain of improvements reaches 100
    monkeypatch.setattr(generator, "compute_score", lambda pw: min(len(pw) * 10, 100))
    assert generator.generate(20, rng=random.Random(0)) == "s" + "m" * 9


def test_mutation_ignores_worse_candidates(monkeypatch):
    seen = []

    def fake_mutate(pw, rng):
        seen.append(pw)
        return "worse"

    monkeypatch.setattr(generator, "build_seed", lambda length, rng: "seed")
    monkeypatch.setattr(generator, "mutate", fake_mutate)
    monkeypatch.setattr(generator, "random_candidate", lambda length, rng: "fresh")
    monkeypatch.setattr(generator, "compute_score", lambda pw: {"seed": 50, "fresh": 100}.get(pw, 10))
    assert generator.generate(20, rng=random.Random(0)) == "fresh"
    assert set(seen) == {"seed"}
    assert len(seen) == generator.MUTATION_ATTEMPTS


def test_fallback_phase_used_after_mutations(monkeypatch):
    calls = {"mutate": 0, "fresh": 0}

    def fake_mutate(pw, rng):
        calls["mutate"] += 1
        return "mutated"

    def fake_candidate(length, rng):
        calls["fresh"] += 1
        return "winner" if calls["fresh"] == 3 else "dud"

    monkeypatch.setattr(generator, "build_seed", lambda length, rng: "seed")
    monkeypatch.setattr(generator, "mutate", fake_mutate)
    monkeypatch.setattr(generator, "random_candidate", fake_candidate)
    monkeypatch.setattr(generator, "compute_score", lambda pw: 100 if pw == "winner" else 0)
    assert generator.generate(20, rng=random.Random(0)) == "winner"
    assert calls == {"mutate": generator.MUTATION_ATTEMPTS, "fresh": 3}


def test_seed_returned_when_every_phase_misses(monkeypatch):
    scored = []

    def fake_score(pw):
        scored.append(pw)
        return 0

    monkeypatch.setattr(generator, "build_seed", lambda length, rng: "seed")
    monkeypatch.setattr(generator, "mutate", lambda pw, rng: "mutated")
    monkeypatch.setattr(generator, "random_candidate", lambda length, rng: "fresh")
    monkeypatch.setattr(generator, "compute_score", fake_score)
    assert generator.generate(20, rng=random.Random(0)) == "seed"
    assert scored.count("seed") == 1
    assert scored.count("mutated") == 2000
    assert scored.count("fresh") == 5000
