import csv
import io

import pytest

from passmeter.evaluator import Verdict, score_password
from passmeter.history import SessionHistory, mask
from passmeter.storage import CSV_FIELDS, export_history_csv, history_csv_bytes


def test_commit_and_order():
    h = SessionHistory()
    first = h.commit("password")
    second = h.commit("X7f!9Lq@2Vb#tR4sYp")
    assert len(h) == 2
    assert [e.index for e in h] == [1, 2]
    assert first.verdict is Verdict.VERY_WEAK
    assert second.score == 100
    assert h.latest is second


def test_masked_display():
    h = SessionHistory(mask_char="*")
    e = h.commit("secret!")
    assert e.masked == "*******"
    assert e.password == "secret!"
    assert mask("abc") == "•••"


def test_commit_reuses_given_result():
    h = SessionHistory()
    result = score_password("Tr0ub4dor&3")
    e = h.commit("Tr0ub4dor&3", result)
    assert e.score == result.score
    assert e.suggestions == result.suggestions


def test_empty_commit_rejected():
    h = SessionHistory()
    with pytest.raises(ValueError):
        h.commit("  ")
    assert len(h) == 0


def test_entries_are_read_only_projection():
    h = SessionHistory()
    h.commit("abc")
    entries = h.entries
    assert isinstance(entries, tuple)
    h.clear()
    assert len(h) == 0
    assert len(entries) == 1


def test_export_records():
    h = SessionHistory()
    h.commit("password")
    recs = h.export_records()
    assert len(recs) == 1
    assert set(recs[0]) == set(CSV_FIELDS)
    assert recs[0]["index"] == 1
    assert recs[0]["password"] == "password"
    assert recs[0]["verdict"] == "Very Weak"


def test_csv_export(tmp_path):
    h = SessionHistory()
    h.commit("password")
    h.commit("a,b\"c")
    path = tmp_path / "out" / "history.csv"
    export_history_csv(h.export_records(), str(path))
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["password"] for r in rows] == ["password", "a,b\"c"]
    assert rows[0]["score"] == "12"
    assert not (tmp_path / "out" / "history.csv.tmp").exists()


def test_csv_header_only_when_empty():
    text = history_csv_bytes([]).decode("utf-8")
    assert next(csv.reader(io.StringIO(text))) == list(CSV_FIELDS)
