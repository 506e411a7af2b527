import csv
import io
import os
from typing import Any, Dict, Iterable

CSV_FIELDS = ("index", "password", "score", "verdict", "timestamp")


def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)


def history_csv_bytes(records: Iterable[Dict[str, Any]]) -> bytes:
    buf = io.StringIO(newline="")
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS, extrasaction="ignore")
    writer.writeheader()
    for rec in records:
        writer.writerow(rec)
    return buf.getvalue().encode("utf-8")


def export_history_csv(records: Iterable[Dict[str, Any]], path: str) -> str:
    """Write history records (SessionHistory.export_records()) as CSV. Returns path."""
    atomic_write_bytes(path, history_csv_bytes(records))
    return path
