"""
passmeter.history
In-memory session log of committed passwords. Nothing here touches disk;
the list is gone when the process exits.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .evaluator import ScoreResult, Verdict, score_password

DEFAULT_MASK_CHAR = "•"


def mask(password: str, mask_char: str = DEFAULT_MASK_CHAR) -> str:
    return mask_char * len(password)


@dataclass(frozen=True)
class HistoryEntry:
    index: int
    masked: str
    password: str
    score: int
    verdict: Verdict
    suggestions: Tuple[str, ...]
    timestamp: datetime

    def as_record(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "password": self.password,
            "score": self.score,
            "verdict": self.verdict.value,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
        }


class SessionHistory:
    """Ordered list of HistoryEntry; UIs only ever read `entries`."""

    def __init__(self, mask_char: str = DEFAULT_MASK_CHAR):
        self.mask_char = mask_char
        self._entries: List[HistoryEntry] = []

    def commit(self, password: str, result: Optional[ScoreResult] = None) -> HistoryEntry:
        if not password or password.isspace():
            raise ValueError("cannot record an empty password")
        result = result or score_password(password)
        entry = HistoryEntry(
            index=len(self._entries) + 1,
            masked=mask(password, self.mask_char),
            password=password,
            score=result.score,
            verdict=result.verdict,
            suggestions=result.suggestions,
            timestamp=datetime.now(),
        )
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def export_records(self) -> List[Dict[str, Any]]:
        return [e.as_record() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.entries)
