"""
In-memory history of recent analyses.

Nothing is persisted; entries live for the lifetime of the process and only
the most recent `limit` analyses are kept, newest first.
"""
import logging
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional
from uuid import uuid4

from sentiment_dashboard.schemas.analysis_result import HistoryEntry, SentimentAnalysis

logger = logging.getLogger(__name__)


class AnalysisHistory:
    """Bounded, newest-first list of past analyses."""

    def __init__(self, limit: int = 10):
        if limit <= 0:
            raise ValueError("history limit must be > 0")
        self.limit = limit
        self._entries: Deque[HistoryEntry] = deque(maxlen=limit)

    def record(self, analysis: SentimentAnalysis, date: Optional[datetime] = None) -> HistoryEntry:
        date = date or datetime.now()
        entry = HistoryEntry(
            id=f"history-{uuid4().hex[:12]}",
            name=f"Analysis {date.strftime('%Y-%m-%d %H:%M:%S')}",
            date=date,
            analysis=analysis,
        )
        self._entries.appendleft(entry)
        logger.debug(f"Recorded {entry.id} ({len(self._entries)}/{self.limit} entries kept)")
        return entry

    def list(self) -> List[HistoryEntry]:
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
