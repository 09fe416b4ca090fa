"""Contracts and in-memory implementations of the history and progress stores."""

from __future__ import annotations

from threading import Lock
from typing import Protocol

from typing_app.core.errors import StoreError
from typing_app.core.models import QuoteStats, SessionRecord, UserProgress
from typing_app.core.stats import round_half_up


class HistoryStore(Protocol):
    def record_session(self, record: SessionRecord) -> bool:
        """Persist one finished session; return False when the write failed."""


class QuoteStatsStore(Protocol):
    def record_quote_result(self, quote_id: str, wpm: int, accuracy: int) -> QuoteStats:
        ...


class ProgressStore(Protocol):
    def get_progress(self, user_id: str) -> UserProgress | None:
        ...

    def save_progress(self, user_id: str, progress: UserProgress) -> None:
        ...

    def delete_progress(self, user_id: str) -> None:
        ...


class InMemoryHistoryStore:
    """Keeps finished sessions in process memory."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: list[SessionRecord] = []

    def record_session(self, record: SessionRecord) -> bool:
        with self._lock:
            self._records.append(record)
        return True

    def get_records(self, user_id: str) -> list[SessionRecord]:
        with self._lock:
            return [record for record in self._records if record.user_id == user_id]

    def get_user_average_wpm(self, user_id: str) -> int | None:
        records = self.get_records(user_id)
        if not records:
            return None
        return round_half_up(sum(record.wpm for record in records) / len(records))

    def get_user_average_accuracy(self, user_id: str) -> int | None:
        records = self.get_records(user_id)
        if not records:
            return None
        return round_half_up(sum(record.accuracy for record in records) / len(records))

    def get_user_wpm_history(self, user_id: str, limit: int = 10) -> list[int]:
        """Return the WPM of the ``limit`` most recent sessions, oldest first."""
        if limit <= 0:
            return []
        records = self.get_records(user_id)
        return [record.wpm for record in records[-limit:]]

    def get_user_best_wpm(self, user_id: str) -> int | None:
        records = self.get_records(user_id)
        if not records:
            return None
        return max(record.wpm for record in records)


class InMemoryProgressStore:
    """Keeps one progress snapshot per user in process memory."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._progress: dict[str, UserProgress] = {}

    def get_progress(self, user_id: str) -> UserProgress | None:
        with self._lock:
            return self._progress.get(user_id)

    def save_progress(self, user_id: str, progress: UserProgress) -> None:
        if progress.user_id != user_id:
            raise StoreError(f"Progress for {progress.user_id!r} cannot be stored under {user_id!r}.")
        with self._lock:
            self._progress[user_id] = progress

    def delete_progress(self, user_id: str) -> None:
        with self._lock:
            self._progress.pop(user_id, None)
