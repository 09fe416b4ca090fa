"""Level ladder progression driven by finished typing sessions."""

from __future__ import annotations

from dataclasses import replace
import logging
from threading import Lock
from typing import Mapping

from typing_app.constants.progression_constants import BASE_LEVEL, DEFAULT_LEVELS
from typing_app.core.models import (
    GameLevel,
    LevelCompleted,
    ProgressUpdate,
    SessionCompleted,
    UserProgress,
)
from typing_app.core.services.notifications import NotificationSink, deliver_level_completed
from typing_app.core.services.stores import ProgressStore
from typing_app.core.stats import round_half_up

logger = logging.getLogger(__name__)


class ProgressionEngine:
    """Evaluates attempts against a user's baseline and moves them up the ladder.

    The engine is the only writer of ``UserProgress``. Store failures never
    propagate: the last known snapshot is kept in memory and used instead.
    """

    def __init__(
        self,
        store: ProgressStore,
        levels: Mapping[int, GameLevel] = DEFAULT_LEVELS,
        notifier: NotificationSink | None = None,
    ) -> None:
        if BASE_LEVEL not in levels:
            raise ValueError(f"Level configuration must contain level {BASE_LEVEL}.")
        self._lock = Lock()
        self._store = store
        self._levels: dict[int, GameLevel] = dict(levels)
        self._notifier = notifier
        self._cache: dict[str, UserProgress] = {}
        self._level_just_completed: LevelCompleted | None = None

    @property
    def level_just_completed(self) -> LevelCompleted | None:
        """Level-up produced by the most recent attempt, if any."""
        return self._level_just_completed

    def set_notifier(self, notifier: NotificationSink | None) -> None:
        self._notifier = notifier

    def get_level_parameters(self, level: int) -> GameLevel:
        parameters = self._levels.get(level)
        if parameters is None:
            logger.warning("No configuration for level %d; using level %d parameters", level, BASE_LEVEL)
            return self._levels[BASE_LEVEL]
        return parameters

    def get_progression_matrix(self) -> list[GameLevel]:
        return [self._levels[level] for level in sorted(self._levels)]

    def get_progress(self, user_id: str) -> UserProgress:
        with self._lock:
            return self._load(user_id)

    def calculate_required_wpm(self, user_id: str) -> int | None:
        progress = self.get_progress(user_id)
        threshold = self._wpm_threshold(progress)
        if threshold is None:
            return None
        return round_half_up(threshold)

    def is_attempt_successful(self, progress: UserProgress, wpm: int, accuracy: int) -> bool:
        level = self.get_level_parameters(progress.current_level)
        threshold = self._wpm_threshold(progress)
        wpm_ok = threshold is None or wpm >= threshold
        return wpm_ok and accuracy >= level.accuracy_threshold

    def is_max_attempts_reached(self, user_id: str) -> bool:
        progress = self.get_progress(user_id)
        level = self.get_level_parameters(progress.current_level)
        return progress.level_attempts_used >= level.max_attempts

    def record_attempt(self, user_id: str, quote_id: str | None, wpm: int, accuracy: int) -> ProgressUpdate:
        """Apply one finished attempt and return the resulting progress."""
        with self._lock:
            progress = self._load(user_id)
            level = self.get_level_parameters(progress.current_level)
            threshold = self._wpm_threshold(progress)
            is_successful = self.is_attempt_successful(progress, wpm, accuracy)

            progress = replace(progress, level_attempts_used=progress.level_attempts_used + 1)
            if is_successful:
                completed = progress.completed_quotes
                if quote_id is not None:
                    completed = completed | {quote_id}
                baseline = progress.baseline_wpm
                progress = replace(
                    progress,
                    successful_quotes_count=progress.successful_quotes_count + 1,
                    completed_quotes=completed,
                    level_best_wpm=max(progress.level_best_wpm, wpm),
                    baseline_wpm=wpm if baseline is None or wpm > baseline else baseline,
                )

            level_completed: LevelCompleted | None = None
            if progress.successful_quotes_count >= level.required_quotes:
                progress, level_completed = self._advance_level(progress)

            self._level_just_completed = level_completed
            self._save(progress)

        if level_completed is not None and self._notifier is not None:
            deliver_level_completed(self._notifier, level_completed)

        return ProgressUpdate(
            progress=progress,
            is_successful=is_successful,
            wpm_threshold=threshold,
            level_completed=level_completed,
        )

    def consume(self, user_id: str, event: SessionCompleted) -> ProgressUpdate:
        return self.record_attempt(user_id, event.quote_id, event.stats.wpm, event.stats.accuracy)

    def reset_progress(self, user_id: str) -> UserProgress:
        """Delete the user's record and start again at level one without a baseline."""
        with self._lock:
            try:
                self._store.delete_progress(user_id)
            except Exception:
                logger.exception("Failed to delete progress for user %s", user_id)
            self._cache.pop(user_id, None)
            self._level_just_completed = None
            progress = UserProgress(user_id=user_id)
            self._save(progress)
            logger.info("Progress reset for user %s", user_id)
            return progress

    def update_current_quote_index(self, user_id: str, index: int) -> UserProgress:
        if index < 0:
            raise ValueError("Quote index must not be negative.")
        with self._lock:
            progress = replace(self._load(user_id), current_quote_index=index)
            self._save(progress)
            return progress

    @staticmethod
    def next_quote_index(current: int, total: int) -> int:
        """Sequential order with wrap-around."""
        if total <= 0:
            return 0
        return (current + 1) % total

    def _advance_level(self, progress: UserProgress) -> tuple[UserProgress, LevelCompleted]:
        completed_level = progress.current_level
        next_level = completed_level + 1
        next_parameters = self.get_level_parameters(next_level)
        target: int | None = None
        if progress.baseline_wpm is not None:
            target = round_half_up(progress.baseline_wpm * next_parameters.wpm_threshold_multiplier)

        event = LevelCompleted(
            completed_level=completed_level,
            best_wpm=progress.level_best_wpm,
            next_level=next_level,
            next_level_wpm_target=target,
        )
        logger.info(
            "User %s completed level %d with best %d WPM; level %d target is %s WPM",
            progress.user_id,
            completed_level,
            progress.level_best_wpm,
            next_level,
            target,
        )
        advanced = replace(
            progress,
            current_level=next_level,
            level_attempts_used=0,
            successful_quotes_count=0,
            level_best_wpm=0,
            completed_quotes=frozenset(),
        )
        return advanced, event

    def _wpm_threshold(self, progress: UserProgress) -> float | None:
        if progress.baseline_wpm is None:
            return None
        level = self.get_level_parameters(progress.current_level)
        return progress.baseline_wpm * level.wpm_threshold_multiplier

    def _load(self, user_id: str) -> UserProgress:
        try:
            stored = self._store.get_progress(user_id)
        except Exception:
            logger.exception("Failed to read progress for user %s; using in-memory copy", user_id)
            stored = None
            cached = self._cache.get(user_id)
            if cached is not None:
                return cached
        if stored is None:
            stored = self._cache.get(user_id)
        if stored is None:
            stored = UserProgress(user_id=user_id)
            logger.info("Created progress for new user %s", user_id)
            self._save(stored)
        self._cache[user_id] = stored
        return stored

    def _save(self, progress: UserProgress) -> None:
        self._cache[progress.user_id] = progress
        try:
            self._store.save_progress(progress.user_id, progress)
        except Exception:
            logger.exception("Failed to save progress for user %s; keeping in-memory state", progress.user_id)
