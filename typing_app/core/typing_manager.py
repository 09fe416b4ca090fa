"""Facade owning the live typing session, shared between the UI and the API."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import Lock
import time
from typing import Callable

from PySide6.QtCore import QTimer

from typing_app.constants.typing_constants import REPEAT_GRACE_DELAY_MS, STATS_TICK_INTERVAL_MS
from typing_app.core.models import (
    ProgressUpdate,
    Quote,
    SessionCompleted,
    SessionRecord,
    TypingStats,
    Word,
)
from typing_app.core.services.notifications import (
    LoggingNotificationSink,
    NotificationSink,
    deliver_error,
)
from typing_app.core.services.progression import ProgressionEngine
from typing_app.core.services.quote_selector import QuoteSelector
from typing_app.core.services.session_timer import SessionTimer
from typing_app.core.services.stores import HistoryStore, QuoteStatsStore
from typing_app.core.session_machine import (
    Backspace,
    CharacterTyped,
    LoadNext,
    Reset,
    SessionEvent,
    SessionState,
    Tick,
    ToggleDeathMode,
    Transition,
    dispatch,
)
from typing_app.core.stats import round_half_up

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionConfig:
    user_id: str | None = None
    death_mode: bool = False
    repeat_mode: bool = False
    tick_interval_ms: int = STATS_TICK_INTERVAL_MS
    repeat_delay_ms: int = REPEAT_GRACE_DELAY_MS


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Consistent read-only view of the session for renderers and the API."""

    quote: Quote | None
    words: tuple[Word, ...]
    stats: TypingStats
    accuracy: int
    is_active: bool
    is_finished: bool
    current_word_index: int
    current_char_index: int
    death_mode: bool
    repeat_mode: bool
    death_mode_failures: int
    completed_quotes: int
    user_id: str | None
    script_id: str | None


class TypingManager:
    """Facade for the session machine, timer, quote selector, history and progression."""

    def __init__(
        self,
        selector: QuoteSelector | None = None,
        history: HistoryStore | None = None,
        progression: ProgressionEngine | None = None,
        notifier: NotificationSink | None = None,
        config: SessionConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        quote_stats: QuoteStatsStore | None = None,
    ) -> None:
        self._lock = Lock()
        self._config = config or SessionConfig()
        self._clock = clock

        # Services
        self._selector = selector or QuoteSelector()
        self._history = history
        self._progression = progression
        self._notifier: NotificationSink = notifier or LoggingNotificationSink()
        self._quote_stats = quote_stats

        self._script_id: str | None = self._selector.scope_id
        self._completed_quotes: int = 0
        self._last_progress_update: ProgressUpdate | None = None

        self._timer = SessionTimer(interval_ms=self._config.tick_interval_ms, clock=clock)
        self._timer.ticked.connect(self._on_tick)

        self._repeat_timer = QTimer()
        self._repeat_timer.setSingleShot(True)
        self._repeat_timer.setInterval(self._config.repeat_delay_ms)
        self._repeat_timer.timeout.connect(self._on_repeat_elapsed)

        self._state = SessionState.for_quote(self._selector.load_next(), death_mode=self._config.death_mode)

    # --- Input ---

    def handle_input(self, typed_char: str) -> Transition:
        """Feed one keystroke; only the last character of ``typed_char`` counts."""
        if not typed_char:
            with self._lock:
                return Transition(self._state)
        return self._apply(CharacterTyped(typed_char[-1], at=self._clock()))

    def smart_backspace(self) -> Transition:
        return self._apply(Backspace())

    def reset_test(self) -> Transition:
        self._repeat_timer.stop()
        return self._apply(Reset())

    def load_new_quote(self) -> Quote:
        self._repeat_timer.stop()
        generation = self._selector.rotation_generation
        quote = self._selector.load_next()
        if self._selector.rotation_generation != generation:
            with self._lock:
                self._completed_quotes = 0
        self._apply(LoadNext(quote))
        return quote

    # --- Modes and scope ---

    def toggle_death_mode(self) -> bool:
        transition = self._apply(ToggleDeathMode())
        self._config.death_mode = transition.state.death_mode
        return transition.state.death_mode

    def toggle_repeat_mode(self) -> bool:
        with self._lock:
            self._config.repeat_mode = not self._config.repeat_mode
            enabled = self._config.repeat_mode
        if not enabled:
            self._repeat_timer.stop()
        return enabled

    def set_script_scope(self, script_id: str | None) -> Quote:
        """Practise from ``script_id`` (or the default pool) starting a new rotation."""
        self._selector.set_scope(script_id)
        with self._lock:
            self._script_id = script_id
            self._completed_quotes = 0
        return self.load_new_quote()

    def set_user(self, user_id: str | None) -> None:
        cleaned = user_id.strip() if user_id else ""
        with self._lock:
            self._config.user_id = cleaned or None
            self._last_progress_update = None

    # --- Read access ---

    @property
    def words(self) -> tuple[Word, ...]:
        with self._lock:
            return self._state.words

    @property
    def stats(self) -> TypingStats:
        with self._lock:
            return self._state.stats

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._state.is_active

    @property
    def is_finished(self) -> bool:
        with self._lock:
            return self._state.is_finished

    @property
    def current_word_index(self) -> int:
        with self._lock:
            return self._state.current_word_index

    @property
    def current_char_index(self) -> int:
        with self._lock:
            return self._state.current_char_index

    @property
    def death_mode(self) -> bool:
        with self._lock:
            return self._state.death_mode

    @property
    def repeat_mode(self) -> bool:
        with self._lock:
            return self._config.repeat_mode

    @property
    def death_mode_failures(self) -> int:
        with self._lock:
            return self._state.death_mode_failures

    @property
    def completed_quotes(self) -> int:
        with self._lock:
            return self._completed_quotes

    @property
    def current_quote(self) -> Quote | None:
        with self._lock:
            return self._state.quote

    @property
    def user_id(self) -> str | None:
        with self._lock:
            return self._config.user_id

    @property
    def script_id(self) -> str | None:
        with self._lock:
            return self._script_id

    @property
    def last_progress_update(self) -> ProgressUpdate | None:
        with self._lock:
            return self._last_progress_update

    @property
    def progression(self) -> ProgressionEngine | None:
        return self._progression

    @property
    def history(self) -> HistoryStore | None:
        return self._history

    @property
    def timer(self) -> SessionTimer:
        return self._timer

    def is_repeat_pending(self) -> bool:
        return self._repeat_timer.isActive()

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            state = self._state
            return SessionSnapshot(
                quote=state.quote,
                words=state.words,
                stats=state.stats,
                accuracy=state.accuracy,
                is_active=state.is_active,
                is_finished=state.is_finished,
                current_word_index=state.current_word_index,
                current_char_index=state.current_char_index,
                death_mode=state.death_mode,
                repeat_mode=self._config.repeat_mode,
                death_mode_failures=state.death_mode_failures,
                completed_quotes=self._completed_quotes,
                user_id=self._config.user_id,
                script_id=self._script_id,
            )

    # --- Internals ---

    def _apply(self, event: SessionEvent) -> Transition:
        with self._lock:
            transition = dispatch(self._state, event)
            self._state = transition.state

        if transition.started:
            self._timer.start()
        if transition.stopped:
            self._timer.stop()
        if transition.completed is not None:
            self._on_session_completed(transition.completed)
        return transition

    def _on_tick(self, at: float) -> None:
        self._apply(Tick(at))

    def _on_repeat_elapsed(self) -> None:
        logger.debug("Repeat mode: presenting the same quote again")
        self.reset_test()

    def _on_session_completed(self, event: SessionCompleted) -> None:
        with self._lock:
            user_id = self._config.user_id
            script_id = self._script_id
            repeat = self._config.repeat_mode

        logger.info(
            "Session finished: %d WPM, %d%% accuracy in %.1fs",
            event.stats.wpm,
            event.stats.accuracy,
            event.stats.elapsed_time,
        )

        if user_id is not None and script_id is not None:
            self._record_history(user_id, script_id, event)

        if user_id is not None and self._progression is not None:
            self._record_progress(self._progression, user_id, event)

        if repeat:
            self._repeat_timer.start()

    def _record_history(self, user_id: str, script_id: str, event: SessionCompleted) -> None:
        if self._history is None:
            return
        record = SessionRecord(
            user_id=user_id,
            script_id=script_id,
            quote_id=event.quote_id,
            wpm=event.stats.wpm,
            accuracy=event.stats.accuracy,
            elapsed_time=round_half_up(event.stats.elapsed_time),
        )
        try:
            saved = self._history.record_session(record)
        except Exception:
            logger.exception("Failed to record session history for user %s", user_id)
            deliver_error(self._notifier, "The finished session could not be saved to history.")
            return
        if not saved:
            logger.warning("History store rejected the session of user %s", user_id)
            deliver_error(self._notifier, "The finished session could not be saved to history.")
            return
        with self._lock:
            self._completed_quotes += 1
        self._record_quote_stats(event)

    def _record_quote_stats(self, event: SessionCompleted) -> None:
        if self._quote_stats is None or event.quote_id is None:
            return
        try:
            self._quote_stats.record_quote_result(event.quote_id, event.stats.wpm, event.stats.accuracy)
        except KeyError:
            logger.warning("Quote %s disappeared before its stats were updated", event.quote_id)
        except Exception:
            logger.exception("Failed to update statistics of quote %s", event.quote_id)

    def _record_progress(self, progression: ProgressionEngine, user_id: str, event: SessionCompleted) -> None:
        try:
            update = progression.consume(user_id, event)
            pool_size = self._selector.pool_size()
            if pool_size:
                next_index = progression.next_quote_index(update.progress.current_quote_index, pool_size)
                update = ProgressUpdate(
                    progress=progression.update_current_quote_index(user_id, next_index),
                    is_successful=update.is_successful,
                    wpm_threshold=update.wpm_threshold,
                    level_completed=update.level_completed,
                )
        except Exception:
            logger.exception("Failed to update progression for user %s", user_id)
            deliver_error(self._notifier, "Your level progress could not be updated.")
            return
        with self._lock:
            self._last_progress_update = update
