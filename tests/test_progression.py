from __future__ import annotations

import pytest

from typing_app.constants.progression_constants import DEFAULT_LEVELS
from typing_app.core.errors import StoreError
from typing_app.core.models import GameLevel, SessionCompleted, TypingStats, UserProgress
from typing_app.core.services.progression import ProgressionEngine


class WriteFailingStore:
    def get_progress(self, user_id):
        return None

    def save_progress(self, user_id, progress):
        raise StoreError("disk full")

    def delete_progress(self, user_id):
        raise StoreError("disk full")


class ReadFailingStore(WriteFailingStore):
    def get_progress(self, user_id):
        raise StoreError("timeout")

    def save_progress(self, user_id, progress):
        pass


def _with_baseline(progress_store, baseline: int) -> None:
    progress_store.save_progress("ana", UserProgress(user_id="ana", baseline_wpm=baseline))


def test_progress_created_on_first_access(progression, progress_store) -> None:
    progress = progression.get_progress("ana")

    assert progress == UserProgress(user_id="ana")
    assert progress_store.get_progress("ana") == progress


def test_baseline_scenario(progression, progress_store) -> None:
    _with_baseline(progress_store, 40)

    passed = progression.record_attempt("ana", "q1", wpm=25, accuracy=95)
    assert passed.is_successful
    assert passed.wpm_threshold == pytest.approx(20.0)

    failed = progression.record_attempt("ana", "q2", wpm=15, accuracy=95)
    assert not failed.is_successful
    assert failed.progress.successful_quotes_count == 1
    assert failed.progress.level_attempts_used == 2
    assert failed.progress.baseline_wpm == 40


def test_accuracy_gate_applies_without_baseline(progression) -> None:
    update = progression.record_attempt("ana", "q1", wpm=80, accuracy=89)

    assert not update.is_successful
    assert update.wpm_threshold is None
    assert update.progress.baseline_wpm is None


def test_first_success_sets_baseline(progression) -> None:
    update = progression.record_attempt("ana", "q1", wpm=33, accuracy=100)

    assert update.is_successful
    assert update.progress.baseline_wpm == 33
    assert update.progress.level_best_wpm == 33
    assert update.progress.completed_quotes == frozenset({"q1"})


def test_baseline_is_running_maximum(progression) -> None:
    progression.record_attempt("ana", "q1", wpm=30, accuracy=100)
    progression.record_attempt("ana", "q2", wpm=45, accuracy=100)
    update = progression.record_attempt("ana", "q3", wpm=35, accuracy=100)

    assert update.progress.baseline_wpm == 45
    assert update.progress.level_best_wpm == 45


def test_reaching_required_quotes_advances_level(progression, notifier) -> None:
    for index in range(4):
        update = progression.record_attempt("ana", f"q{index}", wpm=30, accuracy=100)
        assert update.level_completed is None

    update = progression.record_attempt("ana", "q4", wpm=30, accuracy=100)

    progress = update.progress
    assert progress.current_level == 2
    assert progress.level_attempts_used == 0
    assert progress.successful_quotes_count == 0
    assert progress.level_best_wpm == 0
    assert progress.completed_quotes == frozenset()
    assert progress.baseline_wpm == 30

    assert update.level_completed is not None
    assert update.level_completed.completed_level == 1
    assert update.level_completed.best_wpm == 30
    assert update.level_completed.next_level == 2
    assert update.level_completed.next_level_wpm_target == 18
    assert progression.level_just_completed == update.level_completed
    assert notifier.levels == [update.level_completed]


def test_failed_attempts_never_count_as_successes(progression, progress_store) -> None:
    _with_baseline(progress_store, 60)
    for _ in range(10):
        update = progression.record_attempt("ana", "q", wpm=10, accuracy=100)
    assert update.progress.successful_quotes_count == 0
    assert update.progress.current_level == 1
    assert update.progress.level_attempts_used == 10


def test_level_just_completed_clears_on_next_attempt(progress_store, notifier) -> None:
    engine = ProgressionEngine(progress_store, levels={1: GameLevel(1, 0.5, 90, 1, 50)}, notifier=notifier)
    engine.record_attempt("ana", "q", wpm=30, accuracy=100)
    assert engine.level_just_completed is not None

    engine.record_attempt("ana", "q", wpm=1, accuracy=100)
    assert engine.level_just_completed is None


def test_unknown_level_uses_level_one(progression) -> None:
    assert progression.get_level_parameters(99) == DEFAULT_LEVELS[1]


def test_levels_must_include_level_one(progress_store) -> None:
    with pytest.raises(ValueError):
        ProgressionEngine(progress_store, levels={2: DEFAULT_LEVELS[2]})


def test_progression_matrix(progression) -> None:
    matrix = progression.get_progression_matrix()
    assert [level.level for level in matrix] == [1, 2, 3, 4, 5]
    assert (matrix[2].wpm_threshold_multiplier, matrix[2].accuracy_threshold, matrix[2].required_quotes) == (0.7, 94, 6)


def test_calculate_required_wpm(progression, progress_store) -> None:
    assert progression.calculate_required_wpm("ana") is None
    _with_baseline(progress_store, 45)
    assert progression.calculate_required_wpm("ana") == 23


def test_reset_progress(progression, progress_store) -> None:
    progression.record_attempt("ana", "q1", wpm=50, accuracy=100)
    progress = progression.reset_progress("ana")

    assert progress == UserProgress(user_id="ana")
    assert progress_store.get_progress("ana") == progress
    assert progression.get_progress("ana").baseline_wpm is None


def test_max_attempts(progress_store) -> None:
    engine = ProgressionEngine(progress_store, levels={1: GameLevel(1, 0.5, 90, 5, 2)})
    engine.record_attempt("ana", "q", wpm=10, accuracy=10)
    assert not engine.is_max_attempts_reached("ana")
    engine.record_attempt("ana", "q", wpm=10, accuracy=10)
    assert engine.is_max_attempts_reached("ana")


def test_consume_session_completed(progression) -> None:
    event = SessionCompleted(stats=TypingStats(wpm=30, correct_chars=20), quote_id="q7")
    update = progression.consume("ana", event)

    assert update.is_successful
    assert "q7" in update.progress.completed_quotes


def test_quote_index_helpers(progression) -> None:
    assert progression.update_current_quote_index("ana", 3).current_quote_index == 3
    assert progression.get_progress("ana").current_quote_index == 3
    with pytest.raises(ValueError):
        progression.update_current_quote_index("ana", -1)
    assert ProgressionEngine.next_quote_index(1, 5) == 2
    assert ProgressionEngine.next_quote_index(4, 5) == 0
    assert ProgressionEngine.next_quote_index(0, 0) == 0


def test_write_failure_keeps_in_memory_state(caplog) -> None:
    engine = ProgressionEngine(WriteFailingStore())
    engine.record_attempt("ana", "q1", wpm=30, accuracy=100)

    progress = engine.get_progress("ana")
    assert progress.level_attempts_used == 1
    assert progress.baseline_wpm == 30
    assert "disk full" in caplog.text


def test_read_failure_uses_cached_progress() -> None:
    engine = ProgressionEngine(ReadFailingStore())
    first = engine.record_attempt("ana", "q1", wpm=30, accuracy=100)
    second = engine.record_attempt("ana", "q2", wpm=30, accuracy=100)

    assert first.progress.level_attempts_used == 1
    assert second.progress.level_attempts_used == 2
