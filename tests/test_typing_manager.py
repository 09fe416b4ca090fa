from __future__ import annotations

import pytest

from typing_app.core.models import GameLevel
from typing_app.core.services.progression import ProgressionEngine
from typing_app.core.services.stores import InMemoryProgressStore
from typing_app.core.typing_manager import SessionConfig, TypingManager


class BrokenHistory:
    def record_session(self, record) -> bool:
        raise OSError("history unavailable")


class RejectingHistory:
    def record_session(self, record) -> bool:
        return False


def _type(manager: TypingManager, text: str) -> None:
    for char in text:
        manager.handle_input(char)


def _scoped(manager: TypingManager, repository, *quotes: str) -> str:
    script = repository.add_script("drills", list(quotes) or ["ab cd"])
    manager.set_script_scope(script.id)
    return script.id


def test_first_keystroke_starts_timer(manager) -> None:
    assert not manager.timer.is_running()
    manager.handle_input("a")
    assert manager.is_active
    assert manager.timer.is_running()


def test_only_last_character_of_input_counts(manager) -> None:
    manager.handle_input("xa")
    assert manager.stats.correct_chars == 1
    assert manager.current_char_index == 1

    manager.handle_input("")
    assert manager.current_char_index == 1


def test_finishing_stops_timer(manager) -> None:
    _type(manager, "ab cd")
    assert manager.is_finished
    assert not manager.is_active
    assert not manager.timer.is_running()


def test_guest_session_writes_nothing(manager, history) -> None:
    _type(manager, "ab cd")
    assert manager.last_progress_update is None
    assert manager.completed_quotes == 0


def test_finished_session_records_history_and_progress(manager, repository, history, clock) -> None:
    script_id = _scoped(manager, repository, "ab cd")
    manager.set_user("ana")

    manager.handle_input("a")
    clock.advance(6)
    _type(manager, "b cd")

    records = history.get_records("ana")
    assert len(records) == 1
    assert records[0].script_id == script_id
    assert records[0].wpm == 8
    assert records[0].accuracy == 100
    assert records[0].elapsed_time == 6
    assert manager.completed_quotes == 1

    update = manager.last_progress_update
    assert update is not None
    assert update.is_successful
    assert update.progress.baseline_wpm == 8


def test_progress_without_script_skips_history(manager, history) -> None:
    manager.set_user("ana")
    _type(manager, "ab cd")

    assert history.get_records("ana") == []
    assert manager.last_progress_update is not None


def test_history_failure_is_reported(qapp, selector, notifier, repository) -> None:
    manager = TypingManager(selector=selector, history=BrokenHistory(), notifier=notifier)
    _scoped(manager, repository)
    manager.set_user("ana")
    _type(manager, "ab cd")

    assert manager.is_finished
    assert manager.completed_quotes == 0
    assert len(notifier.errors) == 1


def test_history_rejection_is_reported(qapp, selector, notifier, repository) -> None:
    manager = TypingManager(selector=selector, history=RejectingHistory(), notifier=notifier)
    _scoped(manager, repository)
    manager.set_user("ana")
    _type(manager, "ab cd")

    assert manager.completed_quotes == 0
    assert notifier.errors


def test_completed_quotes_reset_on_new_rotation(manager, repository) -> None:
    _scoped(manager, repository, "ab cd")
    manager.set_user("ana")
    _type(manager, "ab cd")
    assert manager.completed_quotes == 1

    manager.load_new_quote()
    assert manager.completed_quotes == 0


def test_level_completion_reaches_notifier(qapp, selector, notifier, clock) -> None:
    progression = ProgressionEngine(
        InMemoryProgressStore(),
        levels={1: GameLevel(1, 0.5, 90, 1, 50)},
        notifier=notifier,
    )
    manager = TypingManager(selector=selector, progression=progression, notifier=notifier, clock=clock)
    manager.set_user("ana")
    manager.handle_input("a")
    clock.advance(6)
    _type(manager, "b cd")

    assert len(notifier.levels) == 1
    assert notifier.levels[0].completed_level == 1
    assert manager.last_progress_update.level_completed == notifier.levels[0]


def test_death_resets_do_not_count_as_attempts(manager, progression) -> None:
    manager.set_user("ana")
    assert manager.toggle_death_mode()
    manager.handle_input("a")
    manager.handle_input("x")

    assert manager.death_mode_failures == 1
    assert not manager.is_active
    assert not manager.timer.is_running()
    assert progression.get_progress("ana").level_attempts_used == 0


def test_timer_tick_updates_stats(manager, clock) -> None:
    manager.handle_input("a")
    clock.advance(60)
    manager.timer.tick()
    assert manager.stats.elapsed_time == pytest.approx(60)


def test_repeat_mode_represents_same_quote(qtbot, manager) -> None:
    assert manager.toggle_repeat_mode()
    quote = manager.current_quote
    _type(manager, "ab cd")
    assert manager.is_finished
    assert manager.is_repeat_pending()

    qtbot.waitUntil(lambda: not manager.is_finished, timeout=2000)

    assert manager.current_quote == quote
    assert manager.current_word_index == 0
    assert manager.stats.correct_chars == 0


def test_loading_new_quote_cancels_repeat(manager) -> None:
    manager.toggle_repeat_mode()
    _type(manager, "ab cd")
    manager.load_new_quote()

    assert not manager.is_repeat_pending()
    assert not manager.is_finished


def test_disabling_repeat_cancels_pending(manager) -> None:
    manager.toggle_repeat_mode()
    _type(manager, "ab cd")
    assert not manager.toggle_repeat_mode()
    assert not manager.is_repeat_pending()


def test_reset_test_restarts_quote(manager) -> None:
    _type(manager, "ab")
    manager.reset_test()
    assert manager.current_char_index == 0
    assert not manager.is_active
    assert not manager.timer.is_running()


def test_set_user_blank_means_guest(manager) -> None:
    manager.set_user("  ")
    assert manager.user_id is None


def test_snapshot(manager) -> None:
    manager.set_user("ana")
    manager.handle_input("a")
    snapshot = manager.snapshot()

    assert snapshot.user_id == "ana"
    assert snapshot.is_active
    assert snapshot.current_char_index == 1
    assert snapshot.quote.content == "ab cd"
    assert snapshot.accuracy == 100


def test_config_applies_death_mode(qapp, selector) -> None:
    manager = TypingManager(selector=selector, config=SessionConfig(death_mode=True))
    assert manager.death_mode


def test_recorded_session_updates_quote_stats(qapp, selector, history, repository, clock) -> None:
    manager = TypingManager(selector=selector, history=history, quote_stats=repository, clock=clock)
    _scoped(manager, repository, "ab cd")
    manager.set_user("ana")

    manager.handle_input("a")
    clock.advance(6)
    _type(manager, "b cd")

    stats = repository.get_quote_stats(manager.current_quote.id)
    assert stats.typed_count == 1
    assert stats.best_wpm == 8
    assert stats.avg_accuracy == 100


def test_quote_stats_skipped_when_history_fails(qapp, selector, notifier, repository) -> None:
    manager = TypingManager(selector=selector, history=BrokenHistory(), notifier=notifier, quote_stats=repository)
    _scoped(manager, repository)
    manager.set_user("ana")
    _type(manager, "ab cd")

    assert repository.get_quote_stats(manager.current_quote.id).typed_count == 0


def test_guest_session_leaves_quote_stats_alone(qapp, selector, history, repository) -> None:
    manager = TypingManager(selector=selector, history=history, quote_stats=repository)
    _scoped(manager, repository)
    _type(manager, "ab cd")

    assert repository.get_quote_stats(manager.current_quote.id).typed_count == 0
