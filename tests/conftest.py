"""Shared fixtures for the TypeLadder test suite."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import random

import pytest

from typing_app.core.models import Quote
from typing_app.core.services.progression import ProgressionEngine
from typing_app.core.services.quote_repository import QuoteRepository
from typing_app.core.services.quote_selector import QuoteSelector
from typing_app.core.services.stores import InMemoryHistoryStore, InMemoryProgressStore
from typing_app.core.session_machine import CharacterTyped, SessionState, Transition, dispatch
from typing_app.core.typing_manager import SessionConfig, TypingManager


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier:
    def __init__(self) -> None:
        self.levels = []
        self.errors: list[str] = []

    def notify_level_completed(self, event) -> None:
        self.levels.append(event)

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


def type_text(state: SessionState, text: str, at: float = 0.0) -> tuple[SessionState, list[Transition]]:
    """Dispatch one ``CharacterTyped`` per character of ``text``."""
    transitions = []
    for char in text:
        transition = dispatch(state, CharacterTyped(char, at=at))
        transitions.append(transition)
        state = transition.state
    return state, transitions


def session_for(text: str, quote_id: str | None = "q1", **kwargs) -> SessionState:
    return SessionState.for_quote(Quote(id=quote_id, content=text), **kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def repository() -> QuoteRepository:
    return QuoteRepository()


@pytest.fixture
def history() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()


@pytest.fixture
def progress_store() -> InMemoryProgressStore:
    return InMemoryProgressStore()


@pytest.fixture
def progression(progress_store, notifier) -> ProgressionEngine:
    return ProgressionEngine(progress_store, notifier=notifier)


@pytest.fixture
def selector(repository) -> QuoteSelector:
    return QuoteSelector(repository, fallback_quotes=["ab cd"], rng=random.Random(7))


@pytest.fixture
def manager(qapp, selector, history, progression, notifier, clock) -> TypingManager:
    return TypingManager(
        selector=selector,
        history=history,
        progression=progression,
        notifier=notifier,
        config=SessionConfig(repeat_delay_ms=50),
        clock=clock,
    )
