"""Keystroke state machine for a single typing session.

Every change to a session goes through :func:`dispatch`, which takes the
current immutable :class:`SessionState` and one event and returns a
:class:`Transition` holding the next state plus the side effects the caller
has to carry out (start or stop the timer, report a completed session).
Nothing in this module touches timers, stores or the UI.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Callable, Union

from typing_app.core.models import (
    Character,
    CharacterState,
    Quote,
    SessionCompleted,
    TypingStats,
    Word,
)
from typing_app.core.stats import calculate_accuracy, calculate_wpm
from typing_app.core.tokenizer import count_characters, tokenize, with_caret, without_caret

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CharacterTyped:
    char: str
    at: float = 0.0


@dataclass(frozen=True, slots=True)
class SpaceTyped:
    at: float = 0.0


@dataclass(frozen=True, slots=True)
class Backspace:
    pass


@dataclass(frozen=True, slots=True)
class Reset:
    pass


@dataclass(frozen=True, slots=True)
class LoadNext:
    quote: Quote


@dataclass(frozen=True, slots=True)
class Tick:
    at: float


@dataclass(frozen=True, slots=True)
class ToggleDeathMode:
    pass


SessionEvent = Union[CharacterTyped, SpaceTyped, Backspace, Reset, LoadNext, Tick, ToggleDeathMode]


@dataclass(frozen=True, slots=True)
class SessionState:
    quote: Quote | None = None
    words: tuple[Word, ...] = ()
    current_word_index: int = 0
    current_char_index: int = 0
    is_active: bool = False
    is_finished: bool = False
    correct_chars: int = 0
    incorrect_chars: int = 0
    total_chars: int = 0
    wpm: int = 0
    elapsed_time: float = 0.0
    started_at: float | None = None
    death_mode: bool = False
    death_mode_failures: int = 0
    # Typed result of the previous word's last character while the caret
    # marker rests on it after backspacing over a word boundary.
    boundary_char_state: CharacterState | None = None

    @classmethod
    def for_quote(
        cls,
        quote: Quote,
        *,
        death_mode: bool = False,
        death_mode_failures: int = 0,
    ) -> "SessionState":
        words = tokenize(quote.content)
        return cls(
            quote=quote,
            words=words,
            current_word_index=_first_typeable_word(words),
            total_chars=count_characters(words),
            death_mode=death_mode,
            death_mode_failures=death_mode_failures,
        )

    @property
    def stats(self) -> TypingStats:
        return TypingStats(
            wpm=self.wpm,
            correct_chars=self.correct_chars,
            incorrect_chars=self.incorrect_chars,
            total_chars=self.total_chars,
            elapsed_time=self.elapsed_time,
        )

    @property
    def accuracy(self) -> int:
        return calculate_accuracy(self.correct_chars, self.incorrect_chars)


@dataclass(frozen=True, slots=True)
class Transition:
    """Next state plus the effects the owner of the session must apply."""

    state: SessionState
    started: bool = False
    stopped: bool = False
    completed: SessionCompleted | None = None


def dispatch(state: SessionState, event: SessionEvent) -> Transition:
    """Apply one event to ``state``."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        logger.warning("Dropping unknown session event %r", event)
        return Transition(state)
    return handler(state, event)


def _handle_character(state: SessionState, event: CharacterTyped) -> Transition:
    if event.char == " ":
        return _handle_space(state, SpaceTyped(at=event.at))
    if len(event.char) != 1:
        logger.warning("Dropping keystroke %r: expected exactly one character", event.char)
        return Transition(state)
    if not _accepts_input(state):
        return Transition(state)

    word_index = state.current_word_index
    char_index = state.current_char_index
    word = state.words[word_index]

    if char_index == len(word):
        # The word is complete and only its separating space is valid here.
        if state.death_mode:
            return _death_reset(state)
        state, started = _activate(state, event.at)
        return Transition(replace(state, incorrect_chars=state.incorrect_chars + 1), started=started)

    expected = word.characters[char_index]
    is_correct = event.char == expected.char
    if not is_correct and state.death_mode:
        return _death_reset(state)

    state, started = _activate(state, event.at)
    characters = list(word.characters)
    characters[char_index] = replace(
        expected,
        state=CharacterState.CORRECT if is_correct else CharacterState.INCORRECT,
    )
    words = _replace_word(state.words, word_index, Word(tuple(characters)))
    if is_correct:
        state = replace(state, words=words, correct_chars=state.correct_chars + 1)
    else:
        state = replace(state, words=words, incorrect_chars=state.incorrect_chars + 1)

    if char_index < len(word) - 1:
        next_index = char_index + 1
    elif _only_empty_words_after(state.words, word_index):
        return _finish(state, event.at, started)
    else:
        next_index = len(word)
    state = replace(
        state,
        current_char_index=next_index,
        words=with_caret(state.words, word_index, next_index),
    )
    return Transition(state, started=started)


def _handle_space(state: SessionState, event: SpaceTyped) -> Transition:
    if not _accepts_input(state):
        return Transition(state)

    word_index = state.current_word_index

    if state.current_char_index < len(state.words[word_index]):
        if state.death_mode:
            return _death_reset(state)
        state, started = _activate(state, event.at)
        return Transition(replace(state, incorrect_chars=state.incorrect_chars + 1), started=started)

    state, started = _activate(_restore_boundary_char(state), event.at)
    if _only_empty_words_after(state.words, word_index):
        return _finish(state, event.at, started)

    next_word = word_index + 1
    state = replace(
        state,
        current_word_index=next_word,
        current_char_index=0,
        words=with_caret(state.words, next_word, 0),
    )
    return Transition(state, started=started)


def _handle_backspace(state: SessionState, event: Backspace) -> Transition:
    if state.is_finished or not state.words:
        return Transition(state)
    if not _caret_in_bounds(state):
        return Transition(state)

    state = _restore_boundary_char(state)
    word_index = state.current_word_index
    char_index = state.current_char_index

    if char_index == 0:
        if word_index <= _first_typeable_word(state.words):
            return Transition(state)
        return Transition(_back_over_boundary(state, word_index - 1))

    word = state.words[word_index]
    characters = list(word.characters)
    first_error = next(
        (idx for idx in range(char_index) if characters[idx].state is CharacterState.INCORRECT),
        None,
    )

    if first_error is not None:
        for idx in range(first_error, char_index):
            characters[idx] = replace(characters[idx], state=CharacterState.INACTIVE)
        words = _replace_word(state.words, word_index, Word(tuple(characters)))
        state = replace(
            state,
            current_char_index=first_error,
            words=with_caret(words, word_index, first_error),
        )
        return Transition(state)

    vacated = characters[char_index - 1]
    correct_chars = state.correct_chars
    incorrect_chars = state.incorrect_chars
    if vacated.state is CharacterState.CORRECT:
        correct_chars = max(0, correct_chars - 1)
    elif vacated.state is CharacterState.INCORRECT:
        incorrect_chars = max(0, incorrect_chars - 1)
    characters[char_index - 1] = replace(vacated, state=CharacterState.INACTIVE)
    words = _replace_word(state.words, word_index, Word(tuple(characters)))
    state = replace(
        state,
        current_char_index=char_index - 1,
        words=with_caret(words, word_index, char_index - 1),
        correct_chars=correct_chars,
        incorrect_chars=incorrect_chars,
    )
    return Transition(state)


def _handle_reset(state: SessionState, event: Reset) -> Transition:
    return Transition(_fresh_attempt(state), stopped=True)


def _handle_load_next(state: SessionState, event: LoadNext) -> Transition:
    fresh = SessionState.for_quote(
        event.quote,
        death_mode=state.death_mode,
        death_mode_failures=state.death_mode_failures,
    )
    return Transition(fresh, stopped=True)


def _handle_tick(state: SessionState, event: Tick) -> Transition:
    if not state.is_active or state.is_finished or state.started_at is None:
        return Transition(state)
    elapsed = max(0.0, event.at - state.started_at)
    return Transition(
        replace(state, elapsed_time=elapsed, wpm=calculate_wpm(state.correct_chars, elapsed))
    )


def _handle_toggle_death_mode(state: SessionState, event: ToggleDeathMode) -> Transition:
    return Transition(replace(state, death_mode=not state.death_mode))


_HANDLERS: dict[type, Callable[[SessionState, object], Transition]] = {
    CharacterTyped: _handle_character,
    SpaceTyped: _handle_space,
    Backspace: _handle_backspace,
    Reset: _handle_reset,
    LoadNext: _handle_load_next,
    Tick: _handle_tick,
    ToggleDeathMode: _handle_toggle_death_mode,
}


def _accepts_input(state: SessionState) -> bool:
    if state.is_finished or not state.words:
        return False
    return _caret_in_bounds(state)


def _caret_in_bounds(state: SessionState) -> bool:
    word_index = state.current_word_index
    if not 0 <= word_index < len(state.words):
        logger.warning(
            "Dropping event: word index %d outside 0..%d", word_index, len(state.words) - 1
        )
        return False
    word_length = len(state.words[word_index])
    if not 0 <= state.current_char_index <= word_length:
        logger.warning(
            "Dropping event: caret %d outside 0..%d of word %d",
            state.current_char_index,
            word_length,
            word_index,
        )
        return False
    return True


def _activate(state: SessionState, at: float) -> tuple[SessionState, bool]:
    if state.is_active:
        return state, False
    return replace(state, is_active=True, started_at=at), True


def _finish(state: SessionState, at: float, started: bool) -> Transition:
    elapsed = max(0.0, at - state.started_at) if state.started_at is not None else 0.0
    finished = replace(
        state,
        words=without_caret(state.words),
        current_char_index=len(state.words[state.current_word_index]),
        is_active=False,
        is_finished=True,
        elapsed_time=elapsed,
        wpm=calculate_wpm(state.correct_chars, elapsed),
    )
    quote_id = finished.quote.id if finished.quote is not None else None
    return Transition(
        finished,
        started=started,
        stopped=True,
        completed=SessionCompleted(stats=finished.stats, quote_id=quote_id),
    )


def _fresh_attempt(state: SessionState) -> SessionState:
    words = tuple(
        Word(tuple(Character(character.char) for character in word.characters))
        for word in state.words
    )
    return replace(
        state,
        words=with_caret(words, 0, 0),
        current_word_index=_first_typeable_word(words),
        current_char_index=0,
        boundary_char_state=None,
        is_active=False,
        is_finished=False,
        correct_chars=0,
        incorrect_chars=0,
        wpm=0,
        elapsed_time=0.0,
        started_at=None,
    )


def _death_reset(state: SessionState) -> Transition:
    reset = _fresh_attempt(state)
    return Transition(
        replace(reset, death_mode_failures=state.death_mode_failures + 1),
        stopped=True,
    )


def _replace_word(words: tuple[Word, ...], index: int, word: Word) -> tuple[Word, ...]:
    return words[:index] + (word,) + words[index + 1:]


def _first_typeable_word(words: tuple[Word, ...]) -> int:
    """Index of the first non-empty word; leading spaces are never typed."""
    return next((index for index, word in enumerate(words) if len(word)), 0)


def _only_empty_words_after(words: tuple[Word, ...], word_index: int) -> bool:
    return all(not len(word) for word in words[word_index + 1:])


def _back_over_boundary(state: SessionState, previous: int) -> SessionState:
    """Move the caret to the end of word ``previous`` and mark its last character."""
    end = len(state.words[previous])
    if not end:
        return replace(
            state,
            current_word_index=previous,
            current_char_index=0,
            words=with_caret(state.words, previous, 0),
        )
    words = without_caret(state.words)
    characters = list(words[previous].characters)
    marked = characters[end - 1]
    characters[end - 1] = replace(marked, state=CharacterState.CURRENT)
    return replace(
        state,
        current_word_index=previous,
        current_char_index=end,
        words=_replace_word(words, previous, Word(tuple(characters))),
        boundary_char_state=marked.state,
    )


def _restore_boundary_char(state: SessionState) -> SessionState:
    """Put back the typed result hidden under the boundary caret marker."""
    if state.boundary_char_state is None:
        return state
    word_index = state.current_word_index
    characters = list(state.words[word_index].characters)
    characters[-1] = replace(characters[-1], state=state.boundary_char_state)
    return replace(
        state,
        words=_replace_word(state.words, word_index, Word(tuple(characters))),
        boundary_char_state=None,
    )
