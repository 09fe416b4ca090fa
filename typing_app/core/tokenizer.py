"""Split quote text into words of per-character states."""

from __future__ import annotations

from dataclasses import replace

from typing_app.core.models import Character, CharacterState, Word


def tokenize(text: str) -> tuple[Word, ...]:
    """Split ``text`` on single ASCII spaces.

    No other whitespace normalisation happens, so consecutive spaces produce
    empty words and joining the words with single spaces reproduces ``text``.
    Every character starts ``INACTIVE`` except the caret marker on the first
    character of the first non-empty word.
    """
    words = tuple(
        Word(tuple(Character(char) for char in chunk)) for chunk in text.split(" ")
    )
    return with_caret(words, 0, 0)


def count_characters(words: tuple[Word, ...]) -> int:
    """Number of typeable characters, separating spaces excluded."""
    return sum(len(word) for word in words)


def with_caret(words: tuple[Word, ...], word_index: int, char_index: int) -> tuple[Word, ...]:
    """Return ``words`` with the single ``CURRENT`` marker moved to the caret.

    The marker sits on the character at the caret. When the caret is at the
    end of a word (waiting for the separating space) it sits on the next
    character that will be typed after that space.
    """
    target = _marker_position(words, word_index, char_index)
    updated: list[Word] = []
    for w_idx, word in enumerate(words):
        changed = False
        characters = list(word.characters)
        for c_idx, character in enumerate(characters):
            wanted = (w_idx, c_idx) == target
            if wanted and character.state is not CharacterState.CURRENT:
                characters[c_idx] = replace(character, state=CharacterState.CURRENT)
                changed = True
            elif not wanted and character.state is CharacterState.CURRENT:
                characters[c_idx] = replace(character, state=CharacterState.INACTIVE)
                changed = True
        updated.append(Word(tuple(characters)) if changed else word)
    return tuple(updated)


def without_caret(words: tuple[Word, ...]) -> tuple[Word, ...]:
    """Return ``words`` with no ``CURRENT`` marker (finished sessions)."""
    return with_caret(words, len(words), 0)


def _marker_position(words: tuple[Word, ...], word_index: int, char_index: int) -> tuple[int, int] | None:
    if not 0 <= word_index < len(words):
        return None
    if char_index < len(words[word_index]):
        return word_index, char_index
    for next_index in range(word_index + 1, len(words)):
        if len(words[next_index]):
            return next_index, 0
    return None
