"""Pure helpers deriving speed and accuracy from raw keystroke counts."""

from __future__ import annotations

import math

from typing_app.constants.typing_constants import CHARACTERS_PER_WORD


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_wpm(correct_chars: int, elapsed_seconds: float) -> int:
    """Words per minute, counting every five correct characters as one word."""
    if elapsed_seconds <= 0:
        return 0
    words = correct_chars / CHARACTERS_PER_WORD
    minutes = elapsed_seconds / 60.0
    return round_half_up(words / minutes)


def calculate_accuracy(correct_chars: int, incorrect_chars: int) -> int:
    """Percentage of attempted characters that were correct; 100 before any attempt."""
    attempted = correct_chars + incorrect_chars
    if attempted <= 0:
        return 100
    return round_half_up(correct_chars / attempted * 100)


def format_time(seconds: float) -> str:
    """Format a duration as ``MM:SS``."""
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    remainder = int(seconds % 60)
    return f"{minutes:02d}:{remainder:02d}"
