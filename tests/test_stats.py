from __future__ import annotations

import pytest

from typing_app.core.models import TypingStats
from typing_app.core.stats import calculate_accuracy, calculate_wpm, format_time, round_half_up


def test_wpm_is_zero_without_elapsed_time() -> None:
    assert calculate_wpm(50, 0) == 0


def test_wpm_counts_five_characters_per_word() -> None:
    # 50 chars = 10 words in 30 seconds
    assert calculate_wpm(50, 30) == 20


def test_wpm_rounds_half_up() -> None:
    # 5 words in 2 minutes = 2.5 wpm
    assert calculate_wpm(25, 120) == 3


def test_accuracy_defaults_to_100_when_nothing_attempted() -> None:
    assert calculate_accuracy(0, 0) == 100


@pytest.mark.parametrize(
    ("correct", "incorrect", "expected"),
    [(1, 0, 100), (0, 3, 0), (1, 1, 50), (2, 1, 67), (1, 2, 33)],
)
def test_accuracy_percentage(correct: int, incorrect: int, expected: int) -> None:
    assert calculate_accuracy(correct, incorrect) == expected


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


def test_stats_accuracy_is_derived() -> None:
    assert TypingStats(correct_chars=9, incorrect_chars=1).accuracy == 90


@pytest.mark.parametrize(("seconds", "expected"), [(0, "00:00"), (59.9, "00:59"), (61, "01:01"), (-3, "00:00")])
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected
