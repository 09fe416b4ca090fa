"""Default level ladder used by the progression engine."""

from __future__ import annotations

from typing_app.core.models import GameLevel

BASE_LEVEL: int = 1

DEFAULT_LEVELS: dict[int, GameLevel] = {
    1: GameLevel(level=1, wpm_threshold_multiplier=0.5, accuracy_threshold=90, required_quotes=5, max_attempts=50),
    2: GameLevel(level=2, wpm_threshold_multiplier=0.6, accuracy_threshold=92, required_quotes=5, max_attempts=50),
    3: GameLevel(level=3, wpm_threshold_multiplier=0.7, accuracy_threshold=94, required_quotes=6, max_attempts=50),
    4: GameLevel(level=4, wpm_threshold_multiplier=0.8, accuracy_threshold=96, required_quotes=7, max_attempts=50),
    5: GameLevel(level=5, wpm_threshold_multiplier=0.9, accuracy_threshold=98, required_quotes=8, max_attempts=50),
}
