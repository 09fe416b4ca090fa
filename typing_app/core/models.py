"""Domain models for the typing application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from typing_app.core.stats import calculate_accuracy


class CharacterState(Enum):
    """Display/result state of a single character of the quote."""

    INACTIVE = "inactive"
    CURRENT = "current"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True, slots=True)
class Character:
    char: str
    state: CharacterState = CharacterState.INACTIVE


@dataclass(frozen=True, slots=True)
class Word:
    """A run of non-space characters; separating spaces are not stored."""

    characters: tuple[Character, ...]

    @property
    def text(self) -> str:
        return "".join(character.char for character in self.characters)

    def __len__(self) -> int:
        return len(self.characters)


@dataclass(frozen=True, slots=True)
class TypingStats:
    """Immutable stats snapshot; accuracy is always derived from the counters."""

    wpm: int = 0
    correct_chars: int = 0
    incorrect_chars: int = 0
    total_chars: int = 0
    elapsed_time: float = 0.0

    @property
    def accuracy(self) -> int:
        return calculate_accuracy(self.correct_chars, self.incorrect_chars)


@dataclass(frozen=True, slots=True)
class Quote:
    """Source text for a session; ``id`` is None for the static fallback pool."""

    id: str | None
    content: str


@dataclass(frozen=True, slots=True)
class QuoteStats:
    """Aggregate results of every recorded session typed on one quote."""

    quote_id: str
    typed_count: int = 0
    avg_wpm: float = 0.0
    avg_accuracy: float = 0.0
    best_wpm: int = 0


@dataclass(slots=True)
class Script:
    """Named pool of quotes forming one rotation."""

    id: str
    name: str
    quotes: list[Quote] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class GameLevel:
    level: int
    wpm_threshold_multiplier: float
    accuracy_threshold: int
    required_quotes: int
    max_attempts: int


@dataclass(frozen=True, slots=True)
class UserProgress:
    """Snapshot of a user's position on the level ladder."""

    user_id: str
    baseline_wpm: int | None = None
    current_level: int = 1
    level_attempts_used: int = 0
    successful_quotes_count: int = 0
    level_best_wpm: int = 0
    completed_quotes: frozenset[str] = frozenset()
    current_quote_index: int = 0


@dataclass(frozen=True, slots=True)
class SessionCompleted:
    """Emitted once when a session reaches its finish transition."""

    stats: TypingStats
    quote_id: str | None


@dataclass(frozen=True, slots=True)
class LevelCompleted:
    completed_level: int
    best_wpm: int
    next_level: int
    next_level_wpm_target: int | None


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """Result of feeding one finished attempt to the progression engine."""

    progress: UserProgress
    is_successful: bool
    wpm_threshold: float | None
    level_completed: LevelCompleted | None = None


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """A finished session as handed to the history store."""

    user_id: str
    script_id: str
    quote_id: str | None
    wpm: int
    accuracy: int
    elapsed_time: int
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
