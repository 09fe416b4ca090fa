"""Typing-session constants shared across the engine and the UI."""

STATS_TICK_INTERVAL_MS: int = 200
REPEAT_GRACE_DELAY_MS: int = 500
CHARACTERS_PER_WORD: int = 5
DEFAULT_QUOTE_FILE: str = "typing_quotes.txt"

# Static pool used when no script is selected or the quote source fails.
DEFAULT_QUOTES: tuple[str, ...] = (
    "The quick brown fox jumps over the lazy dog.",
    "Programming is the art of telling another human what one wants the computer to do.",
    "The best way to predict the future is to invent it.",
    "The only way to learn a new programming language is by writing programs in it.",
    "Simplicity is the ultimate sophistication.",
    "Code is like humor. When you have to explain it, it's bad.",
    "First, solve the problem. Then, write the code.",
    "Any fool can write code that a computer can understand. Good programmers write code that humans can understand.",
    "The most disastrous thing that you can ever learn is your first programming language.",
    "The most important property of a program is whether it accomplishes the intention of its user.",
)
