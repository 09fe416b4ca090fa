"""Static metadata describing TypeLadder."""

APP_NAME = "TypeLadder"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "TypeLadder is a typing-practice trainer built with Qt and FastAPI. "
    "Type quotes from your own scripts, watch live speed and accuracy, and climb "
    "a ladder of levels measured against your personal best speed."
)

HELP_TEXT = (
    "Start typing to begin a session; the timer starts on your first keystroke.\n\n"
    "Backspace jumps back to your most recent mistake in the current word, or removes "
    "one character when the word has no mistakes.\n"
    "Shift+Enter loads a new quote, Shift+Delete restarts the current one.\n\n"
    "Death Mode restarts the quote on any mistake. Repeat Mode re-presents the same "
    "quote after you finish it.\n\n"
    "Scripts can be imported from a .txt file (quotes separated by blank lines or '---'):\n\n"
    "TITLE: Programming proverbs\n"
    "First, solve the problem. Then, write the code.\n\n"
    "---\n\n"
    "Simplicity is the ultimate sophistication."
)
