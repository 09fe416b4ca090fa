"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "TypeLadder"
UI_REFRESH_INTERVAL_MS: int = 200

BUTTON_NEW_QUOTE: str = "New Quote"
BUTTON_RESTART: str = "Restart"
BUTTON_DEATH_MODE: str = "Death Mode"
BUTTON_REPEAT_MODE: str = "Repeat Mode"
BUTTON_IMPORT_SCRIPT: str = "Import Script"
BUTTON_RESET_PROGRESS: str = "Reset Progress"

DEFAULT_SCRIPT_LABEL: str = "Default quotes"
GUEST_USER_LABEL: str = "Not signed in"
SHORTCUTS_HINT: str = "Shift+Enter: new quote   Shift+Delete: restart   Backspace: jump to last mistake"

IMPORT_DIALOG_TITLE: str = "Select quote file"
IMPORT_FILE_FILTER: str = "Quote files (*.txt);;All files (*.*)"

FINISHED_MESSAGE_TEMPLATE: str = "Finished: {wpm} WPM at {accuracy}% accuracy in {elapsed}."
LEVEL_COMPLETE_TEMPLATE: str = (
    "Level {completed_level} complete with a best of {best_wpm} WPM.\n"
    "Level {next_level} needs {next_target} WPM."
)
NO_BASELINE_TEXT: str = "Baseline: not set yet"
