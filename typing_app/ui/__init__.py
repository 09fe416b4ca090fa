"""Qt UI components for the typing application."""

from .dialog_helpers import (
    confirm_reset_progress,
    show_error,
    show_info,
    show_warning,
)
from .typing_main_window import QtNotificationSink, TypingMainWindow
from .word_renderer import render_words_html

__all__ = [
    "QtNotificationSink",
    "TypingMainWindow",
    "confirm_reset_progress",
    "show_error",
    "show_info",
    "show_warning",
    "render_words_html",
]
