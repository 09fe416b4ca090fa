"""Component showing the quote being typed and the live session stats."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QTextBrowser, QVBoxLayout, QWidget

from typing_app.constants.ui_constants import FINISHED_MESSAGE_TEMPLATE, SHORTCUTS_HINT
from typing_app.core.stats import format_time
from typing_app.core.typing_manager import SessionSnapshot
from typing_app.styling.styles import Styles
from typing_app.ui.word_renderer import render_words_html


class TypingPanel(QWidget):
    """Quote view plus WPM, accuracy, time and death-mode counters."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._quote_font_size: int = 18
        self._last_words: tuple | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.quote_view = QTextBrowser(self)
        # Keystrokes belong to the main window.
        self.quote_view.setFocusPolicy(Qt.NoFocus)
        self.quote_view.setStyleSheet(Styles.get_quote_view_style())
        layout.addWidget(self.quote_view, stretch=1)

        stats_row = QHBoxLayout()
        self.wpm_label = QLabel("WPM: 0", self)
        self.accuracy_label = QLabel("Accuracy: 100%", self)
        self.time_label = QLabel("Time: 00:00", self)
        self.failures_label = QLabel("", self)
        self.completed_label = QLabel("Completed: 0", self)
        for label in (self.wpm_label, self.accuracy_label, self.time_label, self.failures_label, self.completed_label):
            stats_row.addWidget(label)
        stats_row.addStretch()
        layout.addLayout(stats_row)

        self.status_label = QLabel(SHORTCUTS_HINT, self)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

    def update_session(self, snapshot: SessionSnapshot) -> None:
        if snapshot.words != self._last_words:
            self._last_words = snapshot.words
            self.quote_view.setHtml(render_words_html(snapshot.words, self._quote_font_size))

        stats = snapshot.stats
        self.wpm_label.setText(f"WPM: {stats.wpm}")
        self.accuracy_label.setText(f"Accuracy: {snapshot.accuracy}%")
        self.time_label.setText(f"Time: {format_time(stats.elapsed_time)}")
        self.completed_label.setText(f"Completed: {snapshot.completed_quotes}")
        self.failures_label.setVisible(snapshot.death_mode)
        self.failures_label.setText(f"Deaths: {snapshot.death_mode_failures}")

        if snapshot.is_finished:
            self.status_label.setText(
                FINISHED_MESSAGE_TEMPLATE.format(
                    wpm=stats.wpm,
                    accuracy=snapshot.accuracy,
                    elapsed=format_time(stats.elapsed_time),
                )
            )
        else:
            self.status_label.setText(SHORTCUTS_HINT)

    def set_quote_font_size(self, font_size: int) -> None:
        self._quote_font_size = font_size
        self._last_words = None

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        for label in (self.wpm_label, self.accuracy_label, self.time_label, self.failures_label, self.completed_label):
            label.setStyleSheet(style)
