"""Component summarising the user's position on the level ladder."""

from __future__ import annotations

from PySide6.QtWidgets import QGroupBox, QLabel, QVBoxLayout, QWidget

from typing_app.constants.ui_constants import GUEST_USER_LABEL, NO_BASELINE_TEXT
from typing_app.core.models import GameLevel, UserProgress


class ProgressPanel(QGroupBox):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Progress", parent)
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.user_label = QLabel(GUEST_USER_LABEL, self)
        self.level_label = QLabel("", self)
        self.baseline_label = QLabel("", self)
        self.required_label = QLabel("", self)
        self.successes_label = QLabel("", self)
        self.attempts_label = QLabel("", self)
        for label in (
            self.user_label,
            self.level_label,
            self.baseline_label,
            self.required_label,
            self.successes_label,
            self.attempts_label,
        ):
            layout.addWidget(label)
        layout.addStretch()
        self.show_guest()

    def show_guest(self) -> None:
        self.user_label.setText(GUEST_USER_LABEL)
        for label in (self.level_label, self.baseline_label, self.required_label, self.successes_label, self.attempts_label):
            label.setText("")

    def update_progress(self, progress: UserProgress, level: GameLevel, required_wpm: int | None) -> None:
        self.user_label.setText(f"User: {progress.user_id}")
        self.level_label.setText(f"Level {progress.current_level}")
        if progress.baseline_wpm is None:
            self.baseline_label.setText(NO_BASELINE_TEXT)
            self.required_label.setText(f"Required: {level.accuracy_threshold}% accuracy")
        else:
            self.baseline_label.setText(f"Baseline: {progress.baseline_wpm} WPM")
            self.required_label.setText(f"Required: {required_wpm} WPM at {level.accuracy_threshold}% accuracy")
        self.successes_label.setText(f"Successful quotes: {progress.successful_quotes_count} / {level.required_quotes}")
        self.attempts_label.setText(f"Attempts: {progress.level_attempts_used} / {level.max_attempts}")

    def apply_font_size(self, font_size: int) -> None:
        self.setStyleSheet(f"font-size: {font_size}pt;")
