"""Qt main window for typing practice."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from typing_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from typing_app.constants.ui_constants import (
    BUTTON_DEATH_MODE,
    BUTTON_IMPORT_SCRIPT,
    BUTTON_NEW_QUOTE,
    BUTTON_REPEAT_MODE,
    BUTTON_RESET_PROGRESS,
    BUTTON_RESTART,
    DEFAULT_SCRIPT_LABEL,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    LEVEL_COMPLETE_TEMPLATE,
    UI_REFRESH_INTERVAL_MS,
    WINDOW_TITLE,
)
from typing_app.core.models import LevelCompleted
from typing_app.core.quote_importer import QuoteImportError, load_quotes_from_file
from typing_app.core.services.quote_repository import QuoteRepository
from typing_app.core.typing_manager import TypingManager
from typing_app.styling.styles import Styles
from typing_app.ui.components.progress_panel import ProgressPanel
from typing_app.ui.components.typing_panel import TypingPanel
from typing_app.ui.dialog_helpers import confirm_reset_progress, show_error, show_info, show_warning
from typing_app.ui.settings_dialog import SettingsDialog


class QtNotificationSink(QObject):
    """Notification sink that forwards engine events to the UI thread as signals."""

    level_completed = Signal(object)
    error_reported = Signal(str)

    def notify_level_completed(self, event: LevelCompleted) -> None:
        self.level_completed.emit(event)

    def notify_error(self, message: str) -> None:
        self.error_reported.emit(message)


class TypingMainWindow(QMainWindow):
    """Main Qt window: quote view, mode buttons, script picker and progress."""

    def __init__(
        self,
        typing_manager: TypingManager,
        repository: QuoteRepository,
        notifier: QtNotificationSink | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.typing_manager = typing_manager
        self.repository = repository

        self._ui_font_size: int = 10
        self._quote_font_size: int = 18

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()
        self._reload_script_choices()

        if notifier is not None:
            # Queued so dialogs never open in the middle of a keystroke.
            notifier.level_completed.connect(self._handle_level_completed, Qt.QueuedConnection)
            notifier.error_reported.connect(self._handle_engine_error, Qt.QueuedConnection)

        self.setFocusPolicy(Qt.StrongFocus)
        self._refresh_state()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        body = QHBoxLayout()
        self.typing_panel = TypingPanel(self)
        body.addWidget(self.typing_panel, stretch=3)
        self.progress_panel = ProgressPanel(self)
        body.addWidget(self.progress_panel, stretch=1)
        root_layout.addLayout(body, stretch=1)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.new_quote_button = QPushButton(BUTTON_NEW_QUOTE, self)
        self.new_quote_button.clicked.connect(self._handle_new_quote)
        button_row.addWidget(self.new_quote_button)

        self.restart_button = QPushButton(BUTTON_RESTART, self)
        self.restart_button.clicked.connect(self._handle_restart)
        button_row.addWidget(self.restart_button)

        self.death_mode_button = QPushButton(BUTTON_DEATH_MODE, self)
        self.death_mode_button.setCheckable(True)
        self.death_mode_button.setChecked(self.typing_manager.death_mode)
        self.death_mode_button.clicked.connect(self._handle_death_mode)
        button_row.addWidget(self.death_mode_button)

        self.repeat_mode_button = QPushButton(BUTTON_REPEAT_MODE, self)
        self.repeat_mode_button.setCheckable(True)
        self.repeat_mode_button.setChecked(self.typing_manager.repeat_mode)
        self.repeat_mode_button.clicked.connect(self._handle_repeat_mode)
        button_row.addWidget(self.repeat_mode_button)

        self.script_combo = QComboBox(self)
        self.script_combo.currentIndexChanged.connect(self._handle_script_selected)
        button_row.addWidget(self.script_combo)

        self.import_button = QPushButton(BUTTON_IMPORT_SCRIPT, self)
        self.import_button.clicked.connect(self._handle_import_script)
        button_row.addWidget(self.import_button)

        self.reset_progress_button = QPushButton(BUTTON_RESET_PROGRESS, self)
        self.reset_progress_button.clicked.connect(self._handle_reset_progress)
        button_row.addWidget(self.reset_progress_button)

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        for button in self._buttons():
            button.setFocusPolicy(Qt.NoFocus)
        self.script_combo.setFocusPolicy(Qt.NoFocus)

        layout.addLayout(button_row)

    def _buttons(self) -> list[QPushButton]:
        return [
            self.new_quote_button,
            self.restart_button,
            self.death_mode_button,
            self.repeat_mode_button,
            self.import_button,
            self.reset_progress_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(UI_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        snapshot = self.typing_manager.snapshot()
        self.typing_panel.update_session(snapshot)
        self.reset_progress_button.setEnabled(snapshot.user_id is not None)

        progression = self.typing_manager.progression
        if snapshot.user_id is None or progression is None:
            self.progress_panel.show_guest()
            return
        progress = progression.get_progress(snapshot.user_id)
        level = progression.get_level_parameters(progress.current_level)
        self.progress_panel.update_progress(progress, level, progression.calculate_required_wpm(snapshot.user_id))

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        key = event.key()
        shift = bool(event.modifiers() & Qt.ShiftModifier)

        if key in (Qt.Key_Return, Qt.Key_Enter) and shift:
            self._handle_new_quote()
        elif key == Qt.Key_Delete and shift:
            self._handle_restart()
        elif key == Qt.Key_Backspace:
            self.typing_manager.smart_backspace()
            self._refresh_state()
        elif event.text() and event.text().isprintable() and not event.modifiers() & (Qt.ControlModifier | Qt.AltModifier):
            self.typing_manager.handle_input(event.text())
            self._refresh_state()
        else:
            super().keyPressEvent(event)

    def _handle_new_quote(self) -> None:
        self.typing_manager.load_new_quote()
        self._refresh_state()

    def _handle_restart(self) -> None:
        self.typing_manager.reset_test()
        self._refresh_state()

    def _handle_death_mode(self) -> None:
        self.death_mode_button.setChecked(self.typing_manager.toggle_death_mode())
        self._refresh_state()

    def _handle_repeat_mode(self) -> None:
        self.repeat_mode_button.setChecked(self.typing_manager.toggle_repeat_mode())

    def _reload_script_choices(self, select_id: str | None = None) -> None:
        current = select_id if select_id is not None else self.typing_manager.script_id
        self.script_combo.blockSignals(True)
        self.script_combo.clear()
        self.script_combo.addItem(DEFAULT_SCRIPT_LABEL, None)
        for script in self.repository.get_scripts():
            self.script_combo.addItem(f"{script.name} ({len(script.quotes)})", script.id)
        index = self.script_combo.findData(current) if current is not None else 0
        self.script_combo.setCurrentIndex(max(0, index))
        self.script_combo.blockSignals(False)

    def _handle_script_selected(self, index: int) -> None:
        script_id = self.script_combo.itemData(index)
        self.typing_manager.set_script_scope(script_id)
        self._refresh_state()

    def _handle_import_script(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            imported = load_quotes_from_file(Path(file_path))
        except QuoteImportError as exc:
            show_error(self, "Import failed", str(exc))
            return

        try:
            script = self.repository.add_script(imported.name, imported.quotes)
        except ValueError as exc:
            show_error(self, "Script rejected", str(exc))
            return

        self._reload_script_choices(select_id=script.id)
        self.typing_manager.set_script_scope(script.id)
        self._refresh_state()
        show_info(self, "Script imported", f"Imported {len(script.quotes)} quotes into '{script.name}'.")

    def _handle_reset_progress(self) -> None:
        user_id = self.typing_manager.user_id
        progression = self.typing_manager.progression
        if user_id is None or progression is None:
            show_warning(self, "No user", "Set your name in Settings to track progress.")
            return
        if confirm_reset_progress(self, user_id):
            progression.reset_progress(user_id)
            self._refresh_state()

    def _handle_level_completed(self, event: LevelCompleted) -> None:
        next_target = event.next_level_wpm_target if event.next_level_wpm_target is not None else "-"
        show_info(
            self,
            "Level complete",
            LEVEL_COMPLETE_TEMPLATE.format(
                completed_level=event.completed_level,
                best_wpm=event.best_wpm,
                next_level=event.next_level,
                next_target=next_target,
            ),
            font_point_size=self._ui_font_size + 2,
        )

    def _handle_engine_error(self, message: str) -> None:
        show_warning(self, APP_NAME, message)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self.typing_manager.user_id or "",
            self._ui_font_size,
            self._quote_font_size,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._quote_font_size = dialog.get_quote_font_size()
            self.typing_manager.set_user(dialog.get_user_name() or None)
            self._apply_styles()
            self._refresh_state()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in self._buttons():
            button.setStyleSheet(ui_style)
        self.script_combo.setStyleSheet(ui_style)

        self.typing_panel.apply_font_size(self._ui_font_size)
        self.typing_panel.set_quote_font_size(self._quote_font_size)
        self.progress_panel.apply_font_size(self._ui_font_size)
