"""Settings dialog for configuring TypeLadder preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for the practising user and font sizes."""

    def __init__(
        self,
        parent=None,
        user_name: str = "",
        ui_font_size: int = 10,
        quote_font_size: int = 18,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(400)

        self._user_name = user_name
        self._ui_font_size = ui_font_size
        self._quote_font_size = quote_font_size

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        user_group = QGroupBox("User")
        user_layout = QHBoxLayout()
        user_group.setLayout(user_layout)
        user_label = QLabel("Name:")
        user_label.setToolTip("History and level progress are kept per name. Leave empty to practise as a guest.")
        self.user_edit = QLineEdit(self._user_name)
        self.user_edit.setPlaceholderText("Guest")
        user_layout.addWidget(user_label)
        user_layout.addWidget(self.user_edit, stretch=1)
        layout.addWidget(user_group)

        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        ui_font_row = QHBoxLayout()
        ui_font_row.addWidget(QLabel("UI Font Size (buttons, stats):"))
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        ui_font_row.addStretch()
        ui_font_row.addWidget(self.ui_font_spinbox)
        font_layout.addLayout(ui_font_row)

        quote_font_row = QHBoxLayout()
        quote_font_row.addWidget(QLabel("Quote Font Size:"))
        self.quote_font_spinbox = QSpinBox()
        self.quote_font_spinbox.setRange(10, 40)
        self.quote_font_spinbox.setValue(self._quote_font_size)
        self.quote_font_spinbox.setSuffix(" pt")
        quote_font_row.addStretch()
        quote_font_row.addWidget(self.quote_font_spinbox)
        font_layout.addLayout(quote_font_row)

        layout.addWidget(font_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def get_user_name(self) -> str:
        return self.user_edit.text().strip()

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()

    def get_quote_font_size(self) -> int:
        return self.quote_font_spinbox.value()
