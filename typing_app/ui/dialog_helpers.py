"""Helper functions for common dialog patterns in the typing UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def confirm_reset_progress(parent: QWidget, user_name: str) -> bool:
    """Ask before wiping a user's level progress.

    Args:
        parent: Parent widget for the dialog
        user_name: The user whose progress would be deleted

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Reset Progress",
        f"Reset all level progress for {user_name}? You will start again at level 1 without a baseline.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog, optionally with a larger font."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
