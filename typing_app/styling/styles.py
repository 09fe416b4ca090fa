"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QLineEdit, QSpinBox, QComboBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_quote_view_style(theme: Theme = Theme.LIGHT) -> str:
        return (
            f"QTextBrowser {{ background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};"
            f" border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)}; border-radius: 6px; padding: 12px; }}"
        )

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
