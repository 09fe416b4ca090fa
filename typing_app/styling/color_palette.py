"""Color palette for TypeLadder supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from typing_app.core.models import CharacterState


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#000000", dark="#F5F5F5")
    TEXT_SECONDARY = ThemeColors(light="#666666", dark="#AAAAAA")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F5F5F5", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#D1D1D1", dark="#555555")

    BUTTON_PRIMARY_BG = ThemeColors(light="#0078D4", dark="#4A9EFF")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")

    SUCCESS = ThemeColors(light="#107C10", dark="#6FCF6F")
    ERROR = ThemeColors(light="#D13438", dark="#FF6B6B")

    # Quote characters
    CHAR_INACTIVE = ThemeColors(light="#8A8A8A", dark="#7A7A7A")
    CHAR_CURRENT = ThemeColors(light="#000000", dark="#FFFFFF")
    CHAR_CURRENT_BG = ThemeColors(light="#FFE58F", dark="#5C4B00")
    CHAR_CORRECT = SUCCESS
    CHAR_INCORRECT = ERROR

    @classmethod
    def for_character_state(cls, state: CharacterState) -> ThemeColors:
        return {
            CharacterState.INACTIVE: cls.CHAR_INACTIVE,
            CharacterState.CURRENT: cls.CHAR_CURRENT,
            CharacterState.CORRECT: cls.CHAR_CORRECT,
            CharacterState.INCORRECT: cls.CHAR_INCORRECT,
        }[state]
