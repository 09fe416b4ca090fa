"""Styling module for TypeLadder."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
