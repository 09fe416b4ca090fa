"""Render tokenized quote words as HTML for the typing view."""

from __future__ import annotations

from html import escape

from typing_app.core.models import CharacterState, Word
from typing_app.styling.color_palette import ColorPalette, Theme


def render_words_html(words: tuple[Word, ...], font_size: int = 18, theme: Theme = Theme.LIGHT) -> str:
    """Render ``words`` with one coloured span per character.

    Args:
        words: Words of the live session, carrying per-character states
        font_size: Font size in points for the quote text
        theme: Theme used to pick character colours

    Returns:
        HTML string ready for display in a QTextBrowser
    """
    rendered_words = [_render_word(word, theme) for word in words]
    body = " ".join(rendered_words)
    return (
        f"<div style=\"font-family: 'Consolas', 'DejaVu Sans Mono', monospace; "
        f"font-size: {font_size}pt; line-height: 150%;\">{body}</div>"
    )


def _render_word(word: Word, theme: Theme) -> str:
    spans = []
    for character in word.characters:
        color = ColorPalette.for_character_state(character.state).get(theme)
        style = f"color: {color};"
        if character.state is CharacterState.CURRENT:
            style += f" background-color: {ColorPalette.CHAR_CURRENT_BG.get(theme)}; text-decoration: underline;"
        elif character.state is CharacterState.INCORRECT:
            style += " text-decoration: underline;"
        spans.append(f'<span class="{character.state.value}" style="{style}">{escape(character.char)}</span>')
    return "".join(spans)
