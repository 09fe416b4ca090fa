from __future__ import annotations

from conftest import session_for, type_text
from typing_app.ui.word_renderer import render_words_html


def test_each_character_is_a_span_with_its_state() -> None:
    state, _ = type_text(session_for("ab cd"), "ax")
    html = render_words_html(state.words, font_size=20)

    assert "font-size: 20pt" in html
    assert html.count('class="correct"') == 1
    assert html.count('class="incorrect"') == 1
    assert html.count('class="current"') == 1
    assert html.count('class="inactive"') == 1


def test_text_is_escaped() -> None:
    html = render_words_html(session_for("<b> & x").words)
    assert "&lt;" in html
    assert "&amp;" in html
    assert "<b>" not in html
