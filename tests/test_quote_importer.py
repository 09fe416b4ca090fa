from __future__ import annotations

from pathlib import Path

import pytest

from typing_app.core.quote_importer import QuoteImportError, load_quotes_from_file, parse_script_text


def test_parse_blocks_and_title() -> None:
    text = (
        "TITLE: Proverbs\n"
        "\n"
        "First, solve the problem.\n"
        "Then, write the code.\n"
        "---\n"
        "Simplicity is the ultimate sophistication.\n"
        "\n\n"
        "Last one.\n"
    )
    title, quotes = parse_script_text(text)

    assert title == "Proverbs"
    assert quotes == [
        "First, solve the problem. Then, write the code.",
        "Simplicity is the ultimate sophistication.",
        "Last one.",
    ]


def test_duplicate_title_is_rejected() -> None:
    with pytest.raises(QuoteImportError):
        parse_script_text("TITLE: a\nTITLE: b\nquote")


def test_load_uses_file_name_without_title(tmp_path: Path) -> None:
    path = tmp_path / "warmups.txt"
    path.write_text("one\n\ntwo\n", encoding="utf-8")

    imported = load_quotes_from_file(path)

    assert imported.name == "warmups"
    assert imported.quotes == ["one", "two"]
    assert imported.source_path == path


def test_empty_file_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("TITLE: Nothing\n\n---\n", encoding="utf-8")
    with pytest.raises(QuoteImportError):
        load_quotes_from_file(path)


def test_missing_file_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(QuoteImportError):
        load_quotes_from_file(tmp_path / "missing.txt")
