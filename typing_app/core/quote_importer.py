"""Import a typing script from a plain-text file.

File format (quotes separated by blank lines or '---'):

    TITLE: Optional script name (defaults to the file name)

    First quote. Lines of one quote are joined
    with single spaces.
    ---
    Second quote.

Example:

    TITLE: Warm-up
    The quick brown fox jumps over the lazy dog.

    Simplicity is the ultimate sophistication.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class QuoteImportError(Exception):
    """Raised when a script file cannot be parsed."""


@dataclass(slots=True)
class ImportedScript:
    """Script name and quote texts read from a file."""

    source_path: Path
    name: str
    quotes: list[str]


_TITLE_PREFIX = "TITLE:"


def load_quotes_from_file(file_path: Path) -> ImportedScript:
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise QuoteImportError(f"Could not read {file_path.name}: {exc}") from exc
    name, quotes = parse_script_text(text)
    if not quotes:
        raise QuoteImportError("Script file did not contain any quotes.")
    return ImportedScript(source_path=file_path, name=name or file_path.stem, quotes=quotes)


def parse_script_text(text: str) -> tuple[str | None, list[str]]:
    """Return the optional title and the quotes found in ``text``."""
    title: str | None = None
    blocks: list[list[str]] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped.upper().startswith(_TITLE_PREFIX):
            if title is not None:
                raise QuoteImportError("A script file may contain only one TITLE line.")
            title = stripped[len(_TITLE_PREFIX):].strip()
            if not title:
                raise QuoteImportError("TITLE must include a name.")
            continue
        if stripped == "---" or not stripped:
            if current_block:
                blocks.append(current_block)
                current_block = []
            continue
        current_block.append(stripped)
    if current_block:
        blocks.append(current_block)

    return title, [" ".join(block) for block in blocks]
