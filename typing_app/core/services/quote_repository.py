"""Service for managing scripts and their quote pools."""

from __future__ import annotations

from threading import Lock
from uuid import uuid4

from typing_app.core.errors import QuoteSourceError
from typing_app.core.models import Quote, QuoteStats, Script


class QuoteRepository:
    """In-memory quote source: each script is one rotation of quotes."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._scripts: dict[str, Script] = {}
        self._quote_stats: dict[str, QuoteStats] = {}

    def add_script(self, name: str, quotes: list[str] | None = None) -> Script:
        """Create a script from raw quote texts and return it."""
        cleaned_name = name.strip()
        if not cleaned_name:
            raise ValueError("Script name must not be empty.")
        script = Script(id=uuid4().hex, name=cleaned_name)
        script.quotes = [self._prepare_quote(text) for text in quotes or []]
        with self._lock:
            self._scripts[script.id] = script
        return script

    def add_quote(self, script_id: str, content: str) -> Quote:
        quote = self._prepare_quote(content)
        with self._lock:
            script = self._get_script(script_id)
            script.quotes.append(quote)
        return quote

    def delete_script(self, script_id: str) -> None:
        with self._lock:
            script = self._get_script(script_id)
            for quote in script.quotes:
                self._quote_stats.pop(quote.id, None)
            del self._scripts[script_id]

    def record_quote_result(self, quote_id: str, wpm: int, accuracy: int) -> QuoteStats:
        """Fold one finished session into the running statistics of ``quote_id``."""
        if wpm < 0 or not 0 <= accuracy <= 100:
            raise ValueError("WPM must be non-negative and accuracy between 0 and 100.")
        with self._lock:
            self._find_quote(quote_id)
            current = self._quote_stats.get(quote_id, QuoteStats(quote_id=quote_id))
            count = current.typed_count + 1
            updated = QuoteStats(
                quote_id=quote_id,
                typed_count=count,
                avg_wpm=(current.avg_wpm * current.typed_count + wpm) / count,
                avg_accuracy=(current.avg_accuracy * current.typed_count + accuracy) / count,
                best_wpm=max(current.best_wpm, wpm),
            )
            self._quote_stats[quote_id] = updated
            return updated

    def get_quote_stats(self, quote_id: str) -> QuoteStats:
        with self._lock:
            self._find_quote(quote_id)
            return self._quote_stats.get(quote_id, QuoteStats(quote_id=quote_id))

    def get_scripts(self) -> list[Script]:
        """Return a copy of every script, in creation order."""
        with self._lock:
            return [Script(id=s.id, name=s.name, quotes=list(s.quotes)) for s in self._scripts.values()]

    def get_script(self, script_id: str) -> Script:
        with self._lock:
            script = self._get_script(script_id)
            return Script(id=script.id, name=script.name, quotes=list(script.quotes))

    def has_script(self, script_id: str) -> bool:
        with self._lock:
            return script_id in self._scripts

    def list_quotes(self, scope_id: str | None = None) -> list[Quote]:
        """Return the quote pool of ``scope_id``, or of every script when unscoped."""
        with self._lock:
            if scope_id is None:
                return [quote for script in self._scripts.values() for quote in script.quotes]
            script = self._scripts.get(scope_id)
            if script is None:
                raise QuoteSourceError(f"Unknown script {scope_id!r}")
            return list(script.quotes)

    def _get_script(self, script_id: str) -> Script:
        script = self._scripts.get(script_id)
        if script is None:
            raise KeyError(f"Unknown script {script_id!r}")
        return script

    def _find_quote(self, quote_id: str) -> Quote:
        for script in self._scripts.values():
            for quote in script.quotes:
                if quote.id == quote_id:
                    return quote
        raise KeyError(f"Unknown quote {quote_id!r}")

    @staticmethod
    def _prepare_quote(content: str) -> Quote:
        cleaned = content.strip()
        if not cleaned:
            raise ValueError("Quote text must not be empty.")
        return Quote(id=uuid4().hex, content=cleaned)
