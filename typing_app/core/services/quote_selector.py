"""Random quote selection without repeats inside a rotation."""

from __future__ import annotations

import logging
import random
from typing import Protocol, Sequence

from typing_app.constants.typing_constants import DEFAULT_QUOTES
from typing_app.core.errors import QuoteSourceError
from typing_app.core.models import Quote

logger = logging.getLogger(__name__)


class QuoteSource(Protocol):
    def list_quotes(self, scope_id: str | None = None) -> list[Quote]:
        ...


class QuoteSelector:
    """Picks the next quote for a session.

    With a script scope every quote of the script is shown once before any
    repeats; when the pool is used up a new rotation begins. Without a scope
    quotes come from the static fallback pool with no repeat tracking.
    """

    def __init__(
        self,
        quote_source: QuoteSource | None = None,
        fallback_quotes: Sequence[str] = DEFAULT_QUOTES,
        rng: random.Random | None = None,
    ) -> None:
        cleaned = [text for text in fallback_quotes if text.strip()]
        if not cleaned:
            raise ValueError("Fallback quote pool cannot be empty.")
        self._quote_source = quote_source
        self._fallback = [Quote(id=None, content=text) for text in cleaned]
        self._rng = rng or random.Random()
        self._scope_id: str | None = None
        self._processed: set[str] = set()
        self._rotation_generation: int = 0

    @property
    def scope_id(self) -> str | None:
        return self._scope_id

    @property
    def rotation_generation(self) -> int:
        """Incremented every time the processed set is cleared."""
        return self._rotation_generation

    def processed_ids(self) -> set[str]:
        return set(self._processed)

    def set_scope(self, scope_id: str | None) -> None:
        """Scope selection to one script's pool and start a fresh rotation."""
        self._scope_id = scope_id
        self._processed.clear()

    def pool_size(self) -> int:
        """Number of quotes in the scoped pool; 0 when unscoped or unavailable."""
        if self._scope_id is None or self._quote_source is None:
            return 0
        try:
            return len(self._quote_source.list_quotes(self._scope_id))
        except Exception:
            logger.warning("Could not size the pool of script %s", self._scope_id, exc_info=True)
            return 0

    def load_next(self) -> Quote:
        if self._scope_id is None or self._quote_source is None:
            return self._pick_fallback()

        try:
            pool = list(self._quote_source.list_quotes(self._scope_id))
        except QuoteSourceError as exc:
            logger.warning("Quote source unavailable for script %s: %s", self._scope_id, exc)
            return self._pick_fallback()
        except Exception:
            logger.exception("Unexpected quote source failure for script %s", self._scope_id)
            return self._pick_fallback()

        if not pool:
            logger.warning("Script %s has no quotes; using the default pool", self._scope_id)
            return self._pick_fallback()

        available = [quote for quote in pool if quote.id not in self._processed]
        if not available:
            self._processed.clear()
            self._rotation_generation += 1
            logger.info("All %d quotes of script %s shown; starting a new rotation", len(pool), self._scope_id)
            return self._rng.choice(pool)

        quote = self._rng.choice(available)
        if quote.id is not None:
            self._processed.add(quote.id)
        return quote

    def _pick_fallback(self) -> Quote:
        return self._rng.choice(self._fallback)
