"""Exceptions raised by the engine's collaborators."""

from __future__ import annotations


class QuoteSourceError(Exception):
    """Raised when quotes cannot be read from the quote source."""


class StoreError(Exception):
    """Raised when a history or progress store cannot complete a read or write."""
