"""Application entry point for TypeLadder."""

from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from typing_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from typing_app.constants.typing_constants import DEFAULT_QUOTE_FILE
from typing_app.core.quote_importer import QuoteImportError, load_quotes_from_file
from typing_app.core.services.progression import ProgressionEngine
from typing_app.core.services.quote_repository import QuoteRepository
from typing_app.core.services.quote_selector import QuoteSelector
from typing_app.core.services.stores import InMemoryHistoryStore, InMemoryProgressStore
from typing_app.core.typing_manager import TypingManager
from typing_app.server.api_server import start_api_server
from typing_app.ui.typing_main_window import QtNotificationSink, TypingMainWindow
from typing_app.utils.logging_config import configure_logging


def _auto_load_default_script(repository: QuoteRepository, selector: QuoteSelector, logger) -> None:
    default_path = Path(DEFAULT_QUOTE_FILE)
    if not default_path.exists():
        return
    try:
        imported = load_quotes_from_file(default_path)
        script = repository.add_script(imported.name, imported.quotes)
    except (QuoteImportError, ValueError) as exc:
        logger.warning("Could not auto-load %s: %s", default_path, exc)
        return
    selector.set_scope(script.id)
    logger.info("Auto-loaded %s: %d quotes", default_path, len(script.quotes))


def main() -> None:
    """Initialize logging, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting TypeLadder")

    app = QApplication(sys.argv)

    repository = QuoteRepository()
    selector = QuoteSelector(repository)
    _auto_load_default_script(repository, selector, logger)

    history = InMemoryHistoryStore()
    notifier = QtNotificationSink()
    progression = ProgressionEngine(InMemoryProgressStore(), notifier=notifier)
    typing_manager = TypingManager(
        selector=selector,
        history=history,
        progression=progression,
        notifier=notifier,
        quote_stats=repository,
    )

    start_api_server(typing_manager, repository=repository, history=history, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("API available at http://%s:%d/session", DEFAULT_HOST, DEFAULT_PORT)

    window = TypingMainWindow(typing_manager, repository, notifier=notifier)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
