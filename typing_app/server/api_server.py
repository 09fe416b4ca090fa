"""FastAPI server exposing the live session, levels, progress and history."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field
import uvicorn

from typing_app.constants.about import APP_NAME, APP_VERSION
from typing_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from typing_app.core.models import GameLevel, ProgressUpdate, Quote, QuoteStats, UserProgress
from typing_app.core.services.progression import ProgressionEngine
from typing_app.core.services.quote_repository import QuoteRepository
from typing_app.core.services.stores import InMemoryHistoryStore
from typing_app.core.stats import round_half_up
from typing_app.core.typing_manager import TypingManager


class AttemptPayload(BaseModel):
    """Payload schema for an externally reported attempt."""

    quote_id: str | None = None
    wpm: int = Field(ge=0)
    accuracy: int = Field(ge=0, le=100)


class QuoteIndexPayload(BaseModel):
    index: int


def _level_to_dict(level: GameLevel) -> dict[str, object]:
    return {
        "level": level.level,
        "wpm_threshold_multiplier": level.wpm_threshold_multiplier,
        "accuracy_threshold": level.accuracy_threshold,
        "required_quotes": level.required_quotes,
        "max_attempts": level.max_attempts,
    }


def _progress_to_dict(progress: UserProgress) -> dict[str, object]:
    return {
        "user_id": progress.user_id,
        "baseline_wpm": progress.baseline_wpm,
        "current_level": progress.current_level,
        "level_attempts_used": progress.level_attempts_used,
        "successful_quotes_count": progress.successful_quotes_count,
        "level_best_wpm": progress.level_best_wpm,
        "completed_quotes": sorted(progress.completed_quotes),
        "current_quote_index": progress.current_quote_index,
    }


def _quote_to_dict(quote: Quote, stats: QuoteStats) -> dict[str, object]:
    return {
        "id": quote.id,
        "content": quote.content,
        "typed_count": stats.typed_count,
        "avg_wpm": round_half_up(stats.avg_wpm),
        "avg_accuracy": round_half_up(stats.avg_accuracy),
        "best_wpm": stats.best_wpm,
    }


def _update_to_dict(update: ProgressUpdate) -> dict[str, object]:
    level_completed = None
    if update.level_completed is not None:
        event = update.level_completed
        level_completed = {
            "completed_level": event.completed_level,
            "best_wpm": event.best_wpm,
            "next_level": event.next_level,
            "next_level_wpm_target": event.next_level_wpm_target,
        }
    return {
        "progress": _progress_to_dict(update.progress),
        "is_successful": update.is_successful,
        "wpm_threshold": update.wpm_threshold,
        "level_completed": level_completed,
    }


def _get_manager_dependency(typing_manager: TypingManager):
    def dependency() -> TypingManager:
        return typing_manager

    return dependency


def create_api_app(
    typing_manager: TypingManager,
    repository: QuoteRepository | None = None,
    history: InMemoryHistoryStore | None = None,
) -> FastAPI:
    """Create a FastAPI application wired to the provided typing manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    manager_dep = _get_manager_dependency(typing_manager)

    def require_progression(manager: TypingManager = Depends(manager_dep)) -> ProgressionEngine:
        if manager.progression is None:
            raise HTTPException(status_code=503, detail="Progression is not configured.")
        return manager.progression

    def require_repository() -> QuoteRepository:
        if repository is None:
            raise HTTPException(status_code=503, detail="No script repository is configured.")
        return repository

    @app.get("/session")
    def get_session(manager: TypingManager = Depends(manager_dep)) -> dict[str, object]:
        snapshot = manager.snapshot()
        stats = snapshot.stats
        return {
            "quote": snapshot.quote.content if snapshot.quote is not None else None,
            "quote_id": snapshot.quote.id if snapshot.quote is not None else None,
            "words": [
                {
                    "text": word.text,
                    "states": [character.state.value for character in word.characters],
                }
                for word in snapshot.words
            ],
            "current_word_index": snapshot.current_word_index,
            "current_char_index": snapshot.current_char_index,
            "is_active": snapshot.is_active,
            "is_finished": snapshot.is_finished,
            "wpm": stats.wpm,
            "accuracy": snapshot.accuracy,
            "correct_chars": stats.correct_chars,
            "incorrect_chars": stats.incorrect_chars,
            "total_chars": stats.total_chars,
            "elapsed_time": stats.elapsed_time,
            "death_mode": snapshot.death_mode,
            "repeat_mode": snapshot.repeat_mode,
            "death_mode_failures": snapshot.death_mode_failures,
            "completed_quotes": snapshot.completed_quotes,
            "user_id": snapshot.user_id,
            "script_id": snapshot.script_id,
        }

    @app.get("/levels")
    def get_levels(progression: ProgressionEngine = Depends(require_progression)) -> list[dict[str, object]]:
        return [_level_to_dict(level) for level in progression.get_progression_matrix()]

    @app.get("/levels/{level}")
    def get_level(level: int, progression: ProgressionEngine = Depends(require_progression)) -> dict[str, object]:
        if level < 1:
            raise HTTPException(status_code=422, detail="Levels start at 1.")
        return _level_to_dict(progression.get_level_parameters(level))

    @app.get("/progress/{user_id}")
    def get_progress(
        user_id: str,
        progression: ProgressionEngine = Depends(require_progression),
    ) -> dict[str, object]:
        payload = _progress_to_dict(progression.get_progress(user_id))
        payload["required_wpm"] = progression.calculate_required_wpm(user_id)
        payload["max_attempts_reached"] = progression.is_max_attempts_reached(user_id)
        return payload

    @app.post("/progress/{user_id}/attempts", status_code=201)
    def record_attempt(
        user_id: str,
        payload: AttemptPayload,
        progression: ProgressionEngine = Depends(require_progression),
    ) -> dict[str, object]:
        update = progression.record_attempt(user_id, payload.quote_id, payload.wpm, payload.accuracy)
        return _update_to_dict(update)

    @app.put("/progress/{user_id}/quote-index")
    def update_quote_index(
        user_id: str,
        payload: QuoteIndexPayload,
        progression: ProgressionEngine = Depends(require_progression),
    ) -> dict[str, object]:
        try:
            progress = progression.update_current_quote_index(user_id, payload.index)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _progress_to_dict(progress)

    @app.delete("/progress/{user_id}")
    def reset_progress(
        user_id: str,
        progression: ProgressionEngine = Depends(require_progression),
    ) -> dict[str, object]:
        return _progress_to_dict(progression.reset_progress(user_id))

    @app.get("/scripts")
    def get_scripts(repo: QuoteRepository = Depends(require_repository)) -> list[dict[str, object]]:
        return [
            {"id": script.id, "name": script.name, "quote_count": len(script.quotes)}
            for script in repo.get_scripts()
        ]

    @app.get("/scripts/{script_id}/quotes")
    def get_script_quotes(
        script_id: str,
        repo: QuoteRepository = Depends(require_repository),
    ) -> list[dict[str, object]]:
        try:
            script = repo.get_script(script_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown script {script_id}") from exc
        return [_quote_to_dict(quote, repo.get_quote_stats(quote.id)) for quote in script.quotes]

    @app.get("/history/{user_id}")
    def get_history(user_id: str) -> dict[str, object]:
        if history is None:
            raise HTTPException(status_code=503, detail="No history store is configured.")
        return {
            "user_id": user_id,
            "sessions": len(history.get_records(user_id)),
            "average_wpm": history.get_user_average_wpm(user_id),
            "average_accuracy": history.get_user_average_accuracy(user_id),
            "best_wpm": history.get_user_best_wpm(user_id),
            "wpm_history": history.get_user_wpm_history(user_id),
        }

    return app


def start_api_server(
    typing_manager: TypingManager,
    repository: QuoteRepository | None = None,
    history: InMemoryHistoryStore | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(typing_manager, repository=repository, history=history)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="TypingApiServer", daemon=True)
    thread.start()
    return thread
