from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from typing_app.server.api_server import create_api_app


@pytest.fixture
def client(manager, repository, history) -> TestClient:
    return TestClient(create_api_app(manager, repository=repository, history=history))


def test_session_snapshot(client, manager) -> None:
    manager.handle_input("a")
    payload = client.get("/session").json()

    assert payload["quote"] == "ab cd"
    assert payload["is_active"] is True
    assert payload["correct_chars"] == 1
    assert payload["words"][0] == {"text": "ab", "states": ["correct", "current"]}


def test_levels(client) -> None:
    levels = client.get("/levels").json()
    assert [level["level"] for level in levels] == [1, 2, 3, 4, 5]

    assert client.get("/levels/2").json()["accuracy_threshold"] == 92
    assert client.get("/levels/42").json()["level"] == 1
    assert client.get("/levels/0").status_code == 422


def test_attempt_and_progress(client) -> None:
    response = client.post("/progress/ana/attempts", json={"quote_id": "q1", "wpm": 40, "accuracy": 96})
    assert response.status_code == 201
    assert response.json()["is_successful"] is True

    progress = client.get("/progress/ana").json()
    assert progress["baseline_wpm"] == 40
    assert progress["required_wpm"] == 20
    assert progress["completed_quotes"] == ["q1"]
    assert progress["max_attempts_reached"] is False


def test_attempt_validation(client) -> None:
    assert client.post("/progress/ana/attempts", json={"wpm": 40, "accuracy": 140}).status_code == 422


def test_quote_index(client) -> None:
    assert client.put("/progress/ana/quote-index", json={"index": 3}).json()["current_quote_index"] == 3
    assert client.put("/progress/ana/quote-index", json={"index": -1}).status_code == 422


def test_reset_progress(client) -> None:
    client.post("/progress/ana/attempts", json={"wpm": 40, "accuracy": 100})
    payload = client.delete("/progress/ana").json()
    assert payload["baseline_wpm"] is None
    assert payload["current_level"] == 1


def test_scripts(client, repository) -> None:
    script = repository.add_script("drills", ["one", "two"])

    assert client.get("/scripts").json() == [{"id": script.id, "name": "drills", "quote_count": 2}]
    repository.record_quote_result(script.quotes[0].id, 41, 99)
    quotes = client.get(f"/scripts/{script.id}/quotes").json()
    assert [quote["content"] for quote in quotes] == ["one", "two"]
    assert quotes[0]["typed_count"] == 1
    assert quotes[0]["avg_wpm"] == 41
    assert quotes[0]["best_wpm"] == 41
    assert quotes[1]["typed_count"] == 0
    assert client.get("/scripts/unknown/quotes").status_code == 404


def test_history_summary(client, manager, repository) -> None:
    script = repository.add_script("drills", ["ab cd"])
    manager.set_script_scope(script.id)
    manager.set_user("ana")
    for char in "ab cd":
        manager.handle_input(char)

    payload = client.get("/history/ana").json()
    assert payload["sessions"] == 1
    assert payload["wpm_history"] == [payload["best_wpm"]]
