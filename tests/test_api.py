"""
HTTP tests against the FastAPI app with an in-memory store and the mock LLM.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.application.use_cases.handle_chat_message import HandleChatMessageUseCase
from app.application.use_cases.session_budget import SessionBudgetUseCase
from app.application.utils.budget_engine import BudgetEngine
from app.application.utils.conversation_flow import ConversationFlow
from app.infrastructure.llm.mock_llm import MockLLM
from app.infrastructure.store.memory_store import MemoryConversationStore
from app.main import app
from app.wiring.dependencies import get_chat_use_case, get_conversation_store, get_session_budget_use_case


@pytest.fixture
def client():
    store = MemoryConversationStore()
    engine = BudgetEngine()
    flow = ConversationFlow()
    app.dependency_overrides[get_conversation_store] = lambda: store
    app.dependency_overrides[get_chat_use_case] = lambda: HandleChatMessageUseCase(
        store=store, llm=MockLLM(), flow=flow, engine=engine
    )
    app.dependency_overrides[get_session_budget_use_case] = lambda: SessionBudgetUseCase(store=store, engine=engine)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_chat_start_and_message(client):
    r = client.post("/api/v1/chat/start", json={})
    assert r.status_code == 200
    thread_id = r.json()["thread_id"]
    assert r.json()["reply"].startswith("Hello! I'm Plannerly")

    r = client.post("/api/v1/chat", json={"thread_id": thread_id, "message": "We're planning a wedding"})
    assert r.status_code == 200
    body = r.json()
    assert body["thread_id"] == thread_id
    assert body["state"] == "SCOPE"
    assert body["profile"]["event_type"] == "wedding"
    assert body["allocation"] is None


def test_chat_without_thread_id_opens_one(client):
    r = client.post("/api/v1/chat", json={"message": "a birthday"})
    assert r.status_code == 200
    thread_id = r.json()["thread_id"]

    r = client.get(f"/api/v1/sessions/{thread_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["state"] == "SCOPE"
    assert [m["role"] for m in body["history"]] == ["assistant", "user", "assistant"]


def test_chat_validation(client):
    assert client.post("/api/v1/chat", json={"message": ""}).status_code == 422
    assert client.post("/api/v1/chat", json={"message": "x" * 4001}).status_code == 422
    assert client.post("/api/v1/chat", json={"thread_id": "../etc", "message": "hi"}).status_code == 422


def test_unknown_session_is_404(client):
    assert client.get("/api/v1/sessions/nope").status_code == 404
    assert client.get("/api/v1/sessions/nope/budget").status_code == 404
    assert client.post("/api/v1/sessions/nope/selections", json={"category": "venue", "price": 100}).status_code == 404


def test_session_selections_and_budget(client):
    thread_id = client.post("/api/v1/chat/start", json={"thread_id": "t-1"}).json()["thread_id"]
    client.post("/api/v1/chat", json={"thread_id": thread_id, "message": "A wedding with a $10,000 budget"})

    r = client.post(f"/api/v1/sessions/{thread_id}/selections", json={"category": "venue", "price": 3500})
    assert r.status_code == 200
    assert r.json()["selections"][0]["category"] == "venue"

    r = client.put(f"/api/v1/sessions/{thread_id}/priorities", json={"priorities": {"venue": 2, "catering": 1}})
    assert r.status_code == 200
    assert r.json()["priorities"] == {"venue": 2.0, "catering": 1.0}

    r = client.get(f"/api/v1/sessions/{thread_id}/budget")
    assert r.status_code == 200
    body = r.json()
    assert body["total_budget"] == 10000
    assert body["remaining"] == 6500
    assert body["warnings"] == ["venue is over budget by $500.00"]
    assert body["rebalanced"]["venue"] == -500

    assert client.delete(f"/api/v1/sessions/{thread_id}/selections/3").status_code == 404
    r = client.delete(f"/api/v1/sessions/{thread_id}/selections/0")
    assert r.status_code == 200
    assert r.json()["selections"] == []


def test_budget_allocate_and_overage(client):
    r = client.post("/api/v1/budget/allocate", json={"total_budget": 1000, "event_type": "wedding"})
    assert r.status_code == 200
    assert r.json()["allocation"]["venue"] == 300

    r = client.post(
        "/api/v1/budget/reallocate",
        json={"current_allocation": {"a": 100, "b": 100}, "selections": [{"category": "a", "price": 50}], "total_budget": 200},
    )
    assert r.json()["allocation"] == {"a": 50, "b": 100}

    r = client.post(
        "/api/v1/budget/overage",
        json={"allocation": {"venue": 100}, "selections": [{"category": "venue", "price": 150}]},
    )
    assert r.json()["warnings"] == ["venue is over budget by $50.00"]


def test_budget_recommendations_policy(client):
    payload = {"total_budget": 1000, "priorities": {"venue": 1}, "selections": [{"category": "venue", "price": 1500}]}

    r = client.post("/api/v1/budget/recommendations", json={**payload, "policy": "priority"})
    assert r.status_code == 200
    assert r.json()["policy"] == "priority"
    assert "over budget by $500" in r.json()["recommendations"][0]

    r = client.post("/api/v1/budget/recommendations", json={**payload, "event_type": "wedding"})
    assert r.json()["policy"] == "template"
    assert r.json()["recommendations"][-1].startswith("You are nearing your budget limit")

    r = client.post("/api/v1/budget/recommendations", json={**payload, "policy": "nope"})
    assert r.status_code == 422


def test_budget_overview(client):
    r = client.post(
        "/api/v1/budget/overview",
        json={"total_budget": 1000, "event_type": "birthday", "selections": [{"category": "decor", "price": 150}]},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["allocation"]["decor"] == 100
    assert body["warnings"] == ["decor is over budget by $50.00"]
    assert {s["category"] for s in body["status"]} == {"venue", "catering", "entertainment", "decor", "misc"}


def test_conversation_flow_endpoint(client):
    body = client.get("/api/v1/conversation/flow").json()
    assert body["initial"]["next_state"] == "PLANNING"
    assert [s["state"] for s in body["steps"]][0] == "EVENT_TYPE"
    assert len(body["steps"]) == 7
    assert body["steps"][-1]["next_state"] == "PLANNING"


def test_planning_endpoints(client):
    r = client.post("/api/v1/planning/parse", json={"messages": ["A wedding in Austin", "budget $20,000"]})
    assert r.json()["event_type"] == "wedding"
    assert r.json()["budget_amount"] == 20000

    r = client.post("/api/v1/planning/timeline", json={"event_date": "2025-08-31"})
    tasks = r.json()
    assert tasks[0] == {"id": "task-0", "title": "Book venue", "due_date": "2025-02-28", "completed": False}

    r = client.post(
        "/api/v1/planning/price-estimate",
        json={"category": "catering", "event_type": "wedding", "guest_count": 100, "reviews": ["cost us $135"]},
    )
    assert r.json()["base_estimate"] == 135
    assert r.json()["review_prices"] == [135]
    assert r.json()["estimate"] == 135
    assert r.json()["confidence"] == 1.0

    assert client.post("/api/v1/planning/price-estimate", json={"category": "dj", "price_level": 9}).status_code == 422


def test_timeline_toggle(client):
    tasks = client.post("/api/v1/planning/timeline", json={"event_date": "2025-06-14"}).json()
    r = client.post("/api/v1/planning/timeline/toggle", json={"tasks": tasks, "task_id": "task-1"})
    assert r.status_code == 200
    assert [t["completed"] for t in r.json()] == [False, True, False, False, False, False]


def test_budget_templates(client):
    body = client.get("/api/v1/budget/templates").json()
    by_type = {t["event_type"]: t for t in body}
    assert set(by_type) == {"wedding", "birthday"}
    assert by_type["wedding"]["must_have"] == ["venue", "catering", "photography"]
    assert by_type["birthday"]["shares"]["entertainment"] == 0.2
