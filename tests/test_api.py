"""Tests for the FastAPI surface."""

import pytest
from httpx import ASGITransport, AsyncClient

from snippet_sphere.api.dependencies import get_chat_flow, get_explain_flow, get_tags_flow
from snippet_sphere.api.main import app
from snippet_sphere.flows.explain_code import ExplainCodeFlow
from snippet_sphere.flows.general_chat import GeneralChatFlow
from snippet_sphere.flows.suggest_tags import SuggestTagsFlow


@pytest.fixture
def client_for(config_path, fake_llm):
    def make(reply):
        llm = fake_llm(reply)
        app.dependency_overrides[get_explain_flow] = lambda: ExplainCodeFlow(config_path=config_path, llm=llm)
        app.dependency_overrides[get_tags_flow] = lambda: SuggestTagsFlow(config_path=config_path, llm=llm)
        app.dependency_overrides[get_chat_flow] = lambda: GeneralChatFlow(config_path=config_path, llm=llm)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test"), llm

    yield make
    app.dependency_overrides.clear()


async def test_health() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_explain_endpoint(client_for) -> None:
    client, _ = client_for({"explanation": "Adds two numbers."})
    async with client as ac:
        r = await ac.post("/ai/explain", json={"code": "a + b", "language": "python"})
    assert r.status_code == 200
    assert r.json() == {"explanation": "Adds two numbers."}


async def test_suggest_tags_uses_camel_case(client_for) -> None:
    client, _ = client_for({"suggestedTags": ["fetch", "api-client"]})
    async with client as ac:
        r = await ac.post("/ai/suggest-tags", json={"title": "Fetch helper", "code": "fetch(url)", "existingTags": ["javascript"]})
    assert r.status_code == 200
    assert r.json() == {"suggestedTags": ["fetch", "api-client"]}


async def test_chat_failure_is_not_an_http_error(client_for) -> None:
    client, _ = client_for(RuntimeError("provider unavailable"))
    async with client as ac:
        r = await ac.post("/ai/chat", json={"question": "hi", "history": [{"role": "user", "text": "earlier"}]})
    assert r.status_code == 200
    assert r.json() == {"answer": "I'm sorry, I couldn't generate a response right now."}


async def test_invalid_body_lists_all_violations(client_for) -> None:
    client, llm = client_for({"suggestedTags": []})
    async with client as ac:
        r = await ac.post("/ai/suggest-tags", json={"existingTags": "javascript"})
    assert r.status_code == 422
    fields = {v["field"] for v in r.json()["detail"]}
    assert fields == {"title", "code", "existingTags"}
    assert llm.calls == []


async def test_openapi_documents_request_bodies() -> None:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        r = await ac.get("/openapi.json")
    assert r.status_code == 200
    doc = r.json()

    body = doc["paths"]["/ai/chat"]["post"]["requestBody"]
    assert body["content"]["application/json"]["schema"]["$ref"] == "#/components/schemas/ChatRequest"
    schemas = doc["components"]["schemas"]
    for name in ("ExplainRequest", "TagRequest", "ChatRequest", "ChatTurn"):
        assert name in schemas
    assert "existingTags" in schemas["TagRequest"]["properties"]
