"""
Chat and quote endpoint tests through the HTTP API.
"""
from unittest.mock import AsyncMock, patch

from daydiary.core.exceptions import ChatProviderError
from daydiary.schemas.chat import ChatResponse
from daydiary.services.chat_service import FALLBACK_QUOTE, ChatService


def test_empty_chat_gets_fixed_reply(client):
    response = client.post("/api/chat", json={"messages": []})

    assert response.status_code == 200
    assert response.json()["reply"] == "No message received."


def test_chat_returns_provider_reply(client):
    with patch.object(ChatService, "reply", new=AsyncMock(return_value=ChatResponse(reply="Tell me more."))):
        response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "I felt calm today"}]})

    assert response.status_code == 200
    assert response.json()["reply"] == "Tell me more."


def test_chat_provider_failure_is_bad_gateway(client):
    with patch.object(ChatService, "reply", new=AsyncMock(side_effect=ChatProviderError("down"))):
        response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hello"}]})

    assert response.status_code == 502
    assert response.json()["error"] == "ChatProviderError"


def test_chat_rejects_unknown_role(client):
    response = client.post("/api/chat", json={"messages": [{"role": "robot", "content": "beep"}]})

    assert response.status_code == 422


def test_quote_falls_back_when_provider_unavailable(client):
    response = client.get("/api/quote")

    assert response.status_code == 200
    assert response.json() == {"quote": FALLBACK_QUOTE}
