"""
Unit tests for ChatService provider calls.
"""
import json

import httpx
import pytest

from daydiary.core.config import settings
from daydiary.core.exceptions import ChatProviderError
from daydiary.schemas.chat import ChatMessage
from daydiary.services.chat_service import EMPTY_CHAT_REPLY, FALLBACK_QUOTE, ChatService


@pytest.fixture
def chat_keys(monkeypatch):
    monkeypatch.setattr(settings, "chat_api_key", "chat-key")
    monkeypatch.setattr(settings, "quote_api_key", "quote-key")


def _service(handler) -> ChatService:
    return ChatService(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_text_model_for_plain_conversation():
    messages = [ChatMessage(role="user", content="How was my week?")]
    assert ChatService.choose_model(messages) == settings.chat_text_model


def test_vision_model_when_last_message_has_image():
    messages = [
        ChatMessage(role="user", content="Hi"),
        ChatMessage(role="user", content="Look", media=[{"type": "image/png", "url": "https://example.test/a.png"}]),
    ]
    assert ChatService.choose_model(messages) == settings.chat_vision_model


def test_payload_starts_with_system_prompt_and_maps_images():
    service = ChatService()
    messages = [ChatMessage(role="user", content="Look", media=[{"type": "image/png", "url": "https://example.test/a.png"}])]

    payload = service.build_payload(messages)

    assert payload["messages"][0] == {"role": "system", "content": settings.chat_system_prompt}
    assert payload["messages"][1]["content"] == [
        {"type": "image_url", "image_url": {"url": "https://example.test/a.png"}},
        {"type": "text", "text": "Look"},
    ]


@pytest.mark.asyncio
async def test_empty_conversation_gets_fixed_reply():
    response = await ChatService().reply([])
    assert response.reply == EMPTY_CHAT_REPLY


@pytest.mark.asyncio
async def test_reply_returns_provider_answer(chat_keys):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": " Sounds lovely. "}}]})

    response = await _service(handler).reply([ChatMessage(role="user", content="I went hiking")])

    assert response.reply == "Sounds lovely."
    assert response.model == settings.chat_text_model
    assert seen["auth"] == "Bearer chat-key"
    assert seen["body"]["messages"][-1] == {"role": "user", "content": "I went hiking"}


@pytest.mark.asyncio
async def test_reply_provider_error_raises(chat_keys):
    service = _service(lambda request: httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(ChatProviderError):
        await service.reply([ChatMessage(role="user", content="Hi")])


@pytest.mark.asyncio
@pytest.mark.parametrize("reply", [
    httpx.Response(200, text="<html>upstream timeout</html>"),
    httpx.Response(200, json={"choices": [{"message": {"content": ""}}]}),
    httpx.Response(200, json={"choices": []}),
])
async def test_reply_unreadable_answer_raises(chat_keys, reply):
    service = _service(lambda request: reply)

    with pytest.raises(ChatProviderError):
        await service.reply([ChatMessage(role="user", content="Hi")])


@pytest.mark.asyncio
async def test_reply_without_api_key_raises(monkeypatch):
    monkeypatch.setattr(settings, "chat_api_key", None)

    with pytest.raises(ChatProviderError):
        await ChatService().reply([ChatMessage(role="user", content="Hi")])


@pytest.mark.asyncio
async def test_daily_quote_from_provider(chat_keys):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.url.params["key"]
        seen["path"] = request.url.path
        return httpx.Response(200, json={
            "candidates": [{"content": {"parts": [{"text": "Small steps still move you forward.\n"}]}}]
        })

    quote = await _service(handler).daily_quote()

    assert quote == "Small steps still move you forward."
    assert seen["key"] == "quote-key"
    assert seen["path"].endswith(f"{settings.quote_model}:generateContent")


@pytest.mark.asyncio
async def test_daily_quote_falls_back_on_failure(chat_keys):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    assert await _service(handler).daily_quote() == FALLBACK_QUOTE


@pytest.mark.asyncio
async def test_daily_quote_without_key_uses_fallback(monkeypatch):
    monkeypatch.setattr(settings, "quote_api_key", None)
    assert await ChatService().daily_quote() == FALLBACK_QUOTE
