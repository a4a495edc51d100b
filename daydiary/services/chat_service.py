"""
Chat and daily quote service backed by external completion providers.
"""
from typing import Any, Dict, List, Optional

import httpx

from daydiary.core.config import settings
from daydiary.core.exceptions import ChatProviderError
from daydiary.core.http_client import get_http_client
from daydiary.core.logging_config import log_error, log_info, log_warning
from daydiary.schemas.chat import ChatMessage, ChatResponse

EMPTY_CHAT_REPLY = "No message received."
FALLBACK_QUOTE = "Every day is a blank page waiting for your story."
EMPTY_QUOTE = "Keep walking, the stars are watching your journey."


class ChatService:
    """Service for the diary companion chat and the daily quote."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self._http_client = http_client

    async def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return await get_http_client()

    @staticmethod
    def choose_model(messages: List[ChatMessage]) -> str:
        """Use the vision model when the latest message carries an image."""
        if messages and messages[-1].has_image:
            return settings.chat_vision_model
        return settings.chat_text_model

    @staticmethod
    def _to_provider_message(message: ChatMessage) -> Dict[str, Any]:
        if message.role != "user" or not message.media:
            return {"role": message.role, "content": message.content}

        parts: List[Dict[str, Any]] = []
        for item in message.media:
            if item.type.startswith("image/"):
                parts.append({"type": "image_url", "image_url": {"url": item.url}})
            else:
                parts.append({"type": "text", "text": item.url})
        parts.append({"type": "text", "text": message.content})
        return {"role": "user", "content": parts}

    def build_payload(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        model = self.choose_model(messages)
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": settings.chat_system_prompt},
                *(self._to_provider_message(message) for message in messages),
            ],
        }

    async def reply(self, messages: List[ChatMessage]) -> ChatResponse:
        """Send the conversation to the provider and return the assistant's answer.

        Raises:
            ChatProviderError: provider not configured, unreachable, or returned
                an error or an empty answer
        """
        if not messages:
            return ChatResponse(reply=EMPTY_CHAT_REPLY)
        if not settings.chat_api_key:
            raise ChatProviderError("Chat provider API key is not configured")

        payload = self.build_payload(messages)
        log_info("Sending chat request", model=payload["model"], messages=len(messages))

        client = await self._client()
        try:
            response = await client.post(
                settings.chat_api_url,
                json=payload,
                headers={"Authorization": f"Bearer {settings.chat_api_key}"},
            )
        except httpx.HTTPError as exc:
            raise ChatProviderError(f"Chat provider unreachable: {exc}") from exc

        if response.status_code != 200:
            raise ChatProviderError(f"Chat provider returned status {response.status_code}")

        try:
            reply = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ChatProviderError("Chat provider returned no answer") from exc
        if not reply or not isinstance(reply, str):
            raise ChatProviderError("Chat provider returned an empty answer")
        return ChatResponse(reply=reply.strip(), model=payload["model"])

    async def daily_quote(self) -> str:
        """Fetch a short quote; any failure yields the fallback quote."""
        if not settings.quote_api_key:
            log_warning("Quote provider API key is not configured, using fallback quote")
            return FALLBACK_QUOTE

        url = f"{settings.quote_api_url.rstrip('/')}/{settings.quote_model}:generateContent"
        body = {"contents": [{"role": "user", "parts": [{"text": settings.quote_prompt}]}]}

        try:
            client = await self._client()
            response = await client.post(url, params={"key": settings.quote_api_key}, json=body)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            log_error(exc)
            return FALLBACK_QUOTE

        try:
            quote = data["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (KeyError, IndexError, TypeError, AttributeError):
            quote = ""
        return quote or EMPTY_QUOTE
