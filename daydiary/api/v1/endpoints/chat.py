"""
Chat companion and daily quote endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from daydiary.api.dependencies import get_chat_service
from daydiary.schemas.chat import ChatRequest, ChatResponse, QuoteResponse
from daydiary.services.chat_service import ChatService

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        502: {"description": "Chat provider failed"},
    }
)
async def chat(
    chat_request: ChatRequest,
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
):
    return await chat_service.reply(chat_request.messages)


@router.get("/quote", response_model=QuoteResponse)
async def daily_quote(
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
):
    """Short motivational quote; falls back to a fixed one when the provider fails."""
    return QuoteResponse(quote=await chat_service.daily_quote())
