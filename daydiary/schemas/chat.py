"""
Chat and quote schemas.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class ChatMedia(BaseModel):
    """Media attached to a chat message; images are forwarded to the vision model."""
    type: str
    url: str


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str = ""
    media: Optional[List[ChatMedia]] = None

    @property
    def has_image(self) -> bool:
        return any(item.type.startswith("image/") for item in self.media or [])


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    reply: str
    model: Optional[str] = None


class QuoteResponse(BaseModel):
    quote: str
