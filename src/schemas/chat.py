"""Chatbot Pydantic schemas."""

from pydantic import Field

from src.schemas.common import CamelModel


class ChatRequest(CamelModel):
    """Schema for POST /chat."""

    message: str | None = Field(default=None, description="User message")


class ChatResponse(CamelModel):
    """Schema for chatbot replies."""

    reply: str = Field(description="Assistant reply")
