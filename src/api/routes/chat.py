"""Chatbot proxy API route."""

from fastapi import APIRouter, Depends

from src.api.deps import get_chat_service
from src.schemas.chat import ChatRequest, ChatResponse
from src.services.chat_service import ChatService

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Ask the chat assistant",
    responses={
        400: {"description": "Message is missing or too long"},
        502: {"description": "The language model could not be reached"},
    },
)
async def chat(
    data: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Forward a message to the chat assistant and return its reply."""
    reply = await chat_service.reply(data.message)
    return ChatResponse(reply=reply)
