"""Chatbot proxy service forwarding user messages to OpenAI."""

import logging
from typing import Any

from openai import OpenAIError

from src.api.middleware.error_handler import UpstreamServiceError, ValidationError
from src.core.config import Settings, get_settings
from src.core.openai import TimedOpenAIClient, get_openai_client
from src.services.chat_prompts import CHATBOT_SYSTEM_PROMPT, MOCK_CHAT_REPLY

logger = logging.getLogger(__name__)


class ChatService:
    """Service answering single chat messages with a fixed system prompt."""

    def __init__(
        self,
        client: TimedOpenAIClient | None = None,
        settings: Settings | None = None,
    ):
        """Initialize chat service.

        Args:
            client: Optional OpenAI client for testing.
            settings: Optional settings for testing.
        """
        self._client = client
        self.settings = settings or get_settings()

    @property
    def client(self) -> TimedOpenAIClient:
        """Get OpenAI client."""
        if self._client is None:
            self._client = get_openai_client()
        return self._client

    def build_messages(self, message: str) -> list[dict[str, Any]]:
        """Build the chat completion message list."""
        return [
            {"role": "system", "content": CHATBOT_SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ]

    async def reply(self, message: str | None) -> str:
        """Answer a user message.

        Raises:
            ValidationError: If the message is empty or too long.
            UpstreamServiceError: If OpenAI fails after retries.
        """
        if not message or not message.strip():
            raise ValidationError("Message is required")

        if len(message) > self.settings.chat_max_message_length:
            raise ValidationError(
                f"Message exceeds {self.settings.chat_max_message_length} characters"
            )

        if self.settings.mock_openai:
            return MOCK_CHAT_REPLY

        try:
            response = self.client.chat.create(
                model=self.settings.openai_model,
                messages=self.build_messages(message),
            )
        except OpenAIError as e:
            logger.error("Chat completion failed: %s", e)
            raise UpstreamServiceError("Chat assistant is unavailable") from e

        return response.choices[0].message.content or ""
