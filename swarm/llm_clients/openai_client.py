"""
OpenAI GPT client implementation.
Supports newer models that require max_completion_tokens and reasoning_effort.
"""

from typing import Any, Dict, List, Optional
from openai import AsyncOpenAI

from .base_client import BaseLLMClient
from config.config import ModelConfig, OPENAI_CONFIG, SYSTEM_CONFIG
from swarm.models.schemas import ConversationMessage, FilePart, ReasoningEffort, TextPart


class OpenAIClient(BaseLLMClient):
    """Client for OpenAI's chat completions API."""

    provider = "openai"
    base_url: Optional[str] = None
    # Newer OpenAI models (gpt-5, o-series) only accept max_completion_tokens
    max_tokens_param = "max_completion_tokens"

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the OpenAI client.

        Args:
            config: Model configuration, defaults to OPENAI_CONFIG
        """
        config = config or OPENAI_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError(f"{config.name} API key not configured")

        self.client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=self.base_url,
            timeout=SYSTEM_CONFIG.api_timeout
        )

    def _convert_messages(self, messages: List[ConversationMessage]) -> List[Dict[str, Any]]:
        """Convert conversation messages to chat-completions format."""
        converted = []
        for message in messages:
            if message.role != "user" or not message.file_ids:
                converted.append({"role": message.role, "content": message.text})
                continue

            content: List[Dict[str, Any]] = []
            for part in message.parts:
                if isinstance(part, TextPart):
                    content.append({"type": "text", "text": part.text})
                elif isinstance(part, FilePart):
                    content.append({"type": "file", "file": {"file_id": part.file_id}})
            converted.append({"role": "user", "content": content})
        return converted

    async def generate(
        self,
        messages: List[ConversationMessage],
        model: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using an OpenAI-compatible chat model.

        Args:
            messages: Conversation to send
            model: Override model id
            reasoning_effort: Optional reasoning-effort hint
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        kwargs: Dict[str, Any] = {
            "model": model or self.model_id,
            "messages": self._convert_messages(messages),
            self.max_tokens_param: max_tokens or self.config.max_tokens
        }

        if reasoning_effort is not None:
            kwargs["reasoning_effort"] = ReasoningEffort(reasoning_effort).value

        response = await self.client.chat.completions.create(**kwargs)

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
