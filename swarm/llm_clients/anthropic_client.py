"""
Anthropic Claude client implementation.
"""

from typing import Any, Dict, List, Optional
from anthropic import AsyncAnthropic

from .base_client import BaseLLMClient
from config.config import ModelConfig, ANTHROPIC_CONFIG, SYSTEM_CONFIG
from swarm.models.schemas import ConversationMessage, ReasoningEffort

# Extended-thinking token budgets per reasoning-effort hint
THINKING_BUDGETS = {
    ReasoningEffort.LOW: 1024,
    ReasoningEffort.MEDIUM: 4096,
    ReasoningEffort.HIGH: 8192
}


class AnthropicClient(BaseLLMClient):
    """Client for Anthropic's Claude API."""

    provider = "anthropic"

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the Anthropic client.

        Args:
            config: Model configuration, defaults to ANTHROPIC_CONFIG
        """
        config = config or ANTHROPIC_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Anthropic API key not configured")

        self.client = AsyncAnthropic(api_key=config.api_key, timeout=SYSTEM_CONFIG.api_timeout)

    async def generate(
        self,
        messages: List[ConversationMessage],
        model: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using Claude.

        File parts are listed by id in the text; Claude only sees their ids.

        Args:
            messages: Conversation to send
            model: Override model id
            reasoning_effort: Optional hint, mapped to an extended-thinking budget
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        system_prompt, turns = self.split_system(messages)
        max_tokens = max_tokens or self.config.max_tokens

        kwargs: Dict[str, Any] = {
            "model": model or self.model_id,
            "max_tokens": max_tokens,
            "messages": [
                {
                    "role": turn.role,
                    "content": self.flatten_text(turn)
                }
                for turn in turns
            ]
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        if reasoning_effort is not None:
            budget = THINKING_BUDGETS[ReasoningEffort(reasoning_effort)]
            # Thinking budget must stay below max_tokens
            kwargs["max_tokens"] = max(max_tokens, budget + 1024)
            kwargs["thinking"] = {"type": "enabled", "budget_tokens": budget}
        else:
            kwargs["temperature"] = self.config.temperature

        response = await self.client.messages.create(**kwargs)

        return "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
