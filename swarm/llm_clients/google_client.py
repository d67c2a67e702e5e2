"""
Google Gemini client implementation using the google-genai SDK.
"""

from typing import List, Optional
from google import genai
from google.genai import types

from .base_client import BaseLLMClient
from config.config import ModelConfig, GOOGLE_CONFIG
from swarm.models.schemas import ConversationMessage, ReasoningEffort

LOW_THINKING_BUDGET = 1024
HIGH_THINKING_BUDGET = 8192


class GoogleClient(BaseLLMClient):
    """Client for Google's Gemini API."""

    provider = "google"

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the Google Gemini client.

        Args:
            config: Model configuration, defaults to GOOGLE_CONFIG
        """
        config = config or GOOGLE_CONFIG
        super().__init__(config)

        if not config.api_key:
            raise ValueError("Google API key not configured")

        self.client = genai.Client(api_key=config.api_key)

    @staticmethod
    def _thinking_budget(reasoning_effort: Optional[ReasoningEffort]) -> int:
        # No medium tier: medium and high both think hard, anything else stays light
        if reasoning_effort is not None and ReasoningEffort(reasoning_effort) != ReasoningEffort.LOW:
            return HIGH_THINKING_BUDGET
        return LOW_THINKING_BUDGET

    async def generate(
        self,
        messages: List[ConversationMessage],
        model: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response using Gemini.

        Args:
            messages: Conversation to send; non-system turns are joined into one prompt
            model: Override model id
            reasoning_effort: Optional hint, mapped to a thinking budget
            max_tokens: Override max tokens

        Returns:
            Generated text response
        """
        system_prompt, turns = self.split_system(messages)
        contents = "\n\n".join(self.flatten_text(turn) for turn in turns)

        # Build generation config
        generation_config = types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=max_tokens or self.config.max_tokens,
            system_instruction=system_prompt if system_prompt else None,
            thinking_config=types.ThinkingConfig(
                thinking_budget=self._thinking_budget(reasoning_effort)
            )
        )

        # Generate response using async method
        response = await self.client.aio.models.generate_content(
            model=model or self.model_id,
            contents=contents,
            config=generation_config
        )

        return response.text or ""
