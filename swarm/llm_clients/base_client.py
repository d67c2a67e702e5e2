"""
Abstract base class for LLM clients.
Provides a unified interface for interacting with different LLM providers.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from config.config import ModelConfig
from swarm.models.schemas import ConversationMessage, ReasoningEffort


class BaseLLMClient(ABC):
    """Abstract base class for LLM API clients."""

    provider: str = ""

    def __init__(self, config: ModelConfig):
        """
        Initialize the LLM client.

        Args:
            config: Provider configuration including API key and settings
        """
        self.config = config
        self.name = config.name
        self.model_id = config.model_id

    @abstractmethod
    async def generate(
        self,
        messages: List[ConversationMessage],
        model: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a text response from the LLM.

        Args:
            messages: System and user messages, possibly carrying file parts
            model: Model identifier, defaults to the configured model
            reasoning_effort: Optional reasoning-effort hint
            max_tokens: Override default max tokens

        Returns:
            The generated text, normalized from the provider's reply envelope
        """
        pass

    @staticmethod
    def split_system(
        messages: List[ConversationMessage]
    ) -> Tuple[Optional[str], List[ConversationMessage]]:
        """
        Separate system text from the rest of the conversation.

        Providers that take the system prompt as a dedicated argument use this.
        """
        system_texts = [m.text for m in messages if m.role == "system" and m.text]
        others = [m for m in messages if m.role != "system"]
        system_prompt = "\n\n".join(system_texts) if system_texts else None
        return system_prompt, others

    @staticmethod
    def flatten_text(message: ConversationMessage) -> str:
        """
        Text of a message with file parts listed by id.

        Used by providers that cannot receive file ids as inputs.
        """
        text = message.text
        if message.file_ids:
            listing = "\n".join(f"- {file_id}" for file_id in message.file_ids)
            text = f"{text}\n\nAttached file references:\n{listing}" if text else listing
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name}, model={self.model_id})"
