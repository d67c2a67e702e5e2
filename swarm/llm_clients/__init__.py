"""Provider clients behind the completion gateway."""

from typing import Dict, Type

from .base_client import BaseLLMClient
from .openai_client import OpenAIClient
from .anthropic_client import AnthropicClient
from .google_client import GoogleClient
from .xai_client import XAIClient

# Provider name -> client class, in initialization order
PROVIDER_CLIENTS: Dict[str, Type[BaseLLMClient]] = {
    OpenAIClient.provider: OpenAIClient,
    AnthropicClient.provider: AnthropicClient,
    GoogleClient.provider: GoogleClient,
    XAIClient.provider: XAIClient
}

__all__ = [
    "BaseLLMClient",
    "OpenAIClient",
    "AnthropicClient",
    "GoogleClient",
    "XAIClient",
    "PROVIDER_CLIENTS"
]
