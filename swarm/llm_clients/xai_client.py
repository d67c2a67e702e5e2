"""
xAI Grok client implementation.
Uses the OpenAI-compatible API endpoint.
"""

from typing import Optional

from .openai_client import OpenAIClient
from config.config import ModelConfig, XAI_CONFIG


class XAIClient(OpenAIClient):
    """Client for xAI's Grok API (OpenAI-compatible)."""

    provider = "xai"
    # xAI uses an OpenAI-compatible API
    base_url = "https://api.x.ai/v1"
    max_tokens_param = "max_tokens"

    def __init__(self, config: Optional[ModelConfig] = None):
        """
        Initialize the xAI Grok client.

        Args:
            config: Model configuration, defaults to XAI_CONFIG
        """
        super().__init__(config or XAI_CONFIG)
