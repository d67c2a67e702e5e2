"""
Completion Gateway.
Single boundary through which every stage reaches a completion service.
"""

from typing import Dict, List, Optional

from config.config import resolve_provider
from swarm.errors import AgentInvocationFailure
from swarm.llm_clients import PROVIDER_CLIENTS, BaseLLMClient
from swarm.models.schemas import CompletionResult, ConversationMessage, ReasoningEffort


class CompletionGateway:
    """
    Routes a model identifier to its provider client and returns canonical text.

    Holds no per-call state, so one instance can serve every concurrent task
    of a turn. Errors from the provider SDK propagate unchanged.
    """

    def __init__(self, clients: Dict[str, BaseLLMClient]):
        """
        Initialize the gateway.

        Args:
            clients: Dictionary mapping provider names to their clients
        """
        self.clients = clients

    @classmethod
    def from_config(cls, verbose: bool = True) -> "CompletionGateway":
        """
        Build a gateway with every provider whose API key is configured.

        Args:
            verbose: Whether to print which providers were initialized
        """
        clients: Dict[str, BaseLLMClient] = {}

        for provider, client_class in PROVIDER_CLIENTS.items():
            try:
                clients[provider] = client_class()
                if verbose:
                    print(f"[Gateway] Initialized {provider} client")
            except Exception as e:
                if verbose:
                    print(f"[Gateway] Warning: Could not initialize {provider}: {e}")

        if not clients and verbose:
            print("[Gateway] Warning: No providers available. Every model call will fail.")

        return cls(clients)

    @property
    def providers(self) -> List[str]:
        return list(self.clients.keys())

    def client_for(self, model: str) -> BaseLLMClient:
        """Return the client serving ``model`` or raise AgentInvocationFailure."""
        provider = resolve_provider(model)
        client = self.clients.get(provider)
        if client is None:
            raise AgentInvocationFailure(
                f"No {provider} client configured for model '{model}'"
            )
        return client

    async def invoke(
        self,
        model: str,
        conversation: List[ConversationMessage],
        reasoning_effort: Optional[ReasoningEffort] = None
    ) -> CompletionResult:
        """
        Issue a single completion request.

        Args:
            model: Model identifier
            conversation: System and user messages
            reasoning_effort: Optional reasoning-effort hint

        Returns:
            CompletionResult with the reply text
        """
        client = self.client_for(model)

        # "provider/model" identifiers reach the SDK without the provider prefix
        prefix, separator, bare_model = model.partition("/")
        if separator and prefix.lower() == client.provider:
            model = bare_model

        text = await client.generate(
            messages=conversation,
            model=model,
            reasoning_effort=reasoning_effort
        )
        return CompletionResult(text=text or "", model=model, provider=client.provider)
