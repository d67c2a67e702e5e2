"""
Exceptions raised by the swarm.

Only ConfigurationRejected ever leaves a turn; every per-call failure is
absorbed by its stage and turned into a placeholder value.
"""

from typing import Optional


class SwarmError(Exception):
    """Base class for swarm errors."""
    pass


class ConfigurationRejected(SwarmError):
    """Raised before any model call when a turn's parameters are not admissible."""

    def __init__(
        self,
        message: str,
        estimated_seconds: Optional[float] = None,
        budget_seconds: Optional[float] = None
    ):
        super().__init__(message)
        self.estimated_seconds = estimated_seconds
        self.budget_seconds = budget_seconds


class AgentInvocationFailure(SwarmError):
    """Raised by the gateway when a model call cannot be issued."""
    pass
