"""
Runtime Budget Estimator.
Pre-flight admission control: turns whose estimated duration exceeds the
configured budget are rejected before any model is called.
"""

from typing import Union

from config.config import SwarmConfig, SWARM_CONFIG
from swarm.errors import ConfigurationRejected
from swarm.models.schemas import SwarmMode


def per_agent_cost_seconds(
    mode: Union[SwarmMode, str],
    config: SwarmConfig = SWARM_CONFIG
) -> float:
    """Estimated seconds one worker adds to a turn in the given mode."""
    if SwarmMode(mode) == SwarmMode.REASONING:
        return config.reasoning_agent_cost_seconds
    return config.fast_agent_cost_seconds


def estimate_runtime_seconds(
    agent_count: int,
    mode: Union[SwarmMode, str],
    discussion_enabled: bool,
    config: SwarmConfig = SWARM_CONFIG
) -> float:
    """
    Estimate the wall-clock cost of a turn.

    Args:
        agent_count: Number of workers
        mode: Fast or reasoning mode
        discussion_enabled: Whether a discussion round runs
        config: Cost model

    Returns:
        Estimated seconds, never negative
    """
    discussion_factor = config.discussion_time_multiplier if discussion_enabled else 1
    return max(agent_count, 0) * per_agent_cost_seconds(mode, config) * discussion_factor


def check_runtime_budget(
    agent_count: int,
    mode: Union[SwarmMode, str],
    discussion_enabled: bool,
    config: SwarmConfig = SWARM_CONFIG
) -> float:
    """
    Reject a configuration whose estimate exceeds the runtime budget.

    Returns:
        The estimate, when it fits the budget

    Raises:
        ConfigurationRejected: If the estimate exceeds the budget
    """
    estimate = estimate_runtime_seconds(agent_count, mode, discussion_enabled, config)
    budget = config.runtime_budget_seconds

    if estimate > budget:
        raise ConfigurationRejected(
            f"This swarm configuration will likely exceed the runtime budget "
            f"({round(estimate)}s > {budget:g}s). "
            f"Reduce workers, turn off discussion, or switch to fast mode.",
            estimated_seconds=estimate,
            budget_seconds=budget
        )

    return estimate
