"""Configuration package for the Swarm Consensus Engine."""

from .config import (
    ModelConfig,
    SystemConfig,
    SwarmConfig,
    ModelPreset,
    OPENAI_CONFIG,
    ANTHROPIC_CONFIG,
    GOOGLE_CONFIG,
    XAI_CONFIG,
    SYSTEM_CONFIG,
    SWARM_CONFIG,
    ALL_PROVIDERS,
    MODEL_PRESETS,
    get_model_preset,
    resolve_provider,
    validate_api_keys
)

__all__ = [
    "ModelConfig",
    "SystemConfig",
    "SwarmConfig",
    "ModelPreset",
    "OPENAI_CONFIG",
    "ANTHROPIC_CONFIG",
    "GOOGLE_CONFIG",
    "XAI_CONFIG",
    "SYSTEM_CONFIG",
    "SWARM_CONFIG",
    "ALL_PROVIDERS",
    "MODEL_PRESETS",
    "get_model_preset",
    "resolve_provider",
    "validate_api_keys"
]
