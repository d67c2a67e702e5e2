"""
Configuration module for the Swarm Consensus Engine.
Handles API keys, model presets, runtime budget and system configuration.
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, ignoring unparseable values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    """Read an integer from the environment, ignoring unparseable values."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class ModelConfig:
    """Configuration for a specific LLM provider."""
    name: str
    api_key: Optional[str]
    model_id: str
    max_tokens: int = 4096
    temperature: float = 1


@dataclass
class SystemConfig:
    """System-wide configuration settings."""
    # Timeout for API calls in seconds
    api_timeout: int = 120

    # Whether to run in debug mode
    debug: bool = False

    # Results output directory
    results_dir: str = "results"


@dataclass
class SwarmConfig:
    """Limits and cost model for a single swarm turn."""
    max_workers: int = 64
    max_history_turns: int = 6
    history_char_limit: int = 2400
    finalizer_runner_up_count: int = 3
    max_files_per_message: int = 5

    # Pre-flight admission control
    runtime_budget_seconds: float = 280
    fast_agent_cost_seconds: float = 1.4
    reasoning_agent_cost_seconds: float = 4.25
    discussion_time_multiplier: float = 1.75

    # Prompt clipping
    judge_reasoning_excerpt_chars: int = 400
    runner_up_answer_chars: int = 500

    web_max_results: int = 5
    generate_personas: bool = False


@dataclass
class ModelPreset:
    """Models used by each stage for one swarm mode."""
    worker: str
    judge: str
    finalizer: str
    generator: str


# Provider configurations
OPENAI_CONFIG = ModelConfig(
    name="OpenAI",
    api_key=os.getenv("OPENAI_API_KEY"),
    model_id="gpt-5.1",
    max_tokens=4096,
    temperature=1
)

ANTHROPIC_CONFIG = ModelConfig(
    name="Anthropic",
    api_key=os.getenv("ANTHROPIC_API_KEY"),
    model_id="claude-sonnet-4-5",
    max_tokens=8192,
    temperature=1
)

GOOGLE_CONFIG = ModelConfig(
    name="Gemini",
    api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
    model_id="gemini-3-pro-preview",
    max_tokens=8192,
    temperature=1
)

XAI_CONFIG = ModelConfig(
    name="Grok",
    api_key=os.getenv("XAI_API_KEY"),
    model_id="grok-3-mini",
    max_tokens=4096,
    temperature=1
)

# System configuration
SYSTEM_CONFIG = SystemConfig(
    api_timeout=_env_int("SWARM_API_TIMEOUT", 120),
    debug=os.getenv("DEBUG", "false").lower() == "true",
    results_dir="results"
)

SWARM_CONFIG = SwarmConfig(
    max_workers=64,
    max_history_turns=6,
    history_char_limit=2400,
    finalizer_runner_up_count=3,
    max_files_per_message=_env_int("SWARM_MAX_FILES", 5),
    runtime_budget_seconds=_env_float("SWARM_RUNTIME_BUDGET_SECONDS", 280),
    fast_agent_cost_seconds=_env_float("SWARM_FAST_AGENT_COST_SECONDS", 1.4),
    reasoning_agent_cost_seconds=_env_float("SWARM_REASONING_AGENT_COST_SECONDS", 4.25),
    discussion_time_multiplier=_env_float("SWARM_DISCUSSION_TIME_MULTIPLIER", 1.75),
    web_max_results=_env_int("SWARM_WEB_MAX_RESULTS", 5),
    generate_personas=os.getenv("SWARM_GENERATE_PERSONAS", "false").lower() == "true"
)

# All available providers
ALL_PROVIDERS = {
    "openai": OPENAI_CONFIG,
    "anthropic": ANTHROPIC_CONFIG,
    "google": GOOGLE_CONFIG,
    "xai": XAI_CONFIG
}

# Model-name prefixes used to route a model identifier to its provider
PROVIDER_PREFIXES = {
    "gpt": "openai",
    "chatgpt": "openai",
    "o1": "openai",
    "o3": "openai",
    "o4": "openai",
    "claude": "anthropic",
    "gemini": "google",
    "grok": "xai"
}

AI_PROVIDER = os.getenv("AI_PROVIDER", "openai").lower()


def _preset_model(mode: str, stage: str) -> str:
    """Model for a stage in a mode: env override, else the default provider's model."""
    override = os.getenv(f"SWARM_{mode.upper()}_{stage.upper()}_MODEL")
    if override:
        return override
    provider = ALL_PROVIDERS.get(AI_PROVIDER, OPENAI_CONFIG)
    return provider.model_id


MODEL_PRESETS = {
    mode: ModelPreset(
        worker=_preset_model(mode, "worker"),
        judge=_preset_model(mode, "judge"),
        finalizer=_preset_model(mode, "finalizer"),
        generator=_preset_model(mode, "generator")
    )
    for mode in ("fast", "reasoning")
}


def get_model_preset(mode: str) -> ModelPreset:
    """Get the model preset for a swarm mode, defaulting to fast."""
    return MODEL_PRESETS.get(str(mode).lower(), MODEL_PRESETS["fast"])


def resolve_provider(model_id: str) -> str:
    """Map a model identifier to the provider that serves it."""
    normalized = model_id.lower().strip()
    if "/" in normalized:
        prefix, _, _ = normalized.partition("/")
        if prefix in ALL_PROVIDERS:
            return prefix
        normalized = normalized.split("/", 1)[1]
    for prefix, provider in PROVIDER_PREFIXES.items():
        if normalized.startswith(prefix):
            return provider
    return AI_PROVIDER if AI_PROVIDER in ALL_PROVIDERS else "openai"


def validate_api_keys() -> dict[str, bool]:
    """Check which API keys are configured."""
    return {
        name: config.api_key is not None and len(config.api_key) > 0
        for name, config in ALL_PROVIDERS.items()
    }
