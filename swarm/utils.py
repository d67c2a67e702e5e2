"""
Shared helpers: defensive JSON extraction from model text, prompt clipping,
history condensing and the settle-all join used by every fan-out stage.
"""

import asyncio
import json
import re
import time
from typing import Any, Awaitable, Iterable, List, NamedTuple, Optional, TypeVar

from config.config import SWARM_CONFIG
from swarm.models.schemas import HistoryTurn

T = TypeVar('T')

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_WHITESPACE = re.compile(r"\s+")


def parse_json_from_model(text: Optional[str], fallback: T) -> T:
    """
    Extract a JSON value from free-form model output.

    Code fences are unwrapped, then the whole text is parsed; failing that,
    the span between the first '{' and the last '}' is tried. Anything that
    still does not parse, or parses to a different type than ``fallback``,
    yields ``fallback`` unchanged.

    Args:
        text: Raw model output
        fallback: Value returned when nothing usable can be extracted

    Returns:
        The parsed value or the fallback
    """
    if not text:
        return fallback

    clean_text = _CODE_FENCE.sub(r"\1", text).strip()

    candidates = [clean_text]
    first_brace = clean_text.find('{')
    last_brace = clean_text.rfind('}')
    if first_brace != -1 and last_brace > first_brace:
        candidates.append(clean_text[first_brace:last_brace + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if fallback is None or isinstance(parsed, type(fallback)):
            return parsed

    return fallback


def clean_text(value: Any) -> str:
    """Coerce a loosely-typed JSON field to stripped text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value).strip()


def truncate(text: Any, max_length: int) -> str:
    """Collapse whitespace and clip to ``max_length`` characters with an ellipsis."""
    normalized = _WHITESPACE.sub(" ", str(text or "")).strip()
    if not normalized:
        return ""
    if len(normalized) <= max_length:
        return normalized
    return f"{normalized[:max_length - 1]}…"


def extract_error_message(error: BaseException) -> str:
    """Human-readable message for a caught exception."""
    message = str(error).strip()
    return message or error.__class__.__name__


def build_history_snippet(
    history: Iterable[HistoryTurn],
    max_turns: int = SWARM_CONFIG.max_history_turns,
    char_limit: int = SWARM_CONFIG.history_char_limit
) -> str:
    """
    Condense recent turns into a bounded text block.

    Only the last ``max_turns`` turns are kept; if the result is still longer
    than ``char_limit`` the trailing characters are kept.
    """
    turns = list(history)
    recent = turns[-max_turns:] if max_turns > 0 else []
    combined = "\n".join(
        f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}"
        for turn in recent
    )
    if len(combined) <= char_limit:
        return combined
    return combined[len(combined) - char_limit:]


class SettledCall(NamedTuple):
    """Outcome of one concurrent task: exactly one of value/error is meaningful."""
    value: Any
    error: Optional[Exception]
    latency_ms: int


async def _settle(awaitable: Awaitable[Any]) -> SettledCall:
    started = time.perf_counter()
    try:
        value = await awaitable
    except Exception as e:
        return SettledCall(None, e, round((time.perf_counter() - started) * 1000))
    return SettledCall(value, None, round((time.perf_counter() - started) * 1000))


async def gather_settled(awaitables: Iterable[Awaitable[Any]]) -> List[SettledCall]:
    """
    Run awaitables concurrently and wait for all of them.

    Results keep the input order; a failing task never cancels its siblings.
    """
    return list(await asyncio.gather(*(_settle(a) for a in awaitables)))
