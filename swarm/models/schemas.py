"""
Pydantic models for personas, stage outputs and turn results in the swarm.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Literal, Union
from pydantic import BaseModel, Field
from enum import Enum


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SwarmMode(str, Enum):
    """Model tier used for a turn."""
    FAST = "fast"
    REASONING = "reasoning"


class ReasoningEffort(str, Enum):
    """Reasoning-effort hint forwarded to the completion service."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============== Personas ==============

class WorkerPersona(BaseModel):
    """A specialist role that produces one candidate answer per turn."""
    id: str = Field(..., description="Stable persona identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="One-line role description")
    instruction: str = Field(..., description="System instruction for the worker")
    model: str = Field(..., description="Default model identifier")


class JudgePersona(BaseModel):
    """A fixed evaluator role that produces one ballot per turn."""
    id: str = Field(..., description="Stable judge identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="One-line role description")
    judging_instruction: str = Field(..., description="Instruction used when ranking candidates")
    model: str = Field(..., description="Default model identifier")


# ============== Conversation Inputs ==============

class HistoryTurn(BaseModel):
    """One prior turn of the conversation."""
    role: Literal["user", "assistant"] = "user"
    content: str = ""
    timestamp: Optional[str] = None
    final_answer: Optional[str] = None


class FileReference(BaseModel):
    """A user file already uploaded to the completion service."""
    id: str = Field(default_factory=_new_id)
    name: str = "Attachment"
    mime_type: str = "application/octet-stream"
    size: int = 0
    provider_file_id: Optional[str] = Field(
        default=None, description="Opaque file id understood by the completion service"
    )


class TextPart(BaseModel):
    """Plain text content block."""
    type: Literal["text"] = "text"
    text: str


class FilePart(BaseModel):
    """Opaque file reference content block."""
    type: Literal["file"] = "file"
    file_id: str


ContentPart = Union[TextPart, FilePart]


class ConversationMessage(BaseModel):
    """A single message sent to the completion service."""
    role: Literal["system", "user", "assistant"]
    parts: List[ContentPart] = Field(default_factory=list)

    @classmethod
    def system(cls, text: str) -> "ConversationMessage":
        return cls(role="system", parts=[TextPart(text=text)])

    @classmethod
    def user(cls, text: str, files: Optional[List[str]] = None) -> "ConversationMessage":
        parts: List[ContentPart] = [TextPart(text=text)]
        parts.extend(FilePart(file_id=file_id) for file_id in files or [])
        return cls(role="user", parts=parts)

    @property
    def text(self) -> str:
        """All text parts joined by blank lines."""
        return "\n\n".join(part.text for part in self.parts if isinstance(part, TextPart))

    @property
    def file_ids(self) -> List[str]:
        return [part.file_id for part in self.parts if isinstance(part, FilePart)]


class CompletionResult(BaseModel):
    """Canonical reply from any provider."""
    text: str = ""
    model: str
    provider: str


# ============== Stage Outputs ==============

class CandidateAnswer(BaseModel):
    """One worker's answer for a turn, possibly revised during discussion."""
    id: str = Field(default_factory=_new_id, description="Unique per turn")
    worker_id: str
    worker_name: str
    worker_role_description: str
    worker_instruction: str
    worker_model: str
    initial_answer: str
    initial_reasoning: str
    answer: str = Field(..., description="Latest successful answer, never empty")
    reasoning: str = Field(..., description="Latest successful reasoning, never empty")
    discussion_answer: Optional[str] = None
    discussion_reasoning: Optional[str] = None
    latency_ms: int = 0
    created_at: str = Field(default_factory=_utc_now)
    error: Optional[str] = Field(default=None, description="Message of a failed proposal call")


class JudgeVote(BaseModel):
    """One judge's ballot."""
    id: str = Field(default_factory=_new_id)
    judge_id: str
    judge_name: str
    ranked_ids: List[str] = Field(default_factory=list, description="Best to worst, may omit candidates")
    scores: Dict[str, Any] = Field(default_factory=dict, description="Sparse free-form scores")
    notes: Union[str, List[Any], Dict[str, Any]] = ""


class RankingEntry(BaseModel):
    """A candidate and its aggregated score."""
    candidate_id: str
    score: float


class VotingResult(BaseModel):
    """Aggregated outcome of all ballots."""
    winner_id: str
    totals: Dict[str, float]
    ranking: List[RankingEntry]


class WebFinding(BaseModel):
    """A single external-context search hit."""
    title: str = ""
    url: str = ""
    snippet: str = ""
    published_at: Optional[str] = None


class FinalizerOutput(BaseModel):
    """Delivered answer produced by the finalizer."""
    final_answer: str
    short_rationale: str
    summary_title: Optional[str] = None
    fell_back: bool = False


# ============== Turn Result ==============

class SwarmTurnResult(BaseModel):
    """Complete result of a single swarm turn."""
    final_answer: str
    final_reasoning: str
    title: str
    candidates: List[CandidateAnswer]
    votes: List[JudgeVote]
    voting_result: VotingResult
    web_findings: Optional[List[WebFinding]] = None
