"""Pydantic models for swarm inputs and outputs."""

from .schemas import (
    SwarmMode,
    ReasoningEffort,
    WorkerPersona,
    JudgePersona,
    HistoryTurn,
    FileReference,
    TextPart,
    FilePart,
    ConversationMessage,
    CompletionResult,
    CandidateAnswer,
    JudgeVote,
    RankingEntry,
    VotingResult,
    WebFinding,
    FinalizerOutput,
    SwarmTurnResult
)

__all__ = [
    "SwarmMode",
    "ReasoningEffort",
    "WorkerPersona",
    "JudgePersona",
    "HistoryTurn",
    "FileReference",
    "TextPart",
    "FilePart",
    "ConversationMessage",
    "CompletionResult",
    "CandidateAnswer",
    "JudgeVote",
    "RankingEntry",
    "VotingResult",
    "WebFinding",
    "FinalizerOutput",
    "SwarmTurnResult"
]
