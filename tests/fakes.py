"""Scripted stand-ins for the completion gateway and search client."""

import asyncio
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    CompletionResult,
    ConversationMessage,
    JudgeVote,
    ReasoningEffort,
    WebFinding,
    WorkerPersona
)

Response = Union[str, Exception, Callable[[List[ConversationMessage]], str]]

_CANDIDATE_ID = re.compile(r"\(id: ([^)]+)\)")


def stage_of(conversation: List[ConversationMessage]) -> str:
    """Identify which stage issued a conversation from its system prompt."""
    system = conversation[0].text if conversation else ""
    if "team recruiter" in system:
        return "generator"
    if "final arbiter" in system:
        return "finalizer"
    if "ranked_ids" in system:
        return "judge"
    if "collaborative round" in system:
        return "discussion"
    return "worker"


def candidate_ids_in(conversation: List[ConversationMessage]) -> List[str]:
    """Candidate ids listed in a judge request, in listing order."""
    return _CANDIDATE_ID.findall(conversation[-1].text)


class RecordedCall(NamedTuple):
    stage: str
    model: str
    conversation: List[ConversationMessage]
    reasoning_effort: Optional[ReasoningEffort]


class ScriptedGateway(CompletionGateway):
    """Gateway that answers each stage from a script and records every call."""

    def __init__(self, responses: Optional[Dict[str, Response]] = None):
        super().__init__(clients={})
        self.responses = responses or {}
        self.calls: List[RecordedCall] = []

    async def invoke(self, model, conversation, reasoning_effort=None) -> CompletionResult:
        stage = stage_of(conversation)
        self.calls.append(RecordedCall(stage, model, conversation, reasoning_effort))
        await asyncio.sleep(0)

        response = self.responses.get(stage, "")
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response(conversation)
        return CompletionResult(text=response, model=model, provider="fake")

    def calls_for(self, stage: str) -> List[RecordedCall]:
        return [call for call in self.calls if call.stage == stage]


class FakeSearchClient:
    """Search client returning canned findings."""

    def __init__(self, findings: Optional[List[WebFinding]] = None):
        self.findings = findings or []
        self.queries: List[str] = []

    async def search(self, query: str, max_results: int = 5) -> List[WebFinding]:
        self.queries.append(query)
        return list(self.findings[:max_results])


def make_persona(id: str, name: Optional[str] = None) -> WorkerPersona:
    return WorkerPersona(
        id=id,
        name=name or f"Worker {id}",
        description=f"Role {id}",
        instruction=f"You are {id}.",
        model="gpt-test"
    )


def make_candidate(id: str, answer: Optional[str] = None, reasoning: Optional[str] = None) -> CandidateAnswer:
    answer = answer or f"Answer {id.upper()}"
    reasoning = reasoning or f"Reasoning {id.upper()}"
    return CandidateAnswer(
        id=id,
        worker_id=f"worker-{id}",
        worker_name=f"Worker {id.upper()}",
        worker_role_description=f"Role {id.upper()}",
        worker_instruction=f"You are worker {id}.",
        worker_model="gpt-test",
        initial_answer=answer,
        initial_reasoning=reasoning,
        answer=answer,
        reasoning=reasoning,
        latency_ms=10
    )


def make_vote(ranked_ids: List[str], scores: Optional[Dict[str, Any]] = None, judge: str = "judge-1") -> JudgeVote:
    return JudgeVote(
        id=f"vote-{judge}",
        judge_id=judge,
        judge_name=judge.title(),
        ranked_ids=ranked_ids,
        scores=scores or {},
        notes=""
    )
