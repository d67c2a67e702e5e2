"""
Judging Stage
Every judge on the panel ranks and scores the current candidates.
"""

from typing import Any, List, Optional

from config.config import SWARM_CONFIG
from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    ConversationMessage,
    JudgePersona,
    JudgeVote,
    ReasoningEffort
)
from swarm.utils import (
    extract_error_message,
    gather_settled,
    parse_json_from_model,
    truncate
)

INVALID_BALLOT_NOTES = "Judge produced invalid JSON."


class JudgingStage:
    """Fans out one completion call per judge persona."""

    JUDGE_SYSTEM_SUFFIX = """Return JSON with ranked_ids (candidate ids ordered best to worst), scores (an object mapping candidate id to a number) and notes describing your rationale:
{"ranked_ids": [string], "scores": {string: number}, "notes": string}"""

    def __init__(
        self,
        gateway: CompletionGateway,
        reasoning_excerpt_chars: int = SWARM_CONFIG.judge_reasoning_excerpt_chars
    ):
        """
        Initialize the Judging stage.

        Args:
            gateway: Completion gateway shared by all judges
            reasoning_excerpt_chars: Length cap for each candidate's reasoning
        """
        self.gateway = gateway
        self.reasoning_excerpt_chars = reasoning_excerpt_chars

    def format_candidates(self, candidates: List[CandidateAnswer]) -> str:
        """Enumerate candidates with ids and clipped reasoning."""
        return "\n\n".join(
            f"{index}. {candidate.worker_name} (id: {candidate.id})\n"
            f"Answer: {candidate.answer}\n"
            f"Reasoning: {truncate(candidate.reasoning, self.reasoning_excerpt_chars)}"
            for index, candidate in enumerate(candidates, start=1)
        )

    def build_conversation(
        self,
        judge: JudgePersona,
        question: str,
        candidates: List[CandidateAnswer],
        context_summary: str = ""
    ) -> List[ConversationMessage]:
        """Build the ballot request for one judge."""
        sections = [
            f"User question:\n{question}",
            context_summary,
            "Candidate answers:",
            self.format_candidates(candidates)
        ]
        return [
            ConversationMessage.system(f"{judge.judging_instruction}\n{self.JUDGE_SYSTEM_SUFFIX}"),
            ConversationMessage.user("\n\n".join(section for section in sections if section))
        ]

    @staticmethod
    def normalize_notes(notes: Any) -> Any:
        """Keep string, list or object notes; anything else becomes an empty string."""
        if isinstance(notes, (str, list, dict)):
            return notes
        return ""

    def _ballot(self, judge: JudgePersona, payload: dict) -> JudgeVote:
        ranked = payload.get("ranked_ids")
        scores = payload.get("scores")
        return JudgeVote(
            judge_id=judge.id,
            judge_name=judge.name,
            # Unknown ids are kept here and dropped during aggregation
            ranked_ids=[item for item in ranked if isinstance(item, str)] if isinstance(ranked, list) else [],
            scores={str(key): value for key, value in scores.items()} if isinstance(scores, dict) else {},
            notes=self.normalize_notes(payload.get("notes"))
        )

    async def _call_judge(
        self,
        judge: JudgePersona,
        model: str,
        conversation: List[ConversationMessage],
        reasoning_effort: Optional[ReasoningEffort]
    ) -> dict:
        response = await self.gateway.invoke(model, conversation, reasoning_effort)
        return parse_json_from_model(
            response.text,
            {"ranked_ids": [], "scores": {}, "notes": INVALID_BALLOT_NOTES}
        )

    async def collect_votes(
        self,
        judges: List[JudgePersona],
        question: str,
        candidates: List[CandidateAnswer],
        context_summary: str = "",
        model_override: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None
    ) -> List[JudgeVote]:
        """
        Collect one ballot per judge in parallel.

        A failed judge abstains with an empty ballot whose notes carry the error.

        Args:
            judges: Judge panel
            question: The user's question
            candidates: Current candidates
            context_summary: Rendered external-context findings
            model_override: Model used instead of each judge's default
            reasoning_effort: Optional reasoning-effort hint

        Returns:
            Ballots in panel order
        """
        models = [model_override or judge.model for judge in judges]
        settled = await gather_settled(
            self._call_judge(
                judge,
                model,
                self.build_conversation(judge, question, candidates, context_summary),
                reasoning_effort
            )
            for judge, model in zip(judges, models)
        )

        votes = []
        for judge, model, outcome in zip(judges, models, settled):
            if outcome.error is not None:
                message = extract_error_message(outcome.error)
                print(f"[ERROR] Judge {judge.id} ({model}) failed: {message}")
                votes.append(JudgeVote(
                    judge_id=judge.id,
                    judge_name=judge.name,
                    ranked_ids=[],
                    scores={},
                    notes=f"Judge failed: {message}"
                ))
                continue
            votes.append(self._ballot(judge, outcome.value))

        return votes
