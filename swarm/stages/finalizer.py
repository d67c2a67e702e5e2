"""
Finalizer Stage
Rewrites the winning candidate, plus the best runner-ups, into the delivered answer.
"""

from typing import List, Optional

from config.config import SWARM_CONFIG
from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    ConversationMessage,
    FinalizerOutput,
    ReasoningEffort,
    VotingResult
)
from swarm.utils import (
    clean_text,
    extract_error_message,
    parse_json_from_model,
    truncate
)

FALLBACK_TITLE_CHARS = 60
INVALID_JSON_RATIONALE = "Fell back to winning candidate because the finalizer returned invalid JSON."
CALL_FAILED_RATIONALE = "Fell back to winning candidate because the finalizer call failed: {error}"
DEFAULT_RATIONALE = "Synthesized from the top-ranked candidate."


class FinalizerStage:
    """Single completion call acting as final arbiter."""

    FINALIZER_SYSTEM_PROMPT = """You are the final arbiter. Produce the single best user-facing answer, grounding heavily in the winning candidate but optionally borrowing improvements from others.
The final_answer must be well-formatted Markdown with the following sections: ## Executive Summary, ## Key Recommendations, ## Risks & Mitigations, ## Next Actions.
Respond strictly as JSON: {"final_answer": string, "short_rationale": string, "summary_title": string}. The summary title should be at most 6 words."""

    def __init__(
        self,
        gateway: CompletionGateway,
        runner_up_count: int = SWARM_CONFIG.finalizer_runner_up_count,
        runner_up_answer_chars: int = SWARM_CONFIG.runner_up_answer_chars
    ):
        """
        Initialize the Finalizer stage.

        Args:
            gateway: Completion gateway
            runner_up_count: Number of runner-ups shown to the finalizer
            runner_up_answer_chars: Length cap for each runner-up answer
        """
        self.gateway = gateway
        self.runner_up_count = runner_up_count
        self.runner_up_answer_chars = runner_up_answer_chars

    @staticmethod
    def find_winner(
        candidates: List[CandidateAnswer],
        voting_result: VotingResult
    ) -> CandidateAnswer:
        """Winning candidate, or the first candidate if the id is unknown."""
        for candidate in candidates:
            if candidate.id == voting_result.winner_id:
                return candidate
        return candidates[0]

    def runner_ups(
        self,
        candidates: List[CandidateAnswer],
        voting_result: VotingResult,
        winner: CandidateAnswer
    ) -> str:
        """Render the top runner-ups by score."""
        by_id = {candidate.id: candidate for candidate in candidates}
        entries = [
            entry for entry in voting_result.ranking
            if entry.candidate_id != winner.id and entry.candidate_id in by_id
        ][:self.runner_up_count]

        if not entries:
            return "None"
        return "\n\n".join(
            f"{index}. {by_id[entry.candidate_id].worker_name} (score {entry.score:g})\n"
            f"{truncate(by_id[entry.candidate_id].answer, self.runner_up_answer_chars)}"
            for index, entry in enumerate(entries, start=1)
        )

    def build_conversation(
        self,
        question: str,
        candidates: List[CandidateAnswer],
        voting_result: VotingResult,
        context_summary: str = ""
    ) -> List[ConversationMessage]:
        """Build the finalizer request."""
        winner = self.find_winner(candidates, voting_result)
        totals = "\n".join(
            f"{index}. {entry.candidate_id} -> {entry.score:g}"
            for index, entry in enumerate(voting_result.ranking, start=1)
        )
        sections = [
            f"User question:\n{question}",
            context_summary,
            "Winning candidate:",
            f"Agent: {winner.worker_name} ({winner.worker_role_description})",
            f"Answer:\n{winner.answer}",
            f"Reasoning:\n{winner.reasoning}",
            "Runner-ups:",
            self.runner_ups(candidates, voting_result, winner),
            "Voting totals:",
            totals
        ]
        return [
            ConversationMessage.system(self.FINALIZER_SYSTEM_PROMPT),
            ConversationMessage.user("\n\n".join(section for section in sections if section))
        ]

    def _fallback(self, question: str, winner: CandidateAnswer, rationale: str) -> FinalizerOutput:
        return FinalizerOutput(
            final_answer=winner.answer,
            short_rationale=rationale,
            summary_title=truncate(question, FALLBACK_TITLE_CHARS),
            fell_back=True
        )

    async def finalize(
        self,
        question: str,
        candidates: List[CandidateAnswer],
        voting_result: VotingResult,
        model: str,
        context_summary: str = "",
        reasoning_effort: Optional[ReasoningEffort] = None
    ) -> FinalizerOutput:
        """
        Synthesize the delivered answer.

        Unparseable output or a failed call degrades to the winner's own answer.

        Args:
            question: The user's question
            candidates: All candidates
            voting_result: Aggregated votes
            model: Finalizer model
            context_summary: Rendered external-context findings
            reasoning_effort: Optional reasoning-effort hint

        Returns:
            FinalizerOutput, always populated
        """
        winner = self.find_winner(candidates, voting_result)
        conversation = self.build_conversation(question, candidates, voting_result, context_summary)

        try:
            response = await self.gateway.invoke(model, conversation, reasoning_effort)
        except Exception as e:
            message = extract_error_message(e)
            print(f"[ERROR] Finalizer ({model}) failed: {message}")
            return self._fallback(question, winner, CALL_FAILED_RATIONALE.format(error=message))

        payload = parse_json_from_model(response.text, {})
        final_answer = clean_text(payload.get("final_answer"))
        if not final_answer:
            return self._fallback(question, winner, INVALID_JSON_RATIONALE)

        return FinalizerOutput(
            final_answer=final_answer,
            short_rationale=clean_text(payload.get("short_rationale")) or DEFAULT_RATIONALE,
            summary_title=clean_text(payload.get("summary_title")) or None
        )
