"""
Discussion Stage
Each worker revises its answer after reading its peers' answers.
"""

from typing import List, Optional

from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    ConversationMessage,
    ReasoningEffort
)
from swarm.utils import (
    clean_text,
    extract_error_message,
    gather_settled,
    parse_json_from_model
)

NO_PEERS_TEXT = "Peers could not provide any recommendations."


class DiscussionStage:
    """Second fan-out round where every candidate is revised given peer answers."""

    DISCUSSION_SYSTEM_SUFFIX = """You are in a collaborative round with other experts. Use their insights to refine your answer, making it more concrete and aligned with the user's goals.
Respond strictly as JSON: {"answer": string, "reasoning": string}."""

    def __init__(self, gateway: CompletionGateway):
        """
        Initialize the Discussion stage.

        Args:
            gateway: Completion gateway shared by all workers
        """
        self.gateway = gateway

    @staticmethod
    def peer_digest(candidate: CandidateAnswer, snapshot: List[CandidateAnswer]) -> str:
        """Summarize every other candidate's current answer and reasoning."""
        peers = [peer for peer in snapshot if peer.id != candidate.id]
        if not peers:
            return NO_PEERS_TEXT
        return "\n\n".join(
            f"{index}. {peer.worker_name}: {peer.answer}\nReasoning: {peer.reasoning}"
            for index, peer in enumerate(peers, start=1)
        )

    def build_conversation(
        self,
        candidate: CandidateAnswer,
        question: str,
        digest: str
    ) -> List[ConversationMessage]:
        """Build the revision request for one candidate."""
        return [
            ConversationMessage.system(
                f"{candidate.worker_instruction}\n\n{self.DISCUSSION_SYSTEM_SUFFIX}"
            ),
            ConversationMessage.user("\n\n".join([
                f"User question:\n{question}",
                f"Your previous answer:\n{candidate.answer}",
                f"Peer highlights:\n{digest}"
            ]))
        ]

    async def _call_worker(
        self,
        candidate: CandidateAnswer,
        conversation: List[ConversationMessage],
        reasoning_effort: Optional[ReasoningEffort]
    ) -> dict:
        response = await self.gateway.invoke(candidate.worker_model, conversation, reasoning_effort)
        return parse_json_from_model(
            response.text,
            {"answer": candidate.answer, "reasoning": candidate.reasoning}
        )

    async def revise_candidates(
        self,
        candidates: List[CandidateAnswer],
        question: str,
        reasoning_effort: Optional[ReasoningEffort] = None
    ) -> List[CandidateAnswer]:
        """
        Run one discussion round over all candidates in parallel.

        Peer digests are taken from the candidates as they were before the
        round; each task writes back only its own revised copy.

        Args:
            candidates: Candidates from the Proposal stage
            question: The user's question
            reasoning_effort: Optional reasoning-effort hint

        Returns:
            New candidate list in the same order
        """
        snapshot = list(candidates)
        settled = await gather_settled(
            self._call_worker(
                candidate,
                self.build_conversation(candidate, question, self.peer_digest(candidate, snapshot)),
                reasoning_effort
            )
            for candidate in snapshot
        )

        revised = []
        for candidate, outcome in zip(snapshot, settled):
            if outcome.error is not None:
                message = extract_error_message(outcome.error)
                print(f"[ERROR] Discussion for {candidate.worker_id} failed: {message}")
                revised.append(candidate.model_copy(update={
                    "discussion_answer": candidate.answer,
                    "discussion_reasoning": message
                }))
                continue

            answer = clean_text(outcome.value.get("answer"))
            reasoning = clean_text(outcome.value.get("reasoning"))
            revised.append(candidate.model_copy(update={
                "discussion_answer": answer or candidate.answer,
                "discussion_reasoning": reasoning or candidate.reasoning,
                "answer": answer or candidate.answer,
                "reasoning": reasoning or candidate.reasoning
            }))

        return revised
