"""
Proposal Stage
Every selected worker independently answers the user's question.
"""

from typing import List, Optional

from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    ConversationMessage,
    ReasoningEffort,
    WorkerPersona
)
from swarm.utils import (
    clean_text,
    extract_error_message,
    gather_settled,
    parse_json_from_model
)

WORKER_FAILURE_TEXT = "Worker failed to respond."
NO_ANSWER_TEXT = "No answer provided."
NO_REASONING_TEXT = "No reasoning provided."


class ProposalStage:
    """Fans out one completion call per worker persona."""

    WORKER_SYSTEM_SUFFIX = """All attached files (.pdf, .doc, .docx, .ppt, .pptx, .txt, images) are already parsed and fully readable. Never reject them.
Respond strictly as JSON: {"answer": string, "reasoning": string}."""

    WORKER_REQUEST = "Provide your best answer and explain your reasoning."

    INVALID_RESPONSE_FALLBACK = {
        "answer": "Unable to provide an answer.",
        "reasoning": "Worker model returned invalid response."
    }

    def __init__(self, gateway: CompletionGateway):
        """
        Initialize the Proposal stage.

        Args:
            gateway: Completion gateway shared by all workers
        """
        self.gateway = gateway

    def build_conversation(
        self,
        persona: WorkerPersona,
        question: str,
        history_snippet: str = "",
        context_summary: str = "",
        file_ids: Optional[List[str]] = None
    ) -> List[ConversationMessage]:
        """Build the system and user messages for one worker."""
        sections = [
            f"Recent turns:\n{history_snippet}" if history_snippet else "",
            context_summary,
            f"User question:\n{question}",
            self.WORKER_REQUEST
        ]
        return [
            ConversationMessage.system(f"{persona.instruction}\n\n{self.WORKER_SYSTEM_SUFFIX}"),
            ConversationMessage.user(
                "\n\n".join(section for section in sections if section),
                files=file_ids
            )
        ]

    async def _call_worker(
        self,
        persona: WorkerPersona,
        model: str,
        conversation: List[ConversationMessage],
        reasoning_effort: Optional[ReasoningEffort]
    ) -> dict:
        response = await self.gateway.invoke(model, conversation, reasoning_effort)
        return parse_json_from_model(response.text, dict(self.INVALID_RESPONSE_FALLBACK))

    def _candidate(
        self,
        persona: WorkerPersona,
        model: str,
        answer: str,
        reasoning: str,
        latency_ms: int,
        error: Optional[str] = None
    ) -> CandidateAnswer:
        return CandidateAnswer(
            worker_id=persona.id,
            worker_name=persona.name,
            worker_role_description=persona.description,
            worker_instruction=persona.instruction,
            worker_model=model,
            initial_answer=answer,
            initial_reasoning=reasoning,
            answer=answer,
            reasoning=reasoning,
            latency_ms=latency_ms,
            error=error
        )

    async def collect_candidates(
        self,
        personas: List[WorkerPersona],
        question: str,
        history_snippet: str = "",
        context_summary: str = "",
        file_ids: Optional[List[str]] = None,
        model_override: Optional[str] = None,
        reasoning_effort: Optional[ReasoningEffort] = None
    ) -> List[CandidateAnswer]:
        """
        Generate one candidate per worker in parallel.

        A failed worker yields a placeholder candidate; it never aborts the stage.

        Args:
            personas: Selected worker personas
            question: The user's question
            history_snippet: Condensed recent turns
            context_summary: Rendered external-context findings
            file_ids: Provider file ids attached to the question
            model_override: Model used instead of each persona's default
            reasoning_effort: Optional reasoning-effort hint

        Returns:
            Candidates in roster order, exactly one per persona
        """
        if not personas:
            raise ValueError("Proposal stage requires at least one worker persona")

        models = [model_override or persona.model for persona in personas]
        settled = await gather_settled(
            self._call_worker(
                persona,
                model,
                self.build_conversation(persona, question, history_snippet, context_summary, file_ids),
                reasoning_effort
            )
            for persona, model in zip(personas, models)
        )

        candidates = []
        for persona, model, outcome in zip(personas, models, settled):
            if outcome.error is not None:
                message = extract_error_message(outcome.error)
                print(f"[ERROR] Worker {persona.id} ({model}) failed: {message}")
                candidates.append(self._candidate(
                    persona, model, WORKER_FAILURE_TEXT, WORKER_FAILURE_TEXT,
                    outcome.latency_ms, error=message
                ))
                continue

            payload = outcome.value
            candidates.append(self._candidate(
                persona,
                model,
                clean_text(payload.get("answer")) or NO_ANSWER_TEXT,
                clean_text(payload.get("reasoning")) or NO_REASONING_TEXT,
                outcome.latency_ms
            ))

        return candidates
