"""
Persona Generator
Recruits question-specific worker personas, falling back to the fixed roster.
"""

import uuid
from typing import List

from swarm.gateway import CompletionGateway
from swarm.models.schemas import ConversationMessage, ReasoningEffort, WorkerPersona
from swarm.roster import select_workers
from swarm.utils import clean_text, extract_error_message, parse_json_from_model


class PersonaGenerator:
    """Asks a recruiter model for a team of specialists tailored to the question."""

    GENERATOR_SYSTEM_PROMPT = """You are an expert team recruiter. Analyze the user's request and recruit a team of {count} specialized AI agents to solve it.

For each agent, provide:
- name: A professional title (e.g., "Python Specialist", "Legal Analyst").
- description: A one-sentence description of their role.
- instruction: A highly specific, second-person instruction set for that agent (e.g., "You are a...").

Respond strictly as JSON: {{"agents": [{{"name": string, "description": string, "instruction": string}}]}}."""

    def __init__(self, gateway: CompletionGateway):
        """
        Initialize the generator.

        Args:
            gateway: Completion gateway
        """
        self.gateway = gateway

    def build_conversation(self, question: str, count: int) -> List[ConversationMessage]:
        return [
            ConversationMessage.system(self.GENERATOR_SYSTEM_PROMPT.format(count=count)),
            ConversationMessage.user(f'User request: "{question}"\n\nRecruit {count} agents.')
        ]

    async def generate_workers(
        self,
        question: str,
        count: int,
        model: str,
        worker_model: str
    ) -> List[WorkerPersona]:
        """
        Generate up to ``count`` worker personas for ``question``.

        Any failure returns the fixed roster selection for ``count``.

        Args:
            question: The user's question
            count: Number of workers wanted, already clamped
            model: Recruiter model
            worker_model: Model bound to each generated persona

        Returns:
            Non-empty list of worker personas
        """
        try:
            response = await self.gateway.invoke(
                model,
                self.build_conversation(question, count),
                ReasoningEffort.LOW
            )
        except Exception as e:
            print(f"[ERROR] Persona generation failed, using default roster: {extract_error_message(e)}")
            return select_workers(count)

        payload = parse_json_from_model(response.text, {"agents": []})
        agents = payload.get("agents")
        if not isinstance(agents, list):
            agents = []

        personas = []
        for agent in agents[:count]:
            if not isinstance(agent, dict):
                continue
            name = clean_text(agent.get("name"))
            instruction = clean_text(agent.get("instruction"))
            if not name or not instruction:
                continue
            personas.append(WorkerPersona(
                id=str(uuid.uuid4()),
                name=name,
                description=clean_text(agent.get("description")) or name,
                instruction=instruction,
                model=worker_model
            ))

        if not personas:
            print("[Swarm] Generator returned no usable agents, falling back to defaults.")
            return select_workers(count)

        return personas
