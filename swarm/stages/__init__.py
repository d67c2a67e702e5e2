"""Stage implementations for the swarm turn."""

from .persona_generator import PersonaGenerator
from .proposal import ProposalStage
from .discussion import DiscussionStage
from .judging import JudgingStage
from .aggregation import aggregate_votes
from .finalizer import FinalizerStage

__all__ = [
    "PersonaGenerator",
    "ProposalStage",
    "DiscussionStage",
    "JudgingStage",
    "aggregate_votes",
    "FinalizerStage"
]
