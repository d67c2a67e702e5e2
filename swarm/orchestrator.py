"""
Main Orchestrator for the Swarm Consensus Engine.
Coordinates all stages of a single swarm turn.
"""

import json
import time
from typing import List, Optional, Union
from pathlib import Path

from config.config import SwarmConfig, SWARM_CONFIG, SYSTEM_CONFIG, get_model_preset
from swarm.budget import check_runtime_budget
from swarm.errors import ConfigurationRejected
from swarm.gateway import CompletionGateway
from swarm.models.schemas import (
    CandidateAnswer,
    FileReference,
    HistoryTurn,
    ReasoningEffort,
    SwarmMode,
    SwarmTurnResult,
    WebFinding,
    WorkerPersona
)
from swarm.roster import get_judge_personas, select_workers
from swarm.stages.persona_generator import PersonaGenerator
from swarm.stages.proposal import ProposalStage
from swarm.stages.discussion import DiscussionStage
from swarm.stages.judging import JudgingStage
from swarm.stages.aggregation import aggregate_votes
from swarm.stages.finalizer import FinalizerStage
from swarm.tools.web_search import WebSearchClient, summarize_findings
from swarm.utils import build_history_snippet, truncate

TITLE_CHARS = 64
UNTITLED = "Untitled conversation"


class SwarmOrchestrator:
    """
    Orchestrates a complete swarm turn.

    Workflow:
    1. Pre-flight: validate input and check the runtime budget
    2. Optional web search for external context
    3. Proposal: every worker answers in parallel
    4. Discussion (optional): every worker revises given its peers
    5. Judging: every judge ranks the candidates in parallel
    6. Aggregation: Borda count plus judge scores picks the winner
    7. Finalizer: the winner is rewritten into the delivered answer
    """

    def __init__(
        self,
        gateway: Optional[CompletionGateway] = None,
        search_client: Optional[WebSearchClient] = None,
        config: SwarmConfig = SWARM_CONFIG,
        verbose: bool = True
    ):
        """
        Initialize the orchestrator.

        Args:
            gateway: Completion gateway. If None, one is built from configured API keys.
            search_client: External context fetcher. If None, a default client is used.
            config: Turn limits and cost model
            verbose: Whether to print progress messages
        """
        self.verbose = verbose
        self.config = config
        self.gateway = gateway or CompletionGateway.from_config(verbose=verbose)
        self.search_client = search_client or WebSearchClient(verbose=verbose)

        # Initialize stage handlers
        self.persona_generator = PersonaGenerator(self.gateway)
        self.proposal = ProposalStage(self.gateway)
        self.discussion = DiscussionStage(self.gateway)
        self.judging = JudgingStage(self.gateway, config.judge_reasoning_excerpt_chars)
        self.finalizer = FinalizerStage(
            self.gateway,
            runner_up_count=config.finalizer_runner_up_count,
            runner_up_answer_chars=config.runner_up_answer_chars
        )

    def _log(self, message: str):
        """Print message if verbose mode is enabled."""
        if self.verbose:
            print(f"[Swarm] {message}")

    def _clamp_agent_count(self, worker_count: int) -> int:
        try:
            count = int(worker_count)
        except (TypeError, ValueError, OverflowError):
            return 1
        return min(max(1, count), self.config.max_workers)

    def preflight(
        self,
        question: str,
        worker_count: int,
        files: List[FileReference],
        mode: Union[SwarmMode, str],
        discussion_enabled: bool
    ) -> int:
        """
        Validate a turn before any model call is issued.

        Returns:
            The clamped worker count

        Raises:
            ConfigurationRejected: For an empty question, too many files,
                an unknown mode or an estimate above the runtime budget
        """
        if not question or not question.strip():
            raise ConfigurationRejected("Message cannot be empty.")

        if len(files) > self.config.max_files_per_message:
            raise ConfigurationRejected(
                f"Too many files attached ({len(files)} > {self.config.max_files_per_message})."
            )

        try:
            mode = SwarmMode(mode)
        except ValueError:
            raise ConfigurationRejected(f"Unknown swarm mode: {mode}")

        agent_count = self._clamp_agent_count(worker_count)
        estimate = check_runtime_budget(agent_count, mode, discussion_enabled, self.config)
        self._log(f"Estimated runtime {estimate:.1f}s (budget {self.config.runtime_budget_seconds:g}s)")
        return agent_count

    async def _select_personas(
        self,
        question: str,
        agent_count: int,
        generator_model: str,
        worker_model: str
    ) -> List[WorkerPersona]:
        if self.config.generate_personas:
            return await self.persona_generator.generate_workers(
                question, agent_count, generator_model, worker_model
            )
        return select_workers(agent_count, self.config.max_workers)

    async def _fetch_context(self, question: str) -> List[WebFinding]:
        try:
            return await self.search_client.search(question, self.config.web_max_results)
        except Exception as e:
            self._log(f"[WARN] Web search failed: {e}")
            return []

    async def run_turn(
        self,
        question: str,
        worker_count: int = 4,
        files: Optional[List[FileReference]] = None,
        history: Optional[List[HistoryTurn]] = None,
        mode: Union[SwarmMode, str] = SwarmMode.FAST,
        discussion_enabled: bool = False,
        web_context_enabled: bool = False
    ) -> SwarmTurnResult:
        """
        Run the complete swarm workflow for one question.

        Args:
            question: The user's question
            worker_count: Requested number of workers
            files: Uploaded file references
            history: Prior conversation turns
            mode: Fast or reasoning mode
            discussion_enabled: Whether to run the discussion round
            web_context_enabled: Whether to fetch live web findings

        Returns:
            SwarmTurnResult with candidates, votes and the final answer

        Raises:
            ConfigurationRejected: If the turn fails pre-flight validation
        """
        files = files or []
        history = history or []
        agent_count = self.preflight(question, worker_count, files, mode, discussion_enabled)

        mode = SwarmMode(mode)
        preset = get_model_preset(mode.value)
        effort = ReasoningEffort.MEDIUM if mode == SwarmMode.REASONING else None
        start_time = time.time()

        self._log(f"\n{'='*60}")
        self._log(f"Starting turn: {truncate(question, 80)}")
        self._log(f"Mode: {mode.value}, workers: {agent_count}, discussion: {discussion_enabled}")
        self._log(f"{'='*60}")

        findings: Optional[List[WebFinding]] = None
        if web_context_enabled:
            self._log("\n[Context] Searching the web...")
            findings = await self._fetch_context(question)
            self._log(f"  {len(findings)} findings")
        context_summary = summarize_findings(findings)

        personas = await self._select_personas(question, agent_count, preset.generator, preset.worker)
        history_snippet = build_history_snippet(
            history, self.config.max_history_turns, self.config.history_char_limit
        )
        file_ids = [f.provider_file_id for f in files if f.provider_file_id]

        # Proposal
        self._log(f"\n[Proposal] Collecting answers from {len(personas)} workers...")
        candidates = await self.proposal.collect_candidates(
            personas,
            question,
            history_snippet=history_snippet,
            context_summary=context_summary,
            file_ids=file_ids,
            model_override=preset.worker,
            reasoning_effort=effort
        )
        failed = sum(1 for c in candidates if c.error)
        self._log(f"  {len(candidates)} candidates ({failed} failed)")

        # Discussion
        if discussion_enabled:
            self._log("\n[Discussion] Revising answers with peer insights...")
            candidates = await self.discussion.revise_candidates(candidates, question, effort)

        # Judging
        judges = get_judge_personas()
        self._log(f"\n[Judging] Collecting ballots from {len(judges)} judges...")
        votes = await self.judging.collect_votes(
            judges,
            question,
            candidates,
            context_summary=context_summary,
            model_override=preset.judge,
            reasoning_effort=effort
        )

        # Aggregation
        voting_result = aggregate_votes(votes, candidates)
        winner = self._find_candidate(candidates, voting_result.winner_id)
        self._log(f"  Winner: {winner.worker_name} ({voting_result.totals[winner.id]:g} points)")

        # Finalizer
        self._log("\n[Finalizer] Synthesizing final answer...")
        output = await self.finalizer.finalize(
            question,
            candidates,
            voting_result,
            model=preset.finalizer,
            context_summary=context_summary,
            reasoning_effort=effort
        )
        if output.fell_back:
            self._log("  Finalizer fell back to the winning candidate")

        self._log(f"\n[Result] Time: {time.time() - start_time:.2f}s")

        return SwarmTurnResult(
            final_answer=output.final_answer,
            final_reasoning=output.short_rationale,
            title=output.summary_title or truncate(question, TITLE_CHARS) or UNTITLED,
            candidates=candidates,
            votes=votes,
            voting_result=voting_result,
            web_findings=findings
        )

    @staticmethod
    def _find_candidate(candidates: List[CandidateAnswer], candidate_id: str) -> CandidateAnswer:
        return next((c for c in candidates if c.id == candidate_id), candidates[0])

    def save_result(self, result: SwarmTurnResult, path: Optional[str] = None) -> Path:
        """Save a turn result to a JSON file."""
        if path is None:
            path = Path(SYSTEM_CONFIG.results_dir) / "swarm_turn.json"
        else:
            path = Path(path)

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, ensure_ascii=False)

        self._log(f"Result saved to {path}")
        return path
