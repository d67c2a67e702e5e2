"""
Aggregation (Consensus)
Folds all ballots into one score per candidate and picks the winner.
"""

import math
from numbers import Real
from typing import Any, Dict, List

from swarm.models.schemas import (
    CandidateAnswer,
    JudgeVote,
    RankingEntry,
    VotingResult
)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        number = float(value)
    except OverflowError:
        return False
    return math.isfinite(number)


def aggregate_votes(votes: List[JudgeVote], candidates: List[CandidateAnswer]) -> VotingResult:
    """
    Aggregate ballots with a Borda count plus raw judge scores.

    For each ballot, ranked ids are filtered to known candidates; with ``k``
    remaining ids the one at position ``i`` earns ``k - i - 1`` points. Every
    finite numeric score for a known candidate is added to the same total.
    Ranking sorts by total, descending; ties keep roster order.

    Args:
        votes: Ballots from the Judging stage
        candidates: All candidates of the turn, in roster order

    Returns:
        VotingResult covering every candidate exactly once
    """
    if not candidates:
        raise ValueError("Cannot aggregate votes without candidates")

    totals: Dict[str, float] = {candidate.id: 0.0 for candidate in candidates}

    for vote in votes:
        ranked = [candidate_id for candidate_id in vote.ranked_ids if candidate_id in totals]
        for index, candidate_id in enumerate(ranked):
            totals[candidate_id] += max(len(ranked) - index - 1, 0)

        for candidate_id, score in vote.scores.items():
            if candidate_id in totals and _is_finite_number(score):
                totals[candidate_id] += float(score)

    # sorted() is stable, so ties keep insertion (roster) order
    ranking = [
        RankingEntry(candidate_id=candidate_id, score=score)
        for candidate_id, score in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]

    return VotingResult(
        winner_id=ranking[0].candidate_id if ranking else candidates[0].id,
        totals=totals,
        ranking=ranking
    )
