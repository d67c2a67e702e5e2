import unittest

from swarm.stages.aggregation import aggregate_votes

from fakes import make_candidate, make_vote


class AggregateVotesTests(unittest.TestCase):
    def setUp(self):
        self.candidates = [make_candidate("a"), make_candidate("b"), make_candidate("c")]

    def test_unanimous_ranking_picks_the_top_candidate(self):
        votes = [make_vote(["a", "b"], judge="j1"), make_vote(["a", "b"], judge="j2")]
        result = aggregate_votes(votes, self.candidates[:2])

        self.assertEqual(result.winner_id, "a")
        self.assertEqual(result.ranking[0].candidate_id, "a")

    def test_scores_are_summed_with_rank_points(self):
        votes = [
            make_vote(["a", "b"], judge="j1"),
            make_vote(["b", "a"], scores={"b": 2}, judge="j2")
        ]
        result = aggregate_votes(votes, self.candidates[:2])

        self.assertEqual(result.totals, {"a": 1.0, "b": 3.0})
        self.assertGreater(result.totals["b"], result.totals["a"])
        self.assertEqual(result.winner_id, "b")

    def test_every_candidate_appears_exactly_once(self):
        result = aggregate_votes([make_vote(["c"])], self.candidates)

        self.assertEqual(set(result.totals), {"a", "b", "c"})
        self.assertEqual(sorted(e.candidate_id for e in result.ranking), ["a", "b", "c"])
        self.assertEqual(result.winner_id, result.ranking[0].candidate_id)

    def test_ranking_is_sorted_by_score(self):
        votes = [make_vote(["c", "b", "a"])]
        result = aggregate_votes(votes, self.candidates)

        scores = [entry.score for entry in result.ranking]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual([e.candidate_id for e in result.ranking], ["c", "b", "a"])

    def test_unknown_ids_are_ignored(self):
        votes = [make_vote(["ghost", "b", "a"], scores={"ghost": 100, "a": 0.5})]
        result = aggregate_votes(votes, self.candidates[:2])

        self.assertNotIn("ghost", result.totals)
        # "ghost" is filtered before rank points, so b earns 1 and a earns 0
        self.assertEqual(result.totals, {"a": 0.5, "b": 1.0})

    def test_non_numeric_and_non_finite_scores_are_ignored(self):
        votes = [make_vote([], scores={
            "a": "9",
            "b": float("inf"),
            "c": True
        })]
        result = aggregate_votes(votes, self.candidates)

        self.assertEqual(result.totals, {"a": 0.0, "b": 0.0, "c": 0.0})

    def test_huge_integer_scores_are_ignored(self):
        votes = [make_vote(["b"], scores={"a": 10 ** 400, "b": -(10 ** 400), "c": float("1e400")})]
        result = aggregate_votes(votes, self.candidates)

        self.assertEqual(result.totals, {"a": 0.0, "b": 0.0, "c": 0.0})
        self.assertEqual(result.winner_id, "a")

    def test_nan_score_is_ignored(self):
        result = aggregate_votes([make_vote([], scores={"a": float("nan"), "b": 1})], self.candidates)
        self.assertEqual(result.totals["a"], 0.0)
        self.assertEqual(result.winner_id, "b")

    def test_ties_keep_roster_order(self):
        result = aggregate_votes([], self.candidates)

        self.assertEqual([e.candidate_id for e in result.ranking], ["a", "b", "c"])
        self.assertEqual(result.winner_id, "a")

    def test_empty_ballots_still_produce_a_result(self):
        votes = [make_vote([], judge="j1"), make_vote([], judge="j2")]
        result = aggregate_votes(votes, self.candidates)

        self.assertEqual(result.winner_id, "a")
        self.assertEqual(len(result.ranking), 3)

    def test_is_idempotent(self):
        votes = [
            make_vote(["b", "a", "c"], scores={"c": 1.5}, judge="j1"),
            make_vote(["a", "c"], scores={"a": 2}, judge="j2")
        ]
        first = aggregate_votes(votes, self.candidates)
        second = aggregate_votes(votes, self.candidates)

        self.assertEqual(first.model_dump(), second.model_dump())

    def test_does_not_mutate_inputs(self):
        votes = [make_vote(["b", "a"], scores={"a": 1})]
        before = [v.model_dump() for v in votes]
        aggregate_votes(votes, self.candidates)
        self.assertEqual([v.model_dump() for v in votes], before)

    def test_requires_candidates(self):
        with self.assertRaises(ValueError):
            aggregate_votes([make_vote(["a"])], [])


if __name__ == "__main__":
    unittest.main()
