import unittest

from config.config import SwarmConfig
from swarm.budget import (
    check_runtime_budget,
    estimate_runtime_seconds,
    per_agent_cost_seconds
)
from swarm.errors import ConfigurationRejected
from swarm.models.schemas import SwarmMode


class BudgetTests(unittest.TestCase):
    def setUp(self):
        self.config = SwarmConfig(
            runtime_budget_seconds=280.0,
            fast_agent_cost_seconds=1.4,
            reasoning_agent_cost_seconds=4.25,
            discussion_time_multiplier=1.75
        )

    def test_per_agent_cost_by_mode(self):
        self.assertEqual(per_agent_cost_seconds(SwarmMode.FAST, self.config), 1.4)
        self.assertEqual(per_agent_cost_seconds("reasoning", self.config), 4.25)

    def test_estimate(self):
        self.assertAlmostEqual(estimate_runtime_seconds(4, SwarmMode.FAST, False, self.config), 5.6)
        self.assertAlmostEqual(estimate_runtime_seconds(4, SwarmMode.FAST, True, self.config), 9.8)
        self.assertAlmostEqual(estimate_runtime_seconds(10, SwarmMode.REASONING, False, self.config), 42.5)

    def test_estimate_never_negative(self):
        self.assertEqual(estimate_runtime_seconds(-5, SwarmMode.FAST, True, self.config), 0)

    def test_estimate_is_monotonic(self):
        for mode in SwarmMode:
            for discussion in (False, True):
                estimates = [
                    estimate_runtime_seconds(n, mode, discussion, self.config) for n in range(0, 65)
                ]
                self.assertEqual(estimates, sorted(estimates))

    def test_reasoning_and_discussion_cost_more(self):
        fast = estimate_runtime_seconds(8, SwarmMode.FAST, False, self.config)
        self.assertGreater(estimate_runtime_seconds(8, SwarmMode.REASONING, False, self.config), fast)
        self.assertGreater(estimate_runtime_seconds(8, SwarmMode.FAST, True, self.config), fast)

    def test_accepts_configuration_within_budget(self):
        estimate = check_runtime_budget(4, SwarmMode.FAST, False, self.config)
        self.assertAlmostEqual(estimate, 5.6)

    def test_rejects_configuration_over_budget(self):
        with self.assertRaises(ConfigurationRejected) as ctx:
            check_runtime_budget(64, SwarmMode.REASONING, True, self.config)

        error = ctx.exception
        self.assertAlmostEqual(error.estimated_seconds, 64 * 4.25 * 1.75)
        self.assertEqual(error.budget_seconds, 280.0)
        self.assertIn("runtime budget", str(error))
        self.assertIn("switch to fast mode", str(error))


if __name__ == "__main__":
    unittest.main()
