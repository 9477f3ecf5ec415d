"""
Tests for the evaluation script.
"""

from unittest import TestCase, main

from evaluate import evaluate, game_seeds


class TestEvaluate(TestCase):
    """Test seeding and aggregation of evaluation runs."""

    def test_game_seeds(self):
        """Spawns and agent read distinct, reproducible streams."""
        spawn_seed, agent_seed = game_seeds(7)
        self.assertNotEqual(spawn_seed, agent_seed)
        self.assertEqual(game_seeds(7), (spawn_seed, agent_seed))
        self.assertNotEqual(game_seeds(8), (spawn_seed, agent_seed))
        self.assertEqual(game_seeds(None), (None, None))

    def test_evaluate(self):
        """Every game is counted once and seeded runs are reproducible."""
        with self.assertLogs('evaluate', level='INFO'):
            first = evaluate('greedy', length=3, seed=1)

        self.assertEqual(sum(first.values()), 3)
        self.assertEqual(list(first), sorted(first))
        self.assertEqual(evaluate('random', length=2, seed=4), evaluate('random', length=2, seed=4))


if __name__ == '__main__':
    main()
