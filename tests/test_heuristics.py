"""
Tests for the board heuristic and its features.
"""

from dataclasses import FrozenInstanceError
from unittest import TestCase, main

from numpy import array, int64, zeros

from heuristics.evaluator import corner_bonus, evaluate, log_tiles, mergeability, monotonicity, smoothness
from heuristics.weights import DEFAULT_WEIGHTS, SMOOTHNESS_WEIGHTS, HeuristicWeights


def features(grid):
    """Log tiles and occupancy mask of a grid."""
    grid = array(grid)
    return log_tiles(grid), grid != 0


class TestFeatures(TestCase):
    """Test each feature in isolation."""

    def test_corner_bonus(self):
        """Ten times log2 of the max tile when it sits in a corner."""
        self.assertEqual(corner_bonus(array([[4, 0, 0, 0], [0, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 20.0)
        self.assertEqual(corner_bonus(array([[2, 0, 0, 0], [0, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 0.0)
        self.assertEqual(corner_bonus(zeros((4, 4), dtype=int64)), 0.0)

    def test_smoothness(self):
        """Minus the log2 gaps between adjacent tiles."""
        self.assertEqual(smoothness(*features([[2, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), -1.0)
        self.assertEqual(smoothness(*features([[2, 0, 16, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 0.0)
        self.assertEqual(smoothness(*features([[2, 8], [32, 0]])), -6.0)

    def test_monotonicity(self):
        """A sorted row scores the sum of its log2 steps."""
        self.assertEqual(monotonicity(*features([[2, 4, 8, 16], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 3.0)
        self.assertEqual(monotonicity(*features([[2, 8, 4, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 2.0)

    def test_monotonicity_ignores_gaps(self):
        """Tiles separated by an empty cell are not compared."""
        self.assertEqual(monotonicity(*features([[2, 0, 8, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])), 0.0)

    def test_mergeability(self):
        """Sum of log2 values of tiles with an equal neighbour."""
        grid = array([[2, 2, 0, 0], [0, 0, 0, 0], [4, 4, 4, 0], [0, 0, 0, 0]])
        self.assertEqual(mergeability(grid, log_tiles(grid)), 2.0 + 6.0)

        grid = array([[8, 0], [8, 0]])
        self.assertEqual(mergeability(grid, log_tiles(grid)), 6.0)


class TestEvaluate(TestCase):
    """Test the weighted sum."""

    def test_empty_board(self):
        """Only the empty cells count on an empty board."""
        evaluation = evaluate(zeros((4, 4), dtype=int64))
        self.assertEqual(evaluation.empty_cells, 16)
        self.assertEqual(evaluation.max_tile, 0)
        self.assertAlmostEqual(evaluation.score, 16 * 2.7)

    def test_weighted_sum(self):
        """The score combines every feature with its weight."""
        grid = array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        evaluation = evaluate(grid, current_score=100)

        self.assertEqual(evaluation.empty_cells, 14)
        self.assertEqual(evaluation.corner_bonus, 10.0)
        self.assertEqual(evaluation.smoothness, 0.0)
        self.assertEqual(evaluation.monotonicity, 0.0)
        self.assertEqual(evaluation.mergeability, 2.0)
        self.assertAlmostEqual(evaluation.score, 14 * 2.7 + 10.0 + 2.0 * 0.5 + 100 * 0.001)

    def test_custom_weights(self):
        """Weights are passed at call time."""
        grid = array([[2, 4, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        evaluation = evaluate(grid, weights=SMOOTHNESS_WEIGHTS)
        self.assertAlmostEqual(evaluation.score, 14 * 0.15 + 0.0 * 0.05 - 1.0 * 0.5 + 1.0 * 0.3)

    def test_weights_are_immutable(self):
        """Weight sets cannot be modified in place."""
        with self.assertRaises(FrozenInstanceError):
            DEFAULT_WEIGHTS.empty_cells = 0.0

        self.assertEqual(HeuristicWeights().as_dict()['empty_cells'], 2.7)


if __name__ == '__main__':
    main()
