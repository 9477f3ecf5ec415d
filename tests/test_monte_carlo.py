"""
Tests for the Monte Carlo Tree Search nodes, phases and strategy.

Focuses on UCB1 selection, win-credit backpropagation and convergence on boards
with an obvious winning move.
"""

from math import inf, log, sqrt
from unittest import TestCase, main

from numpy import array

from monte_carlo.actor import MonteCarloStrategy
from monte_carlo.config import MonteCarloConfig
from monte_carlo.node import Node
from monte_carlo.search import (
    RolloutResult,
    backpropagate,
    expand,
    monte_carlo_search,
    rollout_credit,
    search_target,
    select,
    simulate,
    uct_select,
)
from tilegame.core.gameboard import make_move
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import make_generator
from tilegame.core.types import Direction, GameState

OPEN_BOARD = array([[2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
TERMINAL_BOARD = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
WINNING_BOARD = array([[1024, 1024, 2, 4], [8, 16, 32, 64], [128, 256, 8, 16], [2, 4, 32, 64]])
MIXED_BOARD = array([[1024, 1024, 2, 4], [8, 16, 32, 64], [128, 256, 8, 16], [2, 4, 0, 64]])


class TestNode(TestCase):
    """Test node construction and expansion."""

    def setUp(self):
        """Create a root node on an open board."""
        self.rng = make_generator(0)
        self.root = Node(state=GameState(grid=OPEN_BOARD), target=2048)

    def test_init(self):
        """Untried moves are the legal moves in canonical order."""
        self.assertEqual(self.root.untried_moves, [Direction.DOWN, Direction.RIGHT])
        self.assertFalse(self.root.is_terminal)
        self.assertFalse(self.root.has_won)
        self.assertIsNone(self.root.parent)

    def test_terminal_nodes(self):
        """Locked and won boards are terminal."""
        self.assertTrue(Node(state=GameState(grid=TERMINAL_BOARD), target=2048).is_terminal)

        won = Node(state=GameState(grid=OPEN_BOARD), target=2)
        self.assertTrue(won.has_won)
        self.assertTrue(won.is_terminal)

    def test_add_child_pops_last_move(self):
        """Expansion takes the last untried move and links the child to its parent."""
        child = self.root.add_child(self.rng)
        self.assertEqual(child.move, Direction.RIGHT)
        self.assertIs(child.parent, self.root)
        self.assertEqual(self.root.children, [child])
        self.assertEqual(self.root.untried_moves, [Direction.DOWN])

    def test_add_child_when_fully_expanded(self):
        """Expanding a fully expanded node is an error."""
        self.root.add_child(self.rng)
        self.root.add_child(self.rng)
        self.assertTrue(self.root.fully_expanded())
        with self.assertRaises(ValueError):
            self.root.add_child(self.rng)

    def test_ucb1(self):
        """Unvisited nodes are infinitely attractive; visited ones follow UCB1."""
        child = self.root.add_child(self.rng)
        self.assertEqual(child.ucb1(10, sqrt(2)), inf)

        child.visits, child.wins = 4, 6.0
        self.assertAlmostEqual(child.ucb1(10, sqrt(2)), 1.5 + sqrt(2) * sqrt(log(10) / 4))


class TestSearchPhases(TestCase):
    """Test selection, expansion, rollout and backpropagation."""

    def setUp(self):
        """Create a fully expanded root on an open board."""
        self.rng = make_generator(1)
        self.root = Node(state=GameState(grid=OPEN_BOARD), target=2048)
        self.right = self.root.add_child(self.rng)
        self.down = self.root.add_child(self.rng)

    def test_uct_select_prefers_unvisited(self):
        """An unvisited child is selected over a visited one."""
        self.root.visits = 5
        self.right.visits, self.right.wins = 5, 50.0
        self.assertIs(uct_select(self.root, sqrt(2)), self.down)

    def test_uct_select_ties_keep_first(self):
        """Equal bounds select the first child."""
        self.root.visits = 4
        for child in (self.right, self.down):
            child.visits, child.wins = 2, 1.0
        self.assertIs(uct_select(self.root, 0.0), self.right)

    def test_uct_select_leaf(self):
        """Selecting among no children is an error."""
        with self.assertRaises(ValueError):
            uct_select(self.right, sqrt(2))

    def test_select_stops_at_expandable_node(self):
        """Selection descends through the fully expanded root."""
        self.root.visits = 2
        self.right.visits, self.down.visits = 1, 1
        self.right.wins = 1.0
        self.assertIs(select(self.root, 0.0), self.right)

    def test_expand_terminal_node(self):
        """A terminal node is returned as is."""
        terminal = Node(state=GameState(grid=TERMINAL_BOARD), target=2048)
        self.assertIs(expand(terminal, self.rng), terminal)

    def test_simulate_stops_on_won_node(self):
        """A rollout from a won node plays no move."""
        won = Node(state=GameState(grid=OPEN_BOARD, score=40), target=2)
        result = simulate(won, 20, self.rng)
        self.assertEqual(result, RolloutResult(won=True, score=40, max_tile=2))

    def test_simulate_respects_depth(self):
        """A one-ply rollout plays exactly one move."""
        result = simulate(self.root, 1, self.rng)
        self.assertFalse(result.won)
        self.assertIn(result.max_tile, (2, 4))

    def test_rollout_credit(self):
        """Wins earn 10, half the target 3, a quarter 1."""
        self.assertEqual(rollout_credit(RolloutResult(True, 0, 2048), 2048), 10.0)
        self.assertEqual(rollout_credit(RolloutResult(False, 0, 1024), 2048), 3.0)
        self.assertEqual(rollout_credit(RolloutResult(False, 0, 512), 2048), 1.0)
        self.assertEqual(rollout_credit(RolloutResult(False, 0, 256), 2048), 0.0)

    def test_backpropagate(self):
        """Every ancestor gains one visit, the score and the credit."""
        backpropagate(self.right, RolloutResult(won=False, score=100, max_tile=1024))

        for node in (self.right, self.root):
            self.assertEqual(node.visits, 1)
            self.assertEqual(node.score, 100.0)
            self.assertEqual(node.wins, 3.0)
        self.assertEqual(self.down.visits, 0)

    def test_search_target(self):
        """The target doubles past the max tile once the win tile is reached."""
        self.assertEqual(search_target(GameState(grid=OPEN_BOARD), 2048), 2048)
        self.assertEqual(search_target(GameState(grid=WINNING_BOARD * 2), 2048), 4096)

    def test_visit_accounting(self):
        """Each iteration adds one visit to the root and one to a root child."""
        root = monte_carlo_search(GameState(grid=OPEN_BOARD), MonteCarloConfig(iterations=30, max_depth=5), self.rng)
        self.assertEqual(root.visits, 30)
        self.assertEqual(sum(child.visits for child in root.children), 30)
        self.assertEqual({child.move for child in root.children}, {Direction.DOWN, Direction.RIGHT})


class TestMonteCarloStrategy(TestCase):
    """Test the strategy wrapping the search."""

    def test_finds_winning_move(self):
        """With a non-winning alternative on the board, the chosen move always wins."""
        state = GameState(grid=MIXED_BOARD)
        self.assertEqual(legal_actions(state.grid), [Direction.DOWN, Direction.LEFT, Direction.RIGHT])
        self.assertFalse(make_move(state, Direction.DOWN, make_generator(0)).has_won)

        for seed in range(8):
            strategy = MonteCarloStrategy(MonteCarloConfig(iterations=50), make_generator(seed))
            move = strategy.get_next_move(state)
            self.assertIn(move, {Direction.LEFT, Direction.RIGHT}, seed)
            self.assertTrue(make_move(state, move, make_generator(0)).has_won)

    def test_no_legal_move(self):
        """A locked board has no move."""
        strategy = MonteCarloStrategy(rng=make_generator(0))
        self.assertIsNone(strategy.get_next_move(GameState(grid=TERMINAL_BOARD)))

    def test_single_legal_move_skips_search(self):
        """The only legal move is returned without building a tree."""
        strategy = MonteCarloStrategy(rng=make_generator(0))
        state = GameState(grid=array([[2, 0], [4, 0]]))

        self.assertEqual(strategy.get_next_move(state), Direction.RIGHT)
        self.assertIsNone(strategy._last)
        self.assertTrue(strategy.explain_move(Direction.RIGHT, state).startswith('RIGHT: MCTS found this path'))

    def test_same_seed_same_move(self):
        """Seeded searches are reproducible."""
        state = GameState(grid=array([[2, 2, 4, 0], [0, 4, 0, 0], [0, 0, 8, 0], [2, 0, 0, 0]]))
        config = MonteCarloConfig(iterations=40, max_depth=10)

        first = MonteCarloStrategy(config, make_generator(5))
        second = MonteCarloStrategy(config, make_generator(5))
        self.assertEqual(first.get_next_move(state), second.get_next_move(state))
        self.assertEqual(
            [(child.move, child.visits, child.wins) for child in first.search(state).children],
            [(child.move, child.visits, child.wins) for child in second.search(state).children],
        )

    def test_explain_and_evaluate(self):
        """Explanations and evaluations reuse the last search tree."""
        state = GameState(grid=OPEN_BOARD)
        strategy = MonteCarloStrategy(MonteCarloConfig(iterations=10, max_depth=3), make_generator(4))

        move = strategy.get_next_move(state)
        root = strategy.search(state)
        self.assertIn('rollouts)', strategy.explain_move(move, state))

        valid_moves, evaluations = strategy.evaluate_all_moves(state)
        self.assertIs(strategy.search(state), root)
        self.assertEqual(valid_moves, [Direction.DOWN, Direction.RIGHT])
        self.assertTrue(evaluations[move].reasoning.startswith('MCTS evaluation'))

    def test_invalid_config(self):
        """Iterations and depth must be positive."""
        with self.assertRaises(ValueError):
            MonteCarloConfig(iterations=0)
        with self.assertRaises(ValueError):
            MonteCarloConfig(max_depth=0)


if __name__ == '__main__':
    main()
