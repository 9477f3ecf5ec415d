"""
Tests for the strategy registry and the selecting agent.
"""

from unittest import TestCase, main

from numpy import array

from expectimax.actor import ExpectimaxStrategy
from expectimax.config import ExpectimaxConfig
from monte_carlo.actor import MonteCarloStrategy
from strategies.baseline import RandomStrategy
from strategies.config import AgentConfig, StrategyKind
from strategies.corner import Corner, CornerStrategy
from strategies.endgame import EndgameStrategy
from strategies.greedy import GreedyStrategy
from strategies.risk import RiskTakingStrategy
from strategies.selector import StrategySelector, create_strategy
from strategies.smoothness import SmoothnessStrategy
from strategies.snake import SnakeStrategy
from strategies.win_probability import WinProbabilityStrategy
from tilegame.core.types import Direction, GameState

MERGE_BOARD = array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
TERMINAL_BOARD = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])


class TestCreateStrategy(TestCase):
    """Test the registry factory."""

    def test_every_kind(self):
        """Each kind builds its strategy."""
        expected = {
            StrategyKind.CORNER: CornerStrategy,
            StrategyKind.GREEDY: GreedyStrategy,
            StrategyKind.SNAKE: SnakeStrategy,
            StrategyKind.SMOOTHNESS: SmoothnessStrategy,
            StrategyKind.ENDGAME: EndgameStrategy,
            StrategyKind.RISK: RiskTakingStrategy,
            StrategyKind.WIN_PROBABILITY: WinProbabilityStrategy,
            StrategyKind.RANDOM: RandomStrategy,
            StrategyKind.EXPECTIMAX: ExpectimaxStrategy,
            StrategyKind.MCTS: MonteCarloStrategy,
        }
        for kind, strategy_class in expected.items():
            self.assertIsInstance(create_strategy(kind), strategy_class)
            self.assertIsInstance(create_strategy(kind.value), strategy_class)

    def test_parameters_are_forwarded(self):
        """Per-strategy parameters come from the agent configuration."""
        config = AgentConfig(corner=Corner.TOP_LEFT, expectimax=ExpectimaxConfig(max_depth=2), win_tile=1024)
        self.assertEqual(create_strategy(StrategyKind.CORNER, config).corner, Corner.TOP_LEFT)
        self.assertEqual(create_strategy(StrategyKind.EXPECTIMAX, config).config.max_depth, 2)
        self.assertEqual(create_strategy(StrategyKind.MCTS, config).config.win_tile, 1024)
        self.assertEqual(create_strategy(StrategyKind.ENDGAME, config).win_tile, 1024)
        self.assertEqual(create_strategy(StrategyKind.WIN_PROBABILITY, config).win_tile, 1024)

        risky = create_strategy(StrategyKind.RISK, AgentConfig(risk_tolerance=0.2))
        self.assertEqual(risky.risk_tolerance, 0.2)

    def test_unknown_strategy(self):
        """Unknown names are rejected."""
        with self.assertRaises(ValueError):
            create_strategy('minimax')
        with self.assertRaises(ValueError):
            AgentConfig(strategy='minimax')
        with self.assertRaises(ValueError):
            AgentConfig(corner='middle')


class TestStrategySelector(TestCase):
    """Test the agent delegating to its strategy."""

    def test_game_over_state(self):
        """A finished game has no next move."""
        selector = StrategySelector(AgentConfig(strategy=StrategyKind.GREEDY))
        self.assertIsNone(selector.get_next_move(GameState(grid=TERMINAL_BOARD, is_game_over=True)))

    def test_contradicting_state_is_rejected(self):
        """A movable board flagged as finished never reaches the strategy."""
        with self.assertRaises(ValueError):
            GameState(grid=MERGE_BOARD, is_game_over=True)

    def test_none_exactly_when_no_move(self):
        """Every strategy returns a move on a movable board and None on a locked one."""
        for kind in StrategyKind:
            config = AgentConfig(
                strategy=kind, explain_moves=False, seed=0, expectimax=ExpectimaxConfig(max_depth=1)
            )
            selector = StrategySelector(config)
            self.assertIn(selector.get_next_move(GameState(grid=MERGE_BOARD)), list(Direction), kind)
            self.assertIsNone(selector.get_next_move(GameState(grid=TERMINAL_BOARD)), kind)

    def test_keeps_last_explanation(self):
        """The explanation of the chosen move is kept and logged."""
        selector = StrategySelector(AgentConfig(strategy=StrategyKind.GREEDY))
        with self.assertLogs('strategies.selector', level='DEBUG') as logs:
            move = selector.get_next_move(GameState(grid=MERGE_BOARD))

        self.assertEqual(move, Direction.LEFT)
        self.assertEqual(selector.last_explanation, 'Moving left to make 1 merge')
        self.assertIn('Merge Monster: Moving left to make 1 merge', logs.output[0])

    def test_without_explanations(self):
        """No explanation is built when explanations are off."""
        selector = StrategySelector(AgentConfig(strategy=StrategyKind.GREEDY, explain_moves=False))
        selector.get_next_move(GameState(grid=MERGE_BOARD))
        self.assertIsNone(selector.last_explanation)

    def test_delegation(self):
        """Explanations and evaluations come from the running strategy."""
        selector = StrategySelector(AgentConfig(strategy=StrategyKind.SNAKE))
        state = GameState(grid=MERGE_BOARD)
        self.assertEqual(selector.name, 'Snake Builder')
        expected = SnakeStrategy().explain_move(Direction.LEFT, state)
        self.assertEqual(selector.explain_move(Direction.LEFT, state), expected)

        valid_moves = selector.evaluate_all_moves(state).valid_moves
        self.assertEqual(valid_moves, [Direction.DOWN, Direction.LEFT, Direction.RIGHT])

    def test_default_agent(self):
        """The default agent runs expectimax."""
        self.assertIsInstance(StrategySelector().strategy, ExpectimaxStrategy)


if __name__ == '__main__':
    main()
