"""
Strategy registry and the agent delegating to the selected strategy.
"""

import logging
from typing import Callable

from expectimax.actor import ExpectimaxStrategy
from monte_carlo.actor import MonteCarloStrategy
from tilegame.core.gamemove import can_move
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState

from .base import MoveEvaluations, Strategy
from .baseline import RandomStrategy
from .config import AgentConfig, StrategyKind
from .corner import CornerStrategy
from .endgame import EndgameStrategy
from .greedy import GreedyStrategy
from .risk import RiskTakingStrategy
from .smoothness import SmoothnessStrategy
from .snake import SnakeStrategy
from .win_probability import WinProbabilityStrategy

logger = logging.getLogger(__name__)

_REGISTRY: dict[StrategyKind, Callable[[AgentConfig, RandomGenerator], Strategy]] = {
    StrategyKind.CORNER: lambda config, rng: CornerStrategy(config.corner),
    StrategyKind.GREEDY: lambda config, rng: GreedyStrategy(),
    StrategyKind.SNAKE: lambda config, rng: SnakeStrategy(),
    StrategyKind.SMOOTHNESS: lambda config, rng: SmoothnessStrategy(),
    StrategyKind.ENDGAME: lambda config, rng: EndgameStrategy(config.win_tile),
    StrategyKind.RISK: lambda config, rng: RiskTakingStrategy(config.risk_tolerance, config.win_tile),
    StrategyKind.WIN_PROBABILITY: lambda config, rng: WinProbabilityStrategy(config.win_tile, rng),
    StrategyKind.RANDOM: lambda config, rng: RandomStrategy(rng),
    StrategyKind.EXPECTIMAX: lambda config, rng: ExpectimaxStrategy(config.expectimax),
    StrategyKind.MCTS: lambda config, rng: MonteCarloStrategy(config.monte_carlo, rng),
}


def create_strategy(
    kind: StrategyKind | str, config: AgentConfig | None = None, rng: RandomGenerator | None = None
) -> Strategy:
    """
    Build a strategy by name.

    Parameters
    ----------
    kind : StrategyKind or str
        The strategy to build.
    config : AgentConfig, optional
        Per-strategy parameters (default values when omitted).
    rng : RandomGenerator, optional
        Generator of the stochastic strategies; seeded from ``config.seed`` when omitted.

    Returns
    -------
    Strategy
        A fresh strategy instance.

    Raises
    ------
    ValueError
        If ``kind`` names no known strategy.
    """
    try:
        kind = StrategyKind(kind)
    except ValueError as error:
        known = ', '.join(item.value for item in StrategyKind)
        raise ValueError(f'Unknown strategy {kind!r}, expected one of: {known}') from error

    config = config if config is not None else AgentConfig(strategy=kind)
    rng = rng if rng is not None else make_generator(config.seed)
    return _REGISTRY[kind](config, rng)


class StrategySelector:
    """
    Agent running the strategy named by its configuration.

    Parameters
    ----------
    config : AgentConfig, optional
        The agent configuration (default values when omitted).
    rng : RandomGenerator, optional
        Generator handed to the stochastic strategies.
    """

    def __init__(self, config: AgentConfig | None = None, rng: RandomGenerator | None = None):
        self.config = config if config is not None else AgentConfig()
        self.strategy = create_strategy(self.config.strategy, self.config, rng)
        self.last_explanation: str | None = None

    @property
    def name(self) -> str:
        """Display name of the running strategy."""
        return self.strategy.name

    def get_next_move(self, state: GameState) -> Direction | None:
        """
        Choose the next move of a game.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        Direction or None
            The move to play, ``None`` when the game is over.
        """
        if not can_move(state.grid):
            return None

        move = self.strategy.get_next_move(state)
        if move is not None and self.config.explain_moves:
            self.last_explanation = self.strategy.explain_move(move, state)
            logger.debug('%s: %s', self.strategy.name, self.last_explanation)
        return move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        """Explain a move with the running strategy."""
        return self.strategy.explain_move(direction, state)

    def evaluate_all_moves(self, state: GameState) -> MoveEvaluations:
        """Evaluate every legal move with the running strategy."""
        return self.strategy.evaluate_all_moves(state)
