"""
Configuration of the move-choosing agent.
"""

from dataclasses import dataclass, field
from enum import Enum

from expectimax.config import ExpectimaxConfig
from monte_carlo.config import MonteCarloConfig
from tilegame.core.gameboard import WIN_TILE

from .corner import Corner
from .risk import DEFAULT_RISK_TOLERANCE


class StrategyKind(str, Enum):
    """
    Closed set of strategies an agent can run.

    CORNER, GREEDY, SNAKE, SMOOTHNESS: one-ply reflex strategies.
    ENDGAME, RISK: one-ply strategies scoring moves by game phase and risk.
    WIN_PROBABILITY: look-ahead blended with random rollouts.
    RANDOM: uniformly random baseline.
    EXPECTIMAX: depth-limited expectimax search.
    MCTS: Monte Carlo tree search.
    """

    CORNER = 'corner'
    GREEDY = 'greedy'
    SNAKE = 'snake'
    SMOOTHNESS = 'smoothness'
    ENDGAME = 'endgame'
    RISK = 'risk'
    WIN_PROBABILITY = 'win_probability'
    RANDOM = 'random'
    EXPECTIMAX = 'expectimax'
    MCTS = 'mcts'


@dataclass(frozen=True)
class AgentConfig:
    """
    Configuration of a ``StrategySelector``.

    Raises
    ------
    ValueError
        If the strategy name is unknown.
    """

    # ##>: Strategy selection.
    strategy: StrategyKind = StrategyKind.EXPECTIMAX
    explain_moves: bool = True  # Keep and log an explanation of every move
    seed: int | None = None  # Seed of the generator used by stochastic strategies

    # ##>: Game target.
    win_tile: int = WIN_TILE

    # ##>: Per-strategy parameters.
    corner: Corner = Corner.BOTTOM_RIGHT
    risk_tolerance: float = DEFAULT_RISK_TOLERANCE  # Early-game tolerance of the risk taker
    expectimax: ExpectimaxConfig = field(default_factory=ExpectimaxConfig)
    monte_carlo: MonteCarloConfig | None = None  # Defaults to MonteCarloConfig(win_tile=win_tile)

    def __post_init__(self):
        try:
            object.__setattr__(self, 'strategy', StrategyKind(self.strategy))
            object.__setattr__(self, 'corner', Corner(self.corner))
        except ValueError as error:
            raise ValueError(f'Invalid agent configuration: {error}') from error

        if self.monte_carlo is None:
            object.__setattr__(self, 'monte_carlo', MonteCarloConfig(win_tile=self.win_tile))
