"""
Configuration of the Monte Carlo tree search.
"""

from dataclasses import dataclass
from math import sqrt

from tilegame.core.gameboard import WIN_TILE


@dataclass(frozen=True)
class MonteCarloConfig:
    """
    Parameters of the Monte Carlo tree search.

    Raises
    ------
    ValueError
        If the iteration count, the rollout depth or the win tile is not positive,
        or the exploration weight is negative.
    """

    # ##>: Search budget.
    iterations: int = 100  # Selection / expansion / rollout / backpropagation cycles per move
    max_depth: int = 20  # Plies per random rollout

    # ##>: Selection.
    exploration_weight: float = sqrt(2)  # UCB1 exploration constant

    # ##>: Rollout outcome.
    win_tile: int = WIN_TILE

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError(f'iterations must be positive, got {self.iterations}')
        if self.max_depth < 1:
            raise ValueError(f'max_depth must be positive, got {self.max_depth}')
        if self.exploration_weight < 0:
            raise ValueError(f'exploration_weight must be non-negative, got {self.exploration_weight}')
        if self.win_tile < 4:
            raise ValueError(f'win_tile must be at least 4, got {self.win_tile}')
