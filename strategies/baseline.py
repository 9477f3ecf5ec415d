"""
Random baseline used to calibrate the other strategies.
"""

from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState

from .base import Strategy


class RandomStrategy(Strategy):
    """
    Play a uniformly random legal move.

    Parameters
    ----------
    rng : RandomGenerator, optional
        Source of randomness; an unseeded generator when omitted.
    """

    name = 'Random'
    description = 'Uniformly random legal moves'

    def __init__(self, rng: RandomGenerator | None = None):
        self.rng = rng if rng is not None else make_generator()

    def get_next_move(self, state: GameState) -> Direction | None:
        legal = legal_actions(state.grid)
        if not legal:
            return None
        return legal[int(self.rng.next() * len(legal))]

    def explain_move(self, direction: Direction, state: GameState) -> str:
        return f'Moving {Direction(direction).value.upper()} at random'
