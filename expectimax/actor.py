"""
Expectimax player behind the common strategy contract.
"""

import logging

from numpy import count_nonzero

from strategies.base import MoveEvaluation, MoveEvaluations, Strategy
from tilegame.core.gameboard import describe_position, max_tile_position
from tilegame.core.types import Direction, GameState

from .config import ExpectimaxConfig
from .search import MoveScore, analyze_all_moves, best_move

logger = logging.getLogger(__name__)

# ##>: Smallest score gap worth reporting against the runner-up.
SCORE_GAP = 0.1


class ExpectimaxStrategy(Strategy):
    """
    Choose moves with a depth-limited expectimax search over the board heuristic.

    The analysis of the last state searched is kept, so that explaining or
    evaluating the move just chosen does not search the same state again.

    Parameters
    ----------
    config : ExpectimaxConfig, optional
        Search parameters (default values when omitted).
    """

    name = 'Expectimax'
    description = 'Uses expectimax search with weighted heuristics and detailed move reasoning'

    def __init__(self, config: ExpectimaxConfig | None = None):
        self.config = config if config is not None else ExpectimaxConfig()
        self._cache: tuple[GameState, list[MoveScore]] | None = None

    def analyze(self, state: GameState) -> list[MoveScore]:
        """
        Search every legal move of a state.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        list[MoveScore]
            One result per legal move, in canonical order.
        """
        if self._cache is not None and self._cache[0] is state:
            return self._cache[1]

        analysis = analyze_all_moves(state, self.config)
        self._cache = (state, analysis)
        return analysis

    def get_next_move(self, state: GameState) -> Direction | None:
        best = best_move(self.analyze(state))
        if best is None:
            return None

        logger.debug('Expectimax picked %s with score %.2f', best.direction.value, best.score)
        return best.direction

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        analysis = self.analyze(state)
        chosen = next((item for item in analysis if item.direction == direction), None)
        if chosen is None:
            return f'Moving {direction.value.upper()} (fallback choice)'

        explanation = f'Moving {direction.value.upper()}'
        if chosen.merges:
            explanation += ' to merge ' + ', '.join(f'{value // 2}+{value // 2}={value}' for value in chosen.merges)

        explanation += '. ' + ', '.join(chosen.reasoning[:2])

        alternatives = sorted((item for item in analysis if item.direction != direction), key=lambda item: -item.score)
        if alternatives:
            gap = chosen.score - alternatives[0].score
            if gap > SCORE_GAP:
                explanation += f' ({gap:.1f} points better than {alternatives[0].direction.value})'

        return explanation

    def evaluate_all_moves(self, state: GameState) -> MoveEvaluations:
        analysis = self.analyze(state)
        evaluations = {
            item.direction: MoveEvaluation(
                merges=len(item.merges),
                empty_after=int(count_nonzero(item.grid == 0)),
                max_tile_position=describe_position(max_tile_position(item.grid), state.size),
                score=item.score,
                reasoning=', '.join(item.reasoning),
            )
            for item in analysis
        }
        return MoveEvaluations([item.direction for item in analysis], evaluations)
