"""
Greedy strategy: take the move merging the most tiles right now.
"""

from tilegame.core.gameboard import merge_results, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy


class GreedyStrategy(Strategy):
    """
    One-ply merge maximizer.

    Candidates are ranked by number of merges, then by points earned; the first
    legal direction in canonical order wins remaining ties.
    """

    name = 'Merge Monster'
    description = 'Always make the move that creates the most merges'

    def get_next_move(self, state: GameState) -> Direction | None:
        best_move, best_key = None, None
        for direction in legal_actions(state.grid):
            result = move_grid(state.grid, direction)
            key = (len(merge_results(result.moves)), result.points)
            if best_key is None or key > best_key:
                best_move, best_key = direction, key
        return best_move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        merges = len(merge_results(move_grid(state.grid, direction).moves))
        if merges:
            return f'Moving {direction.value} to make {merges} merge{"s" if merges > 1 else ""}'
        return f'Moving {direction.value} to set up future merges'

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        return len(merge_results(result.moves)) * 1000.0 + result.points
