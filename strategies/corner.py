"""
Corner strategy: keep the biggest tile anchored in a preferred corner.
"""

from enum import Enum

from numpy import asarray, log2, ndarray

from tilegame.core.gameboard import merge_results, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy, describe_merges


class Corner(str, Enum):
    """Corner of the grid."""

    TOP_LEFT = 'top-left'
    TOP_RIGHT = 'top-right'
    BOTTOM_LEFT = 'bottom-left'
    BOTTOM_RIGHT = 'bottom-right'


# ##>: Moves pulling tiles toward each corner.
_TOWARD: dict[Corner, tuple[Direction, Direction]] = {
    Corner.BOTTOM_RIGHT: (Direction.DOWN, Direction.RIGHT),
    Corner.BOTTOM_LEFT: (Direction.DOWN, Direction.LEFT),
    Corner.TOP_RIGHT: (Direction.UP, Direction.RIGHT),
    Corner.TOP_LEFT: (Direction.UP, Direction.LEFT),
}

# ##>: Moves tried first once the max tile is anchored, so the board keeps moving.
_ANCHORED: dict[Corner, tuple[Direction, Direction]] = {
    Corner.BOTTOM_RIGHT: (Direction.LEFT, Direction.UP),
    Corner.BOTTOM_LEFT: (Direction.RIGHT, Direction.UP),
    Corner.TOP_RIGHT: (Direction.LEFT, Direction.DOWN),
    Corner.TOP_LEFT: (Direction.RIGHT, Direction.DOWN),
}


class CornerStrategy(Strategy):
    """
    Play by a fixed priority list pulling the largest tile toward one corner.

    Parameters
    ----------
    corner : Corner, optional
        The corner to anchor the largest tile in (default is bottom-right).
    """

    name = 'Corner Master'
    description = 'Keep the biggest tile in a corner'

    def __init__(self, corner: Corner = Corner.BOTTOM_RIGHT):
        self.corner = Corner(corner)

    def corner_cell(self, size: int) -> tuple[int, int]:
        """Grid cell of the preferred corner."""
        vertical, horizontal = self.corner.value.split('-')
        return (0 if vertical == 'top' else size - 1, 0 if horizontal == 'left' else size - 1)

    def is_anchored(self, grid: ndarray) -> bool:
        """Whether the preferred corner holds the max tile."""
        grid = asarray(grid)
        highest = grid.max()
        return bool(highest > 0 and grid[self.corner_cell(grid.shape[0])] == highest)

    def priority_moves(self, state: GameState) -> list[Direction]:
        """
        Moves to try first, best first.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        list[Direction]
            Moves toward the corner, preceded by the two alternating moves when the
            max tile already sits in the corner.
        """
        moves = list(_TOWARD[self.corner])
        if self.is_anchored(state.grid):
            moves = list(_ANCHORED[self.corner]) + moves
        return moves

    def would_displace(self, state: GameState, direction: Direction) -> bool:
        """Whether ``direction`` pulls an anchored max tile out of its corner."""
        if not self.is_anchored(state.grid):
            return False
        result = move_grid(state.grid, direction)
        return result.has_changed and not self.is_anchored(result.grid)

    def get_next_move(self, state: GameState) -> Direction | None:
        legal = legal_actions(state.grid)
        for direction in self.priority_moves(state):
            if direction in legal:
                return direction

        return legal[0] if legal else None

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        highest = state.max_tile
        corner_name = self.corner.value.replace('-', ' ')

        explanation = f'Moving {direction.value.upper()}'
        merges = describe_merges(move_grid(state.grid, direction))
        if merges:
            explanation += f' to merge {merges}'

        if self.is_anchored(state.grid):
            explanation += f', keeping {highest} safely in {corner_name} corner'
        else:
            explanation += f', working to move {highest} toward {corner_name} corner'

        legal = legal_actions(state.grid)
        if len(legal) == 1:
            return explanation + ' (only valid move)'

        priority = self.priority_moves(state)
        if priority[0] == direction:
            explanation += f' (priority move for {corner_name})'
        elif direction in priority:
            skipped = [move for move in priority[: priority.index(direction)] if move in legal]
            if skipped and merges and not merge_results(move_grid(state.grid, skipped[0]).moves):
                explanation += f' ({skipped[0].value} has no merges)'

        for alternative in legal:
            if alternative != direction and self.would_displace(state, alternative):
                explanation += f' ({alternative.value} would move {highest} from corner)'
                break

        return explanation

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        merged = merge_results(result.moves)
        score = len(merged) * 10.0 + sum(float(log2(value)) for value in merged) * 5.0

        if self.is_anchored(result.grid):
            score += 100.0

        priority = self.priority_moves(state)
        if direction in priority:
            score += (4 - priority.index(direction)) * 20.0

        if self.would_displace(state, direction):
            score -= 50.0
        return score

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        reasons = []
        merges = len(merge_results(result.moves))
        if merges:
            reasons.append(f'Creates {merges} merge{"s" if merges > 1 else ""}')

        highest = state.max_tile
        if self.is_anchored(result.grid):
            reasons.append(f'keeps {highest} in corner')
        elif self.would_displace(state, direction):
            reasons.append(f'moves {highest} from corner')

        if self.priority_moves(state)[0] == direction:
            reasons.append('priority move')

        return ', '.join(reasons) if reasons else 'Valid move'
