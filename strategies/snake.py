"""
Snake strategy: fill the bottom row, then zig-zag upward row by row.
"""

from numpy import count_nonzero, ndarray

from tilegame.core.gameboard import move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState

from .base import Strategy, describe_merges

# ##>: Last resort order once the snake sequence is blocked.
FALLBACK_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.DOWN, Direction.UP)


def empty_in_row(grid: ndarray, row: int) -> int:
    """Number of empty cells of one row."""
    return int(count_nonzero(grid[row] == 0))


def should_fill_bottom_row(grid: ndarray) -> bool:
    """Whether the bottom row holds both tiles and holes."""
    bottom = grid[-1]
    return bool((bottom == 0).any() and (bottom != 0).any())


def snake_sequence(grid: ndarray) -> tuple[Direction, ...]:
    """
    Moves to try for the current fill stage of the snake.

    Parameters
    ----------
    grid : ndarray
        The board.

    Returns
    -------
    tuple[Direction, ...]
        ``right, down, left`` while the bottom row has holes, ``left, down, right``
        while the second row has holes, ``right, left, down`` otherwise.
    """
    if empty_in_row(grid, -1) > 0:
        return Direction.RIGHT, Direction.DOWN, Direction.LEFT
    if empty_in_row(grid, -2) > 0:
        return Direction.LEFT, Direction.DOWN, Direction.RIGHT
    return Direction.RIGHT, Direction.LEFT, Direction.DOWN


class SnakeStrategy(Strategy):
    """Build tiles in a snake (zig-zag) pattern starting from the bottom row."""

    name = 'Snake Builder'
    description = 'Build tiles in a snake/zigzag pattern'

    def get_next_move(self, state: GameState) -> Direction | None:
        grid = state.grid
        legal = legal_actions(grid)
        if not legal:
            return None

        if should_fill_bottom_row(grid):
            for direction in (Direction.RIGHT, Direction.DOWN):
                if direction in legal:
                    return direction

        if empty_in_row(grid, -1) < empty_in_row(grid, -2) and Direction.DOWN in legal:
            return Direction.DOWN

        for direction in snake_sequence(grid) + FALLBACK_ORDER:
            if direction in legal:
                return direction
        return None

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        grid = state.grid
        bottom_empty = empty_in_row(grid, -1)
        second_empty = empty_in_row(grid, -2)

        explanation = f'Moving {direction.value.upper()}'
        merges = describe_merges(move_grid(grid, direction))
        if merges:
            explanation += f' to merge {merges}'

        if direction == Direction.DOWN and bottom_empty > 0:
            explanation += f', filling bottom row ({bottom_empty} empty)'
        elif direction == Direction.RIGHT and should_fill_bottom_row(grid):
            explanation += ', organizing bottom row left-to-right'
        elif direction == Direction.LEFT and bottom_empty == 0 and second_empty > 0:
            explanation += ', filling 2nd row right-to-left (snake pattern)'

        return explanation + f'. Keeping {int(count_nonzero(grid))} tiles organized, max: {state.max_tile}'
