"""
Value types shared by the engine, the evaluators and the agents.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from numpy import array, int64, ndarray

# ##>: Largest tile reachable on a 7x7 board is 2**50, well inside int64.
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 7


def validate_grid(grid: ndarray) -> None:
    """
    Check that an array is a legal board.

    Parameters
    ----------
    grid : ndarray
        Candidate board.

    Raises
    ------
    ValueError
        If the board is not square, its size is outside the supported range, or a
        non-empty cell is not a power of two greater than one.
    """
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ValueError(f'Grid must be square, got shape {grid.shape}')
    if not MIN_GRID_SIZE <= grid.shape[0] <= MAX_GRID_SIZE:
        raise ValueError(f'Grid size must be within [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}], got {grid.shape[0]}')

    tiles = grid[grid != 0]
    if (tiles < 2).any() or (tiles & (tiles - 1)).any():
        raise ValueError('Every non-empty cell must hold a power of two greater than one')


class Direction(str, Enum):
    """
    Direction of a move.

    The declaration order (up, down, left, right) is the canonical order used
    whenever moves are enumerated or ties are broken.
    """

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'


@dataclass(frozen=True)
class Move:
    """
    One tile displacement produced by a move.

    Attributes
    ----------
    from_position : tuple[int, int]
        Cell (row, col) the tile starts from.
    to_position : tuple[int, int]
        Cell (row, col) the tile ends in.
    value : int
        Value held by the destination cell after the move.
    merged : bool
        Whether the tile took part in a merge.
    """

    from_position: tuple[int, int]
    to_position: tuple[int, int]
    value: int
    merged: bool = False


class MoveResult(NamedTuple):
    """Outcome of sliding a whole grid in one direction."""

    grid: ndarray
    points: int
    moves: list[Move]
    has_changed: bool


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Immutable snapshot of a game.

    The grid is copied on construction and flagged read-only, so the caller's
    array is never shared with, nor mutated by, the engine. Equality is identity:
    ``make_move`` returns the very same instance when a move is a no-op.

    Attributes
    ----------
    grid : ndarray
        Square board, ``0`` for empty cells.
    score : int
        Accumulated merge points.
    is_game_over : bool
        True when no direction changes the grid. Derived from the grid when omitted.
    has_won : bool
        True once the target tile has been reached.

    Raises
    ------
    ValueError
        If the grid is malformed, the score is negative, or ``is_game_over``
        contradicts the grid.
    """

    grid: ndarray
    score: int = 0
    is_game_over: bool | None = None
    has_won: bool = False

    def __post_init__(self):
        """Copy, validate and freeze the grid."""
        from tilegame.core.gamemove import can_move

        grid = array(self.grid, dtype=int64)
        validate_grid(grid)
        grid.setflags(write=False)
        object.__setattr__(self, 'grid', grid)

        if self.score < 0:
            raise ValueError(f'Score must be non-negative, got {self.score}')

        # ##>: The game is over iff no direction changes the grid.
        is_game_over = not can_move(grid)
        if self.is_game_over is None:
            object.__setattr__(self, 'is_game_over', is_game_over)
        elif bool(self.is_game_over) != is_game_over:
            raise ValueError(f'is_game_over={self.is_game_over} contradicts the grid')

    @property
    def size(self) -> int:
        """Side length of the grid."""
        return self.grid.shape[0]

    @property
    def max_tile(self) -> int:
        """Largest tile on the grid, 0 when empty."""
        return int(self.grid.max())
