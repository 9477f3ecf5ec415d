"""
Move legality for the tile-merging game, computed without sliding the grid.
"""

from numpy import asarray, ndarray

from tilegame.core.types import Direction


def legal_actions_mask(grid: ndarray) -> dict[Direction, bool]:
    """
    Get the legality of all four directions in a single pass.

    Parameters
    ----------
    grid : ndarray
        The current board.

    Returns
    -------
    dict[Direction, bool]
        Legality per direction, in canonical order (up, down, left, right).

    Notes
    -----
    A direction is legal iff sliding toward it changes the grid: some tile has an
    empty cell on that side, or two equal tiles are adjacent along that axis.
    Horizontal and vertical adjacencies are computed once and shared.
    """
    grid = asarray(grid)

    # ##>: Compute horizontal adjacency once for left/right.
    left_cols, right_cols = grid[:, :-1], grid[:, 1:]
    h_can_merge = bool(((left_cols != 0) & (left_cols == right_cols)).any())

    # ##>: Compute vertical adjacency once for up/down.
    top_rows, bottom_rows = grid[:-1, :], grid[1:, :]
    v_can_merge = bool(((top_rows != 0) & (top_rows == bottom_rows)).any())

    # ##>: Check slide conditions per direction.
    return {
        Direction.UP: v_can_merge or bool(((top_rows == 0) & (bottom_rows != 0)).any()),
        Direction.DOWN: v_can_merge or bool(((bottom_rows == 0) & (top_rows != 0)).any()),
        Direction.LEFT: h_can_merge or bool(((left_cols == 0) & (right_cols != 0)).any()),
        Direction.RIGHT: h_can_merge or bool(((right_cols == 0) & (left_cols != 0)).any()),
    }


def legal_actions(grid: ndarray) -> list[Direction]:
    """
    Determine the legal directions for a board.

    Parameters
    ----------
    grid : ndarray
        The current board.

    Returns
    -------
    list[Direction]
        Directions that change the board, in canonical order.
    """
    return [direction for direction, legal in legal_actions_mask(grid).items() if legal]


def can_move(grid: ndarray) -> bool:
    """
    Check whether any direction changes the board.

    Parameters
    ----------
    grid : ndarray
        The current board.

    Returns
    -------
    bool
        True if at least one move is available.
    """
    return any(legal_actions_mask(grid).values())


def is_done(grid: ndarray) -> bool:
    """Check if the game has ended (no move changes the board)."""
    return not can_move(grid)
