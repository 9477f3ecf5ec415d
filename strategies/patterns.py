"""
Board patterns shared by the win-oriented strategies.

Tile pairs able to meet along a clear row or column, monotonic lines and corner
anchoring of the max tile.
"""

from itertools import combinations

from numpy import argwhere, asarray, count_nonzero, diff, ndarray


def tile_positions(grid: ndarray, value: int) -> list[tuple[int, int]]:
    """Cells holding ``value``, in row-major order."""
    return [(int(row), int(col)) for row, col in argwhere(asarray(grid) == value)]


def count_tiles(grid: ndarray, value: int) -> int:
    """Number of cells holding ``value``."""
    return int(count_nonzero(asarray(grid) == value))


def can_meet(grid: ndarray, first: tuple[int, int], second: tuple[int, int]) -> bool:
    """
    Check whether two tiles share a row or a column with only empty cells between them.

    Parameters
    ----------
    grid : ndarray
        The board.
    first, second : tuple[int, int]
        Cells of the two tiles.

    Returns
    -------
    bool
        True if one slide along their common line brings the tiles together.
    """
    (row_a, col_a), (row_b, col_b) = first, second
    if row_a == row_b:
        low, high = sorted((col_a, col_b))
        return not asarray(grid)[row_a, low + 1 : high].any()
    if col_a == col_b:
        low, high = sorted((row_a, row_b))
        return not asarray(grid)[low + 1 : high, col_a].any()
    return False


def has_path(grid: ndarray, first: tuple[int, int], second: tuple[int, int]) -> bool:
    """Like ``can_meet`` for aligned tiles; tiles on different lines are assumed reachable."""
    (row_a, col_a), (row_b, col_b) = first, second
    if row_a == row_b or col_a == col_b:
        return can_meet(grid, first, second)
    return True


def meeting_pairs(grid: ndarray, value: int) -> int:
    """Number of pairs of ``value`` tiles able to meet."""
    return sum(can_meet(grid, first, second) for first, second in combinations(tile_positions(grid, value), 2))


def can_merge_value(grid: ndarray, value: int) -> bool:
    """Whether two ``value`` tiles can meet in one slide."""
    return meeting_pairs(grid, value) > 0


def is_monotonic(line: ndarray) -> bool:
    """Whether the tiles of a line, holes skipped, never go both up and down."""
    tiles = asarray(line)[asarray(line) != 0]
    if len(tiles) <= 1:
        return True

    steps = diff(tiles)
    return bool((steps >= 0).all() or (steps <= 0).all())


def monotonic_lines(grid: ndarray) -> int:
    """Number of monotonic rows and columns."""
    grid = asarray(grid)
    return sum(is_monotonic(row) for row in grid) + sum(is_monotonic(col) for col in grid.T)


def max_in_corner(grid: ndarray) -> bool:
    """Whether some corner holds the max tile."""
    grid = asarray(grid)
    highest = grid.max()
    corners = grid[[0, 0, -1, -1], [0, -1, 0, -1]]
    return bool(highest > 0 and (corners == highest).any())


def is_corner(position: tuple[int, int], size: int) -> bool:
    """Whether a cell is a corner of a ``size`` board."""
    return position[0] in (0, size - 1) and position[1] in (0, size - 1)


def is_edge(position: tuple[int, int], size: int) -> bool:
    """Whether a cell lies on the border of a ``size`` board."""
    return position[0] in (0, size - 1) or position[1] in (0, size - 1)
