"""
Board heuristic: a weighted sum of features rewarding boards that stay playable.

Features are computed on the log2 of the tiles, so a board of large tiles is not
scored differently from the same pattern of small tiles.
"""

from dataclasses import dataclass

from numpy import abs as abs_array
from numpy import asarray, count_nonzero, float64, log2, maximum, ndarray, where, zeros_like

from heuristics.weights import DEFAULT_WEIGHTS, HeuristicWeights

# ##>: Corner bonus per power of two of the max tile.
CORNER_BONUS_SCALE = 10.0


@dataclass(frozen=True)
class BoardEvaluation:
    """
    Feature vector and weighted score of one board.

    Attributes
    ----------
    score : float
        Weighted sum of the features.
    empty_cells : int
        Number of empty cells.
    max_tile : int
        Largest tile.
    corner_bonus : float
        Bonus for the max tile sitting in a corner, 0 otherwise.
    smoothness : float
        Negative sum of log2 gaps between adjacent tiles.
    mergeability : float
        Sum of log2 values of tiles having an equal neighbour.
    monotonicity : float
        Sum over rows and columns of the dominant monotonic trend.
    """

    score: float
    empty_cells: int
    max_tile: int
    corner_bonus: float
    smoothness: float
    mergeability: float
    monotonicity: float


def log_tiles(grid: ndarray) -> ndarray:
    """
    Take the log2 of every tile, leaving empty cells at zero.

    Parameters
    ----------
    grid : ndarray
        The board.

    Returns
    -------
    ndarray
        Float array of the same shape.
    """
    values = asarray(grid, dtype=float64)
    return log2(values, where=values > 0, out=zeros_like(values))


def corner_bonus(grid: ndarray) -> float:
    """
    Reward a max tile anchored in one of the four corners.

    Parameters
    ----------
    grid : ndarray
        The board.

    Returns
    -------
    float
        ``10 * log2(max_tile)`` when a corner holds the max tile, else 0.
    """
    grid = asarray(grid)
    highest = grid.max()
    if highest == 0:
        return 0.0

    corners = grid[[0, 0, -1, -1], [0, -1, 0, -1]]
    if (corners == highest).any():
        return CORNER_BONUS_SCALE * float(log2(highest))
    return 0.0


def smoothness(logs: ndarray, occupied: ndarray) -> float:
    """
    Penalize jagged boards.

    Parameters
    ----------
    logs : ndarray
        Log2 of the tiles (see ``log_tiles``).
    occupied : ndarray
        Boolean mask of the non-empty cells.

    Returns
    -------
    float
        Minus the sum of absolute log2 differences between adjacent non-empty cells.
    """
    horizontal = occupied[:, :-1] & occupied[:, 1:]
    vertical = occupied[:-1, :] & occupied[1:, :]
    penalty = abs_array(logs[:, :-1] - logs[:, 1:])[horizontal].sum()
    penalty += abs_array(logs[:-1, :] - logs[1:, :])[vertical].sum()
    return -float(penalty)


def _row_monotonicity(logs: ndarray, occupied: ndarray) -> float:
    """Sum over rows of the larger of the increasing and decreasing log2 totals."""
    deltas = logs[:, 1:] - logs[:, :-1]
    both = occupied[:, 1:] & occupied[:, :-1]
    increasing = where(both & (deltas > 0), deltas, 0.0).sum(axis=1)
    decreasing = where(both & (deltas < 0), -deltas, 0.0).sum(axis=1)
    return float(maximum(increasing, decreasing).sum())


def monotonicity(logs: ndarray, occupied: ndarray) -> float:
    """
    Reward rows and columns sorted in one direction.

    Parameters
    ----------
    logs : ndarray
        Log2 of the tiles (see ``log_tiles``).
    occupied : ndarray
        Boolean mask of the non-empty cells.

    Returns
    -------
    float
        For each row and each column, the larger of the total increasing and total
        decreasing log2 deltas between adjacent non-empty cells, summed.

    Notes
    -----
    Only directly adjacent pairs are compared; a gap interrupts the trend.
    """
    return _row_monotonicity(logs, occupied) + _row_monotonicity(logs.T, occupied.T)


def mergeability(grid: ndarray, logs: ndarray) -> float:
    """
    Reward boards holding merge opportunities.

    Parameters
    ----------
    grid : ndarray
        The board.
    logs : ndarray
        Log2 of the tiles (see ``log_tiles``).

    Returns
    -------
    float
        Sum of log2 values of the tiles having at least one equal orthogonal neighbour.
    """
    grid = asarray(grid)
    horizontal = (grid[:, :-1] != 0) & (grid[:, :-1] == grid[:, 1:])
    vertical = (grid[:-1, :] != 0) & (grid[:-1, :] == grid[1:, :])

    mergeable = zeros_like(grid, dtype=bool)
    mergeable[:, :-1] |= horizontal
    mergeable[:, 1:] |= horizontal
    mergeable[:-1, :] |= vertical
    mergeable[1:, :] |= vertical
    return float(logs[mergeable].sum())


def evaluate(grid: ndarray, current_score: float = 0, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> BoardEvaluation:
    """
    Score a board.

    Parameters
    ----------
    grid : ndarray
        The board to score.
    current_score : float, optional
        Game score reached with this board (default is 0).
    weights : HeuristicWeights, optional
        Feature weights (default is ``DEFAULT_WEIGHTS``).

    Returns
    -------
    BoardEvaluation
        The features and their weighted sum.
    """
    grid = asarray(grid)
    logs = log_tiles(grid)
    occupied = grid != 0

    empty = int(count_nonzero(~occupied))
    corner = corner_bonus(grid)
    smooth = smoothness(logs, occupied)
    mono = monotonicity(logs, occupied)
    merge = mergeability(grid, logs)

    score = (
        empty * weights.empty_cells
        + corner * weights.max_tile_corner
        + smooth * weights.smoothness
        + mono * weights.monotonicity
        + merge * weights.mergeability
        + current_score * weights.score_gain
    )

    return BoardEvaluation(
        score=float(score),
        empty_cells=empty,
        max_tile=int(grid.max()),
        corner_bonus=corner,
        smoothness=smooth,
        mergeability=merge,
        monotonicity=mono,
    )
