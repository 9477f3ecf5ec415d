"""
Grid transitions of the tile-merging game: sliding, merging, spawning and win detection.

All functions are pure: they never modify the grid they receive and return fresh arrays.
"""

from numpy import argwhere, array_equal, asarray, flatnonzero, int64, ndarray, rot90, zeros, zeros_like

from tilegame.core.gamemove import can_move
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState, Move, MoveResult

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

WIN_TILE = 2048

# ##>: Counter-clockwise quarter turns bringing each direction onto LEFT.
ROTATIONS: dict[Direction, int] = {Direction.LEFT: 0, Direction.UP: 1, Direction.RIGHT: 2, Direction.DOWN: 3}


def slide_line(line: ndarray) -> tuple[ndarray, int, list[Move]]:
    """
    Slide a line toward its first cell and merge equal neighbours.

    Parameters
    ----------
    line : ndarray
        A 1D array, ``0`` for empty cells.

    Returns
    -------
    new_line : ndarray
        The line after compaction and merging.
    points : int
        Sum of the values created by merges.
    moves : list[Move]
        Displacements in line coordinates ``(0, index)``.

    Notes
    -----
    - Each tile merges at most once per call: ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``.
    - Merging scans from the first cell, so ``[2, 2, 2]`` becomes ``[4, 2, 0]``.
    - Both tiles of a merge produce a ``Move`` flagged ``merged``. Tiles that stay
      in place without merging produce none.
    """
    line = asarray(line)
    result = zeros_like(line)
    occupied = flatnonzero(line)

    points = 0
    moves: list[Move] = []
    target, i = 0, 0
    while i < len(occupied):
        source = int(occupied[i])
        value = int(line[source])

        if i + 1 < len(occupied) and int(line[occupied[i + 1]]) == value:
            merged_value = value * 2
            result[target] = merged_value
            points += merged_value
            moves.append(Move((0, source), (0, target), merged_value, True))
            moves.append(Move((0, int(occupied[i + 1])), (0, target), merged_value, True))
            i += 2
        else:
            result[target] = value
            if source != target:
                moves.append(Move((0, source), (0, target), value))
            i += 1
        target += 1

    return result, points, moves


def _unrotate(position: tuple[int, int], turns: int, size: int) -> tuple[int, int]:
    """Map a cell of a grid rotated ``turns`` times counter-clockwise back to the original grid."""
    row, col = position
    for _ in range(turns):
        row, col = col, size - 1 - row
    return row, col


def move_grid(grid: ndarray, direction: Direction) -> MoveResult:
    """
    Slide the whole grid in one direction.

    Parameters
    ----------
    grid : ndarray
        The current board.
    direction : Direction
        The direction to slide toward.

    Returns
    -------
    MoveResult
        The new grid, the points earned, the tile moves (original coordinates) and
        whether any cell changed. ``has_changed`` is the authoritative legality signal.

    Notes
    -----
    The grid is rotated so that ``direction`` becomes LEFT, every row is slid with
    ``slide_line``, then the grid is rotated back.
    """
    grid = asarray(grid)
    if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
        raise ValueError(f'Grid must be square, got shape {grid.shape}')

    size = grid.shape[0]
    turns = ROTATIONS[Direction(direction)]
    rotated = rot90(grid, k=turns)

    updated = zeros_like(rotated)
    points = 0
    moves: list[Move] = []
    for i, row in enumerate(rotated):
        updated[i], row_points, row_moves = slide_line(row)
        points += row_points
        moves.extend(
            Move(
                _unrotate((i, move.from_position[1]), turns, size),
                _unrotate((i, move.to_position[1]), turns, size),
                move.value,
                move.merged,
            )
            for move in row_moves
        )

    new_grid = rot90(updated, k=-turns).copy()
    return MoveResult(new_grid, points, moves, not array_equal(grid, new_grid))


def rotate_clockwise(grid: ndarray, turns: int = 1) -> ndarray:
    """
    Rotate a grid by quarter turns, clockwise.

    Parameters
    ----------
    grid : ndarray
        The board to rotate.
    turns : int, optional
        Number of quarter turns (default is 1). Four turns give back the same grid.

    Returns
    -------
    ndarray
        A rotated copy.
    """
    return rot90(asarray(grid), k=-turns).copy()


def empty_cells(grid: ndarray) -> list[tuple[int, int]]:
    """
    List the empty cells of a grid in row-major order.

    Parameters
    ----------
    grid : ndarray
        The board to inspect.

    Returns
    -------
    list[tuple[int, int]]
        Positions (row, col) of the empty cells.
    """
    return [(int(row), int(col)) for row, col in argwhere(asarray(grid) == 0)]


def max_tile(grid: ndarray) -> int:
    """Largest tile of a grid, 0 when empty."""
    return int(asarray(grid).max())


def max_tile_position(grid: ndarray) -> tuple[int, int]:
    """Position of the first (row-major) occurrence of the largest tile."""
    grid = asarray(grid)
    index = int(grid.argmax())
    return index // grid.shape[1], index % grid.shape[1]


def describe_position(position: tuple[int, int], size: int) -> str:
    """
    Describe a cell as a corner, an edge or the center of the grid.

    Parameters
    ----------
    position : tuple[int, int]
        The cell (row, col).
    size : int
        Side length of the grid.

    Returns
    -------
    str
        One of ``top-left``, ``top-right``, ``bottom-left``, ``bottom-right``,
        ``top edge``, ``bottom edge``, ``left edge``, ``right edge`` or ``center``.
    """
    row, col = position
    last = size - 1
    vertical = 'top' if row == 0 else 'bottom' if row == last else None
    horizontal = 'left' if col == 0 else 'right' if col == last else None

    if vertical and horizontal:
        return f'{vertical}-{horizontal}'
    if vertical or horizontal:
        return f'{vertical or horizontal} edge'
    return 'center'


def merge_results(moves: list[Move]) -> list[int]:
    """
    Values created by the merges of a move, one entry per merge.

    Parameters
    ----------
    moves : list[Move]
        Moves produced by ``move_grid`` or ``slide_line``.

    Returns
    -------
    list[int]
        Merge results in the order the merges were produced.
    """
    return list({move.to_position: move.value for move in moves if move.merged}.values())


def check_win(grid: ndarray, target: int = WIN_TILE) -> bool:
    """
    Check whether the target tile is on the grid.

    Parameters
    ----------
    grid : ndarray
        The board to inspect.
    target : int, optional
        The winning tile value (default is 2048).

    Returns
    -------
    bool
        True if some cell equals ``target``.
    """
    return bool((asarray(grid) == target).any())


def add_random_tile(grid: ndarray, rng: RandomGenerator) -> tuple[ndarray, tuple[int, int] | None]:
    """
    Spawn a new tile on a uniformly chosen empty cell.

    Parameters
    ----------
    grid : ndarray
        The board after a move. Not modified.
    rng : RandomGenerator
        Source of randomness; consumed twice (cell, then value).

    Returns
    -------
    new_grid : ndarray
        A copy of the board holding the new tile.
    position : tuple[int, int] or None
        Where the tile was placed, ``None`` when the grid is full (grid returned unchanged).

    Notes
    -----
    The new tile is a 2 with probability 0.9 and a 4 with probability 0.1.
    """
    cells = empty_cells(grid)
    if not cells:
        return grid, None

    position = cells[int(rng.next() * len(cells))]
    new_grid = asarray(grid).copy()
    new_grid[position] = 2 if rng.next() < TILE_SPAWN_PROBS[2] else 4
    return new_grid, position


def make_move(
    state: GameState, direction: Direction, rng: RandomGenerator | None = None, target: int = WIN_TILE
) -> GameState:
    """
    Play one move: slide, spawn a tile and update the win and game-over flags.

    Parameters
    ----------
    state : GameState
        The current game.
    direction : Direction
        The move to play.
    rng : RandomGenerator, optional
        Source of randomness for the spawn; a fresh unseeded generator when omitted.
    target : int, optional
        The winning tile value (default is 2048).

    Returns
    -------
    GameState
        The next state, or ``state`` itself when the move changes nothing.

    Notes
    -----
    ``has_won`` is sticky: once set it is carried to every following state.
    """
    result = move_grid(state.grid, direction)
    if not result.has_changed:
        return state

    grid, _ = add_random_tile(result.grid, rng if rng is not None else make_generator())
    return GameState(
        grid=grid,
        score=state.score + result.points,
        is_game_over=not can_move(grid),
        has_won=state.has_won or check_win(grid, target),
    )


def new_game(size: int = 4, rng: RandomGenerator | None = None) -> GameState:
    """
    Create a fresh game with two random tiles.

    Parameters
    ----------
    size : int, optional
        Side length of the grid (default is 4).
    rng : RandomGenerator, optional
        Source of randomness for the two initial tiles.

    Returns
    -------
    GameState
        The initial state.
    """
    rng = rng if rng is not None else make_generator()
    grid = zeros((size, size), dtype=int64)
    grid, _ = add_random_tile(grid, rng)
    grid, _ = add_random_tile(grid, rng)
    return GameState(grid=grid)
