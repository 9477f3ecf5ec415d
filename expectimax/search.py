"""
Depth-limited expectimax search with a worst-case chance layer.

The player layer keeps the best child. The spawn layer weights the 2 and the 4
of each sampled empty cell by their spawn probabilities, then keeps the *worst*
sampled cell, which makes the search pessimistic about where the next tile lands.
"""

import logging
from dataclasses import dataclass, replace

from numpy import ndarray

from heuristics.evaluator import BoardEvaluation, evaluate
from tilegame.core.gameboard import TILE_SPAWN_PROBS, empty_cells, merge_results, move_grid
from tilegame.core.gamemove import is_done, legal_actions
from tilegame.core.types import Direction, GameState

from .config import ExpectimaxConfig
from .reasoning import generate_reasoning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveScore:
    """
    Search result of one root move.

    Attributes
    ----------
    direction : Direction
        The move.
    score : float
        Backed-up evaluation score of the move.
    evaluation : BoardEvaluation
        Backed-up evaluation (features of the leaf the score comes from).
    grid : ndarray
        Board right after the move, before the spawn.
    points : int
        Merge points earned by the move.
    merges : list[int]
        Values created by the merges of the move.
    reasoning : list[str]
        Ranked reasons supporting the move.
    """

    direction: Direction
    score: float
    evaluation: BoardEvaluation
    grid: ndarray
    points: int
    merges: list[int]
    reasoning: list[str]


def expectimax(
    grid: ndarray, depth: int, maximizing: bool, current_score: int, config: ExpectimaxConfig
) -> BoardEvaluation:
    """
    Evaluate a board by alternating player and spawn layers.

    Parameters
    ----------
    grid : ndarray
        The board to evaluate.
    depth : int
        Remaining layers; the board is evaluated statically at 0.
    maximizing : bool
        True for a player layer, False for a spawn layer.
    current_score : int
        Game score reached with this board.
    config : ExpectimaxConfig
        Search parameters.

    Returns
    -------
    BoardEvaluation
        The evaluation backed up to this board.

    Notes
    -----
    Player layer ties keep the first direction in canonical order. The spawn
    layer only examines the first ``config.sample_cells`` empty cells in
    row-major order.
    """
    if depth == 0 or is_done(grid):
        return evaluate(grid, current_score, config.weights)

    if maximizing:
        best = None
        for direction in legal_actions(grid):
            result = move_grid(grid, direction)
            candidate = expectimax(result.grid, depth - 1, False, current_score + result.points, config)
            if best is None or candidate.score > best.score:
                best = candidate
        return best

    cells = empty_cells(grid)[: config.sample_cells]
    if not cells:
        return evaluate(grid, current_score, config.weights)

    worst = None
    for cell in cells:
        outcomes = {}
        for value in TILE_SPAWN_PROBS:
            spawned = grid.copy()
            spawned[cell] = value
            outcomes[value] = expectimax(spawned, depth - 1, True, current_score, config)

        weighted = replace(
            outcomes[2], score=sum(TILE_SPAWN_PROBS[value] * outcomes[value].score for value in TILE_SPAWN_PROBS)
        )
        if worst is None or weighted.score < worst.score:
            worst = weighted
    return worst


def analyze_move(
    state: GameState, direction: Direction, config: ExpectimaxConfig, before: BoardEvaluation | None = None
) -> MoveScore | None:
    """
    Search one root move.

    Parameters
    ----------
    state : GameState
        The current game.
    direction : Direction
        The root move.
    config : ExpectimaxConfig
        Search parameters.
    before : BoardEvaluation, optional
        Evaluation of the current board, computed when omitted.

    Returns
    -------
    MoveScore or None
        The search result, ``None`` when the move leaves the board unchanged.
    """
    result = move_grid(state.grid, direction)
    if not result.has_changed:
        return None

    if before is None:
        before = evaluate(state.grid, state.score, config.weights)

    evaluation = expectimax(result.grid, config.max_depth - 1, False, state.score + result.points, config)
    merges = merge_results(result.moves)
    return MoveScore(
        direction=Direction(direction),
        score=evaluation.score,
        evaluation=evaluation,
        grid=result.grid,
        points=result.points,
        merges=merges,
        reasoning=generate_reasoning(before, evaluation, merges),
    )


def analyze_all_moves(state: GameState, config: ExpectimaxConfig) -> list[MoveScore]:
    """
    Search every legal root move.

    Parameters
    ----------
    state : GameState
        The current game.
    config : ExpectimaxConfig
        Search parameters.

    Returns
    -------
    list[MoveScore]
        One result per legal move, in canonical order.
    """
    before = evaluate(state.grid, state.score, config.weights)
    analysis = [analyze_move(state, direction, config, before) for direction in legal_actions(state.grid)]
    logger.debug(
        'Expectimax depth %d: %s',
        config.max_depth,
        ', '.join(f'{item.direction.value}={item.score:.2f}' for item in analysis),
    )
    return analysis


def best_move(analysis: list[MoveScore]) -> MoveScore | None:
    """Highest scoring result; the first one wins ties."""
    best = None
    for item in analysis:
        if best is None or item.score > best.score:
            best = item
    return best
