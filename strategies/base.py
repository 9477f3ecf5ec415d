"""
Common contract of every move-choosing strategy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import NamedTuple

from tilegame.core.gameboard import describe_position, max_tile_position, merge_results, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult


@dataclass(frozen=True)
class MoveEvaluation:
    """
    Summary of one candidate move.

    Attributes
    ----------
    merges : int
        Number of merges the move performs.
    empty_after : int
        Empty cells right after the move, before the spawn.
    max_tile_position : str
        Where the max tile sits after the move (see ``describe_position``).
    score : float
        Strategy-specific desirability, higher is better.
    reasoning : str
        Short human-readable justification.
    """

    merges: int
    empty_after: int
    max_tile_position: str
    score: float
    reasoning: str


class MoveEvaluations(NamedTuple):
    """Legal moves of a state and the evaluation of each of them."""

    valid_moves: list[Direction]
    evaluations: dict[Direction, MoveEvaluation]


def describe_merges(moves_result: MoveResult) -> str:
    """
    Format the merges of a move as ``2+2=4, 8+8=16``.

    Parameters
    ----------
    moves_result : MoveResult
        Result of ``move_grid``.

    Returns
    -------
    str
        Comma separated merges, empty when nothing merges.
    """
    return ', '.join(f'{value // 2}+{value // 2}={value}' for value in merge_results(moves_result.moves))


class Strategy(ABC):
    """
    A policy choosing the next move of a game.

    Subclasses must return ``None`` exactly when no move is available and must never
    return a direction that leaves the grid unchanged.
    """

    name: str = 'Strategy'
    description: str = ''

    @abstractmethod
    def get_next_move(self, state: GameState) -> Direction | None:
        """Choose the next move, ``None`` when the game cannot continue."""

    @abstractmethod
    def explain_move(self, direction: Direction, state: GameState) -> str:
        """Explain in one sentence why ``direction`` is played in ``state``."""

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        """Desirability of a legal move reported by ``evaluate_all_moves``; the merge points by default."""
        return float(result.points)

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        """Justification of a legal move reported by ``evaluate_all_moves``."""
        merges = len(merge_results(result.moves))
        if merges:
            return f'Creates {merges} merge{"s" if merges > 1 else ""}'
        return 'Valid move'

    def evaluate_all_moves(self, state: GameState) -> MoveEvaluations:
        """
        Evaluate every legal move of a state.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        MoveEvaluations
            The legal moves in canonical order and one ``MoveEvaluation`` per move.
        """
        valid_moves = legal_actions(state.grid)
        evaluations = {}
        for direction in valid_moves:
            result = move_grid(state.grid, direction)
            evaluations[direction] = MoveEvaluation(
                merges=len(merge_results(result.moves)),
                empty_after=int((result.grid == 0).sum()),
                max_tile_position=describe_position(max_tile_position(result.grid), state.size),
                score=self.score_move(state, direction, result),
                reasoning=self.reason_move(state, direction, result),
            )
        return MoveEvaluations(valid_moves, evaluations)

    def __repr__(self) -> str:
        return f'{type(self).__name__}(name={self.name!r})'
