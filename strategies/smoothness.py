"""
Smoothness strategy: one-ply search over a smoothness-first heuristic.
"""

from heuristics.evaluator import BoardEvaluation, evaluate
from heuristics.weights import SMOOTHNESS_WEIGHTS, HeuristicWeights
from tilegame.core.gameboard import move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy

# ##>: Smoothness penalty (sum of log2 gaps) still counted as a smooth board.
SMOOTH_BOARD_PENALTY = 4.0


class SmoothnessStrategy(Strategy):
    """
    Pick the move whose resulting board scores best under ``SMOOTHNESS_WEIGHTS``.

    Parameters
    ----------
    weights : HeuristicWeights, optional
        Weights of the one-ply evaluation (default is ``SMOOTHNESS_WEIGHTS``).
    """

    name = 'Smoothness Master'
    description = 'Keep adjacent tiles close in value'

    def __init__(self, weights: HeuristicWeights = SMOOTHNESS_WEIGHTS):
        self.weights = weights

    def evaluate_move(self, state: GameState, direction: Direction) -> BoardEvaluation:
        """Evaluate the board right after ``direction``, before the spawn."""
        result = move_grid(state.grid, direction)
        return evaluate(result.grid, state.score + result.points, self.weights)

    def get_next_move(self, state: GameState) -> Direction | None:
        best_move, best_score = None, float('-inf')
        for direction in legal_actions(state.grid):
            score = self.evaluate_move(state, direction).score
            if score > best_score:
                best_move, best_score = direction, score
        return best_move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        evaluation = self.evaluate_move(state, direction)

        reasons = []
        if evaluation.smoothness > -SMOOTH_BOARD_PENALTY:
            reasons.append(f'smooth board ({evaluation.smoothness:.1f})')
        if evaluation.monotonicity > 0:
            reasons.append(f'good order ({evaluation.monotonicity:.1f})')
        if evaluation.empty_cells > 0:
            reasons.append(f'{evaluation.empty_cells} empty spaces')
        if evaluation.corner_bonus > 0:
            reasons.append('corner positioning')

        main_reason = reasons[0] if reasons else 'best available option'
        return f'{direction.value.upper()}: Prioritizing {main_reason} (total: {evaluation.score:.1f})'

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        return self.evaluate_move(state, direction).score

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        evaluation = self.evaluate_move(state, direction)
        return (
            f'Smoothness-based: smooth={evaluation.smoothness:.1f}, '
            f'mono={evaluation.monotonicity:.1f}, empty={evaluation.empty_cells}'
        )
