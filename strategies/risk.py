"""
Risk-taking strategy: trade average score for a better shot at the winning tile.
"""

from enum import Enum

from numpy import count_nonzero, ndarray

from tilegame.core.gameboard import WIN_TILE, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy
from .patterns import can_merge_value, count_tiles

# ##>: Risk tolerance per situation, 0 is conservative and 1 goes for broke.
DEFAULT_RISK_TOLERANCE = 0.7
ENDGAME_RISK_TOLERANCE = 0.9
LATE_GAME_RISK_TOLERANCE = 0.8
DESPERATE_RISK_TOLERANCE = 1.0


class Risk(str, Enum):
    """Risk level of a move."""

    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


def empty_count(grid: ndarray) -> int:
    """Number of empty cells."""
    return int(count_nonzero(grid == 0))


def risk_level(before: ndarray, after: ndarray) -> Risk:
    """
    Rate how much a board change endangers the game.

    Parameters
    ----------
    before, after : ndarray
        The board before and after the change.

    Returns
    -------
    Risk
        High when free cells shrink by two without a bigger max tile or two cells
        at most are left free, medium when free cells shrink or four at most are
        left, low otherwise.
    """
    change = empty_count(after) - empty_count(before)
    free = empty_count(after)

    if change <= -2 and after.max() == before.max():
        return Risk.HIGH
    if free <= 2:
        return Risk.HIGH
    if change <= -1 or free <= 4:
        return Risk.MEDIUM
    return Risk.LOW


class RiskTakingStrategy(Strategy):
    """
    Favor moves with a high potential of reaching the winning tile, accepting risk.

    The tolerance rises with the max tile, and goes all in when the board is almost
    full.

    Parameters
    ----------
    risk_tolerance : float, optional
        Tolerance of the early game, between 0 and 1 (default is 0.7).
    win_tile : int, optional
        The winning tile value (default is 2048).
    """

    name = 'Risk Taker'
    description = 'Willing to sacrifice average score for win probability'

    def __init__(self, risk_tolerance: float = DEFAULT_RISK_TOLERANCE, win_tile: int = WIN_TILE):
        if not 0.0 <= risk_tolerance <= 1.0:
            raise ValueError(f'risk_tolerance must be within [0, 1], got {risk_tolerance}')
        self.risk_tolerance = risk_tolerance
        self.win_tile = win_tile

    def tolerance(self, state: GameState) -> float:
        """Risk tolerance adapted to the situation of ``state``."""
        highest = state.max_tile
        if highest >= self.win_tile // 2:
            return ENDGAME_RISK_TOLERANCE
        if highest >= self.win_tile // 4:
            return LATE_GAME_RISK_TOLERANCE
        if empty_count(state.grid) <= 4:
            return DESPERATE_RISK_TOLERANCE
        return self.risk_tolerance

    def could_reach_win(self, grid: ndarray) -> bool:
        """Whether two halves of the winning tile can meet, or two quarters next to a half."""
        half, quarter = self.win_tile // 2, self.win_tile // 4
        halves = count_tiles(grid, half)
        if halves >= 2:
            return can_merge_value(grid, half)
        if halves == 1 and count_tiles(grid, quarter) >= 2:
            return can_merge_value(grid, quarter)
        return False

    def win_potential(self, grid: ndarray) -> float:
        """
        Rough chance of winning from a board.

        Parameters
        ----------
        grid : ndarray
            The board.

        Returns
        -------
        float
            A value in ``[0, 1]`` growing with the max tile and the free cells.
        """
        highest = int(grid.max())
        if highest >= self.win_tile // 2:
            potential = 0.8
        elif highest >= self.win_tile // 4:
            potential = 0.4
        elif highest >= self.win_tile // 8:
            potential = 0.2
        else:
            potential = 0.05

        free = empty_count(grid)
        if free <= 2:
            potential *= 0.3
        elif free >= 6:
            potential *= 1.5

        if self.could_reach_win(grid):
            potential = 0.9
        return min(potential, 1.0)

    def risky_score(self, state: GameState, result: MoveResult, tolerance: float) -> float:
        """
        Reward of a move weighed by the risk it takes.

        Parameters
        ----------
        state : GameState
            The current game.
        result : MoveResult
            The move, before the spawn.
        tolerance : float
            The risk tolerance to apply.

        Returns
        -------
        float
            Merge points plus weighted win potential. A high-risk move is rewarded
            when its potential is worth it and penalized otherwise.
        """
        potential = self.win_potential(result.grid)
        score = result.points + potential * 1000.0

        risk = risk_level(state.grid, result.grid)
        if risk is Risk.HIGH:
            score += 2000.0 * tolerance if potential > 0.3 else -1000.0 * (1.0 - tolerance)
        elif risk is Risk.MEDIUM:
            score += potential * 500.0 * tolerance

        if empty_count(result.grid) <= 3:
            score += 500.0 * tolerance

        if result.grid.max() >= self.win_tile // 2 and self.could_reach_win(result.grid):
            score += 5000.0
        return score

    def potential_label(self, grid: ndarray) -> Risk:
        """Win potential of a board as a level."""
        potential = self.win_potential(grid)
        if potential >= 0.7:
            return Risk.HIGH
        if potential >= 0.3:
            return Risk.MEDIUM
        return Risk.LOW

    def get_next_move(self, state: GameState) -> Direction | None:
        tolerance = self.tolerance(state)
        best_move, best_score = None, float('-inf')
        for direction in legal_actions(state.grid):
            score = self.risky_score(state, move_grid(state.grid, direction), tolerance)
            if score > best_score:
                best_move, best_score = direction, score
        return best_move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        move = direction.value.upper()
        risk = risk_level(state.grid, move_grid(state.grid, direction).grid)

        if state.max_tile >= self.win_tile // 2:
            return f'{move}: HIGH RISK endgame move - going for {self.win_tile}! ({risk.value})'
        if risk is Risk.HIGH:
            return f'{move}: RISKY move that could pay off big or fail spectacularly'
        if risk is Risk.MEDIUM:
            return f'{move}: Calculated risk - potential for major progress'
        return f'{move}: Conservative choice - building for future risks'

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        return self.risky_score(state, result, self.tolerance(state))

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        risk = risk_level(state.grid, result.grid)
        return f'Risk: {risk.value}, Win potential: {self.potential_label(result.grid).value}'
