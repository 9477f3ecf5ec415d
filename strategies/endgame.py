"""
Endgame strategy: switch scoring by game phase, from foundation to the final merge.
"""

from enum import Enum
from itertools import combinations

from numpy import count_nonzero

from tilegame.core.gameboard import WIN_TILE, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy
from .patterns import (
    can_merge_value,
    has_path,
    is_corner,
    is_edge,
    max_in_corner,
    meeting_pairs,
    monotonic_lines,
    tile_positions,
)

# ##>: Empty cells at or below which an early game plays for survival.
SURVIVAL_EMPTY_CELLS = 6


class Phase(str, Enum):
    """Game phase, decided on the board before the move."""

    ENDGAME = 'endgame'
    LATE_GAME = 'late game'
    SURVIVAL = 'survival'
    FOUNDATION = 'foundation'


class EndgameStrategy(Strategy):
    """
    Score moves differently depending on how close the game is to the winning tile.

    The endgame starts once half the winning tile is on the board, the late game at
    a quarter of it. Earlier, a crowded board is played for survival and an open one
    for building a foundation.

    Parameters
    ----------
    win_tile : int, optional
        The winning tile value (default is 2048).
    """

    name = 'Endgame Specialist'
    description = 'Specialized for the final transitions and winning positions'

    def __init__(self, win_tile: int = WIN_TILE):
        self.win_tile = win_tile

    def phase(self, state: GameState) -> Phase:
        """Phase of the game in ``state``."""
        highest = state.max_tile
        if highest >= self.win_tile // 2:
            return Phase.ENDGAME
        if highest >= self.win_tile // 4:
            return Phase.LATE_GAME
        if count_nonzero(state.grid == 0) <= SURVIVAL_EMPTY_CELLS:
            return Phase.SURVIVAL
        return Phase.FOUNDATION

    def endgame_score(self, result: MoveResult) -> float:
        """
        Score a move bringing the two halves of the winning tile together.

        Parameters
        ----------
        result : MoveResult
            The move, before the spawn.

        Returns
        -------
        float
            Large bonus for halves able to merge at once, bonuses for halves on the
            border and for quarters able to merge, a penalty per pair of high tiles
            locked apart, and a bonus for room to maneuver.
        """
        grid, size = result.grid, result.grid.shape[0]
        half, quarter = self.win_tile // 2, self.win_tile // 4
        score = 0.0

        if can_merge_value(grid, half):
            score += 10000.0

        halves = tile_positions(grid, half)
        if len(halves) >= 2:
            for position in halves:
                if is_corner(position, size):
                    score += 200.0
                elif is_edge(position, size):
                    score += 100.0
            score += meeting_pairs(grid, half) * 500.0

        if len(tile_positions(grid, quarter)) >= 2:
            score += meeting_pairs(grid, quarter) * 300.0

        # ##: Pairs of high tiles aligned on a blocked line.
        high = [position for value in (half // 4, quarter, half) for position in tile_positions(grid, value)]
        blocked = sum(not has_path(grid, first, second) for first, second in combinations(high, 2))
        score -= blocked * 1000.0

        empty = int(count_nonzero(grid == 0))
        score += empty * 50.0 if empty >= 2 else -500.0
        return score

    @staticmethod
    def late_game_score(result: MoveResult) -> float:
        """Merge points, max tile anchored in a corner, monotonic lines and free cells."""
        positioning = (50 if max_in_corner(result.grid) else 0) + monotonic_lines(result.grid) * 10
        return result.points * 50.0 + positioning * 10.0 + int(count_nonzero(result.grid == 0)) * 20.0

    @staticmethod
    def survival_score(result: MoveResult) -> float:
        """Free cells left by the move."""
        return float(count_nonzero(result.grid == 0))

    @staticmethod
    def foundation_score(direction: Direction, result: MoveResult) -> float:
        """Merge points, with a slight preference for left and down."""
        return result.points * 100.0 + (10.0 if direction in (Direction.LEFT, Direction.DOWN) else 0.0)

    def phase_score(self, phase: Phase, direction: Direction, result: MoveResult) -> float:
        """Score of a move under the scoring of ``phase``."""
        if phase is Phase.ENDGAME:
            return self.endgame_score(result)
        if phase is Phase.LATE_GAME:
            return self.late_game_score(result)
        if phase is Phase.SURVIVAL:
            return self.survival_score(result)
        return self.foundation_score(direction, result)

    def get_next_move(self, state: GameState) -> Direction | None:
        phase = self.phase(state)
        best_move, best_score = None, float('-inf')
        for direction in legal_actions(state.grid):
            score = self.phase_score(phase, direction, move_grid(state.grid, direction))
            if score > best_score:
                best_move, best_score = direction, score
        return best_move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        move = Direction(direction).value.upper()
        phase = self.phase(state)
        if phase is Phase.ENDGAME:
            return f'{move}: ENDGAME - Setting up for {self.win_tile} creation'
        if phase is Phase.LATE_GAME:
            return f'{move}: LATE GAME - Building toward {self.win_tile // 2}'
        if phase is Phase.SURVIVAL:
            return f'{move}: SURVIVAL - Keeping game alive'
        return f'{move}: FOUNDATION - Building strong base'

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        return self.phase_score(self.phase(state), direction, result)

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        phase = self.phase(state)
        if phase is Phase.ENDGAME:
            return f'Endgame positioning for {self.win_tile} creation (win probability 0.8, high risk)'
        if phase is Phase.LATE_GAME:
            return f'Building toward {self.win_tile // 2} tile (win probability 0.4, medium risk)'
        return 'Foundation building (win probability 0.1, low risk)'
