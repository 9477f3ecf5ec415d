"""
Win-probability strategy: rate moves by their estimated chance of reaching the winning tile.
"""

from numpy import count_nonzero, ndarray

from tilegame.core.gameboard import WIN_TILE, make_move, move_grid
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState, MoveResult

from .base import Strategy
from .patterns import count_tiles, max_in_corner, monotonic_lines

# ##>: Weights of the look-ahead, rollout and heuristic estimates.
LOOK_AHEAD_WEIGHT = 0.4
ROLLOUT_WEIGHT = 0.4
HEURISTIC_WEIGHT = 0.2


class WinProbabilityStrategy(Strategy):
    """
    Play the move with the best estimated probability of eventually winning.

    A move winning at once scores 1. Otherwise the estimate blends a spawn-free
    look-ahead, a few random rollouts and a board heuristic. The estimates of the
    last state are kept so that explaining the chosen move reuses them.

    Parameters
    ----------
    win_tile : int, optional
        The winning tile value (default is 2048).
    rng : RandomGenerator, optional
        Source of randomness for the rollouts.
    look_ahead_depth : int, optional
        Depth of the look-ahead (default is 1).
    simulation_runs : int, optional
        Random rollouts per move (default is 5).
    rollout_moves : int, optional
        Move limit of one rollout (default is 200).
    """

    name = 'Win Probability'
    description = 'Evaluates each move on its probability of eventually winning'

    def __init__(
        self,
        win_tile: int = WIN_TILE,
        rng: RandomGenerator | None = None,
        look_ahead_depth: int = 1,
        simulation_runs: int = 5,
        rollout_moves: int = 200,
    ):
        if look_ahead_depth < 0 or simulation_runs <= 0 or rollout_moves <= 0:
            raise ValueError('look_ahead_depth must be non-negative, simulation_runs and rollout_moves positive')

        self.win_tile = win_tile
        self.rng = rng if rng is not None else make_generator()
        self.look_ahead_depth = look_ahead_depth
        self.simulation_runs = simulation_runs
        self.rollout_moves = rollout_moves
        self._cache: tuple[GameState, dict[Direction, float]] | None = None

    def organization(self, grid: ndarray) -> float:
        """Monotonic lines and the max tile in a corner, scored in ``[0, 1]``."""
        score = monotonic_lines(grid) * 0.25 + (0.5 if max_in_corner(grid) else 0.0)
        return min(score, 1.0)

    def heuristic_probability(self, grid: ndarray) -> float:
        """
        Estimate the chance of winning from the tiles already built.

        Parameters
        ----------
        grid : ndarray
            The board.

        Returns
        -------
        float
            A base chance per max tile, raised by pairs of big tiles, scaled by the
            free cells and by how organized the board is.
        """
        half, quarter, eighth = self.win_tile // 2, self.win_tile // 4, self.win_tile // 8
        highest = int(grid.max())

        if highest >= self.win_tile:
            probability = 1.0
        elif highest >= half:
            probability = 0.7
            probability += 0.2 if count_tiles(grid, half) >= 2 else 0.0
            probability += 0.1 if count_tiles(grid, quarter) >= 2 else 0.0
        elif highest >= quarter:
            probability = 0.3
            probability += 0.2 if count_tiles(grid, quarter) >= 2 else 0.0
            probability += 0.1 if count_tiles(grid, eighth) >= 4 else 0.0
        elif highest >= eighth:
            probability = 0.1 + (0.05 if count_tiles(grid, eighth) >= 2 else 0.0)
        else:
            probability = 0.01

        free = int(count_nonzero(grid == 0))
        if free <= 2:
            probability *= 0.2
        elif free <= 4:
            probability *= 0.5
        elif free >= 8:
            probability *= 1.3

        probability *= 0.5 + self.organization(grid) * 0.5
        return min(probability, 1.0)

    def look_ahead(self, grid: ndarray, depth: int) -> float:
        """Average win estimate over every legal move, ``depth`` moves deep and without spawns."""
        if grid.max() >= self.win_tile:
            return 1.0
        if depth == 0:
            return self.heuristic_probability(grid)

        moves = legal_actions(grid)
        if not moves:
            return 0.0
        return sum(self.look_ahead(move_grid(grid, direction).grid, depth - 1) for direction in moves) / len(moves)

    def rollout(self, state: GameState) -> bool:
        """Play random moves from ``state``; True if the winning tile shows up."""
        for _ in range(self.rollout_moves):
            if state.max_tile >= self.win_tile:
                break
            moves = legal_actions(state.grid)
            if not moves:
                break
            state = make_move(state, moves[int(self.rng.next() * len(moves))], self.rng, self.win_tile)
        return state.max_tile >= self.win_tile

    def rollout_probability(self, grid: ndarray) -> float:
        """Share of random rollouts reaching the winning tile."""
        state = GameState(grid=grid)
        return sum(self.rollout(state) for _ in range(self.simulation_runs)) / self.simulation_runs

    def win_probability(self, result: MoveResult) -> float:
        """
        Blend the estimates of a move.

        Parameters
        ----------
        result : MoveResult
            The move, before the spawn.

        Returns
        -------
        float
            1 for a winning move, else the weighted blend of the three estimates.
        """
        if result.grid.max() >= self.win_tile:
            return 1.0
        return (
            self.look_ahead(result.grid, self.look_ahead_depth) * LOOK_AHEAD_WEIGHT
            + self.rollout_probability(result.grid) * ROLLOUT_WEIGHT
            + self.heuristic_probability(result.grid) * HEURISTIC_WEIGHT
        )

    def probabilities(self, state: GameState) -> dict[Direction, float]:
        """
        Estimate every legal move of a state, reusing the estimates of the last state.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        dict[Direction, float]
            Win probability per legal move, in canonical order.
        """
        if self._cache is not None and self._cache[0] is state:
            return self._cache[1]

        estimates = {
            direction: self.win_probability(move_grid(state.grid, direction)) for direction in legal_actions(state.grid)
        }
        self._cache = (state, estimates)
        return estimates

    def get_next_move(self, state: GameState) -> Direction | None:
        best_move, best_probability = None, -1.0
        for direction, probability in self.probabilities(state).items():
            if probability > best_probability:
                best_move, best_probability = direction, probability
        return best_move

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        probability = self.probabilities(state).get(direction)
        if probability is None:
            probability = self.win_probability(move_grid(state.grid, direction))
        return f'{direction.value.upper()}: {probability * 100:.1f}% chance of eventually reaching {self.win_tile}'

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        return self.probabilities(state)[direction]

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        highest = int(result.grid.max())
        half, quarter = self.win_tile // 2, self.win_tile // 4
        if highest >= half:
            return f'Endgame positioning: focus on merging {half} tiles to create {self.win_tile}'
        if highest >= quarter:
            return f'Build to {half}: merge {quarter}s while maintaining board organization'
        return 'Foundation building: create larger tiles while keeping options open'
