"""Headless game session for fast simulations and strategy evaluation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from numpy import ndarray

from tilegame.core.gameboard import WIN_TILE, make_move, new_game
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState

if TYPE_CHECKING:
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedMove:
    """One move of a recorded game."""

    move_number: int
    direction: Direction
    grid_before: ndarray
    grid_after: ndarray
    score_increase: int
    total_score: int
    reasoning: str | None = None


@dataclass
class GameRecording:
    """Moves of a game, in order, with the seed needed to replay it."""

    strategy: str
    seed: int | None = None
    moves: list[RecordedMove] = field(default_factory=list)


@dataclass(frozen=True)
class SimulationResult:
    """Summary of a finished (or interrupted) game."""

    score: int
    moves: int
    max_tile: int
    is_win: bool
    is_game_over: bool
    final_grid: ndarray
    seed: int | None
    duration: float
    recording: GameRecording | None = None


class HeadlessGame:
    """
    Game session without any rendering.

    This class owns the sequence of ``GameState`` snapshots of one game and the
    random generator feeding its tile spawns, so that a seeded session is fully
    reproducible.
    """

    def __init__(
        self,
        size: int = 4,
        seed: int | None = None,
        win_tile: int = WIN_TILE,
        rng: RandomGenerator | None = None,
    ):
        """
        Initialize the session.

        Parameters
        ----------
        size : int, optional
            The size of the square grid (default is 4).
        seed : int, optional
            Seed of the default generator; ignored when ``rng`` is given.
        win_tile : int, optional
            The winning tile value (default is 2048).
        rng : RandomGenerator, optional
            Explicit generator for tile spawns.
        """
        self.size = size
        self.seed = seed
        self.win_tile = win_tile
        self._rng = rng if rng is not None else make_generator(seed)
        self._recording: GameRecording | None = None
        self.move_count = 0
        self.state = new_game(size, self._rng)

    def reset(self, seed: int | None = None) -> GameState:
        """
        Start a new game with two random tiles.

        Parameters
        ----------
        seed : int, optional
            Seed of the new spawn generator; an unseeded generator when omitted.

        Returns
        -------
        GameState
            The initial state of the new game.
        """
        self.seed = seed
        self._rng = make_generator(seed)
        self._recording = None
        self.move_count = 0
        self.state = new_game(self.size, self._rng)
        return self.state

    @property
    def is_finished(self) -> bool:
        """True when no move is available."""
        return self.state.is_game_over

    @property
    def recording(self) -> GameRecording | None:
        """The recording in progress, if any."""
        return self._recording

    def valid_moves(self) -> list[Direction]:
        """Legal directions for the current grid."""
        return legal_actions(self.state.grid)

    def start_recording(self, strategy: str) -> None:
        """
        Start recording the moves played from now on.

        Parameters
        ----------
        strategy : str
            Name of the strategy playing the game.
        """
        self._recording = GameRecording(strategy=strategy, seed=self.seed)

    def stop_recording(self) -> GameRecording | None:
        """Stop recording and return what was recorded."""
        recording, self._recording = self._recording, None
        return recording

    def step(self, direction: Direction, reasoning: str | None = None) -> bool:
        """
        Play one move.

        Parameters
        ----------
        direction : Direction
            The move to play.
        reasoning : str, optional
            Explanation stored with the move when recording.

        Returns
        -------
        bool
            True if the move changed the grid, False for a no-op or a finished game.
        """
        if self.state.is_game_over:
            return False

        before = self.state
        after = make_move(before, direction, self._rng, self.win_tile)
        if after is before:
            return False

        self.state = after
        self.move_count += 1

        if self._recording is not None:
            self._recording.moves.append(
                RecordedMove(
                    move_number=self.move_count,
                    direction=Direction(direction),
                    grid_before=before.grid,
                    grid_after=after.grid,
                    score_increase=after.score - before.score,
                    total_score=after.score,
                    reasoning=reasoning,
                )
            )
        return True

    def play(self, strategy: Strategy, max_moves: int | None = None, explain: bool = False) -> SimulationResult:
        """
        Let a strategy play until the game ends.

        Parameters
        ----------
        strategy : Strategy
            The move-choosing strategy.
        max_moves : int, optional
            Stop after this many moves even if the game is not over.
        explain : bool, optional
            Store the strategy's explanation with each recorded move (default is False).

        Returns
        -------
        SimulationResult
            Summary of the game.
        """
        start = time.perf_counter()

        while not self.state.is_game_over and (max_moves is None or self.move_count < max_moves):
            direction = strategy.get_next_move(self.state)
            if direction is None:
                break

            reasoning = strategy.explain_move(direction, self.state) if explain else None
            if not self.step(direction, reasoning):
                raise ValueError(f'{strategy.name} returned the illegal move {direction!r}')

        result = self.result(duration=time.perf_counter() - start)
        logger.info(
            'Game finished: strategy=%s score=%d moves=%d max_tile=%d win=%s',
            strategy.name,
            result.score,
            result.moves,
            result.max_tile,
            result.is_win,
        )
        return result

    def result(self, duration: float = 0.0) -> SimulationResult:
        """
        Summarize the current game.

        Parameters
        ----------
        duration : float, optional
            Wall-clock time spent playing, in seconds.

        Returns
        -------
        SimulationResult
            Summary of the game so far.
        """
        state: GameState = self.state
        return SimulationResult(
            score=state.score,
            moves=self.move_count,
            max_tile=state.max_tile,
            is_win=state.has_won,
            is_game_over=state.is_game_over,
            final_grid=state.grid,
            seed=self.seed,
            duration=duration,
            recording=self._recording,
        )

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self.state.grid.tolist():
            print(' \t'.join(map(str, row)))
