# -*- coding: utf-8 -*-
"""
Monte Carlo Tree Search player behind the common strategy contract.
"""
from strategies.base import Strategy
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator, make_generator
from tilegame.core.types import Direction, GameState, MoveResult

from .config import MonteCarloConfig
from .node import Node
from .search import monte_carlo_search, search_target, uct_select


class MonteCarloStrategy(Strategy):
    """
    An agent that uses Monte Carlo Tree Search to play.

    The agent grows a search tree from the current state with random rollouts and
    plays the root child with the highest win rate. The tree of the last state
    searched is kept so that explaining the chosen move reuses it.

    Parameters
    ----------
    config : MonteCarloConfig, optional
        Search parameters (default values when omitted).
    rng : RandomGenerator, optional
        Source of randomness for the spawns and the rollouts.
    """

    name = 'Monte Carlo Tree Search'
    description = 'Uses MCTS to find actual win paths, not just good scores'

    def __init__(self, config: MonteCarloConfig | None = None, rng: RandomGenerator | None = None):
        self.config = config if config is not None else MonteCarloConfig()
        self.rng = rng if rng is not None else make_generator()
        self._last: tuple[GameState, Node] | None = None

    def search(self, state: GameState) -> Node:
        """
        Build (or reuse) the search tree of a state.

        Parameters
        ----------
        state : GameState
            The current game.

        Returns
        -------
        Node
            The root of the search tree.
        """
        if self._last is not None and self._last[0] is state:
            return self._last[1]

        root = monte_carlo_search(state, self.config, self.rng)
        self._last = (state, root)
        return root

    @classmethod
    def _best_child(cls, root: Node) -> Node:
        """
        Choose the best child based on win rate.

        Parameters
        ----------
        root : Node
            The root node of the search tree.

        Returns
        -------
        Node
            The child with the highest win rate, the first one on ties.
        """
        return uct_select(root, 0.0)

    def get_next_move(self, state: GameState) -> Direction | None:
        legal = legal_actions(state.grid)
        if len(legal) <= 1:
            return legal[0] if legal else None

        return self._best_child(self.search(state)).move

    def _child(self, state: GameState, direction: Direction) -> Node | None:
        """Searched child of ``state`` for ``direction``, if any."""
        root = self.search(state)
        return next((child for child in root.children if child.move == direction), None)

    def explain_move(self, direction: Direction, state: GameState) -> str:
        direction = Direction(direction)
        target = search_target(state, self.config.win_tile)
        explanation = f'{direction.value.upper()}: MCTS found this path most likely to reach {target}'

        if len(legal_actions(state.grid)) > 1:
            child = self._child(state, direction)
            if child is not None:
                explanation += f' (win rate {child.win_rate:.2f} over {child.visits} rollouts)'
        return explanation

    def score_move(self, state: GameState, direction: Direction, result: MoveResult) -> float:
        child = self._child(state, direction)
        return child.win_rate if child is not None else 0.0

    def reason_move(self, state: GameState, direction: Direction, result: MoveResult) -> str:
        return 'MCTS evaluation - simulating random games to find win probability'
