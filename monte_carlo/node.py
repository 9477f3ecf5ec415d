# -*- coding: utf-8 -*-
"""
Monte Carlo Tree Search node.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from math import inf, log, sqrt
from weakref import ReferenceType, ref

from tilegame.core.gameboard import make_move
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator
from tilegame.core.types import Direction, GameState


@dataclass(kw_only=True, eq=False)
class Node:
    """
    A game state of the search tree.

    Children are owned by their parent; the parent is only held through a weak
    reference, so dropping the root releases the whole tree.

    Attributes
    ----------
    state : GameState
        The game state of this node.
    target : int
        Tile counted as a win for this search.
    move : Direction, optional
        The move leading from the parent to this node.
    parent_ref : ReferenceType, optional
        Weak reference to the parent node, ``None`` for the root.
    children : list[Node]
        Expanded children, in expansion order.
    visits : int
        Number of rollouts back-propagated through this node.
    wins : float
        Accumulated win credit of those rollouts.
    score : float
        Accumulated final game scores of those rollouts.
    untried_moves : list[Direction]
        Legal moves not expanded yet, in canonical order.
    is_terminal : bool
        True when the node is won or has no legal move.
    has_won : bool
        True when the target tile is on the board.
    """

    state: GameState
    target: int
    move: Direction | None = None
    parent_ref: ReferenceType[Node] | None = None
    children: list[Node] = field(default_factory=list)
    visits: int = 0
    wins: float = 0.0
    score: float = 0.0
    untried_moves: list[Direction] = field(default_factory=list)
    is_terminal: bool = False
    has_won: bool = False

    def __post_init__(self):
        """Derive the legal moves and the terminal flags from the state."""
        self.has_won = self.state.max_tile >= self.target
        self.untried_moves = legal_actions(self.state.grid)
        self.is_terminal = self.has_won or not self.untried_moves

    @property
    def parent(self) -> Node | None:
        """The parent node, ``None`` for the root or once the parent is gone."""
        return self.parent_ref() if self.parent_ref is not None else None

    @property
    def win_rate(self) -> float:
        """Average win credit per visit, 0 for an unvisited node."""
        return self.wins / self.visits if self.visits else 0.0

    def fully_expanded(self) -> bool:
        """Check if every legal move has a child."""
        return not self.untried_moves

    def ucb1(self, parent_visits: int, exploration_weight: float) -> float:
        """
        Upper confidence bound of this node seen from its parent.

        Parameters
        ----------
        parent_visits : int
            Visits of the parent node.
        exploration_weight : float
            The exploration constant.

        Returns
        -------
        float
            ``wins / visits + c * sqrt(ln(parent_visits) / visits)``, infinite for an
            unvisited node.
        """
        if self.visits == 0:
            return inf
        return self.win_rate + exploration_weight * sqrt(log(parent_visits) / self.visits)

    def add_child(self, rng: RandomGenerator) -> Node:
        """
        Expand the last untried move.

        Parameters
        ----------
        rng : RandomGenerator
            Source of randomness for the tile spawned by the move.

        Returns
        -------
        Node
            The newly created child.

        Raises
        ------
        ValueError
            If every move has been tried. Node should be fully expanded.
        """
        if not self.untried_moves:
            raise ValueError('All moves have been tried. Node should be fully expanded.')

        move = self.untried_moves.pop()
        child_state = make_move(self.state, move, rng, self.target)
        child = Node(state=child_state, target=self.target, move=move, parent_ref=ref(self))
        self.children.append(child)
        return child

    def update(self, credit: float, score: float) -> None:
        """
        Update node statistics after a rollout.

        Parameters
        ----------
        credit : float
            Win credit of the rollout.
        score : float
            Final game score of the rollout.
        """
        self.visits += 1
        self.wins += credit
        self.score += score
