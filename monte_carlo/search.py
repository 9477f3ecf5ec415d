# -*- coding: utf-8 -*-
"""
Monte Carlo Tree Search (MCTS) for the tile-merging game.

This module provides the four phases of the search (selection, expansion,
random rollout and backpropagation) and the main loop chaining them. Nodes are
rated by their win rate: a rollout earns full credit for reaching the target
tile and partial credit for getting close to it.
"""
import logging
from dataclasses import dataclass

from tilegame.core.gameboard import make_move
from tilegame.core.gamemove import legal_actions
from tilegame.core.generator import RandomGenerator
from tilegame.core.types import GameState

from .config import MonteCarloConfig
from .node import Node

logger = logging.getLogger(__name__)

# ##>: Win credit of a rollout reaching the target, half of it, a quarter of it.
WIN_CREDIT = 10.0
HALF_TARGET_CREDIT = 3.0
QUARTER_TARGET_CREDIT = 1.0


@dataclass(frozen=True)
class RolloutResult:
    """Outcome of one random rollout."""

    won: bool
    score: int
    max_tile: int


def search_target(state: GameState, win_tile: int) -> int:
    """
    Tile counted as a win when searching from ``state``.

    Parameters
    ----------
    state : GameState
        The root of the search.
    win_tile : int
        The configured winning tile.

    Returns
    -------
    int
        ``win_tile`` until it is reached, then twice the current max tile.
    """
    if state.max_tile < win_tile:
        return win_tile
    return state.max_tile * 2


def uct_select(node: Node, exploration_weight: float) -> Node:
    """
    Select a child node using the UCB1 formula.

    Parameters
    ----------
    node : Node
        The parent node from which to select a child.
    exploration_weight : float
        The exploration weight in the UCB1 formula; 0 ranks children by win rate.

    Returns
    -------
    Node
        The child with the highest bound; the first child wins ties.

    Raises
    ------
    ValueError
        If the node has no children.
    """
    if not node.children:
        raise ValueError('Cannot select among the children of a leaf node.')

    best = node.children[0]
    best_value = best.ucb1(node.visits, exploration_weight)
    for child in node.children[1:]:
        value = child.ucb1(node.visits, exploration_weight)
        if value > best_value:
            best, best_value = child, value
    return best


def select(node: Node, exploration_weight: float) -> Node:
    """
    Descend from ``node`` through fully expanded, non-terminal nodes.

    Parameters
    ----------
    node : Node
        Where to start, usually the root.
    exploration_weight : float
        The exploration weight for the UCB1 calculation.

    Returns
    -------
    Node
        The first node that is terminal or still has untried moves.
    """
    while not node.is_terminal and node.fully_expanded():
        node = uct_select(node, exploration_weight)
    return node


def expand(node: Node, rng: RandomGenerator) -> Node:
    """Add a child for one untried move, or return ``node`` itself when it cannot grow."""
    if node.is_terminal or node.fully_expanded():
        return node
    return node.add_child(rng)


def simulate(node: Node, max_depth: int, rng: RandomGenerator) -> RolloutResult:
    """
    Play uniformly random legal moves from a node.

    Parameters
    ----------
    node : Node
        Where the rollout starts.
    max_depth : int
        Maximum number of moves played.
    rng : RandomGenerator
        Source of randomness for the moves and the spawns.

    Returns
    -------
    RolloutResult
        Whether the target was reached, the final score and the largest tile seen.

    Notes
    -----
    The rollout stops early on a board without legal move or holding the target tile.
    """
    state = node.state
    highest = state.max_tile

    for _ in range(max_depth):
        if highest >= node.target:
            break
        moves = legal_actions(state.grid)
        if not moves:
            break

        move = moves[int(rng.next() * len(moves))]
        state = make_move(state, move, rng, node.target)
        highest = max(highest, state.max_tile)

    return RolloutResult(won=state.max_tile >= node.target, score=state.score, max_tile=highest)


def rollout_credit(result: RolloutResult, target: int) -> float:
    """
    Win credit of a rollout.

    Parameters
    ----------
    result : RolloutResult
        The rollout outcome.
    target : int
        The tile counted as a win.

    Returns
    -------
    float
        10 for a win, 3 for reaching half the target, 1 for a quarter, 0 otherwise.
    """
    if result.won:
        return WIN_CREDIT
    if result.max_tile >= target // 2:
        return HALF_TARGET_CREDIT
    if result.max_tile >= target // 4:
        return QUARTER_TARGET_CREDIT
    return 0.0


def backpropagate(node: Node, result: RolloutResult) -> None:
    """
    Back-propagate a rollout through the tree.

    Parameters
    ----------
    node : Node
        The node the rollout started from.
    result : RolloutResult
        The rollout outcome.

    Notes
    -----
    Every node from ``node`` up to the root gains one visit, the rollout score and
    the rollout win credit.
    """
    credit = rollout_credit(result, node.target)
    while node is not None:
        node.update(credit, result.score)
        node = node.parent


def monte_carlo_search(state: GameState, config: MonteCarloConfig, rng: RandomGenerator) -> Node:
    """
    Perform Monte Carlo Tree Search on the given game state.

    Parameters
    ----------
    state : GameState
        The initial game state.
    config : MonteCarloConfig
        Search parameters.
    rng : RandomGenerator
        Source of randomness for the spawns and the rollouts.

    Returns
    -------
    Node
        The root node of the search tree.

    Notes
    -----
    The search process consists of four main steps:
    1. Selection: Traverse the tree to select a promising node.
    2. Expansion: Add a new child to the selected node.
    3. Simulation: Play a random rollout from the new node.
    4. Backpropagation: Update node statistics with the rollout outcome.
    """
    root = Node(state=state, target=search_target(state, config.win_tile))

    for _ in range(config.iterations):
        # ##: Select a node and expand.
        node = select(root, config.exploration_weight)
        node = expand(node, rng)

        # ##: Simulate and back-propagate.
        result = simulate(node, config.max_depth, rng)
        backpropagate(node, result)

    logger.debug(
        'MCTS root after %d iterations: %s',
        config.iterations,
        ', '.join(f'{child.move.value}={child.wins:.0f}/{child.visits}' for child in root.children),
    )
    return root
