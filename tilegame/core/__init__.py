# -*- coding: utf-8 -*-
"""
Core engine of the tile-merging game.

It includes the value types (directions, moves, game states), the injectable random
generators, the pure grid transitions (slide, merge, spawn, rotate) and the move
legality checks.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    WIN_TILE,
    add_random_tile,
    check_win,
    describe_position,
    empty_cells,
    make_move,
    max_tile,
    max_tile_position,
    merge_results,
    move_grid,
    new_game,
    rotate_clockwise,
    slide_line,
)
from .gamemove import can_move, is_done, legal_actions, legal_actions_mask
from .generator import LinearCongruentialGenerator, NumpyGenerator, RandomGenerator, make_generator
from .types import Direction, GameState, Move, MoveResult, validate_grid

__all__ = [
    "TILE_SPAWN_PROBS",
    "WIN_TILE",
    "Direction",
    "GameState",
    "Move",
    "MoveResult",
    "RandomGenerator",
    "NumpyGenerator",
    "LinearCongruentialGenerator",
    "make_generator",
    "validate_grid",
    "slide_line",
    "move_grid",
    "rotate_clockwise",
    "empty_cells",
    "max_tile",
    "max_tile_position",
    "describe_position",
    "merge_results",
    "check_win",
    "add_random_tile",
    "make_move",
    "new_game",
    "legal_actions_mask",
    "legal_actions",
    "can_move",
    "is_done",
]
