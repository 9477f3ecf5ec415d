# -*- coding: utf-8 -*-
"""
Depth-limited expectimax search for the tile-merging game.

It includes the search itself, the textual reasons attached to each root move and
the strategy wrapping both.
"""

from .actor import ExpectimaxStrategy
from .config import ExpectimaxConfig
from .search import MoveScore, analyze_all_moves, best_move, expectimax

__all__ = ["ExpectimaxStrategy", "ExpectimaxConfig", "MoveScore", "analyze_all_moves", "best_move", "expectimax"]
