# -*- coding: utf-8 -*-
"""
Module containing the Monte Carlo Tree Search for the tile-merging game.
"""
from .actor import MonteCarloStrategy
from .config import MonteCarloConfig
from .node import Node
from .search import monte_carlo_search

__all__ = ["MonteCarloStrategy", "MonteCarloConfig", "Node", "monte_carlo_search"]
