# -*- coding: utf-8 -*-
"""
Move-choosing strategies.

It includes the common strategy contract, the reflex strategies (corner, greedy,
snake, smoothness, endgame, risk taking, random) and the win-probability estimator.
The searching strategies live in the ``expectimax`` and ``monte_carlo`` packages;
``strategies.selector`` builds any of them by name.
"""

from .base import MoveEvaluation, MoveEvaluations, Strategy
from .baseline import RandomStrategy
from .corner import Corner, CornerStrategy
from .endgame import EndgameStrategy, Phase
from .greedy import GreedyStrategy
from .risk import Risk, RiskTakingStrategy
from .smoothness import SmoothnessStrategy
from .snake import SnakeStrategy
from .win_probability import WinProbabilityStrategy

__all__ = [
    "Strategy",
    "MoveEvaluation",
    "MoveEvaluations",
    "Corner",
    "CornerStrategy",
    "GreedyStrategy",
    "SnakeStrategy",
    "SmoothnessStrategy",
    "Phase",
    "EndgameStrategy",
    "Risk",
    "RiskTakingStrategy",
    "WinProbabilityStrategy",
    "RandomStrategy",
]
