# -*- coding: utf-8 -*-
"""
Heuristic evaluation of boards.

It includes the `BoardEvaluation` feature vector, the individual features (empty cells, corner
bonus, smoothness, monotonicity, mergeability) and the immutable weight sets combining them.
"""

from .evaluator import BoardEvaluation, evaluate
from .weights import DEFAULT_WEIGHTS, SMOOTHNESS_WEIGHTS, HeuristicWeights

__all__ = ["BoardEvaluation", "evaluate", "HeuristicWeights", "DEFAULT_WEIGHTS", "SMOOTHNESS_WEIGHTS"]
