"""
Configuration of the expectimax search.
"""

from dataclasses import dataclass

from heuristics.weights import DEFAULT_WEIGHTS, HeuristicWeights


@dataclass(frozen=True)
class ExpectimaxConfig:
    """
    Parameters of the depth-limited expectimax search.

    Raises
    ------
    ValueError
        If the depth or the number of sampled cells is not positive.
    """

    # ##>: Search parameters.
    max_depth: int = 4  # Plies counted from the root move, spawn layers included
    sample_cells: int = 6  # Empty cells examined per chance layer

    # ##>: Leaf evaluation.
    weights: HeuristicWeights = DEFAULT_WEIGHTS

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(f'max_depth must be positive, got {self.max_depth}')
        if self.sample_cells < 1:
            raise ValueError(f'sample_cells must be positive, got {self.sample_cells}')
