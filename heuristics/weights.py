"""
Weight sets of the board heuristic.

Weights are plain immutable values handed to ``evaluate`` at call time, so two
weight sets can be compared side by side without any shared state.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class HeuristicWeights:
    """
    Linear weights of the board features.

    Attributes
    ----------
    empty_cells : float
        Weight of the number of empty cells.
    max_tile_corner : float
        Weight of the corner bonus.
    smoothness : float
        Weight of the (non-positive) smoothness penalty.
    monotonicity : float
        Weight of the monotonicity score.
    mergeability : float
        Weight of the mergeability score.
    score_gain : float
        Weight of the accumulated game score.
    """

    empty_cells: float = 2.7
    max_tile_corner: float = 1.0
    smoothness: float = 0.1
    monotonicity: float = 1.0
    mergeability: float = 0.5
    score_gain: float = 0.001

    def as_dict(self) -> dict[str, float]:
        """Weights keyed by feature name."""
        return {item.name: getattr(self, item.name) for item in fields(self)}


# ##>: Weights of the expectimax search.
DEFAULT_WEIGHTS = HeuristicWeights()

# ##>: Smoothness-first weights for the one-ply smoothness strategy.
SMOOTHNESS_WEIGHTS = HeuristicWeights(
    empty_cells=0.15,
    max_tile_corner=0.05,
    smoothness=0.5,
    monotonicity=0.3,
    mergeability=0.0,
    score_gain=0.0,
)
