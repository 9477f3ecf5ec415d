"""
Textual reasons behind an expectimax move.

Reasons are derived only from the merges of the move and from the difference
between the evaluation of the board before the move and the evaluation the
search returned for the move.
"""

from heuristics.evaluator import BoardEvaluation

# ##>: Thresholds on merge values and feature deltas.
HIGH_VALUE_MERGE = 512
CORNER_ANCHORED = 50.0
MONOTONICITY_GAIN = 0.5
SMOOTHNESS_GAIN = 0.3
MERGEABILITY_GAIN = 0.4

MAX_REASONS = 3

FALLBACK_REASON = 'Best available option maintains board stability'


def generate_reasoning(before: BoardEvaluation, after: BoardEvaluation, merges: list[int]) -> list[str]:
    """
    Rank the reasons supporting a move.

    Parameters
    ----------
    before : BoardEvaluation
        Evaluation of the board the move is played from.
    after : BoardEvaluation
        Evaluation backed up by the search for the move.
    merges : list[int]
        Values created by the merges of the move.

    Returns
    -------
    list[str]
        At most three reasons, most important first; never empty.
    """
    reasons = []

    if merges:
        if any(value >= HIGH_VALUE_MERGE for value in merges):
            reasons.append(f'Creates high-value merges ({sum(merges)} total)')
        elif len(merges) >= 2:
            reasons.append(f'Maximizes merges ({len(merges)} simultaneous)')
        else:
            reasons.append(f'Secures merge for {merges[0]}')

    if after.corner_bonus > CORNER_ANCHORED:
        reasons.append('Maintains max tile in corner position')
    elif after.corner_bonus > 0:
        reasons.append('Improves corner positioning')

    if after.empty_cells >= before.empty_cells:
        reasons.append(f'Preserves mobility ({after.empty_cells} empty cells)')
    else:
        reasons.append('Maintains adequate space')

    if after.monotonicity - before.monotonicity > MONOTONICITY_GAIN:
        reasons.append('Improves tile organization')
    if after.smoothness - before.smoothness > SMOOTHNESS_GAIN:
        reasons.append('Reduces tile gaps for future merges')
    if after.mergeability - before.mergeability > MERGEABILITY_GAIN:
        reasons.append('Sets up future merge opportunities')

    if not reasons:
        reasons.append(FALLBACK_REASON)
    return reasons[:MAX_REASONS]
