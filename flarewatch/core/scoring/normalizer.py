"""
Severity Normalizer

Maps a raw measurement onto a [0, 1] severity fraction relative to a
baseline and a valid range. Out-of-range values are clamped, never rejected.
"""
from enum import Enum

import numpy as np

# Nudge applied when a baseline sits on (or past) the edge of its range
BASELINE_EPSILON = 1e-6


class Orientation(str, Enum):
    """Direction in which a measurement becomes clinically worse."""
    HIGHER_IS_WORSE = "higher_is_worse"
    LOWER_IS_WORSE = "lower_is_worse"
    BINARY = "binary"


def normalize(
    value: float,
    baseline: float,
    minimum: float,
    maximum: float,
    orientation: Orientation = Orientation.HIGHER_IS_WORSE,
) -> float:
    """
    Normalize a measurement into a severity fraction.

    Args:
        value: Raw measurement
        baseline: Value at which severity starts to accumulate
            (the threshold itself for binary indicators)
        minimum: Lower bound of the valid range
        maximum: Upper bound of the valid range
        orientation: Which direction is worse

    Returns:
        Severity in [0, 1]
    """
    # A 0/1 range is a flag regardless of the declared orientation
    if orientation == Orientation.BINARY or (minimum == 0 and maximum == 1):
        return 1.0 if value > baseline else 0.0

    if orientation == Orientation.LOWER_IS_WORSE:
        if baseline <= minimum:
            baseline = minimum + BASELINE_EPSILON
        if value >= baseline:
            return 0.0
        return float(np.clip((baseline - value) / (baseline - minimum), 0.0, 1.0))

    if baseline >= maximum:
        baseline = maximum - BASELINE_EPSILON
    if value <= baseline:
        return 0.0
    return float(np.clip((value - baseline) / (maximum - baseline), 0.0, 1.0))
