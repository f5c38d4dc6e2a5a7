"""
Numeric helpers shared by the scoring and correlation modules.
"""
from typing import Iterable, Optional
import math

import numpy as np


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (toward +inf) instead of to even."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def mean_or_none(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty sequence."""
    data = list(values)
    if not data:
        return None
    return float(np.mean(data))
