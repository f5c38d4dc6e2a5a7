"""
Correlation statistics helpers.
"""
from datetime import date
from typing import Sequence

import numpy as np

# Variance products below this are rounding noise from constant series
_EPSILON = 1e-12


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Sample Pearson correlation computed from raw sums.

    Returns 0.0 for mismatched or empty series and whenever either series
    has no variance, so the result is never NaN.
    """
    if len(x) != len(y) or len(x) == 0:
        return 0.0
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = len(xs)

    numerator = n * np.sum(xs * ys) - np.sum(xs) * np.sum(ys)
    variance_product = (n * np.sum(xs * xs) - np.sum(xs) ** 2) * (n * np.sum(ys * ys) - np.sum(ys) ** 2)
    if variance_product <= _EPSILON:
        return 0.0
    return float(np.clip(numerator / np.sqrt(variance_product), -1.0, 1.0))


def iso_week_key(day: date) -> str:
    """ISO year-week bucket such as ``2024-W07``."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"
