"""
Shared numeric helpers.
"""
from .numeric import round_half_up, mean_or_none

__all__ = [
    "round_half_up",
    "mean_or_none",
]
