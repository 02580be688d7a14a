"""
Downsampling module.

Reduces dense series to a bounded number of evenly spread observations.
"""

import math
from typing import List

from ..models import Series


def select_indices(length: int, max_points: int) -> List[int]:
    """
    Evenly spread indices over ``[0, length - 1]``.

    Args:
        length: Number of observations
        max_points: Upper bound on selected indices (>= 1)

    Returns:
        Ascending, distinct indices including both endpoints when
        ``max_points >= 2``
    """
    if max_points < 1:
        raise ValueError(f"max_points must be >= 1, got {max_points}")
    if length <= max_points:
        return list(range(length))
    if max_points == 1:
        return [length - 1]

    step = (length - 1) / (max_points - 1)
    # floor(x + 0.5) rounds halves up
    return sorted({math.floor(i * step + 0.5) for i in range(max_points)})


def downsample(series: Series, max_points: int) -> Series:
    """
    Reduce a series to at most ``max_points`` observations.

    A series already within the bound is returned as-is. A single-point
    bound keeps the latest observation.

    Raises:
        ValueError: If max_points < 1
    """
    indices = select_indices(len(series), max_points)
    if len(indices) == len(series):
        return series
    return Series(tuple(series[i] for i in indices))
