#!/usr/bin/env python3
"""
Discrete Brownian bridge.

A random walk of normal increments, linearly de-trended so that it starts and
ends at fixed levels.
"""

import numpy as np

from .lcg import LcgSource, NormalSource


def random_discrete_bridge(T: int,
                           start: float,
                           end: float,
                           std: float,
                           seed: int) -> np.ndarray:
    """
    Generate a bridge of ``T`` points from ``start`` to ``end``.

    Parameters:
    -----------
    T : int
        Number of points (at least 2)
    start : float
        First point of the bridge (matched exactly)
    end : float
        Last point of the bridge (matched up to rounding)
    std : float
        Standard deviation of each of the T - 1 increments
    seed : int
        Seed of the increment generator

    Returns:
    --------
    np.ndarray: bridge levels, shape (T,)
    """
    if T < 2:
        raise ValueError(f"bridge needs at least 2 points, got T={T}")

    normal = NormalSource(LcgSource(seed), 0.0, std)
    increments = np.array([normal() for _ in range(T - 1)])

    levels = np.concatenate(([0.0], np.cumsum(increments)))

    start_offset = start - levels[0]
    slope = end - start_offset - levels[-1]
    return levels + start_offset + slope * (np.arange(T) / (T - 1))
