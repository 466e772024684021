#!/usr/bin/env python3
"""
Sample statistics used to check simulated processes.
"""

from typing import Sequence, Tuple

import numpy as np


def sample_stats(sample: Sequence[float]) -> Tuple[float, float]:
    '''Mean and population standard deviation (1/N) of a sample'''
    values = np.asarray(sample, dtype=float)
    mean = values.mean()
    std = np.sqrt(np.mean((values - mean) ** 2))
    return float(mean), float(std)


def correlation(sample_a: Sequence[float], sample_b: Sequence[float]) -> float:
    '''Pearson correlation of two samples of equal length'''
    a = np.asarray(sample_a, dtype=float)
    b = np.asarray(sample_b, dtype=float)
    if a.shape != b.shape:
        raise ValueError(f"samples must have equal length, got {len(a)} and {len(b)}")

    mean_a, std_a = sample_stats(a)
    mean_b, std_b = sample_stats(b)
    return float(np.mean((a - mean_a) * (b - mean_b)) / (std_a * std_b))


def increments(sample: Sequence[float]) -> np.ndarray:
    '''First differences of a sample'''
    return np.diff(np.asarray(sample, dtype=float))
