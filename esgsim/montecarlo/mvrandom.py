#!/usr/bin/env python3
"""
Correlated multivariate normal processes.

Independent standard-normal processes are mixed through the symmetric square
root of the covariance matrix (more stable for simulation than a Cholesky
factor).
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from ..processes import Process, fmap
from .random_processes import Random, white_noise

SEED_OFFSET_PER_IDX = 27644437


def to_matrix(cov: Dict[str, Dict[str, float]]) -> Tuple[List[str], np.ndarray]:
    """
    Convert a nested covariance mapping into (sorted keys, matrix).

    Raises:
    -------
    ValueError
        If a row is missing a key or the matrix is not symmetric
    """
    keys = sorted(cov.keys())
    try:
        matrix = np.array([[float(cov[x][y]) for y in keys] for x in keys])
    except KeyError as e:
        raise ValueError(f"covariance must define every pair of {keys}, missing {e}") from e

    if not np.allclose(matrix, matrix.T):
        raise ValueError(f"covariance matrix must be symmetric, got {matrix.tolist()}")
    return keys, matrix


def sqrt_symm(cov_matrix: np.ndarray) -> np.ndarray:
    """Symmetric square root V sqrt(D) V' of a covariance matrix."""
    eigenvalues, eigenvectors = np.linalg.eigh(cov_matrix)
    # round-off can leave tiny negative eigenvalues on PSD input
    eigenvalues = np.clip(eigenvalues, 0.0, None)
    return eigenvectors @ np.diag(np.sqrt(eigenvalues)) @ eigenvectors.T


def mvnsims(cov: Dict[str, Dict[str, float]]) -> Random[Dict[str, Process[float]]]:
    """
    Correlated zero-mean normal processes, one per variable of ``cov``.

    Parameters:
    -----------
    cov : Dict[str, Dict[str, float]]
        Covariance keyed by variable name, e.g.
        {'a': {'a': 2, 'b': 0.7}, 'b': {'a': 0.7, 'b': 0.5}}

    Returns:
    --------
    Random mapping a seed to {variable: Process[float]}
    """
    keys, cov_matrix = to_matrix(cov)
    transformation = sqrt_symm(cov_matrix)
    loadings = [transformation[:, i].tolist() for i in range(len(keys))]
    standard_normal = white_noise(0, 1)

    logging.debug(f"mvnsims: {len(keys)} variables {keys}")

    def mix(column: List[float]):
        return fmap(lambda *values: sum(c * v for c, v in zip(column, values)))

    def pick(seed: int) -> Dict[str, Process[float]]:
        independent = [
            standard_normal.pick(seed + idx * SEED_OFFSET_PER_IDX)
            for idx in range(len(keys))
        ]
        return {
            key: mix(column)(*independent)
            for key, column in zip(keys, loadings)
        }

    return Random(pick)
