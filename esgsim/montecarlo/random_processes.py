#!/usr/bin/env python3
"""
Random processes built on seeded generators.

A ``Random`` is a pure function from an integer seed to a value (usually a
Process): the same seed always produces the same realisation.

Mean reversion reference (MLE for Ornstein-Uhlenbeck type processes):
http://www.investmentscience.com/Content/howtoArticles/MLE_for_OR_mean_reverting.pdf
"""

from typing import Callable, Generic, TypeVar

from ..processes import Process, fmap, stateful_fold
from .lcg import lcg, normal_variate

A = TypeVar('A')
R = TypeVar('R')


class Random(Generic[A]):
    """
    Random value realised by picking a seed.

    Parameters:
    -----------
    pick : Callable[[int], A]
        Pure function from seed to realisation
    """

    def __init__(self, pick: Callable[[int], A]):
        self._pick = pick

    def pick(self, seed: int) -> A:
        return self._pick(seed)


def rmap(transform: Callable[[A], R]) -> Callable[[Random[A]], Random[R]]:
    """Lift a transformation of realisations to a transformation of Randoms."""
    def lifted(random: Random[A]) -> Random[R]:
        return Random(lambda seed: transform(random.pick(seed)))
    return lifted


def white_noise(mean: float, stdev: float) -> Random[Process[float]]:
    """
    Independent normal draws N(mean, stdev**2) at every step.

    The n-th draw comes from a fresh generator seeded with the n-th uniform of
    a master LCG, so any step can be reproduced on its own. Successive fresh
    generators overlap with the master stream, which makes this unsuitable for
    quasi-random or high-dimensional use.
    """
    def pick(seed: int) -> Process[float]:
        master = lcg(seed)
        return fmap(lambda step_seed: normal_variate(step_seed, mean, stdev))(master)

    return Random(pick)


def random_mean_reverting(x_0: float,
                          ltm: float,
                          nu: float,
                          std_resid: float) -> Random[Process[float]]:
    """
    Discrete mean-reverting process.

        x[t+1] = x[t] + nu * (ltm - x[t]) + std_resid * eps[t],  eps ~ N(0, 1)

    Parameters:
    -----------
    x_0 : float
        Current level of the process; not part of the output, which starts at
        its successor
    ltm : float
        Long-term mean
    nu : float
        Mean-reversion strength
    std_resid : float
        Standard deviation of the residual
    """
    def revert(driver: Process[float]) -> Process[float]:
        levels = stateful_fold(
            lambda previous, residual: previous + nu * (ltm - previous) + std_resid * residual
        )(x_0, driver)
        return levels.evolve

    return rmap(revert)(white_noise(0, 1))
