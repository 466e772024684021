#!/usr/bin/env python3
"""
Seeded linear congruential generator and normal transform.

The recurrence, seeding and scaling reproduce the d3-random ``randomLcg`` /
``randomNormal`` pair bit for bit, so a seed gives the same stream here as in
the reference generator:

    state[n+1] = (0x19660D * state[n] + 0x3C6EF35F) mod 2**32
    uniform[n] = state[n] / 2**32

Reference: https://en.wikipedia.org/wiki/Linear_congruential_generator#Parameters_in_common_use
"""

import math
from typing import Callable

from ..processes import Process, fmap, stateful_fold

MULTIPLIER = 0x19660D
INCREMENT = 0x3C6EF35F
MODULUS = 0x100000000
EPS = 1.0 / MODULUS


def seed_state(seed: float) -> int:
    """
    Convert a seed into an initial 32-bit LCG state.

    Seeds in [0, 1) are treated as fractions of the state space, any other seed
    by its absolute value; the result is truncated to 32 bits. Non-finite seeds
    give state 0.
    """
    seed = float(seed)
    if not math.isfinite(seed):
        return 0
    scaled = seed / EPS if 0 <= seed < 1 else abs(seed)
    if not math.isfinite(scaled):
        return 0
    return int(scaled) % MODULUS


def next_state(state: int) -> int:
    return (MULTIPLIER * state + INCREMENT) % MODULUS


def lcg(seed: float) -> Process[float]:
    """
    Process of uniforms in [0, 1) for ``seed``.

    The first value is the first generated uniform, matching the first call of
    the reference generator.
    """
    states = stateful_fold(next_state)(next_state(seed_state(seed)))
    return fmap(lambda state: state * EPS)(states)


class LcgSource:
    """
    Sequential uniform source over the same recurrence as ``lcg``.

    Each call advances the generator and returns the next uniform.
    """

    def __init__(self, seed: float):
        self.state = seed_state(seed)

    def __call__(self) -> float:
        self.state = next_state(self.state)
        return self.state * EPS


class NormalSource:
    """
    Normal variates by the Marsaglia polar method.

    Each accepted pair of uniforms produces two variates; the second one is
    kept and returned by the next call.

    Parameters:
    -----------
    source : Callable[[], float]
        Uniform source on [0, 1)
    mu : float
        Mean of the variates
    sigma : float
        Standard deviation of the variates
    """

    def __init__(self, source: Callable[[], float], mu: float = 0.0, sigma: float = 1.0):
        self.source = source
        self.mu = float(mu)
        self.sigma = float(sigma)
        self._spare = None
        self._r = None

    def __call__(self) -> float:
        if self._spare is not None:
            y, self._spare = self._spare, None
        else:
            while True:
                x = self.source() * 2 - 1
                y = self.source() * 2 - 1
                r = x * x + y * y
                if r and r <= 1:
                    break
            self._spare, self._r = x, r
        r = self._r
        return self.mu + self.sigma * y * math.sqrt(-2 * math.log(r) / r)


def normal_variate(seed: float, mu: float = 0.0, sigma: float = 1.0) -> float:
    """First normal variate of a fresh generator seeded with ``seed``."""
    return NormalSource(LcgSource(seed), mu, sigma)()
