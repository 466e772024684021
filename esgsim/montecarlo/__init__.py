# Monte Carlo simulation package
"""
Seeded random processes and Monte Carlo utilities.

Modules:
- lcg: Seeded linear congruential generator and normal transform
- random_processes: Random wrapper, white noise, mean reversion
- mvrandom: Correlated multivariate normal processes
- brownian_bridge: Discrete Brownian bridge
- lifecycle: Monte Carlo runs over savings trajectories
"""

from .lcg import lcg, LcgSource, NormalSource, normal_variate
from .random_processes import Random, rmap, white_noise, random_mean_reverting
from .mvrandom import mvnsims
from .brownian_bridge import random_discrete_bridge
from .lifecycle import run_trajectories, calculate_percentiles, summarize

__all__ = [
    # Generators
    'lcg',
    'LcgSource',
    'NormalSource',
    'normal_variate',
    # Random processes
    'Random',
    'rmap',
    'white_noise',
    'random_mean_reverting',
    'mvnsims',
    'random_discrete_bridge',
    # Lifecycle
    'run_trajectories',
    'calculate_percentiles',
    'summarize',
]
