# Metrics package
"""
Sample statistics of simulated processes.

Modules:
- statistics: mean/std, correlation, increments
"""

from .statistics import sample_stats, correlation, increments

__all__ = [
    'sample_stats',
    'correlation',
    'increments',
]
