# Dividend savings simulation package
"""
Monte Carlo simulation of dividend-paying investments.

Subpackages:
- engine: Valuation, portfolio bookkeeping, simulation and resampling
- montecarlo: Seeded random processes and Monte Carlo runs
- strategies: Investment strategies
- metrics: Sample statistics
- config: Configuration handling

Usage:
    from esgsim.processes import take
    from esgsim.engine import savings_trajectory, PeriodManager
    from esgsim.montecarlo import white_noise, mvnsims
    from esgsim.strategies import get_strategy
    from esgsim.config import SimulationConfig
"""

__version__ = "0.1.0"

# engine first: strategies depend on engine.model and engine.portfolio
from .engine import PeriodManager, invest_over_time, savings_trajectory
from .strategies import get_strategy, list_strategies
from .config import SimulationConfig

__all__ = [
    'PeriodManager',
    'invest_over_time',
    'savings_trajectory',
    'get_strategy',
    'list_strategies',
    'SimulationConfig',
]
