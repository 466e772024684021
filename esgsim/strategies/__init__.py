# Investment strategies package
"""
Investment strategies.

Modules:
- base: Strategy signature and shared helpers
- allocation: no_reinvestment, full_reinvestment, full_rebalancing, invest_cashflow
- registry: Strategy lookup by name
"""

from .base import Strategy, accrued_dividends, value_weights
from .allocation import full_rebalancing, full_reinvestment, invest_cashflow, no_reinvestment
from .registry import create_strategy_registry, get_strategy, list_strategies

__all__ = [
    # Base
    'Strategy', 'accrued_dividends', 'value_weights',
    # Strategies
    'no_reinvestment', 'full_reinvestment', 'full_rebalancing', 'invest_cashflow',
    # Registry
    'create_strategy_registry', 'get_strategy', 'list_strategies',
]
