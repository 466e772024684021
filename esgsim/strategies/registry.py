#!/usr/bin/env python3
"""
Strategy Registry Module.

Maps strategy names (as used in configuration files and on the command line)
to strategy functions.
"""

from typing import Dict, List

from .allocation import full_rebalancing, full_reinvestment, invest_cashflow, no_reinvestment
from .base import Strategy


def create_strategy_registry() -> Dict[str, Strategy]:
    """
    Create a registry mapping strategy names to strategy functions.

    Example:
        >>> registry = create_strategy_registry()
        >>> strategy = registry['full_rebalancing']
    """
    return {
        'no_reinvestment': no_reinvestment,
        'full_reinvestment': full_reinvestment,
        'full_rebalancing': full_rebalancing,
    }


def get_strategy(strategy_name: str, invest_savings: bool = True) -> Strategy:
    """
    Get a strategy by name.

    Parameters:
    -----------
    strategy_name : str
        Name of the strategy from the registry
    invest_savings : bool
        Wrap the strategy with invest_cashflow so monthly savings are invested

    Returns:
    --------
    Strategy: the strategy function
    """
    registry = create_strategy_registry()
    if strategy_name not in registry:
        available = list(registry.keys())
        raise ValueError(f"Unknown strategy: '{strategy_name}'. Available: {available}")
    strategy = registry[strategy_name]
    return invest_cashflow(strategy) if invest_savings else strategy


def list_strategies() -> List[str]:
    """List all available strategy names."""
    return list(create_strategy_registry().keys())
