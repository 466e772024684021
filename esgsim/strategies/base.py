#!/usr/bin/env python3
"""
Common definitions for investment strategies.

A strategy is a pure function

    strategy(time, portfolio, pricing, future_pricing, savings) -> InvestmentDecision

deciding the trades of one month given the holdings, the prices of the current
month, the prices of the next month (at which trades execute) and the savings
available for the month.
"""

import math
from typing import Callable, Dict

from ..engine.model import InvestmentDecision, Portfolio, Pricing, SavingsParams

Strategy = Callable[[int, Portfolio, Pricing, Pricing, SavingsParams], InvestmentDecision]


def accrued_dividends(portfolio: Portfolio, pricing: Pricing) -> Dict[str, float]:
    """Dividends paid out in one month per position (annual dividends / 12)."""
    return {
        key: allocation.number_of_shares * pricing[key].security.current_annual_dividends / 12
        for key, allocation in portfolio.items()
    }


def value_weights(values: Dict[str, float]) -> Dict[str, float]:
    """
    Normalise position values into weights.

    Falls back to equal weights when the total is zero or not finite.
    """
    total = sum(values.values())
    if total == 0 or not math.isfinite(total):
        return {key: 1.0 / len(values) for key in values}
    return {key: value / total for key, value in values.items()}
